# Recursive descent parser, LaTeX-ish text -> expression Tree.
#
# expr     -> prod (('+' | '-') prod)*
# prod     -> unary ('\cdot' unary)*
# unary    -> '-' unary | FUNC unary | frac
# frac     -> '\frac' '{' expr '}' '{' expr '}' | pow
# pow      -> group ['^' pow]                        - right associative
# group    -> '(' expr ')' | '{' expr '}' | atom
# atom     -> NUM | VAR

import logging

from dast import Tree, TreeError, Num, Var, Op
from dlexer import tokenize

_log      = logging.getLogger ('difftex.parser')

_CLOSERS  = {'PARENL': 'PARENR', 'CURLYL': 'CURLYR'}
_SYMBOLS  = {
	'NUM'   : 'number',
	'VAR'   : 'variable',
	'FUNC'  : 'function',
	'PLUS'  : "'+'",
	'MINUS' : "'-'",
	'CDOT'  : "'\\cdot'",
	'FRAC'  : "'\\frac'",
	'CARET' : "'^'",
	'PARENL': "'('",
	'PARENR': "')'",
	'CURLYL': "'{'",
	'CURLYR': "'}'",
	'$end'  : 'end of input',
}

class ParseError (SyntaxError):
	def __init__ (self, msg, pos = None):
		SyntaxError.__init__ (self, msg)

		self.pos = pos

class GroupingError (ParseError): pass
class TrailingInputError (ParseError): pass
class UnexpectedTokenError (ParseError): pass
class TooManyVariablesError (ParseError): pass

def _tokdesc (tok):
	return f'{tok.text!r}' if tok.text else _SYMBOLS.get (tok, tok)

#...............................................................................................
class Parser:
	def __init__ (self):
		self.tokens = []
		self.idx    = 0
		self.tree   = None

	def parse (self, text):
		self.tokens = tokenize (text)
		self.idx    = 0
		self.tree   = Tree ()

		_log.debug ('tokens: %s', ' '.join (self.tokens))

		root = self.expr ()
		tok  = self.tok

		if tok != '$end':
			if tok in {'PARENR', 'CURLYR'}:
				raise GroupingError (f'unmatched {_tokdesc (tok)} at position {tok.pos}', tok.pos)

			raise TrailingInputError (f'trailing input {_tokdesc (tok)} at position {tok.pos}', tok.pos)

		self.idx += 1 # consume $end
		tree      = self.tree

		tree.set_root (root)

		self.tokens = []
		self.tree   = None

		return tree

	tok = property (lambda self: self.tokens [self.idx])

	def next (self):
		tok       = self.tokens [self.idx]
		self.idx += 1

		return tok

	def expect (self, kind, opener = None):
		tok = self.tok

		if tok != kind:
			if opener is not None:
				raise GroupingError (f'expecting {_SYMBOLS [kind]} to close {_tokdesc (opener)} at position {opener.pos}, got {_tokdesc (tok)} at position {tok.pos}', tok.pos)

			raise UnexpectedTokenError (f'expecting {_SYMBOLS [kind]}, got {_tokdesc (tok)} at position {tok.pos}', tok.pos)

		return self.next ()

	#...............................................................................................
	def expr (self):
		node = self.prod ()

		while self.tok in {'PLUS', 'MINUS'}:
			op   = '+' if self.next () == 'PLUS' else '-'
			node = Op (op, node, self.prod ())

		return node

	def prod (self):
		node = self.unary ()

		while self.tok == 'CDOT':
			self.next ()

			node = Op ('*', node, self.unary ())

		return node

	def unary (self):
		tok = self.tok

		if tok == 'MINUS':
			self.next ()

			return Op ('neg', self.unary ())

		if tok == 'FUNC':
			self.next ()

			return Op (tok.val, self.unary ())

		return self.frac ()

	def frac (self):
		if self.tok != 'FRAC':
			return self.pow ()

		self.next ()

		num = self.curly ()
		den = self.curly ()

		return Op ('/', num, den)

	def curly (self):
		opener = self.expect ('CURLYL')
		node   = self.expr ()

		self.expect ('CURLYR', opener)

		return node

	def pow (self):
		node = self.group ()

		if self.tok == 'CARET':
			self.next ()

			node = Op ('^', node, self.pow ())

		return node

	def group (self):
		tok = self.tok

		if tok in _CLOSERS:
			self.next ()

			node = self.expr ()

			self.expect (_CLOSERS [tok], tok)

			return node

		return self.atom ()

	def atom (self):
		tok = self.next ()

		if tok == 'NUM':
			return Num (tok.val)

		if tok == 'VAR':
			try:
				return Var (self.tree.var (tok.val))
			except TreeError as e:
				raise TooManyVariablesError (f'{e} at {tok.text!r} position {tok.pos}', tok.pos) from None

		self.idx -= 1 # put it back

		if tok in {'PARENR', 'CURLYR'}:
			raise GroupingError (f'unmatched {_tokdesc (tok)} at position {tok.pos}', tok.pos)

		raise UnexpectedTokenError (f'unexpected {_tokdesc (tok)} at position {tok.pos}, expecting number, variable or group', tok.pos)

#...............................................................................................
def parse (text):
	return Parser ().parse (text)
