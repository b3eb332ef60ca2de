# Tokenizer for LaTeX-ish math text.

from collections import OrderedDict
import re

from dast import FUNCS

MAX_IDENT = 32

class LexError (SyntaxError):
	def __init__ (self, msg, pos = None):
		SyntaxError.__init__ (self, msg)

		self.pos = pos

#...............................................................................................
class Token (str):
	__slots__ = ['text', 'pos', 'val']

	def __new__ (cls, str_, text = None, pos = None, val = None):
		self      = str.__new__ (cls, str_)
		self.text = text or ''
		self.pos  = pos
		self.val  = val

		return self

	def __repr__ (self):
		return f'Token ({str (self)!r}, {self.text!r}, {self.pos!r})'

_FUNCRE = '|'.join (sorted (FUNCS, key = len, reverse = True)) # longest first so arcsin is never cut short

TOKENS  = OrderedDict ([ # order matters due to Python regex non-greedy or operator '|'
	('NUM',     r'(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'),
	('PARENL',  r'\\left\s*\(|\('),
	('PARENR',  r'\\right\s*\)|\)'),
	('CURLYL',  r'{'),
	('CURLYR',  r'}'),
	('PLUS',    r'\+'),
	('MINUS',   r'-'),
	('CARET',   r'\^'),
	('CDOT',    r'\\cdot'),
	('FRAC',    r'\\frac'),
	('FUNC',   fr'\\({_FUNCRE})'),
	('VAR',     r'[A-Za-z_\\][A-Za-z_]*'),
	('ignore',  r'\s+'),
])

_tokrec = re.compile ('|'.join (f'(?P<{tok}>{pat})' for tok, pat in TOKENS.items ()), re.IGNORECASE)

#...............................................................................................
def tokenize (text):
	tokens = []
	end    = len (text)
	pos    = 0

	while pos < end:
		m = _tokrec.match (text, pos)

		if m is None:
			raise LexError (f'invalid symbol {text [pos]!r} at position {pos}', pos)

		tok = m.lastgroup
		s   = m.group (0)

		if tok == 'NUM':
			tokens.append (Token (tok, s, pos, float (s)))

		elif tok == 'FUNC':
			tokens.append (Token (tok, s, pos, m.group ('FUNC') [1:].lower ()))

		elif tok == 'VAR':
			if len (s) > MAX_IDENT:
				raise LexError (f'identifier {s [:16]!r}... at position {pos} is longer than {MAX_IDENT} characters', pos)

			tokens.append (Token (tok, s, pos, s))

		elif tok != 'ignore':
			tokens.append (Token (tok, s, pos))

		pos += len (s)

	tokens.append (Token ('$end', '', pos))

	return tokens
