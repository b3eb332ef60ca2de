# Calculus on expression trees: differentiation, substitution, numeric evaluation, Taylor series and tangent lines.

import logging
import math
import operator

from dast import Node, Num, Var, Op
from dsimp import simplify

_log = logging.getLogger ('difftex.math')

class DiffError (ValueError): pass

class UnknownVariableError (DiffError):
	def __init__ (self, var, vars):
		DiffError.__init__ (self, f'unknown variable {var!r}, expression has {", ".join (repr (v) for v in vars) or "no variables"}')

		self.var = var

# derivative of f (u) with respect to u, built from a fresh copy of u each time it is needed
_DERIVS = {
	'sin'   : lambda u: Op ('cos', u.copy ()),
	'cos'   : lambda u: Op ('neg', Op ('sin', u.copy ())),
	'tan'   : lambda u: Op ('/', Num (1), Op ('^', Op ('cos', u.copy ()), Num (2))),
	'cot'   : lambda u: Op ('neg', Op ('/', Num (1), Op ('^', Op ('sin', u.copy ()), Num (2)))),
	'arcsin': lambda u: Op ('/', Num (1), Op ('sqrt', Op ('-', Num (1), Op ('^', u.copy (), Num (2))))),
	'arccos': lambda u: Op ('neg', Op ('/', Num (1), Op ('sqrt', Op ('-', Num (1), Op ('^', u.copy (), Num (2)))))),
	'arctan': lambda u: Op ('/', Num (1), Op ('+', Num (1), Op ('^', u.copy (), Num (2)))),
	'arccot': lambda u: Op ('neg', Op ('/', Num (1), Op ('+', Num (1), Op ('^', u.copy (), Num (2))))),
	'sqrt'  : lambda u: Op ('/', Num (1), Op ('*', Num (2), Op ('sqrt', u.copy ()))),
	'ln'    : lambda u: Op ('/', Num (1), u.copy ()),
}

_EVALS  = {
	'+'     : operator.add,
	'-'     : operator.sub,
	'*'     : operator.mul,
	'/'     : operator.truediv,
	'^'     : math.pow,
	'neg'   : operator.neg,
	'sin'   : math.sin,
	'cos'   : math.cos,
	'tan'   : math.tan,
	'cot'   : lambda x: 1 / math.tan (x),
	'arcsin': math.asin,
	'arccos': math.acos,
	'arctan': math.atan,
	'arccot': lambda x: math.pi / 2 - math.atan (x),
	'sqrt'  : math.sqrt,
	'ln'    : math.log,
}

def _literal (val):
	return Num (val) if val >= 0 else Op ('neg', Num (-val))

def _check_var (tree, var):
	if var not in tree.vars:
		raise UnknownVariableError (var, tree.vars)

	return tree.var (var) # interned name

#...............................................................................................
def _diff (node, var):
	if node.is_const (var):
		return Num (0)

	if node.is_var:
		return Num (1)

	op = node.op
	l  = node.left
	r  = node.right

	if op in {'+', '-'}:
		return Op (op, _diff (l, var), _diff (r, var))

	if op == '*':
		return Op ('+', Op ('*', _diff (l, var), r.copy ()), Op ('*', l.copy (), _diff (r, var)))

	if op == '/':
		return Op ('/',
				Op ('-', Op ('*', _diff (l, var), r.copy ()), Op ('*', l.copy (), _diff (r, var))),
				Op ('^', r.copy (), Num (2)))

	if op == '^':
		if l.is_const (var): # c^u -> ln c * c^u * u'
			return Op ('*', Op ('*', Op ('ln', l.copy ()), node.copy ()), _diff (r, var))

		if r.is_const (var): # u^c -> c * u^(c - 1) * u'
			return Op ('*', Op ('*', r.copy (), Op ('^', l.copy (), Op ('-', r.copy (), Num (1)))), _diff (l, var))

		# u^v -> u^v * (v' ln u + v u' / u)
		return Op ('*', node.copy (), Op ('+',
				Op ('*', _diff (r, var), Op ('ln', l.copy ())),
				Op ('/', Op ('*', r.copy (), _diff (l, var)), l.copy ())))

	if op == 'neg':
		return Op ('neg', _diff (r, var))

	return Op ('*', _DERIVS [op] (r), _diff (r, var)) # chain rule

def differentiate (tree, var):
	"""Derivative of tree with respect to variable named var, unsimplified. The source tree is not modified and the
	result shares no nodes with it."""

	var = _check_var (tree, var)

	return tree.copy (_diff (tree.root, var))

#...............................................................................................
def _subst (node, var, val):
	if node.is_var and node.val == var:
		return val.copy ()

	new = Node (node.op, node.val)

	if node.left is not None:
		new.set_child ('left', _subst (node.left, var, val))

	if node.right is not None:
		new.set_child ('right', _subst (node.right, var, val))

	return new

def substitute (tree, var, val):
	"""Copy of tree with every occurrence of variable var replaced by the number val."""

	var = _check_var (tree, var)

	return tree.copy (_subst (tree.root, var, _literal (val)))

def evaluate (tree, env = None, **kw):
	"""Numeric value of tree with variables taken from env and / or keyword arguments. Math errors like division by
	zero or domain errors propagate as ZeroDivisionError or ValueError."""

	env = {**(env or {}), **kw}

	def _eval (node):
		if node.is_num:
			return node.val

		if node.is_var:
			try:
				return float (env [node.val])
			except KeyError:
				raise ValueError (f'no value for variable {node.val!r}') from None

		if node.left is None:
			return _EVALS [node.op] (_eval (node.right))

		return _EVALS [node.op] (_eval (node.left), _eval (node.right))

	return _eval (tree.root if hasattr (tree, 'root') else tree)

#...............................................................................................
def series (tree, var, center = 0., order = 3, strict = False):
	"""Taylor series of tree in var around center up to and including the term of power order, Maclaurin series for
	center = 0. Coefficients are found by evaluating successive derivatives at the center. With strict = True a
	degenerate coefficient like ln 0 raises SimplifyError."""

	var = _check_var (tree, var)

	if order < 0:
		raise ValueError (f'series order must not be negative, got {order}')

	center = float (center)
	deriv  = tree
	terms  = None

	for i in range (order + 1):
		coef = simplify (substitute (deriv, var, center), strict).root

		_log.debug ('series term %d coefficient %r', i, coef)

		if not coef.is_val (0):
			dx = Var (var) if center == 0 else Op ('-', Var (var), _literal (center))

			if i == 0:
				term = coef
			else:
				term = Op ('/', Op ('*', coef, Op ('^', dx, Num (i))), Num (math.factorial (i)))

			terms = term if terms is None else Op ('+', terms, term)

		if i < order:
			deriv = simplify (differentiate (deriv, var), strict)

	return simplify (tree.copy (Num (0) if terms is None else terms), strict)

def tangent (tree, var, at, strict = False):
	"""Tangent line to tree as a function of var at var = at: f (at) + f' (at) * (var - at)."""

	var   = _check_var (tree, var)
	at    = float (at)
	f0    = simplify (substitute (tree, var, at), strict).root
	df0   = simplify (substitute (differentiate (tree, var), var, at), strict).root
	dx    = Var (var) if at == 0 else Op ('-', Var (var), _literal (at))

	return simplify (tree.copy (Op ('+', f0, Op ('*', df0, dx))), strict)
