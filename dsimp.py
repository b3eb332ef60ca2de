# Bottom-up rewriting simplifier.
#
# Each pass visits the tree post-order and at every node applies the first matching rule of, in order: constant folding,
# negation extraction, identity elimination, collapse of equal operands and function closed forms. Passes are repeated
# until nothing changes so that simplifying an already simplified tree is a no-op.

import logging
import math
import operator

from dast import EPSILON, Tree, Num, Op

MAX_PASSES = 64

_log       = logging.getLogger ('difftex.simplify')

class SimplifyError (ArithmeticError): pass

_FOLD      = {
	'+': operator.add,
	'-': operator.sub,
	'*': operator.mul,
	'/': operator.truediv,
	'^': math.pow,
}

# arccot is pi / 2 - arctan with range (0, pi), so it is neither odd nor zero at zero
_ODD       = {'sin', 'tan', 'cot', 'arcsin', 'arctan'}
_ZERO2ZERO = {'sin', 'tan', 'arcsin', 'arctan', 'sqrt'}

def _num (val): # literal in normalized form, negative values as ('neg', ('#', abs))
	val = val + 0. # -0 -> 0

	return Num (val) if val >= 0 else Op ('neg', Num (-val))

def _take (node, slot):
	return getattr (node, slot).detach ()

def _lit (node): # value of a literal # or ('neg', #), None for anything else
	if node.is_num:
		return node.val

	if node.is_neg and node.right.is_num:
		return -node.right.val

	return None

#...............................................................................................
class _Simplifier:
	def __init__ (self, strict = False):
		self.strict   = strict
		self.changed  = False
		self.reported = set ()

	def diag (self, msg):
		if self.strict:
			raise SimplifyError (msg)

		if msg not in self.reported:
			self.reported.add (msg)
			_log.warning (msg)

	def swap (self, node, new): # node is rewritten to new which must be built from detached parts of node or fresh nodes
		node.destroy ()

		self.changed = True

		return new

	def simp (self, node):
		for slot in ('left', 'right'):
			child = getattr (node, slot)

			if child is not None:
				node.set_child (slot, self.simp (child.detach ()))

		return self._simp_funcs.get (node.op, _Simplifier._simp_func) (self, node)

	#...............................................................................................
	def _simp_num (self, node):
		if node.val < 0:
			return self.swap (node, _num (node.val))

		return node

	def _simp_binop (self, node):
		l, r = node.left, node.right
		a, b = _lit (l), _lit (r)

		if a is not None and b is not None:
			return self._fold (node, a, b)

		for rule in (self._simp_neg_binop, self._simp_ident, self._simp_same):
			new = rule (node, l, r)

			if new is not None:
				return self.swap (node, new)

		if node.op == '^':
			new = self._simp_neg_pow (node, l, r)

			if new is not None:
				return self.swap (node, new)

		return node

	def _fold (self, node, a, b):
		if node.op == '^' and a == 0 and b < 0:
			self.diag (f'zero raised to negative power in {node!r}')

			return node

		try:
			val = _FOLD [node.op] (a, b)

		except ZeroDivisionError:
			self.diag (f'division by zero in {a:g} / {b:g}')

			return node

		except (ValueError, OverflowError) as e:
			self.diag (f'can not evaluate {a:g} {node.op} {b:g}: {e}')

			return node

		if not math.isfinite (val):
			self.diag (f'{a:g} {node.op} {b:g} is not finite')

			return node

		return self.swap (node, _num (val))

	def _simp_neg_binop (self, node, l, r):
		op = node.op

		if op in {'+', '-'}:
			if l.is_neg and r.is_neg: # -a + -b = -(a + b), -a - -b = -(a - b)
				return Op ('neg', Op (op, _take (l, 'right'), _take (r, 'right')))

			if r.is_neg: # a + -b = a - b, a - -b = a + b
				return Op ('-' if op == '+' else '+', _take (node, 'left'), _take (r, 'right'))

			if l.is_neg:
				if op == '+': # -a + b = b - a
					return Op ('-', _take (node, 'right'), _take (l, 'right'))
				else: # -a - b = -(a + b)
					return Op ('neg', Op ('+', _take (l, 'right'), _take (node, 'right')))

		elif op in {'*', '/'}:
			if l.is_neg and r.is_neg:
				return Op (op, _take (l, 'right'), _take (r, 'right'))

			if l.is_neg:
				return Op ('neg', Op (op, _take (l, 'right'), _take (node, 'right')))

			if r.is_neg:
				return Op ('neg', Op (op, _take (node, 'left'), _take (r, 'right')))

		return None

	def _simp_ident (self, node, l, r):
		op = node.op

		if op == '+':
			if r.is_val (0):
				return _take (node, 'left')
			if l.is_val (0):
				return _take (node, 'right')

		elif op == '-':
			if r.is_val (0):
				return _take (node, 'left')
			if l.is_val (0):
				return Op ('neg', _take (node, 'right'))

		elif op == '*':
			if l.is_val (0) or r.is_val (0):
				return Num (0)
			if r.is_val (1):
				return _take (node, 'left')
			if l.is_val (1):
				return _take (node, 'right')

		elif op == '/':
			if r.is_val (0):
				self.diag (f'division by zero in {node!r}')

				return None

			if l.is_val (0):
				return Num (0)
			if r.is_val (1):
				return _take (node, 'left')

		elif op == '^':
			if r.is_val (0):
				return Num (1)
			if r.is_val (1):
				return _take (node, 'left')
			if l.is_val (1):
				return Num (1)

			if l.is_val (0) and not r.is_neg: # 0 ^ -u is left alone
				return Num (0)

		return None

	def _simp_same (self, node, l, r):
		if l != r:
			return None

		op = node.op

		if op == '+':
			return Op ('*', Num (2), _take (node, 'left'))
		elif op == '-':
			return Num (0)
		elif op == '*':
			return Op ('^', _take (node, 'left'), Num (2))
		elif op == '/':
			return Num (1)

		return None

	def _simp_neg_pow (self, node, l, r): # (-x)^n
		if not (l.is_neg and r.is_int ()):
			return None

		new = Op ('^', _take (l, 'right'), _take (node, 'right'))

		return new if round (new.right.val) % 2 == 0 else Op ('neg', new)

	def _simp_neg (self, node):
		u = node.right

		if u.is_neg:
			return self.swap (node, _take (u, 'right'))

		if u.is_val (0):
			return self.swap (node, Num (0))

		return node

	def _simp_func (self, node):
		op = node.op
		u  = node.right

		if u.is_val (0):
			if op in _ZERO2ZERO:
				return self.swap (node, Num (0))
			elif op == 'cos':
				return self.swap (node, Num (1))
			elif op == 'ln':
				self.diag ('logarithm of zero')
			elif op == 'cot':
				self.diag ('cotangent of zero')

		elif u.is_val (1):
			if op == 'ln':
				return self.swap (node, Num (0))
			elif op == 'sqrt':
				return self.swap (node, Num (1))

		elif u.is_neg:
			if op == 'cos':
				return self.swap (node, Op ('cos', _take (u, 'right')))
			elif op in _ODD:
				return self.swap (node, Op ('neg', Op (op, _take (u, 'right'))))

		return node

	_simp_funcs = {
		'#'  : _simp_num,
		'@'  : lambda self, node: node,
		'+'  : _simp_binop,
		'-'  : _simp_binop,
		'*'  : _simp_binop,
		'/'  : _simp_binop,
		'^'  : _simp_binop,
		'neg': _simp_neg,
	}

#...............................................................................................
def simplify (tree, strict = False):
	"""Return a simplified copy of tree, the input tree is not modified. With strict = True degenerate operations like
	division by zero or logarithm of zero raise SimplifyError instead of being logged and left unsimplified."""

	simp = _Simplifier (strict)
	root = tree.root.copy ()

	for _ in range (MAX_PASSES):
		simp.changed = False
		root         = simp.simp (root)

		if not simp.changed:
			break

	else:
		_log.debug ('simplification did not settle after %d passes', MAX_PASSES)

	return tree.copy (root)

def simplify_node (node, strict = False):
	"""Simplified copy of a single subtree."""

	return simplify (Tree (node.copy ()), strict).root
