# Convert between expression trees and LaTeX text, plottable infix text and SymPy expressions.

import string

import sympy as sp

from dast import Tree

LABEL_THRESHOLD = 24
LABELS          = string.ascii_uppercase

class RenderError (ValueError): pass

def _num2str (val):
	s = f'{val:.12g}'

	return s if s != '-0' else '0'

def _extract_labels (root, threshold = LABEL_THRESHOLD):
	"""Bottom-up sizes of subtrees, any child subtree bigger than threshold is replaced by the next label and counts as
	a single node from then on. Returns ({id (node): label, ...}, [node, ...]) in labeling order."""

	labels = {}
	nodes  = []

	def size (node):
		sz = 1

		for child in node.children:
			csz = size (child)

			if csz > threshold:
				if len (nodes) >= len (LABELS):
					raise RenderError (f'expression too big, needs more than {len (LABELS)} labels')

				labels [id (child)] = LABELS [len (nodes)]
				csz                 = 1

				nodes.append (child)

			sz += csz

		return sz

	size (root)

	return labels, nodes

#...............................................................................................
class ast2tex: # expression tree -> LaTeX text
	def __init__ (self): self.labels = self.defining = None # pylint medication
	def __new__ (cls, tree, labeled = False):
		self          = super ().__new__ (cls)
		root          = tree.root if isinstance (tree, Tree) else tree
		labels, nodes = _extract_labels (root)
		self.labels   = labels
		self.defining = None
		tex           = self._ast2tex (root)
		legend        = []

		for node in nodes:
			self.defining = node

			legend.append ((self.labels [id (node)], self._ast2tex (node)))

		if labeled:
			return tex, legend

		if legend:
			tex = f'{tex} \\quad\\text{{where: }}{", ".join (f"{l} = {t}" for l, t in legend)}'

		return tex

	def _ast2tex (self, node):
		if node is not self.defining:
			label = self.labels.get (id (node))

			if label is not None:
				return label

		return self._ast2tex_funcs [node.op] (self, node)

	def _is_atomic (self, node): # renders as a single unit, labels included
		return node.is_leaf and not (node.is_num and node.val < 0) or (node is not self.defining and id (node) in self.labels)

	def _ast2tex_wrap (self, node, paren):
		s = self._ast2tex (node)

		return f'\\left({s} \\right)' if paren and not self._is_atomic (node) else s

	def _ast2tex_num (self, node):
		return _num2str (node.val)

	def _ast2tex_add (self, node):
		return f'{self._ast2tex (node.left)} + {self._ast2tex (node.right)}'

	def _ast2tex_sub (self, node):
		return f'{self._ast2tex (node.left)} - {self._ast2tex_wrap (node.right, node.right.op in {"+", "-"})}'

	def _ast2tex_mul (self, node):
		return f'{self._ast2tex_wrap (node.left, node.left.op in {"+", "-"})} \\cdot {self._ast2tex_wrap (node.right, node.right.op in {"+", "-"})}'

	def _ast2tex_pow (self, node):
		return f'{self._ast2tex_wrap (node.left, not node.left.is_var)}^{{{self._ast2tex (node.right)}}}'

	def _ast2tex_neg (self, node):
		return f'-{self._ast2tex_wrap (node.right, node.right.op in {"+", "-", "*"})}'

	def _ast2tex_func (self, node):
		if node.op == 'sqrt':
			return f'\\sqrt{{{self._ast2tex (node.right)}}}'

		return f'\\{node.op} {self._ast2tex_wrap (node.right, node.right.op in {"+", "-", "*"})}'

	_ast2tex_funcs = {
		'#'     : _ast2tex_num,
		'@'     : lambda self, node: node.val,
		'+'     : _ast2tex_add,
		'-'     : _ast2tex_sub,
		'*'     : _ast2tex_mul,
		'/'     : lambda self, node: f'\\frac{{{self._ast2tex (node.left)}}}{{{self._ast2tex (node.right)}}}',
		'^'     : _ast2tex_pow,
		'neg'   : _ast2tex_neg,
		'sin'   : _ast2tex_func,
		'cos'   : _ast2tex_func,
		'tan'   : _ast2tex_func,
		'cot'   : _ast2tex_func,
		'arcsin': _ast2tex_func,
		'arccos': _ast2tex_func,
		'arctan': _ast2tex_func,
		'arccot': _ast2tex_func,
		'sqrt'  : _ast2tex_func,
		'ln'    : _ast2tex_func,
	}

def ast2tex_labeled (tree):
	"""LaTeX of tree with oversized subexpressions pulled out, returns (tex, [(label, tex), ...])."""

	return ast2tex (tree, labeled = True)

#...............................................................................................
class ast2plot: # expression tree -> fully parenthesized infix text for numeric plotting tools
	def __new__ (cls, tree):
		self = super ().__new__ (cls)

		return self._ast2plot (tree.root if isinstance (tree, Tree) else tree)

	def _ast2plot (self, node):
		return self._ast2plot_funcs [node.op] (self, node)

	def _ast2plot_num (self, node):
		s = _num2str (node.val)

		return s if node.val >= 0 else f'({s})'

	def _ast2plot_binop (self, node, op):
		return f'({self._ast2plot (node.left)} {op} {self._ast2plot (node.right)})'

	_ast2plot_funcs = {
		'#'     : _ast2plot_num,
		'@'     : lambda self, node: node.val.lstrip ('\\'),
		'+'     : lambda self, node: self._ast2plot_binop (node, '+'),
		'-'     : lambda self, node: self._ast2plot_binop (node, '-'),
		'*'     : lambda self, node: self._ast2plot_binop (node, '*'),
		'/'     : lambda self, node: self._ast2plot_binop (node, '/'),
		'^'     : lambda self, node: self._ast2plot_binop (node, '**'),
		'neg'   : lambda self, node: f'(-{self._ast2plot (node.right)})',
		'sin'   : lambda self, node: f'sin({self._ast2plot (node.right)})',
		'cos'   : lambda self, node: f'cos({self._ast2plot (node.right)})',
		'tan'   : lambda self, node: f'tan({self._ast2plot (node.right)})',
		'cot'   : lambda self, node: f'(1/tan({self._ast2plot (node.right)}))',
		'arcsin': lambda self, node: f'asin({self._ast2plot (node.right)})',
		'arccos': lambda self, node: f'(pi/2 - asin({self._ast2plot (node.right)}))',
		'arctan': lambda self, node: f'atan({self._ast2plot (node.right)})',
		'arccot': lambda self, node: f'(pi/2 - atan({self._ast2plot (node.right)}))',
		'sqrt'  : lambda self, node: f'sqrt({self._ast2plot (node.right)})',
		'ln'    : lambda self, node: f'log({self._ast2plot (node.right)})',
	}

#...............................................................................................
class ast2spt: # expression tree -> sympy expression
	def __new__ (cls, tree):
		self = super ().__new__ (cls)

		return self._ast2spt (tree.root if isinstance (tree, Tree) else tree)

	def _ast2spt (self, node):
		return self._ast2spt_funcs [node.op] (self, node)

	def _ast2spt_num (self, node):
		return sp.Integer (int (node.val)) if float (node.val).is_integer () else sp.Float (node.val)

	_ast2spt_funcs = {
		'#'     : _ast2spt_num,
		'@'     : lambda self, node: sp.Symbol (node.val.lstrip ('\\')),
		'+'     : lambda self, node: self._ast2spt (node.left) + self._ast2spt (node.right),
		'-'     : lambda self, node: self._ast2spt (node.left) - self._ast2spt (node.right),
		'*'     : lambda self, node: self._ast2spt (node.left) * self._ast2spt (node.right),
		'/'     : lambda self, node: self._ast2spt (node.left) / self._ast2spt (node.right),
		'^'     : lambda self, node: self._ast2spt (node.left) ** self._ast2spt (node.right),
		'neg'   : lambda self, node: -self._ast2spt (node.right),
		'sin'   : lambda self, node: sp.sin (self._ast2spt (node.right)),
		'cos'   : lambda self, node: sp.cos (self._ast2spt (node.right)),
		'tan'   : lambda self, node: sp.tan (self._ast2spt (node.right)),
		'cot'   : lambda self, node: sp.cot (self._ast2spt (node.right)),
		'arcsin': lambda self, node: sp.asin (self._ast2spt (node.right)),
		'arccos': lambda self, node: sp.acos (self._ast2spt (node.right)),
		'arctan': lambda self, node: sp.atan (self._ast2spt (node.right)),
		'arccot': lambda self, node: sp.pi / 2 - sp.atan (self._ast2spt (node.right)), # same branch as the plottable form
		'sqrt'  : lambda self, node: sp.sqrt (self._ast2spt (node.right)),
		'ln'    : lambda self, node: sp.log (self._ast2spt (node.right)),
	}
