# Expression tree with parent pointers, node based.
#
# ('#', val)            - number, val is a float, negative values only exist until simplified into ('neg', ('#', abs))
# ('@', name)           - variable, name is the same str object stored in the owning Tree.vars
# ('+', left, right)    - addition
# ('-', left, right)    - subtraction
# ('*', left, right)    - multiplication
# ('/', left, right)    - division, left numerator, right denominator
# ('^', left, right)    - power, left base, right exponent
# ('neg', None, right)  - negation, unary operators only use the right child
# ('sin', None, right)  - elementary function of right, one of FUNCS
#
# Parent pointers are only used for in-order iteration, a node is owned by exactly one parent (or a Tree as root).

MAX_VARS = 16
EPSILON  = 1e-6

BINOPS   = ('+', '-', '*', '/', '^')
FUNCS    = ('sin', 'cos', 'tan', 'cot', 'arcsin', 'arccos', 'arctan', 'arccot', 'sqrt', 'ln')
UNOPS    = ('neg',) + FUNCS

class TreeError (ValueError): pass

#...............................................................................................
class Node:
	__slots__ = ['op', 'val', 'left', 'right', 'parent']

	def __init__ (self, op, val = None, left = None, right = None):
		self.op     = op
		self.val    = val
		self.left   = None
		self.right  = None
		self.parent = None

		if left is not None:
			self.set_child ('left', left)

		if right is not None:
			self.set_child ('right', right)

	def __repr__ (self):
		if self.op == '#':
			return f"('#', {self.val!r})"
		elif self.op == '@':
			return f"('@', {self.val!r})"
		elif self.left is None:
			return f"({self.op!r}, {self.right!r})"
		else:
			return f"({self.op!r}, {self.left!r}, {self.right!r})"

	def __eq__ (self, other): # structural, numbers compared exactly, use is_val () for tolerance
		if not isinstance (other, Node) or self.op != other.op or self.val != other.val:
			return False

		return self.left == other.left and self.right == other.right

	def __ne__ (self, other):
		return not self.__eq__ (other)

	__hash__ = None

	is_num    = property (lambda self: self.op == '#')
	is_var    = property (lambda self: self.op == '@')
	is_leaf   = property (lambda self: self.op in {'#', '@'})
	is_binop  = property (lambda self: self.op in BINOPS)
	is_unop   = property (lambda self: self.op in UNOPS)
	is_neg    = property (lambda self: self.op == 'neg')
	is_func   = property (lambda self: self.op in FUNCS)
	is_root   = property (lambda self: self.parent is None)
	operand   = property (lambda self: self.right)
	children  = property (lambda self: tuple (c for c in (self.left, self.right) if c is not None))

	def is_val (self, val, eps = EPSILON):
		return self.op == '#' and abs (self.val - val) < eps

	def is_int (self, eps = EPSILON):
		return self.op == '#' and abs (self.val - round (self.val)) < eps

	def is_const (self, var): # does not depend on variable named var?
		if self.op == '#':
			return True
		elif self.op == '@':
			return self.val != var

		return all (c.is_const (var) for c in self.children)

	def slot (self): # name of attribute by which parent holds this node
		if self.parent is None:
			return None

		return 'left' if self.parent.left is self else 'right'

	def set_child (self, slot, node):
		if node.parent is not None:
			raise TreeError ('node already has a parent, copy it first')

		if self.op in {'#', '@'}:
			raise TreeError ('leaf nodes can not have children')

		old = getattr (self, slot)

		if old is not None:
			old.parent = None

		setattr (self, slot, node)

		node.parent = self

		return old

	def detach (self):
		if self.parent is not None:
			setattr (self.parent, self.slot (), None)

			self.parent = None

		return self

	def replace (self, node): # install node where self is, return self detached
		parent = self.parent

		if parent is not None:
			parent.set_child (self.slot (), node)

		return self

	def destroy (self):
		self.detach ()

		stack = [self]
		order = []

		while stack:
			node = stack.pop ()

			order.append (node)
			stack.extend (node.children)

		for node in reversed (order): # children before parents
			node.detach ()
			node.free ()

	def free (self):
		if self.left is not None or self.right is not None:
			raise TreeError (f'can not free {self.op!r} node which still has children')

		self.parent = None

	def copy (self):
		node = Node (self.op, self.val)

		if self.left is not None:
			node.set_child ('left', self.left.copy ())

		if self.right is not None:
			node.set_child ('right', self.right.copy ())

		return node

	def size (self):
		return 1 + sum (c.size () for c in self.children)

	def leftmost (self):
		node = self

		while node.left is not None:
			node = node.left

		return node

	def rightmost (self):
		node = self

		while node.right is not None:
			node = node.right

		return node

	def next (self): # in-order successor or None
		if self.right is not None:
			return self.right.leftmost ()

		node = self

		while node.parent is not None and node.parent.right is node:
			node = node.parent

		return node.parent

	def prev (self): # in-order predecessor or None
		if self.left is not None:
			return self.left.rightmost ()

		node = self

		while node.parent is not None and node.parent.left is node: # a unary parent precedes its operand which is always right
			node = node.parent

		return node.parent

#...............................................................................................
def Num (val):
	return Node ('#', float (val))

def Var (name):
	return Node ('@', name)

def Op (op, a, b = None): # Op ('+', l, r) or Op ('sin', x)
	if b is None:
		if op not in UNOPS:
			raise TreeError (f'{op!r} is not a unary operator')

		return Node (op, None, None, a)

	if op not in BINOPS:
		raise TreeError (f'{op!r} is not a binary operator')

	return Node (op, None, a, b)

#...............................................................................................
class Tree:
	__slots__ = ['root', 'vars']

	def __init__ (self, root = None, vars = None):
		self.root = None
		self.vars = [] if vars is None else vars

		if root is not None:
			self.set_root (root)

	def __repr__ (self):
		return f'Tree ({self.root!r}, {self.vars!r})'

	def __eq__ (self, other):
		return isinstance (other, Tree) and self.root == other.root

	def __ne__ (self, other):
		return not self.__eq__ (other)

	__hash__ = None

	def __iter__ (self):
		node = self.begin ()

		while node is not None:
			yield node

			node = node.next ()

	def set_root (self, node):
		if node.parent is not None:
			raise TreeError ('root node can not have a parent')

		self.root = node

	def var (self, name): # interned variable name, added on first use
		for v in self.vars:
			if v == name:
				return v

		if len (self.vars) >= MAX_VARS:
			raise TreeError (f'too many variables, maximum is {MAX_VARS}')

		self.vars.append (name)

		return name

	def begin (self):
		return None if self.root is None else self.root.leftmost ()

	def end (self):
		return None if self.root is None else self.root.rightmost ()

	def size (self):
		return 0 if self.root is None else self.root.size ()

	def copy (self, root = None): # root = replacement root for the copy, must be unowned
		return Tree (self.root.copy () if root is None else root, list (self.vars))

	def destroy (self):
		if self.root is not None:
			self.root.destroy ()

		self.root = None
