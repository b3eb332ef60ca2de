#!/usr/bin/env python
# python 3.6+

import unittest

import sympy as sp

from dast import Node, Tree, TreeError, Num, Var, Op, MAX_VARS
from dlexer import tokenize, LexError
from dparser import parse, ParseError, GroupingError, TrailingInputError, UnexpectedTokenError, TooManyVariablesError
from dsimp import simplify
from dsym import ast2tex, ast2tex_labeled, ast2plot, ast2spt, RenderError

p = lambda s: parse (s).root
t = lambda s: ast2tex (parse (s))
x = lambda: Var ('x')
y = lambda: Var ('y')

class Test (unittest.TestCase):
	def test_tokenize (self):
		self.assertEqual (tokenize ('x^2'), ['VAR', 'CARET', 'NUM', '$end'])
		self.assertEqual (tokenize ('  1.5e-3 \\cdot y '), ['NUM', 'CDOT', 'VAR', '$end'])
		self.assertEqual (tokenize ('\\frac{1}{x}'), ['FRAC', 'CURLYL', 'NUM', 'CURLYR', 'CURLYL', 'VAR', 'CURLYR', '$end'])
		self.assertEqual (tokenize ('\\left( x \\right)'), ['PARENL', 'VAR', 'PARENR', '$end'])
		self.assertEqual (tokenize ('-x + -1'), ['MINUS', 'VAR', 'PLUS', 'MINUS', 'NUM', '$end'])
		self.assertEqual ([tok.val for tok in tokenize ('\\sin\\COS\\arccot\\arcsin\\sqrt\\ln')] [:-1], ['sin', 'cos', 'arccot', 'arcsin', 'sqrt', 'ln'])
		self.assertEqual ([tok.val for tok in tokenize ('1 .5 2. 3e2')] [:-1], [1., .5, 2., 300.])
		self.assertEqual ([tok.val for tok in tokenize ('x \\alpha a_b')] [:-1], ['x', '\\alpha', 'a_b'])
		self.assertEqual ([tok.pos for tok in tokenize ('x +  y')], [0, 2, 5, 6])

	def test_tokenize_errors (self):
		self.assertRaises (LexError, tokenize, 'x # y')
		self.assertRaises (LexError, tokenize, '2 * 3')
		self.assertRaises (LexError, tokenize, 'a' * 33)
		self.assertEqual (tokenize ('a' * 32) [0].val, 'a' * 32)

		try:
			tokenize ('x + $')
		except LexError as e:
			self.assertEqual (e.pos, 4)
			self.assertIn ("'$'", str (e))

	def test_parse (self):
		self.assertEqual (p ('1'), Num (1))
		self.assertEqual (p ('1.5e3'), Num (1500))
		self.assertEqual (p ('x'), x ())
		self.assertEqual (p ('-1'), Op ('neg', Num (1)))
		self.assertEqual (p ('--x'), Op ('neg', Op ('neg', x ())))
		self.assertEqual (p ('(x)'), x ())
		self.assertEqual (p ('{{x}}'), x ())
		self.assertEqual (p ('x + y - 1'), Op ('-', Op ('+', x (), y ()), Num (1)))
		self.assertEqual (p ('x - (y - 1)'), Op ('-', x (), Op ('-', y (), Num (1))))
		self.assertEqual (p ('x \\cdot y \\cdot 2'), Op ('*', Op ('*', x (), y ()), Num (2)))
		self.assertEqual (p ('x + y \\cdot 2'), Op ('+', x (), Op ('*', y (), Num (2))))
		self.assertEqual (p ('x^y^2'), Op ('^', x (), Op ('^', y (), Num (2))))
		self.assertEqual (p ('x^{2}'), Op ('^', x (), Num (2)))
		self.assertEqual (p ('-x^2'), Op ('neg', Op ('^', x (), Num (2))))
		self.assertEqual (p ('(-x)^2'), Op ('^', Op ('neg', x ()), Num (2)))
		self.assertEqual (p ('\\frac{1}{x+1}'), Op ('/', Num (1), Op ('+', x (), Num (1))))
		self.assertEqual (p ('-\\frac{1}{x}'), Op ('neg', Op ('/', Num (1), x ())))
		self.assertEqual (p ('\\left(x + 1 \\right) \\cdot 2'), Op ('*', Op ('+', x (), Num (1)), Num (2)))
		self.assertEqual (p ('\\sin x'), Op ('sin', x ()))
		self.assertEqual (p ('\\SIN x'), Op ('sin', x ()))
		self.assertEqual (p ('\\sin x^2'), Op ('sin', Op ('^', x (), Num (2))))
		self.assertEqual (p ('\\sin x \\cdot y'), Op ('*', Op ('sin', x ()), y ()))
		self.assertEqual (p ('\\sin -x'), Op ('sin', Op ('neg', x ())))
		self.assertEqual (p ('\\ln \\cos x'), Op ('ln', Op ('cos', x ())))
		self.assertEqual (p ('\\sqrt{x}'), Op ('sqrt', x ()))
		self.assertEqual (p ('\\arccos (x + 1)'), Op ('arccos', Op ('+', x (), Num (1))))
		self.assertEqual (p ('\\alpha + x'), Op ('+', Var ('\\alpha'), x ()))

	def test_parse_vars (self):
		tree = parse ('x + y \\cdot x + \\alpha')

		self.assertEqual (tree.vars, ['x', 'y', '\\alpha'])
		self.assertIs (tree.root.left.left.val, tree.vars [0])
		self.assertIs (tree.root.left.right.right.val, tree.vars [0])
		self.assertEqual (parse ('1 + 2').vars, [])

		names = [chr (ord ('a') + i) for i in range (MAX_VARS)]

		self.assertEqual (parse (' + '.join (names)).vars, names)
		self.assertRaises (TooManyVariablesError, parse, ' + '.join (names + ['z']))

	def test_parse_errors (self):
		self.assertRaises (GroupingError, parse, '(x+1')
		self.assertRaises (GroupingError, parse, 'x+1)')
		self.assertRaises (GroupingError, parse, '{x+1)')
		self.assertRaises (GroupingError, parse, '\\frac{1}{x')
		self.assertRaises (TrailingInputError, parse, 'x y')
		self.assertRaises (TrailingInputError, parse, '2 x')
		self.assertRaises (UnexpectedTokenError, parse, 'x +')
		self.assertRaises (UnexpectedTokenError, parse, '')
		self.assertRaises (UnexpectedTokenError, parse, '\\frac 1 2')
		self.assertRaises (UnexpectedTokenError, parse, 'x^-1')
		self.assertRaises (ParseError, parse, '\\cdot x')
		self.assertRaises (SyntaxError, parse, '(x')
		self.assertRaises (LexError, parse, 'x ! 2')

		try:
			parse ('(x + 1')
		except GroupingError as e:
			self.assertEqual (e.pos, 6)
			self.assertIn ("')'", str (e))

	def test_tree_iteration (self):
		tree = parse ('\\sin x + 2 \\cdot y')

		self.assertEqual ([n.op for n in tree], ['sin', '@', '+', '#', '*', '@'])
		self.assertEqual (tree.begin ().op, 'sin')
		self.assertEqual (tree.end (), y ())

		nodes = []
		node  = tree.end ()

		while node is not None:
			nodes.append (node)

			node = node.prev ()

		self.assertEqual ([n.op for n in reversed (nodes)], [n.op for n in tree])
		self.assertEqual (tree.size (), 6)
		self.assertEqual (len (list (Tree ())), 0)

	def test_tree_parents (self):
		tree = parse ('\\frac{x^2 - 1}{\\sqrt{x} + -y}')

		for node in tree:
			for child in node.children:
				self.assertIs (child.parent, node)

		self.assertIsNone (tree.root.parent)

	def test_tree_ownership (self):
		a = x ()

		self.assertRaises (TreeError, Op, '+', a, a)
		self.assertRaises (TreeError, Op, 'sin', x (), y ())
		self.assertRaises (TreeError, Op, '+', x ())
		self.assertRaises (TreeError, Num (1).set_child, 'left', x ())
		self.assertRaises (TreeError, Op ('+', x (), y ()).free)

		node = Op ('+', x (), Op ('*', y (), Num (2)))
		sub  = node.right

		self.assertIs (sub.detach (), sub)
		self.assertIsNone (sub.parent)
		self.assertIsNone (node.right)

		node.set_child ('right', Num (3))
		self.assertEqual (node, Op ('+', x (), Num (3)))

		old = node.left.replace (Num (4))

		self.assertEqual (old, x ())
		self.assertIsNone (old.parent)
		self.assertEqual (node, Op ('+', Num (4), Num (3)))

		leaves = [sub.left, sub.right]

		sub.destroy ()

		self.assertEqual ((sub.left, sub.right), (None, None))
		self.assertTrue (all (l.parent is None for l in leaves))

	def test_tree_copy (self):
		tree = parse ('x^2 + \\sin y')
		copy = tree.copy ()

		self.assertEqual (copy, tree)
		self.assertEqual (copy.vars, tree.vars)
		self.assertIsNot (copy.vars, tree.vars)
		self.assertFalse ({id (n) for n in copy} & {id (n) for n in tree})

		copy.root.left.set_child ('right', Num (3))

		self.assertNotEqual (copy, tree)
		self.assertEqual (tree.root.left.right, Num (2))

	def test_node_predicates (self):
		node = p ('x \\cdot y + 2')

		self.assertTrue (node.is_const ('z'))
		self.assertFalse (node.is_const ('x'))
		self.assertTrue (node.right.is_const ('x'))
		self.assertTrue (Num (2.0000001).is_val (2))
		self.assertFalse (Num (2.01).is_val (2))
		self.assertTrue (Num (3.0000001).is_int ())
		self.assertFalse (Num (3.5).is_int ())
		self.assertFalse (x ().is_val (0))

	def test_ast2tex (self):
		self.assertEqual (t ('x + 1'), 'x + 1')
		self.assertEqual (t ('2 \\cdot x'), '2 \\cdot x')
		self.assertEqual (t ('2.0'), '2')
		self.assertEqual (t ('1.5'), '1.5')
		self.assertEqual (t ('x - y - 1'), 'x - y - 1')
		self.assertEqual (t ('x - (y - 1)'), 'x - \\left(y - 1 \\right)')
		self.assertEqual (t ('x - (y + 1)'), 'x - \\left(y + 1 \\right)')
		self.assertEqual (t ('x + (y - 1)'), 'x + y - 1')
		self.assertEqual (t ('(x + 1) \\cdot (x - 1)'), '\\left(x + 1 \\right) \\cdot \\left(x - 1 \\right)')
		self.assertEqual (t ('\\frac{1}{x+1}'), '\\frac{1}{x + 1}')
		self.assertEqual (t ('(x+1)^2'), '\\left(x + 1 \\right)^{2}')
		self.assertEqual (t ('x^{y+1}'), 'x^{y + 1}')
		self.assertEqual (t ('2^x'), '2^{x}')
		self.assertEqual (t ('(\\sin x)^2'), '\\left(\\sin x \\right)^{2}')
		self.assertEqual (t ('(-x)^2'), '\\left(-x \\right)^{2}')
		self.assertEqual (t ('(\\frac{1}{x})^2'), '\\left(\\frac{1}{x} \\right)^{2}')
		self.assertEqual (t ('-(x+1)'), '-\\left(x + 1 \\right)')
		self.assertEqual (t ('-(x \\cdot y)'), '-\\left(x \\cdot y \\right)')
		self.assertEqual (t ('-x^2'), '-x^{2}')
		self.assertEqual (t ('\\sin x'), '\\sin x')
		self.assertEqual (t ('\\sin (x + 1)'), '\\sin \\left(x + 1 \\right)')
		self.assertEqual (t ('\\ln x^2'), '\\ln x^{2}')
		self.assertEqual (t ('\\sqrt{x + 1}'), '\\sqrt{x + 1}')
		self.assertEqual (t ('\\arccot \\alpha'), '\\arccot \\alpha')
		self.assertEqual (ast2tex (Op ('^', Num (-3), Num (2))), '\\left(-3 \\right)^{2}')
		self.assertEqual (ast2tex (Num (-0.)), '0')

	def test_ast2tex_roundtrip (self):
		for s in (
			'x^2 + 2 \\cdot x - 1',
			'\\frac{\\sin x}{x} - \\cos (x + 1)',
			'-(x - y) \\cdot -z',
			'(x^y)^z',
			'\\sqrt{1 - x^2} \\cdot \\arcsin x',
			'2^{-x} + \\ln \\frac{1}{x}',
			'\\tan -x - --y',
		):
			tex1 = t (s)
			tex2 = t (tex1)

			self.assertEqual (tex1, tex2)
			self.assertEqual (simplify (parse (tex1)), simplify (parse (s)))

	def test_ast2tex_labels (self):
		tree         = parse (' + '.join (['x'] * 20))
		tex, legend  = ast2tex_labeled (tree)

		self.assertEqual (legend, [('A', ' + '.join (['x'] * 13))])
		self.assertEqual (tex, ' + '.join (['A'] + ['x'] * 7))
		self.assertEqual (ast2tex (tree), f'{tex} \\quad\\text{{where: }}A = {legend [0] [1]}')
		self.assertEqual (ast2tex_labeled (parse ('x + 1')), ('x + 1', []))

		tree         = parse (' + '.join ('\\sin (x + 1)' for _ in range (7)))
		tex, legend  = ast2tex_labeled (tree)

		self.assertEqual ([l for l, _ in legend], ['A'])
		self.assertTrue (tex.startswith ('A + \\sin'))

		self.assertRaises (RenderError, ast2tex, parse (' + '.join (['x'] * 400)))

	def test_ast2plot (self):
		pl = lambda s: ast2plot (parse (s))

		self.assertEqual (pl ('x'), 'x')
		self.assertEqual (pl ('x^2'), '(x ** 2)')
		self.assertEqual (pl ('-x'), '(-x)')
		self.assertEqual (pl ('\\frac{1}{x}'), '(1 / x)')
		self.assertEqual (pl ('2 \\cdot x - 1'), '((2 * x) - 1)')
		self.assertEqual (pl ('\\sin x'), 'sin(x)')
		self.assertEqual (pl ('\\cot x'), '(1/tan(x))')
		self.assertEqual (pl ('\\arcsin x'), 'asin(x)')
		self.assertEqual (pl ('\\arccos x'), '(pi/2 - asin(x))')
		self.assertEqual (pl ('\\arctan x'), 'atan(x)')
		self.assertEqual (pl ('\\arccot x'), '(pi/2 - atan(x))')
		self.assertEqual (pl ('\\ln (x + 1)'), 'log((x + 1))')
		self.assertEqual (pl ('\\sqrt{x}'), 'sqrt(x)')
		self.assertEqual (pl ('\\alpha'), 'alpha')
		self.assertEqual (ast2plot (Op ('*', Num (-2), x ())), '((-2) * x)')

	def test_ast2spt (self):
		sx, sy = sp.Symbol ('x'), sp.Symbol ('y')

		self.assertEqual (ast2spt (parse ('x^2 + 1')), sx**2 + 1)
		self.assertEqual (ast2spt (parse ('\\frac{x}{y} - 2 \\cdot y')), sx / sy - 2 * sy)
		self.assertEqual (ast2spt (parse ('\\sin x \\cdot \\ln y')), sp.sin (sx) * sp.log (sy))
		self.assertEqual (ast2spt (parse ('\\arccot x')), sp.pi / 2 - sp.atan (sx))
		self.assertEqual (ast2spt (parse ('0.5')), sp.Float (0.5))
		self.assertEqual (sp.sympify (ast2plot (parse ('\\cot x + \\arccos x')), locals = {'x': sx}), 1 / sp.tan (sx) + sp.pi / 2 - sp.asin (sx))

if __name__ == '__main__':
	import os.path
	import subprocess
	import sys

	subprocess.run ([sys.executable, '-m', 'unittest', '-v', os.path.basename (sys.argv [0])])
