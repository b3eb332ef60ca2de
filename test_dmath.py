#!/usr/bin/env python
# python 3.6+

import math
import unittest

import sympy as sp

import dast
from dast import Num, Var, Op
from dparser import parse
from dmath import differentiate, substitute, evaluate, series, tangent, DiffError, UnknownVariableError, _DERIVS, _EVALS
from dsimp import simplify, simplify_node, SimplifyError
from dsym import ast2tex, ast2plot, ast2spt

s  = lambda text: ast2tex (simplify (parse (text)))
d  = lambda text, var = 'x': ast2tex (simplify (differentiate (parse (text), var)))
sx = sp.Symbol ('x')

# functions differentiated numerically against central differences and sympy
FUNCS = [
	'x^3 - 2 \\cdot x',
	'\\frac{x^2 + 1}{x - 3}',
	'x^x',
	'2^x',
	'x^{\\sin x}',
	'\\sin x \\cdot \\cos x',
	'\\tan x^2',
	'\\cot x',
	'\\arcsin \\frac{x}{2}',
	'\\arccos \\frac{x}{2}',
	'\\arctan (x^2 - 1)',
	'\\arccot x',
	'\\sqrt{x^2 + 1}',
	'\\ln (x + \\sqrt{x})',
	'-\\frac{1}{\\sin x}',
	'(1 + x)^{-\\frac{1}{2}}',
]

POINTS = (0.5, 1.0, 1.7)

class Test (unittest.TestCase):
	def test_differentiate (self):
		self.assertEqual (d ('x^2 + 2 \\cdot x - 1'), '2 \\cdot x + 2')
		self.assertEqual (d ('\\frac{1}{x+1}'), '-\\frac{1}{\\left(x + 1 \\right)^{2}}')
		self.assertEqual (d ('x'), '1')
		self.assertEqual (d ('\\sin x'), '\\cos x')
		self.assertEqual (d ('\\cos x'), '-\\sin x')
		self.assertEqual (d ('\\ln x'), '\\frac{1}{x}')
		self.assertEqual (d ('y \\cdot x'), 'y')
		self.assertEqual (d ('x + y'), '1')
		self.assertEqual (d ('x \\cdot y', 'y'), 'x')
		self.assertEqual (d ('2^x'), '\\ln 2 \\cdot 2^{x}')
		self.assertEqual (d ('-x'), '-1')

	def test_differentiate_constant (self):
		tree = parse ('5 + y')

		self.assertRaises (UnknownVariableError, differentiate, tree, 'x')
		self.assertRaises (DiffError, differentiate, parse ('5'), 'x')

		tree.var ('x')

		self.assertEqual (ast2tex (simplify (differentiate (tree, 'x'))), '0')

		try:
			differentiate (parse ('y'), 'x')
		except UnknownVariableError as e:
			self.assertEqual (e.var, 'x')

	def test_differentiate_copy (self):
		tree  = parse ('x^2 \\cdot \\sin x')
		orig  = tree.copy ()
		deriv = differentiate (tree, 'x')

		self.assertEqual (tree, orig)
		self.assertFalse ({id (n) for n in deriv} & {id (n) for n in tree})
		self.assertEqual (deriv.vars, ['x'])

		for node in deriv:
			for child in node.children:
				self.assertIs (child.parent, node)

	def test_differentiate_numeric (self):
		for text in FUNCS:
			tree  = parse (text)
			deriv = differentiate (tree, 'x')
			simp  = simplify (deriv)
			spt   = sp.diff (ast2spt (tree), sx)

			for x in POINTS:
				val  = evaluate (deriv, x = x)
				h    = 1e-6
				num  = (evaluate (tree, x = x + h) - evaluate (tree, x = x - h)) / (2 * h)
				sym  = float (spt.subs (sx, x))

				self.assertAlmostEqual (val, evaluate (simp, x = x), places = 9, msg = text)
				self.assertAlmostEqual (val, sym, places = 7, msg = text)
				self.assertLess (abs (val - num), 1e-4 * max (1, abs (val)), msg = text)

	def test_simplify (self):
		self.assertEqual (s ('x + x'), '2 \\cdot x')
		self.assertEqual (s ('x \\cdot x'), 'x^{2}')
		self.assertEqual (s ('x - x'), '0')
		self.assertEqual (s ('\\frac{x}{x}'), '1')
		self.assertEqual (s ('\\sin x + \\sin x'), '2 \\cdot \\sin x')
		self.assertEqual (s ('-x + y'), 'y - x')
		self.assertEqual (s ('-x - y'), '-\\left(x + y \\right)')
		self.assertEqual (s ('x + -y'), 'x - y')
		self.assertEqual (s ('x - -y'), 'x + y')
		self.assertEqual (s ('-x \\cdot -y'), 'x \\cdot y')
		self.assertEqual (s ('\\frac{-x}{y}'), '-\\frac{x}{y}')
		self.assertEqual (s ('(-x)^3'), '-x^{3}')
		self.assertEqual (s ('(-x)^2'), 'x^{2}')
		self.assertEqual (s ('--x'), 'x')
		self.assertEqual (s ('-0'), '0')
		self.assertEqual (s ('0 - x'), '-x')
		self.assertEqual (s ('1 \\cdot x + 0'), 'x')
		self.assertEqual (s ('0 \\cdot \\sin x'), '0')
		self.assertEqual (s ('\\frac{0}{x}'), '0')
		self.assertEqual (s ('\\frac{x}{1}'), 'x')
		self.assertEqual (s ('\\frac{x}{-1}'), '-x')
		self.assertEqual (s ('\\frac{-x}{-y}'), '\\frac{x}{y}')
		self.assertEqual (s ('x^1'), 'x')
		self.assertEqual (s ('x^0'), '1')
		self.assertEqual (s ('1^x'), '1')
		self.assertEqual (s ('0^x'), '0')

	def test_simplify_fold (self):
		self.assertEqual (s ('1 - 3'), '-2')
		self.assertEqual (s ('2^3'), '8')
		self.assertEqual (s ('\\frac{1}{4}'), '0.25')
		self.assertEqual (s ('2 \\cdot 3 + x \\cdot 0'), '6')
		self.assertEqual (s ('2 \\cdot (3 - 5)'), '-4')
		self.assertEqual (s ('x^{1 + 1}'), 'x^{2}')
		self.assertEqual (s ('2^{-1}'), '0.5')
		self.assertEqual (s ('4^{-\\frac{1}{2}}'), '0.5')
		self.assertEqual (s ('(-2)^3'), '-8')
		self.assertEqual (s ('-2 \\cdot -3'), '6')
		self.assertEqual (s ('x^{-1 - 1}'), 'x^{-2}')

	def test_simplify_funcs (self):
		self.assertEqual (s ('\\sin 0 + \\tan 0'), '0')
		self.assertEqual (s ('\\arcsin 0 + \\arctan 0 + \\sqrt{0}'), '0')
		self.assertEqual (s ('\\cos 0'), '1')
		self.assertEqual (s ('\\ln 1'), '0')
		self.assertEqual (s ('\\sqrt{1}'), '1')
		self.assertEqual (s ('\\sin (-x)'), '-\\sin x')
		self.assertEqual (s ('\\arctan -x'), '-\\arctan x')
		self.assertEqual (s ('\\cos (-x)'), '\\cos x')
		self.assertEqual (s ('\\arccos -x'), '\\arccos -x')
		self.assertEqual (s ('\\arccot 0'), '\\arccot 0')
		self.assertEqual (s ('\\ln (x - x + 1)'), '0')

	def test_simplify_diagnostics (self):
		with self.assertLogs ('difftex.simplify', 'WARNING') as cm:
			self.assertEqual (s ('\\frac{x}{0}'), '\\frac{x}{0}')

		self.assertEqual (len (cm.output), 1)

		with self.assertLogs ('difftex.simplify', 'WARNING'):
			self.assertEqual (s ('\\frac{1}{0}'), '\\frac{1}{0}')

		with self.assertLogs ('difftex.simplify', 'WARNING'):
			self.assertEqual (s ('\\ln 0'), '\\ln 0')

		with self.assertLogs ('difftex.simplify', 'WARNING'):
			self.assertEqual (s ('\\cot (1 - 1)'), '\\cot 0')

		with self.assertLogs ('difftex.simplify', 'WARNING'):
			self.assertEqual (s ('0^{-1}'), '0^{-1}')

		for text in ('\\frac{x}{0}', '\\frac{1}{0}', '\\ln 0', '\\cot 0', '0^{-2}', '\\frac{x}{1 - 1}'):
			self.assertRaises (SimplifyError, simplify, parse (text), True)

		self.assertRaises (ArithmeticError, simplify, parse ('\\ln 0'), strict = True)

	def test_simplify_copy (self):
		tree = parse ('x + x - (y - y)')
		orig = tree.copy ()
		simp = simplify (tree)

		self.assertEqual (tree, orig)
		self.assertEqual (simp.vars, ['x', 'y'])
		self.assertFalse ({id (n) for n in simp} & {id (n) for n in tree})

		node = Op ('+', Var ('x'), Num (0))

		self.assertEqual (simplify_node (node), Var ('x'))
		self.assertEqual (node, Op ('+', Var ('x'), Num (0)))

	def test_simplify_idempotent (self):
		for text in FUNCS + ['x + x + x', '-x - -y + --z', '\\frac{-1}{-x} \\cdot (0 + y)', '(-x)^3 \\cdot (-x)^3']:
			once = simplify (parse (text))

			self.assertEqual (simplify (once), once, msg = text)

	def test_simplify_preserves_value (self):
		for text in FUNCS:
			tree = parse (text)
			simp = simplify (differentiate (tree, 'x'))

			for x in POINTS:
				self.assertAlmostEqual (evaluate (simp, x = x), evaluate (differentiate (tree, 'x'), x = x), places = 9, msg = text)

	def test_series (self):
		self.assertEqual (ast2tex (series (parse ('\\sin x'), 'x', 0, 3)), 'x - \\frac{x^{3}}{6}')
		self.assertEqual (ast2tex (series (parse ('\\cos x'), 'x', 0, 0)), '1')
		self.assertEqual (ast2tex (series (parse ('\\sin x'), 'x', 0, 0)), '0')

		ser = series (parse ('\\ln (1 + x)'), 'x', 0, 4)

		self.assertAlmostEqual (evaluate (ser, x = .1), .1 - .1**2 / 2 + .1**3 / 3 - .1**4 / 4, places = 12)

		ser = series (parse ('x^2'), 'x', 1, 2)

		self.assertAlmostEqual (evaluate (ser, x = 3), 9, places = 9)
		self.assertAlmostEqual (evaluate (ser, x = -2), 4, places = 9)

		ser = series (parse ('x^3'), 'x', -1, 3)

		self.assertAlmostEqual (evaluate (ser, x = 2), 8, places = 9)
		self.assertAlmostEqual (evaluate (ser, x = -.5), -.125, places = 9)

		ser = series (parse ('e^x'), 'x', 0, 2) # e is just a variable here

		self.assertEqual (ser.vars, ['e', 'x'])

		ser = series (parse ('x^{-1}'), 'x', 2, 2)
		tex = ast2tex (ser)

		self.assertTrue (tex.startswith ('0.5 - 0.25 \\cdot '), msg = tex)
		self.assertNotIn ('^{-', tex)
		self.assertAlmostEqual (evaluate (ser, x = 2.5), .5 - .125 + .03125, places = 12)

	def test_series_errors (self):
		self.assertRaises (UnknownVariableError, series, parse ('y^2'), 'x')
		self.assertRaises (ValueError, series, parse ('x^2'), 'x', 0, -1)

	def test_series_strict (self):
		self.assertRaises (SimplifyError, series, parse ('\\ln x'), 'x', 0, 2, True)
		self.assertRaises (SimplifyError, tangent, parse ('\\frac{1}{x}'), 'x', 0, strict = True)

		with self.assertLogs ('difftex.simplify', 'WARNING'):
			self.assertIn ('\\ln 0', ast2tex (series (parse ('\\ln x'), 'x', 0, 2)))

		with self.assertLogs ('difftex.simplify', 'WARNING'):
			tangent (parse ('\\frac{1}{x}'), 'x', 0)

		self.assertEqual (ast2tex (series (parse ('\\ln x'), 'x', 1, 1, True)), 'x - 1')

	def test_series_accuracy (self):
		tree = parse ('\\frac{1}{1 - x}')

		for order in (2, 4, 6):
			ser = series (tree, 'x', 0, order)

			self.assertAlmostEqual (evaluate (ser, x = .5), sum (.5**i for i in range (order + 1)), places = 9)

	def test_tangent (self):
		self.assertEqual (ast2tex (tangent (parse ('x^2'), 'x', 1)), '1 + 2 \\cdot \\left(x - 1 \\right)')
		self.assertEqual (ast2tex (tangent (parse ('\\sin x'), 'x', 0)), 'x')

		tree = parse ('\\ln x + x^3')
		tan  = tangent (tree, 'x', 2)

		self.assertAlmostEqual (evaluate (tan, x = 2), evaluate (tree, x = 2), places = 9)
		self.assertAlmostEqual (evaluate (tan, x = 3) - evaluate (tan, x = 2), .5 + 12, places = 9)
		self.assertRaises (UnknownVariableError, tangent, tree, 'y', 0)

	def test_evaluate (self):
		self.assertEqual (evaluate (parse ('x^2 + y'), x = 2, y = 1), 5)
		self.assertEqual (evaluate (parse ('x^2 + y'), {'x': 2}, y = 1), 5)
		self.assertEqual (evaluate (parse ('\\frac{3}{2}')), 1.5)
		self.assertAlmostEqual (evaluate (parse ('\\arccot 0')), math.pi / 2)
		self.assertAlmostEqual (evaluate (parse ('\\arccot -1')), 3 * math.pi / 4)
		self.assertAlmostEqual (evaluate (parse ('\\cot x'), x = math.pi / 4), 1)
		self.assertAlmostEqual (evaluate (parse ('\\alpha \\cdot 2'), {'\\alpha': 1.5}), 3)
		self.assertEqual (evaluate (parse ('-x').root, x = 2), -2)
		self.assertRaises (ValueError, evaluate, parse ('x + y'), x = 1)
		self.assertRaises (ValueError, evaluate, parse ('\\ln 0'))
		self.assertRaises (ValueError, evaluate, parse ('\\sqrt{-1}'))
		self.assertRaises (ZeroDivisionError, evaluate, parse ('\\frac{1}{x}'), x = 0)

	def test_substitute (self):
		tree = parse ('x^2 + x')
		sub  = substitute (tree, 'x', -2)

		self.assertEqual (ast2tex (sub), '\\left(-2 \\right)^{2} + -2')
		self.assertEqual (evaluate (sub), 2)
		self.assertEqual (sub.vars, ['x'])
		self.assertEqual (ast2tex (simplify (sub)), '2')
		self.assertEqual (ast2tex (substitute (parse ('x \\cdot y'), 'y', 3)), 'x \\cdot 3')
		self.assertEqual (tree, parse ('x^2 + x'))
		self.assertRaises (UnknownVariableError, substitute, tree, 'y', 1)

	def test_function_tables (self):
		self.assertEqual (set (_DERIVS), set (dast.FUNCS))
		self.assertLessEqual (set (dast.FUNCS), set (_EVALS))
		self.assertLessEqual (set (dast.FUNCS), set (ast2tex._ast2tex_funcs))
		self.assertLessEqual (set (dast.FUNCS), set (ast2plot._ast2plot_funcs))
		self.assertLessEqual (set (dast.FUNCS), set (ast2spt._ast2spt_funcs))

if __name__ == '__main__':
	unittest.main ()
