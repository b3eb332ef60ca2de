#!/usr/bin/env python
# python 3.6+

import io
import math
import os
import random
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr

import difftex
from darticle import Article, ArticleError, build_pdf, load_lines, DEFAULT_STARTER, DEFAULT_TRANSITION, DEFAULT_PLACEHOLDER
from dinput import load
from dmath import DiffError
from dsimp import SimplifyError
from dparser import parse
from dsym import ast2tex

PROBLEM = '''
$f(x) = x^2 + \\sin x$
Taylor series at 0 to $x^3$
Tangent at $x=1$
Plot in range [-2, 2]
'''.lstrip ()

def article (rng = None, **kw):
	a = Article (rng or random.Random (1), **kw)

	a.title ('T', 'A')
	a.start ()

	return a

class Test (unittest.TestCase):
	def test_article_states (self):
		a = Article (random.Random (1))

		self.assertRaises (ArticleError, a.text, 'x')
		self.assertRaises (ArticleError, a.end)
		self.assertRaises (ArticleError, a.write, '.')

		a.title ('Title', 'Author')

		self.assertRaises (ArticleError, a.title, 'Again')

		a.start ()

		self.assertRaises (ArticleError, a.start)

		a.text ('hello')
		a.end ()

		self.assertRaises (ArticleError, a.text, 'x')
		self.assertRaises (ArticleError, a.formula, parse ('x'))

		tex = a.tex ()

		self.assertTrue (tex.startswith ('\\documentclass{article}\n'))
		self.assertIn ('\\title{Title}\n\\author{Author}\n', tex)
		self.assertIn ('\\begin{document}\n\\maketitle\n', tex)
		self.assertTrue (tex.endswith ('hello\n\\end{document}\n'))

	def test_article_untitled (self):
		a = Article (random.Random (1))

		a.start ()
		a.end ()

		self.assertNotIn ('\\title', a.tex ())

	def test_article_phrases (self):
		a = article ()

		a.narrated_formula (parse ('x^2'), 'f')

		self.assertIn (f'\n{DEFAULT_STARTER}\n\\begin{{equation}}\nf = x^{{2}}\n\\end{{equation}}\n{DEFAULT_TRANSITION} {DEFAULT_PLACEHOLDER}\n\n', a.tex ())

		starters = ['One:', 'Two:', 'Three:']
		texs     = []

		for _ in range (2):
			a = article (random.Random (5), starters = starters, transitions = ['So'], placeholders = ['done.'])

			for _ in range (10):
				a.narrated_formula (parse ('x'))

			texs.append (a.tex ())

		self.assertEqual (texs [0], texs [1])
		self.assertIn ('So done.\n', texs [0])
		self.assertNotIn (DEFAULT_STARTER, texs [0])
		self.assertTrue (any (s in texs [0] for s in starters))

	def test_article_formula_labels (self):
		a = article ()

		a.formula (parse ('x'))
		self.assertIn ('\\begin{equation}\nx\n\\end{equation}\n', a.tex ())
		self.assertNotIn ('Where:', a.tex ())

		a.formula (parse (' + '.join ('x' for _ in range (20))), 'g')

		tex = a.tex ()

		self.assertIn ('g = A + x', tex)
		self.assertIn ('Where:\n\\begin{itemize}\n\\item $A = x + x', tex)
		self.assertIn ('\\end{itemize}\n', tex)

	def test_article_sections (self):
		a = article ()

		a.abstract ('About.')
		a.section ('First')
		a.image ('f.png', 'Graph')
		a.image ('g.png')

		tex = a.tex ()

		self.assertIn ('\\begin{abstract}\nAbout.\n\\end{abstract}\n', tex)
		self.assertIn ('\\newpage\n\\section{First}\n', tex)
		self.assertIn ('\\includegraphics[width=0.8\\textwidth]{f.png}\n\\caption{Graph}\n', tex)
		self.assertIn ('\\includegraphics[width=0.8\\textwidth]{g.png}\n\\end{figure}\n', tex)

	def test_article_write (self):
		with tempfile.TemporaryDirectory () as tmp:
			pre = os.path.join (tmp, 'my.sty')

			with open (pre, 'w') as f:
				f.write ('\\usepackage{amsmath}\n')

			a = article (preamble = pre)

			a.end ()

			out = os.path.join (tmp, 'out')
			fnm = a.write (out, 'paper')

			self.assertEqual (fnm, os.path.join (out, 'paper.tex'))

			with open (fnm) as f:
				self.assertEqual (f.read (), a.tex ())

			with open (os.path.join (out, 'preamble.sty')) as f:
				self.assertEqual (f.read (), '\\usepackage{amsmath}\n')

			self.assertIn ('\\usepackage{preamble}\n', a.tex ())
			self.assertNotIn ('\\usepackage{preamble}', article ().tex ())

	def test_load_lines (self):
		with tempfile.TemporaryDirectory () as tmp:
			fnm = os.path.join (tmp, 'lines.txt')

			with open (fnm, 'w') as f:
				f.write ('first line\n\n   \n  second  \n')

			self.assertEqual (load_lines (fnm), ['first line', 'second'])

	def test_build_pdf_failure (self):
		with tempfile.TemporaryDirectory () as tmp:
			fnm = os.path.join (tmp, 'article.tex')

			with open (fnm, 'w') as f:
				f.write ('')

			with self.assertLogs ('difftex.article', 'ERROR'):
				self.assertFalse (build_pdf (fnm, latex = 'no-such-latex-command-here'))

	def test_solve (self):
		res = difftex.solve (load (PROBLEM))

		self.assertEqual (ast2tex (res.tree), 'x^{2} + \\sin x')
		self.assertEqual (ast2tex (res.deriv_simp), '2 \\cdot x + \\cos x')
		self.assertAlmostEqual (res.tangent_value, 1 + math.sin (1))
		self.assertEqual (res.tree.vars, ['x'])

		res = difftex.solve (load (PROBLEM.replace ('x^2 + \\sin x', '5')))

		self.assertEqual (ast2tex (res.deriv_simp), '0')
		self.assertEqual (ast2tex (res.series), '5')
		self.assertEqual (ast2tex (res.tangent), '5')

		self.assertRaises (DiffError, difftex.solve, load (PROBLEM.replace ('x^2 + \\sin x', 'y^2')))

		res = difftex.solve (load (PROBLEM.replace ('x^2 + \\sin x', '\\frac{1}{x - 1}')))

		self.assertIsNone (res.tangent_value)

		self.assertRaises (SimplifyError, difftex.solve, load (PROBLEM.replace ('x^2 + \\sin x', '\\ln x')), True)

	def test_write_article (self):
		res = difftex.solve (load (PROBLEM))
		a   = Article (random.Random (1))

		difftex.write_article (res, a, 'T', 'A')

		self.assertNotIn ('\\includegraphics', a.tex ())
		self.assertTrue (a.tex ().endswith ('\\end{document}\n'))

		a = Article (random.Random (1))

		difftex.write_article (res, a, 'T', 'A', {'series': 'series.png'})

		self.assertIn ('{series.png}', a.tex ())
		self.assertNotIn ('tangent.png', a.tex ())

	def test_main (self):
		with tempfile.TemporaryDirectory () as tmp:
			inp = os.path.join (tmp, 'problem.txt')
			out = os.path.join (tmp, 'out')

			with open (inp, 'w') as f:
				f.write (PROBLEM)

			stdout = io.StringIO ()

			with redirect_stdout (stdout):
				self.assertEqual (difftex.main (['--noplot', '--nopdf', '-o', out, '-s', '1', '--title=Study', inp]), 0)

			fnm = os.path.join (out, 'article.tex')

			self.assertEqual (stdout.getvalue ().strip (), fnm)

			with open (fnm) as f:
				tex = f.read ()

			self.assertIn ('\\title{Study}', tex)
			self.assertIn ('2 \\cdot x + \\cos x', tex)
			self.assertTrue (tex.endswith ('\\end{document}\n'))

			with open (inp, 'w') as f:
				f.write (PROBLEM.replace ('Tangent', 'Tangle'))

			stderr = io.StringIO ()

			with redirect_stderr (stderr):
				self.assertEqual (difftex.main (['--noplot', '--nopdf', '-o', out, inp]), 1)

			self.assertTrue (stderr.getvalue ().startswith ('InputError: '))

			with open (inp, 'w') as f:
				f.write (PROBLEM.replace ('x^2', 'x^'))

			with redirect_stderr (io.StringIO ()):
				self.assertEqual (difftex.main (['--noplot', '--nopdf', '-o', out, inp]), 1)
				self.assertEqual (difftex.main (['--noplot', '--nopdf', '-o', out, os.path.join (tmp, 'missing.txt')]), 1)

	def test_main_strict (self):
		with tempfile.TemporaryDirectory () as tmp:
			inp = os.path.join (tmp, 'problem.txt')
			out = os.path.join (tmp, 'out')

			with open (inp, 'w') as f:
				f.write (PROBLEM.replace ('x^2 + \\sin x', '\\ln x'))

			stderr = io.StringIO ()

			with redirect_stdout (io.StringIO ()), redirect_stderr (stderr):
				self.assertEqual (difftex.main (['--strict', '--noplot', '--nopdf', '-o', out, inp]), 1)

			self.assertTrue (stderr.getvalue ().startswith ('SimplifyError: '), msg = stderr.getvalue ())
			self.assertFalse (os.path.exists (os.path.join (out, 'article.tex')))

			with redirect_stdout (io.StringIO ()), redirect_stderr (io.StringIO ()), self.assertLogs ('difftex.simplify', 'WARNING'):
				self.assertEqual (difftex.main (['--noplot', '--nopdf', '-o', out, inp]), 0)

			with open (os.path.join (out, 'article.tex')) as f:
				self.assertIn ('\\ln 0', f.read ())

	def test_main_usage (self):
		with redirect_stdout (io.StringIO ()) as stdout, redirect_stderr (io.StringIO ()):
			self.assertEqual (difftex.main (['--version']), 0)
			self.assertEqual (stdout.getvalue ().strip (), '1.0')
			self.assertEqual (difftex.main (['-h']), 0)
			self.assertEqual (difftex.main ([]), 2)
			self.assertEqual (difftex.main (['a', 'b']), 2)
			self.assertEqual (difftex.main (['--bogus', 'a']), 2)

if __name__ == '__main__':
	unittest.main ()
