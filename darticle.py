# LaTeX article assembly around rendered formulas, with random narrative filler lines.

import logging
import os
import shutil
import subprocess

from dsym import ast2tex_labeled

_log                 = logging.getLogger ('difftex.article')

DEFAULT_STARTER      = 'Now look at this:'
DEFAULT_TRANSITION   = 'As you can see,'
DEFAULT_PLACEHOLDER  = 'is easy to see.'

_NEW, _TITLE, _STARTED, _ENDED = range (4)

class ArticleError (RuntimeError): pass

def load_lines (filename):
	"""Non-empty lines of a text file, used for starter / transition / placeholder phrases."""

	with open (filename) as f:
		return [l.strip () for l in f if l.strip ()]

#...............................................................................................
class Article:
	def __init__ (self, rng, starters = None, transitions = None, placeholders = None, preamble = None):
		self.rng          = rng
		self.starters     = starters or []
		self.transitions  = transitions or []
		self.placeholders = placeholders or []
		self.preamble     = preamble
		self.state        = _NEW
		self.parts        = ['\\documentclass{article}\n', '\\usepackage{graphicx}\n']

		if preamble:
			self.parts.append ('\\usepackage{preamble}\n')

	def _check (self, *states):
		if self.state not in states:
			raise ArticleError ('article is ' + ('not started yet' if self.state < _STARTED else 'already finished' if self.state == _ENDED else 'already started'))

	def _choice (self, lines, default):
		return self.rng.choice (lines) if lines else default

	def title (self, title, author = ''):
		self._check (_NEW)
		self.parts.append (f'\\title{{{title}}}\n\\author{{{author}}}\n')

		self.state = _TITLE

	def start (self):
		self._check (_NEW, _TITLE)
		self.parts.append ('\\begin{document}\n\\maketitle\n')

		self.state = _STARTED

	def end (self):
		self._check (_STARTED)
		self.parts.append ('\\end{document}\n')

		self.state = _ENDED

	def abstract (self, text):
		self._check (_STARTED)
		self.parts.append (f'\\begin{{abstract}}\n{text}\n\\end{{abstract}}\n')

	def section (self, title):
		self._check (_STARTED)
		self.parts.append (f'\\newpage\n\\section{{{title}}}\n')

	def text (self, text):
		self._check (_STARTED)
		self.parts.append (f'{text}\n')

	def starter (self):
		self._check (_STARTED)
		self.parts.append (f'\n{self._choice (self.starters, DEFAULT_STARTER)}\n')

	def transition (self):
		self._check (_STARTED)
		self.parts.append (f'{self._choice (self.transitions, DEFAULT_TRANSITION)} ')

	def placeholder (self):
		self._check (_STARTED)
		self.parts.append (f'{self._choice (self.placeholders, DEFAULT_PLACEHOLDER)}\n\n')

	def formula (self, tree, lhs = None):
		"""Display equation of tree, oversized subexpressions are pulled out into an itemized 'Where:' list."""

		self._check (_STARTED)

		tex, legend = ast2tex_labeled (tree)
		lhs         = f'{lhs} = ' if lhs else ''

		self.parts.append (f'\\begin{{equation}}\n{lhs}{tex}\n\\end{{equation}}\n')

		if legend:
			self.parts.append ('Where:\n\\begin{itemize}\n')
			self.parts.extend (f'\\item ${l} = {t}$\n' for l, t in legend)
			self.parts.append ('\\end{itemize}\n')

	def narrated_formula (self, tree, lhs = None):
		self.starter ()
		self.formula (tree, lhs)
		self.transition ()
		self.placeholder ()

	def image (self, filename, caption = None):
		self._check (_STARTED)
		self.parts.append ('\\begin{figure}[h]\n\\centering\n'
				f'\\includegraphics[width=0.8\\textwidth]{{{filename}}}\n' +
				(f'\\caption{{{caption}}}\n' if caption else '') +
				'\\end{figure}\n')

	def tex (self):
		return ''.join (self.parts)

	def write (self, outdir, name = 'article'):
		"""Write finished article to outdir/name.tex (and preamble.sty if one was given), return the .tex path."""

		self._check (_ENDED)
		os.makedirs (outdir, exist_ok = True)

		if self.preamble:
			shutil.copyfile (self.preamble, os.path.join (outdir, 'preamble.sty'))

		fnm = os.path.join (outdir, f'{name}.tex')

		with open (fnm, 'w') as f:
			f.write (self.tex ())

		_log.info ('wrote %s', fnm)

		return fnm

#...............................................................................................
def build_pdf (fnm, latex = 'pdflatex'):
	"""Typeset fnm in its own directory. Returns True on success, failures are logged and do not raise."""

	outdir, base = os.path.split (os.path.abspath (fnm))

	try:
		ret = subprocess.run ([latex, '-interaction=nonstopmode', '-shell-escape', base], cwd = outdir,
				stdout = subprocess.PIPE, stderr = subprocess.STDOUT)

	except OSError as e:
		_log.error ('could not run %s: %s', latex, e)

		return False

	if ret.returncode != 0:
		_log.error ('%s failed with code %d:\n%s', latex, ret.returncode, ret.stdout.decode (errors = 'replace') [-2000:])

		return False

	return True
