#!/usr/bin/env python3
# python 3.6+

# Command line driver: problem file -> derivative, Taylor series and tangent -> plots -> LaTeX article -> pdf.

import getopt
import logging
import os
import random
import sys
import traceback

from dlexer import LexError
from dparser import parse, ParseError
from dmath import differentiate, evaluate, series, tangent, DiffError
from dsimp import simplify, SimplifyError
from dsym import ast2tex, RenderError
from dinput import load_file, InputError
from darticle import Article, build_pdf, load_lines, ArticleError
import dplot

_VERSION      = '1.0'

_HELP         = f'usage: difftex [options] inputfile' '''

  -h, --help               - Show help information
  -v, --version            - Show version string
  -o, --outdir=DIR         - Output directory for article, plots and pdf (default "output")
  -s, --seed=N             - Seed for narrative phrase selection (default random)
  -t, --title=TEXT         - Article title
  -a, --author=TEXT        - Article author
  -p, --preamble=FILE      - LaTeX style file used as article preamble
  --starters=FILE          - Phrases introducing formulas, one per line
  --transitions=FILE       - Phrases following formulas, one per line
  --placeholders=FILE      - Phrases finishing transitions, one per line
  --strict                 - Treat simplification diagnostics like division by zero as errors
  -d, --debug              - Dump debug info to stderr
  --noplot                 - Don't plot graphs
  --nopdf                  - Don't run pdflatex on the article
'''.lstrip ()

_DEFAULT_TITLE  = 'On the Differentiation of a Certain Function'
_DEFAULT_AUTHOR = 'difftex'

_log = logging.getLogger ('difftex')

#...............................................................................................
class Results:
	__slots__ = ['problem', 'tree', 'deriv', 'deriv_simp', 'series', 'tangent', 'tangent_value']

	def __init__ (self, **kw):
		for s in self.__slots__:
			setattr (self, s, kw.get (s))

def solve (problem, strict = False):
	"""Parse problem function and compute everything the article needs."""

	tree = parse (problem.function)
	var  = problem.var

	if var not in tree.vars and tree.vars:
		raise DiffError (f'function variable {var!r} does not appear in expression, it has {", ".join (repr (v) for v in tree.vars)}')

	tree.var (var) # constant functions are differentiated with respect to var all the same

	_log.debug ('parsed: %r', tree)

	deriv      = differentiate (tree, var)
	deriv_simp = simplify (deriv, strict)
	ser        = series (tree, var, problem.taylor_at, problem.taylor_order, strict)
	tan        = tangent (tree, var, problem.tangent_at, strict)

	try:
		fat = evaluate (tree, {var: problem.tangent_at})

	except (ValueError, ZeroDivisionError, OverflowError):
		fat = None

	return Results (problem = problem, tree = tree, deriv = deriv, deriv_simp = deriv_simp, series = ser, tangent = tan,
			tangent_value = fat)

def plot (res, outdir):
	"""Plot function, tangent and series, return {name: filename} of plots actually made."""

	if not dplot.available ():
		_log.warning ('matplotlib not installed, skipping plots')

		return {}

	p     = res.problem
	plots = {}
	todo  = (
		('function', lambda fnm: dplot.plot_function (res.tree, p.var, p.range_start, p.range_end, fnm)),
		('tangent', lambda fnm: dplot.plot_tangent (res.tree, res.tangent, p.var, p.tangent_at, p.range_start, p.range_end, fnm, res.tangent_value)),
		('series', lambda fnm: dplot.plot_series (res.tree, res.series, p.var, p.taylor_at, p.taylor_order, p.range_start, p.range_end, fnm)),
	)

	for name, func in todo:
		fnm = os.path.join (outdir, f'{name}.png')

		try:
			if func (fnm):
				plots [name] = f'{name}.png'

		except Exception as e:
			_log.error ('plotting %s failed: %s', name, e)

			if os.environ.get ('DIFFTEX_DEBUG'):
				traceback.print_exc ()

	return plots

def write_article (res, article, title, author, plots = None):
	plots = plots or {}
	p     = res.problem
	var   = p.var
	f     = f'f\\left({var} \\right)'

	article.title (title, author)
	article.start ()
	article.abstract (f'In this paper we study the function ${f} = {ast2tex (res.tree)}$, its derivative, '
			f'its Taylor series at ${var} = {p.taylor_at:g}$ and its tangent at ${var} = {p.tangent_at:g}$.')

	article.section ('The function')
	article.narrated_formula (res.tree, f)

	if 'function' in plots:
		article.image (plots ['function'], f'Graph of ${f}$')

	article.section ('The derivative')
	article.text ('Applying the rules of differentiation term by term we get')
	article.narrated_formula (res.deriv, f"f'\\left({var} \\right)")
	article.text ('Which after simplification becomes')
	article.narrated_formula (res.deriv_simp, f"f'\\left({var} \\right)")

	article.section ('Taylor series')
	article.text (f'Expanding the function around ${var} = {p.taylor_at:g}$ up to ${var}^{{{p.taylor_order}}}$')
	article.narrated_formula (res.series, f)

	if 'series' in plots:
		article.image (plots ['series'], 'Function and its Taylor series')

	article.section ('Tangent')
	article.text (f'The tangent line at ${var} = {p.tangent_at:g}$ is')
	article.narrated_formula (res.tangent, 'y')

	if 'tangent' in plots:
		article.image (plots ['tangent'], 'Function and its tangent')

	article.end ()

#...............................................................................................
def main (argv = None):
	try:
		opts, args = getopt.getopt (sys.argv [1:] if argv is None else argv, 'hvo:s:t:a:p:d',
				['help', 'version', 'outdir=', 'seed=', 'title=', 'author=', 'preamble=', 'starters=', 'transitions=',
				'placeholders=', 'strict', 'debug', 'noplot', 'nopdf'])

	except getopt.GetoptError as e:
		print (f'{e}\n\n{_HELP}', file = sys.stderr)

		return 2

	opts = dict (opts)

	if '--help' in opts or '-h' in opts:
		print (_HELP)

		return 0

	if '--version' in opts or '-v' in opts:
		print (_VERSION)

		return 0

	if '--debug' in opts or '-d' in opts:
		os.environ ['DIFFTEX_DEBUG'] = '1'

	debug = bool (os.environ.get ('DIFFTEX_DEBUG'))

	logging.basicConfig (level = logging.DEBUG if debug else logging.WARNING, format = '%(name)s: %(levelname)s: %(message)s')

	if len (args) != 1:
		print (_HELP, file = sys.stderr)

		return 2

	outdir = opts.get ('--outdir', opts.get ('-o', 'output'))
	seed   = opts.get ('--seed', opts.get ('-s'))

	try:
		problem = load_file (args [0])
		res     = solve (problem, strict = '--strict' in opts)

		os.makedirs (outdir, exist_ok = True)

		plots   = {} if '--noplot' in opts else plot (res, outdir)
		article = Article (random.Random (None if seed is None else int (seed)),
				starters     = load_lines (opts ['--starters']) if '--starters' in opts else None,
				transitions  = load_lines (opts ['--transitions']) if '--transitions' in opts else None,
				placeholders = load_lines (opts ['--placeholders']) if '--placeholders' in opts else None,
				preamble     = opts.get ('--preamble', opts.get ('-p')))

		write_article (res, article, opts.get ('--title', opts.get ('-t', _DEFAULT_TITLE)), opts.get ('--author', opts.get ('-a', _DEFAULT_AUTHOR)), plots)

		fnm     = article.write (outdir)

	except (LexError, ParseError, InputError, DiffError, SimplifyError, RenderError, ArticleError, OSError, ValueError) as e:
		if debug:
			traceback.print_exc ()

		print (f'{e.__class__.__name__}: {e}', file = sys.stderr)

		return 1

	print (fnm)

	if '--nopdf' not in opts:
		if not build_pdf (fnm):
			return 1

		print (os.path.splitext (fnm) [0] + '.pdf')

	return 0

if __name__ == '__main__':
	sys.exit (main ())
