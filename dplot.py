# Plot expression trees to image files using matplotlib.

import logging
import math

import sympy as sp

from dsym import ast2plot

_log   = logging.getLogger ('difftex.plot')

_DPLOT = False

try:
	import matplotlib

	matplotlib.use ('Agg')

	import matplotlib.pyplot as plt

	matplotlib.style.use ('bmh')

	_DPLOT = True

except ImportError:
	pass

RESOLUTION = 400

def available ():
	return _DPLOT

#...............................................................................................
def _cast_num (arg):
	try:
		return float (arg)
	except (TypeError, ValueError):
		return math.nan

def _lambdify (tree, var):
	"""Numeric function of var from the plottable text form of tree."""

	syms = {v.lstrip ('\\'): sp.Symbol (v.lstrip ('\\')) for v in tree.vars}
	expr = sp.sympify (ast2plot (tree), locals = {**syms, 'pi': sp.pi})

	return sp.lambdify (syms.get (var.lstrip ('\\'), sp.Symbol (var.lstrip ('\\'))), expr, 'math')

def sample (tree, var, xmin, xmax, res = RESOLUTION):
	f  = _lambdify (tree, var)
	xs = [xmin + (xmax - xmin) * i / res for i in range (res + 1)]
	ys = []

	for x in xs:
		try:
			ys.append (_cast_num (f (x)))
		except (ValueError, ZeroDivisionError, OverflowError, FloatingPointError):
			ys.append (math.nan)

	return xs, ys

def _ylim (ys, margin = 0.1): # bounds of the middle 90% of finite values so poles don't flatten everything
	ys = sorted (y for y in ys if math.isfinite (y))

	if not ys:
		return None

	lo, hi = ys [len (ys) // 20], ys [-1 - len (ys) // 20]

	if hi - lo < 1e-9:
		lo, hi = lo - 1, hi + 1

	d = (hi - lo) * margin

	return lo - d, hi + d

def _plot (curves, var, xmin, xmax, fnm, points = (), title = None):
	if not _DPLOT:
		_log.warning ('matplotlib not available, not plotting %s', fnm)

		return None

	fig  = plt.figure ()
	ylim = None

	try:
		for tree, fmt, label in curves:
			xs, ys = sample (tree, var, xmin, xmax)

			if ylim is None:
				ylim = _ylim (ys)

			plt.plot (xs, ys, fmt, label = label)

		for x, y, label in points:
			plt.plot ([x], [y], 'o', label = label)

		plt.xlim (xmin, xmax)

		if ylim is not None:
			plt.ylim (*ylim)

		plt.xlabel (var.lstrip ('\\'))

		if title:
			plt.title (title)

		plt.legend ()
		fig.savefig (fnm, format = 'png', bbox_inches = 'tight')

	finally:
		plt.close (fig)

	_log.info ('plotted %s', fnm)

	return fnm

def plot_function (tree, var, xmin, xmax, fnm):
	return _plot ([(tree, '-', 'f')], var, xmin, xmax, fnm)

def plot_tangent (tree, tangent, var, at, xmin, xmax, fnm, fat = None):
	"""Function and its tangent line at var = at, the tangent point marked if its value fat is given."""

	points = () if fat is None or not math.isfinite (fat) else ((at, fat, 'tangent point'),)

	return _plot ([(tree, '-', 'f'), (tangent, '--', 'tangent')], var, xmin, xmax, fnm, points)

def plot_series (tree, series, var, center, order, xmin, xmax, fnm):
	return _plot ([(tree, '-', 'f'), (series, '--', f'Taylor series at {center:g}, order {order}')], var, xmin, xmax, fnm)
