# Problem description file loader.
#
#   $f(x) = <expression>$
#   Taylor series at <number> to $x^<order>$
#   Tangent at $x=<number>$
#   Plot in range [<start>, <end>]

import re

_NUM          = r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'

_rec_function = re.compile (r'^\$\s*f\s*\(([^)]*)\)\s*=\s*([^$]*)\$$')
_rec_taylor   = re.compile (fr'^Taylor\s+series\s+at\s+({_NUM})\s+to\s+\$([^^$]*)\^\s*{{?\s*([+-]?\d+)\s*}}?\s*\$$')
_rec_tangent  = re.compile (fr'^Tangent\s+at\s+\$([^=$]*)=\s*({_NUM})\s*\$$')
_rec_range    = re.compile (fr'^Plot\s+in\s+range\s*\[\s*({_NUM})\s*,\s*({_NUM})\s*\]$')

class InputError (ValueError):
	def __init__ (self, msg, lineno = None, filename = None):
		where = f'{filename or "<input>"}' + (f':{lineno}' if lineno is not None else '')

		ValueError.__init__ (self, f'{where}: {msg}')

		self.lineno   = lineno
		self.filename = filename

#...............................................................................................
class Problem:
	__slots__ = ['var', 'function', 'taylor_at', 'taylor_order', 'tangent_at', 'range_start', 'range_end']

	def __init__ (self, var, function, taylor_at, taylor_order, tangent_at, range_start, range_end):
		self.var          = var
		self.function     = function
		self.taylor_at    = taylor_at
		self.taylor_order = taylor_order
		self.tangent_at   = tangent_at
		self.range_start  = range_start
		self.range_end    = range_end

	def __repr__ (self):
		return f'Problem ({", ".join (f"{s} = {getattr (self, s)!r}" for s in self.__slots__)})'

	def __eq__ (self, other):
		return isinstance (other, Problem) and all (getattr (self, s) == getattr (other, s) for s in self.__slots__)

	__hash__ = None

def load (text, filename = None):
	lines = [(i, l.strip ()) for i, l in enumerate (text.split ('\n'), 1) if l.strip ()]
	names = ('function', 'Taylor series', 'tangent', 'plot range')

	if len (lines) < len (names):
		raise InputError (f'missing {names [len (lines)]} line', None, filename)

	if len (lines) > len (names):
		raise InputError (f'unexpected extra input {lines [len (names)] [1] [:32]!r}', lines [len (names)] [0], filename)

	def match (idx, rec):
		lineno, line = lines [idx]
		m            = rec.match (line)

		if not m:
			raise InputError (f'invalid {names [idx]} line {line [:32]!r}', lineno, filename)

		return lineno, m.groups ()

	_, (var, function)             = match (0, _rec_function)
	var                            = var.strip ()

	if not var:
		raise InputError ('function variable missing', lines [0] [0], filename)

	lineno, (at, tvar, order)      = match (1, _rec_taylor)

	if tvar.strip () != var:
		raise InputError (f'function variable {var!r} does not match Taylor series variable {tvar.strip ()!r}', lineno, filename)

	if int (order) < 0:
		raise InputError (f'Taylor series order must not be negative, got {order}', lineno, filename)

	lineno, (gvar, tangent_at)     = match (2, _rec_tangent)

	if gvar.strip () != var:
		raise InputError (f'function variable {var!r} does not match tangent variable {gvar.strip ()!r}', lineno, filename)

	lineno, (range_start, range_end) = match (3, _rec_range)

	if float (range_start) >= float (range_end):
		raise InputError (f'plot range start {range_start} must be less than end {range_end}', lineno, filename)

	return Problem (var, function.strip (), float (at), int (order), float (tangent_at), float (range_start), float (range_end))

def load_file (filename):
	with open (filename) as f:
		return load (f.read (), filename)
