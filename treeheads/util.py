"""Misc code to avoid cyclic imports: files, parameters, and iterators."""
import io
import sys
import gzip
import threading

DEFAULTS = dict(
		headrules='modcollins',  # a name in heads.HEADFINDERS, or a filename
		startsymbol='ROOT',  # category of the synthetic root
		normpos=False,  # replace POS tags in relations by a canonical tag
		normalizer='ptb',  # one of 'ptb', 'basic', 'none'
		encoding='utf8',
		suffix='.mrg',  # only read files in a directory with this suffix
		fmt='conll',  # dependency output format: 'conll' or 'mst'
		)


class DictObj(object):
	"""Trivial class to wrap a dictionary for reasons of syntactic sugar."""

	def __init__(self, *args, **kwds):
		self.__dict__.update(*args, **kwds)

	def update(self, *args, **kwds):
		"""Update/add more attributes."""
		self.__dict__.update(*args, **kwds)

	def __getattr__(self, name):
		"""Dummy function for suppressing pylint E1101 errors."""
		raise AttributeError('%r instance has no attribute %r.\n'
				'Available attributes: %r' % (
				self.__class__.__name__, name, self.__dict__.keys()))

	def __repr__(self):
		return '%s(%s)' % (self.__class__.__name__,
			',\n\t'.join('%s=%r' % a for a in self.__dict__.items()))


def readparam(filename):
	"""Parse a parameter file.

	:param filename: The file should contain a list of comma-separated
		``attribute=value`` pairs and will be read using ``eval('dict(%s)' %
		open(file).read())``.
	:returns: A DictObj with the defaults of ``DEFAULTS`` for missing keys.
	:raises ValueError: for unrecognized keys."""
	with io.open(filename, encoding='utf8') as fileobj:
		params = eval('dict(%s)' % fileobj.read())  # pylint: disable=eval-used
	for key in params:
		if key not in DEFAULTS:
			raise ValueError('unrecognized option: %r' % key)
	return DictObj({key: params.get(key, value)
			for key, value in DEFAULTS.items()})


def openread(filename, encoding='utf8'):
	"""Open stdin/file for reading; decompress gz files on-the-fly.

	:param encoding: if None, mode is binary; otherwise, text."""
	mode = 'rb' if encoding is None else 'rt'
	if filename == '-':
		return open(sys.stdin.fileno(), mode=mode, encoding=encoding,
				closefd=False)
	if filename.endswith('.gz'):
		return gzip.open(filename, mode=mode, encoding=encoding)
	return open(filename, mode=mode, encoding=encoding)


class SynchronizedIterator(object):
	"""Wrap an iterator such that calls to ``next()`` are serialized.

	Allows a single corpus iterator to be shared among threads; each item is
	returned to exactly one caller."""

	def __init__(self, iterable):
		self._iterator = iter(iterable)
		self._lock = threading.Lock()

	def __iter__(self):
		return self

	def __next__(self):
		with self._lock:
			return next(self._iterator)


__all__ = ['DictObj', 'readparam', 'openread', 'SynchronizedIterator']
