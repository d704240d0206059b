"""Read trees from treebank files and directories of such files."""
import os
import re
import logging
from collections import deque
from roaringbitmap import RoaringBitmap
from .treereader import BracketTreeReader
from .util import openread

LOG = logging.getLogger(__name__)


class Item(object):
	"""A treebank item."""
	__slots__ = ('tree', 'filename', 'ordinal')

	def __init__(self, tree, filename, ordinal):
		self.tree = tree  # a Tree
		self.filename = filename  # the file the tree was read from
		self.ordinal = ordinal  # 1-based position of the tree in that file

	def __repr__(self):
		return '%s(%s, %r, %d)' % (self.__class__.__name__, self.tree,
				self.filename, self.ordinal)


def numbase(key):
	"""Split file name in numeric and string components to use as sort key."""
	path, base = os.path.split(key)
	components = re.split(r'[-.,_ ]', os.path.splitext(base)[0])
	components = [(0, int(a), '') if re.match(r'[0-9]+$', a) else (1, 0, a)
			for a in components]
	return [path] + components


def suffixfilter(suffix):
	""":returns: a predicate accepting file names that end with suffix."""
	return lambda filename: filename.endswith(suffix)


def regexfilter(pattern):
	""":returns: a predicate accepting file names of which the base name
		matches a regular expression."""
	regex = re.compile(pattern)
	return lambda filename: regex.search(os.path.basename(filename)) is not None


def iterfiles(path, acceptfile=None, bfs=True):
	"""Yield the names of the files in a directory tree.

	The accepted files of a directory are yielded before any of its
	subdirectories are visited. With ``bfs=True``, all files at one level of
	the directory tree are yielded before those at the next level; otherwise
	the traversal is depth-first.

	:param path: a directory, or a single file which is yielded as is.
	:param acceptfile: a predicate to filter file names; None accepts all."""
	if not os.path.isdir(path):
		yield path
		return
	agenda = deque([path])
	while agenda:
		directory = agenda.popleft() if bfs else agenda.pop()
		entries = sorted((os.path.join(directory, a)
				for a in os.listdir(directory)), key=numbase)
		subdirs = []
		for entry in entries:
			if os.path.isdir(entry):
				subdirs.append(entry)
			elif acceptfile is None or acceptfile(entry):
				yield entry
		agenda.extend(subdirs if bfs else reversed(subdirs))


class TreebankIterator(object):
	"""Lazily read the trees of a file, or of all files in a directory.

	>>> for item in TreebankIterator('wsj/', suffixfilter('.mrg')):
	...     print(item.filename, item.ordinal, item.tree)  # doctest: +SKIP

	Each file is read with a fresh :class:`BracketTreeReader`, which is
	closed when the file is exhausted. The root label of each tree records
	its provenance in ``docid`` and ``sentindex``. Instances are not thread
	safe; cf. :class:`treeheads.util.SynchronizedIterator`."""

	def __init__(self, path, acceptfile=None, normalizer=None, encoding='utf8',
			bfs=True, recover=False):
		"""
		:param path: a treebank file, or a directory with treebank files.
		:param acceptfile: a predicate to select the files in a directory;
			e.g., ``suffixfilter('.mrg')``.
		:param normalizer: a :class:`treeheads.normalize.TreeNormalizer`.
		:param bfs: if True, read directories breadth-first, otherwise
			depth-first.
		:param recover: if True, an opening bracket in the first column
			starts a new tree even if the previous one is incomplete; this
			requires files in which continuation lines are indented."""
		self.path = path
		self.normalizer = normalizer
		self.encoding = encoding
		self.recover = recover
		self.currentfile = None  # name of the file currently being read
		self.numfiles = 0
		self.numskipped = 0
		self._files = iterfiles(path, acceptfile, bfs)
		self._reader = None
		self._ordinal = 0

	def _nextfile(self):
		"""Open the next file; return False if there are no more files."""
		filename = next(self._files, None)
		if filename is None:
			self.currentfile = None
			return False
		LOG.debug('reading %s', filename)
		self._reader = BracketTreeReader(
				openread(filename, encoding=self.encoding),
				self.normalizer, filename=filename, recover=self.recover)
		self.currentfile = filename
		self.numfiles += 1
		self._ordinal = 0
		return True

	def _closereader(self):
		if self._reader is not None:
			self.numskipped += self._reader.numskipped
			self._reader.close()
			self._reader = None

	def __iter__(self):
		return self

	def __next__(self):
		while True:
			if self._reader is None and not self._nextfile():
				raise StopIteration
			tree = self._reader.readtree()
			if tree is not None:
				tree.label.docid = self.currentfile
				tree.label.sentindex = self._ordinal
				self._ordinal += 1
				return Item(tree, self.currentfile, self._ordinal)
			self._closereader()

	def close(self):
		"""Close the file currently being read."""
		self._closereader()

	def __enter__(self):
		return self

	def __exit__(self, _type, _value, _traceback):
		self.close()


def readtreebank(path, acceptfile=None, normalizer=None, encoding='utf8',
		bfs=True, recover=False):
	""":returns: a list with all trees of a treebank as :class:`Item`
		objects."""
	with TreebankIterator(path, acceptfile, normalizer, encoding,
			bfs, recover) as treebank:
		return list(treebank)


class CategoryIndex(object):
	"""An index of the categories that occur in the trees of a treebank.

	Trees are numbered consecutively in the order they are added; for each
	category a bitmap of the numbers of the trees in which it occurs is
	stored.

	>>> index = CategoryIndex(readtreebank('wsj/'))  # doctest: +SKIP
	>>> for n in index.query('NP', 'SBAR'):  # doctest: +SKIP
	...     print(index.provenance(n))"""

	def __init__(self, items=()):
		self.index = {}  # category => RoaringBitmap of tree numbers
		self.sources = []  # tree number => (filename, ordinal)
		for item in items:
			self.add(item)

	def add(self, item):
		"""Add the categories of an :class:`Item` to the index.

		:returns: the number assigned to the tree."""
		n = len(self.sources)
		self.sources.append((item.filename, item.ordinal))
		for node in item.tree.subtrees(lambda node: node.children):
			category = node.label.value
			if category is None:
				continue
			if category not in self.index:
				self.index[category] = RoaringBitmap()
			self.index[category].add(n)
		return n

	def query(self, *categories):
		""":returns: a RoaringBitmap with the numbers of the trees that
			contain all of the given categories."""
		result = None
		for category in categories:
			bitmap = self.index.get(category)
			if bitmap is None:
				return RoaringBitmap()
			result = RoaringBitmap(bitmap) if result is None else result & bitmap
		return RoaringBitmap() if result is None else result

	def provenance(self, n):
		""":returns: a tuple ``(filename, ordinal)`` for tree number n."""
		return self.sources[n]

	def __len__(self):
		return len(self.sources)

	def __contains__(self, category):
		return category in self.index


__all__ = ['Item', 'numbase', 'suffixfilter', 'regexfilter', 'iterfiles',
		'TreebankIterator', 'readtreebank', 'CategoryIndex']
