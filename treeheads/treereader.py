"""Read trees in bracket notation from a stream of characters.

The reader is a push-down automaton over three kinds of tokens: opening
brackets, closing brackets, and any other whitespace-delimited string, which
is either a category (if it directly follows an opening bracket) or a word.
For example::

	( (S (NP (DT The) (NN cat)) (VP (VBD sat)) (. .)) )

Text outside of brackets is ignored."""
import io
import re
import logging
from .tree import Label, Tree
from .normalize import TreeNormalizer

LOG = logging.getLogger(__name__)
TOKENRE = re.compile(r'[()]|[^\s()]+')
BRACKETS = ('(', ')')


class MalformedTreeError(ValueError):
	"""Raised for improperly nested brackets when reading in strict mode."""


def tokenize(stream):
	"""Yield the tokens in a stream: opening and closing brackets, and any
	other maximal sequence of non-whitespace characters.

	:param stream: a string, a file object, or another iterable of lines."""
	for _lineno, _bol, token in _tokenlines(stream):
		yield token


def _tokenlines(stream):
	"""Yield tuples ``(lineno, bol, token)``; ``bol`` is True for an opening
	bracket in the first column of a line. The stream is consumed lazily."""
	if isinstance(stream, str):
		stream = io.StringIO(stream)
	for lineno, line in enumerate(stream, 1):
		for match in TOKENRE.finditer(line):
			token = match.group()
			yield lineno, match.start() == 0 and token == '(', token


def unescape(token):
	"""Undo the escaping of asterisks and slashes in words.

	>>> unescape('1\\\\/2')
	'1/2'"""
	return token.replace('\\*', '*').replace('\\/', '/')


class BracketTreeReader(object):
	"""Incrementally read trees in bracket notation from a stream.

	>>> reader = BracketTreeReader('(S (NP John) (VP runs)) (S (VP stop))')
	>>> [str(tree) for tree in reader]
	['(S (NP John) (VP runs))', '(S (VP stop))']
	"""

	def __init__(self, stream, normalizer=None, filename=None, strict=False,
			recover=False):
		"""
		:param stream: a string, a file object, or an iterable of lines.
		:param normalizer: a :class:`TreeNormalizer` instance, applied to each
			word and category, and to each complete tree.
		:param filename: name to use in diagnostics; by default the ``name``
			attribute of ``stream``, if any.
		:param strict: if True, raise :class:`MalformedTreeError` for improperly
			nested brackets, instead of logging and skipping the tree.
		:param recover: if True, an opening bracket in the first column of a
			line while a tree is still open is taken as the start of a new
			tree, and the incomplete tree is discarded. Only use this for
			files that indent continuation lines, as the Penn treebank does;
			otherwise a balanced tree may be split."""
		self.normalizer = normalizer or TreeNormalizer()
		self.filename = filename or getattr(stream, 'name', None)
		self.strict = strict
		self.recover = recover
		self.numread = 0  # number of trees returned so far
		self.numskipped = 0  # number of malformed trees skipped
		self.numrejected = 0  # number of trees rejected by the normalizer
		self.lineno = 0
		self._stream = stream
		self._tokens = _tokenlines(stream)
		self._peeked = None

	def _next(self):
		"""Consume the next token; return None at the end of the stream."""
		if self._peeked is not None:
			result, self._peeked = self._peeked, None
			return result
		return next(self._tokens, None)

	def _peek(self):
		"""Return the next token without consuming it."""
		if self._peeked is None:
			self._peeked = next(self._tokens, None)
		return self._peeked

	def readtree(self):
		"""Read the next tree.

		:returns: a Tree, or None when the end of the stream is reached.
		:raises MalformedTreeError: in strict mode, for improperly nested
			brackets."""
		while True:
			tree = self._readraw()
			if tree is None:
				return None
			tree = self._finish(tree)
			if tree is not None:
				self.numread += 1
				return tree

	def _readraw(self):
		"""Run the automaton until a complete bracketing has been read."""
		stack = []
		current = None
		leafindex = start = 0
		while True:
			item = self._next()
			if item is None:
				if current is not None:
					self._malformed('unexpected end of input with %d open '
							'bracket(s); incomplete tree discarded'
							% (len(stack) + 1), start)
				return None
			self.lineno, bol, token = item
			if token == '(':
				if current is not None and bol and self.recover:
					self._malformed('new tree started before brackets were '
							'balanced; incomplete tree discarded', start)
					stack, current, leafindex = [], None, 0
				following = self._peek()
				if following is None or following[2] in BRACKETS:
					label = Label(None)
				else:
					self._next()
					label = Label(
							self.normalizer.normalizenonterminal(following[2]))
				node = Tree(label)
				if current is None:
					start = self.lineno
				else:
					current.append(node)
					stack.append(current)
				current = node
			elif token == ')':
				if current is None:
					self._malformed('unmatched closing bracket', self.lineno)
					continue
				node = current
				current = stack.pop() if stack else None
				if not node.children:
					# drop empty bracketings such as ()
					LOG.debug('%s:%d: skipping empty bracketing %s',
							self.filename or '<stream>', self.lineno, node.label)
					if current is not None:
						current.pop()
					continue
				if current is None:
					return node
			elif current is not None:
				leafindex += 1
				word = unescape(self.normalizer.normalizeterminal(token))
				current.append(Tree(Label(word, index=leafindex)))
			# otherwise, stray text outside of a tree is ignored

	def _finish(self, tree):
		"""Flatten extra wrapping brackets, set tags of leaves, and apply
		the whole-tree normalization."""
		while (tree.label.value is None and len(tree) == 1
				and tree[0].label.value is None and tree[0].children):
			tree = tree[0]
		tree.percolatetags()
		result = self.normalizer.normalizewholetree(tree)
		if result is None:
			self.numrejected += 1
			LOG.debug('%s:%d: tree %d rejected by normalizer',
					self.filename or '<stream>', self.lineno, self.numread + 1)
		return result

	def _malformed(self, msg, lineno):
		"""Report a malformed tree."""
		if self.strict:
			raise MalformedTreeError('%s:%d: %s' % (
					self.filename or '<stream>', lineno, msg))
		self.numskipped += 1
		LOG.warning('%s:%d: malformed tree %d: %s',
				self.filename or '<stream>', lineno, self.numread + 1, msg)

	def close(self):
		"""Close the underlying stream, if possible."""
		if hasattr(self._stream, 'close'):
			self._stream.close()

	def __iter__(self):
		return self

	def __next__(self):
		tree = self.readtree()
		if tree is None:
			raise StopIteration
		return tree

	def __enter__(self):
		return self

	def __exit__(self, _type, _value, _traceback):
		self.close()


def readtrees(stream, normalizer=None):
	""":returns: a list with all trees in a string or stream."""
	return list(BracketTreeReader(stream, normalizer))


def parsetree(treestr, normalizer=None):
	"""Parse a string with exactly one tree in bracket notation.

	:raises ValueError: if the string does not contain exactly one
		well-formed tree."""
	reader = BracketTreeReader(treestr, normalizer, strict=True,
			recover=False)
	tree = reader.readtree()
	if tree is None:
		raise ValueError('no tree in %r' % treestr)
	elif reader.readtree() is not None:
		raise ValueError('expected a single tree: %r' % treestr)
	return tree


__all__ = ['MalformedTreeError', 'BracketTreeReader', 'tokenize', 'unescape',
		'readtrees', 'parsetree']
