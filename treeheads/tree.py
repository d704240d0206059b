"""Labels and trees for representing phrase-structure trees."""
# This is an adaptation of the tree.py file from disco-dop, which in turn
# adapts the original tree.py file from NLTK.
# Removed: immutable, parented & discontinuous trees, drawing.
# Leaves are Tree objects without children, each with its own Label.
# Original notice:
# Natural Language Toolkit: Text Trees
#
# Copyright (C) 2001-2010 NLTK Project
# Author: Edward Loper <edloper@gradient.cis.upenn.edu>
#         Steven Bird <sb@csse.unimelb.edu.au>
#         Nathan Bodenstab <bodenstab@cslu.ogi.edu> (tree transforms)
# URL: <http://www.nltk.org/>
# For license information, see LICENSE.TXT


class Label(object):
	"""The label of a tree node.

	For a nonterminal, ``value`` is the syntactic category; for a leaf it is
	the word. Leaves additionally carry the POS ``tag`` of their preterminal
	and their 1-based ``index`` in the yield of the tree. The root label of a
	tree read from a corpus records the file (``docid``) and the 0-based
	ordinal of the tree in that file (``sentindex``)."""

	__slots__ = ('value', 'tag', 'index', 'docid', 'sentindex')

	def __init__(self, value, tag=None, index=None, docid=None,
			sentindex=None):
		self.value = value
		self.tag = tag
		self.index = index
		self.docid = docid
		self.sentindex = sentindex

	def copy(self):
		"""Return an independent copy of this label."""
		return Label(self.value, self.tag, self.index, self.docid,
				self.sentindex)

	def __eq__(self, other):
		if not isinstance(other, Label):
			return False
		return (self.value == other.value and self.tag == other.tag
				and self.index == other.index)

	def __ne__(self, other):
		return not self.__eq__(other)

	def __hash__(self):
		return hash((self.value, self.tag, self.index))

	def __str__(self):
		return '' if self.value is None else self.value

	def __repr__(self):
		fields = ', '.join('%s=%r' % (a, getattr(self, a))
				for a in self.__slots__[1:] if getattr(self, a) is not None)
		return '%s(%r%s)' % (self.__class__.__name__, self.value,
				', ' + fields if fields else '')


class Tree(object):
	"""A mutable, labeled, n-ary tree structure.

	A tree without children is a leaf, and its label holds a terminal; any
	other node holds a nonterminal category. A preterminal is a node with
	exactly one child, which is a leaf; it models a (POS tag, word) pair.

	Several Tree methods use tree positions to specify children or descendants
	of a tree. Tree positions are defined as follows:

	- The tree position ``i`` specifies a Tree's ith child.
	- The tree position () specifies the Tree itself.
	- If ``p`` is the tree position of descendant ``d``, then
		``p + (i,)`` specifies the ith child of ``d``.

	The constructor is called as ``Tree(label, children)``; a string label is
	wrapped in a :class:`Label`. Use ``Tree.parse(s)`` to read a tree in
	bracket notation.

	There are no parent pointers; algorithms that need the parent of a node
	receive it as an argument. After head rules have been applied, ``head``
	holds the index of the head child of an internal node."""

	__slots__ = ('label', 'children', 'head')

	def __init__(self, label, children=None):
		if isinstance(label, str) or label is None:
			label = Label(label)
		if isinstance(children, str):
			raise TypeError("%s() argument 2 should be a list, not a "
					"string" % self.__class__.__name__)
		self.label = label
		self.children = [] if children is None else list(children)
		self.head = None

	@classmethod
	def leaf(cls, word, index=None, tag=None):
		"""Construct a leaf holding ``word``."""
		return cls(Label(word, tag=tag, index=index))

	@classmethod
	def parse(cls, s, normalizer=None):
		"""Parse a single tree in bracket notation.

		:param normalizer: a :class:`treeheads.normalize.TreeNormalizer`.
		:raises ValueError: if ``s`` does not contain exactly one tree."""
		from .treereader import parsetree
		return parsetree(s, normalizer)

	# === Comparison operators ==================================
	def __eq__(self, other):
		if not isinstance(other, Tree):
			return False
		return (self.label.value == other.label.value
				and self.children == other.children)

	def __ne__(self, other):
		return not self.__eq__(other)

	__hash__ = None

	# === Delegated list operations ==============================
	def append(self, child):
		"""Append ``child`` to this node."""
		self.children.append(child)

	def insert(self, n, child):
		"""Insert ``child`` before the n-th child."""
		self.children.insert(n, child)

	def pop(self, n=-1):
		"""Detach and return the n-th child; the last one by default."""
		return self.children.pop(n)

	def remove(self, child):
		"""Detach the first child equal to ``child``."""
		self.children.remove(child)

	def index(self, child):
		""":returns: the position of the first child equal to ``child``."""
		return self.children.index(child)

	def childindex(self, child):
		""":returns: the position of ``child`` itself among the children;
			unlike :meth:`index`, equal but distinct subtrees do not match."""
		for n, a in enumerate(self.children):
			if a is child:
				return n
		raise ValueError('not a child of this node: %r' % child)

	def __iter__(self):
		return self.children.__iter__()

	def __len__(self):
		return self.children.__len__()

	def __bool__(self):
		return True

	# === Indexing (int, slice, or tree position) ================
	def __getitem__(self, index):
		if isinstance(index, (int, slice)):
			return self.children[index]
		node = self
		for n in index:
			node = node.children[n]
		return node

	# === Basic tree operations =================================
	def isleaf(self):
		"""Test whether this node has no children."""
		return not self.children

	def ispreterminal(self):
		"""Test whether this node has exactly one child, which is a leaf."""
		return len(self.children) == 1 and not self.children[0].children

	def isphrasal(self):
		"""Test whether this node is neither a leaf nor a preterminal."""
		return bool(self.children) and not self.ispreterminal()

	def leaves(self):
		""":returns: list containing the leaf nodes of this tree.

		The order reflects the order of the tree's hierarchical structure."""
		result = []
		agenda = [self]
		while agenda:
			node = agenda.pop()
			if node.children:
				agenda.extend(node.children[::-1])
			else:
				result.append(node)
		return result

	def yieldlabels(self):
		""":returns: the labels of the leaves of this tree, in order."""
		return [leaf.label for leaf in self.leaves()]

	def preterminals(self):
		""":returns: list of preterminal nodes, in order."""
		return list(self.subtrees(Tree.ispreterminal))

	def height(self):
		""":returns: the number of nodes on the longest path from this node
			down to a leaf; 1 for a leaf, 2 for a preterminal."""
		return 1 + max((child.height() for child in self.children),
				default=0)

	def subtrees(self, condition=None):
		"""Yield the nodes of this tree, parents before their children.

		:param condition: a predicate on nodes; only nodes for which it holds
			are yielded, but the children of all nodes are visited."""
		agenda = [self]
		while agenda:
			node = agenda.pop()
			if condition is None or condition(node):
				yield node
			agenda.extend(node.children[::-1])

	def postorder(self, condition=None):
		"""Yield the nodes of this tree, children before their parents.

		The tree should not be modified while this generator is in use."""
		agenda = [self]
		visited = set()
		while agenda:
			node = agenda[-1]
			if id(node) in visited or not node.children:
				agenda.pop()
				if condition is None or condition(node):
					yield node
			else:
				agenda.extend(node.children[::-1])
				visited.add(id(node))

	def indexleaves(self, start=1, overwrite=True):
		"""Assign consecutive indices to the labels of the leaves.

		:param start: the index of the first leaf.
		:param overwrite: if False, leaves that already have an index keep it.
		:returns: the next unused index."""
		for leaf in self.leaves():
			if overwrite or leaf.label.index is None:
				leaf.label.index = start
			start += 1
		return start

	def percolatetags(self):
		"""Set the tag of each leaf under a preterminal to its category."""
		for node in self.subtrees(Tree.ispreterminal):
			node[0].label.tag = node.label.value

	def spans(self):
		""":returns: a dictionary mapping ``id(node)`` to a tuple with
			the indices of its leftmost and rightmost leaf. Leaves must have
			been indexed."""
		result = {}
		for node in self.postorder():
			if node.children:
				result[id(node)] = (result[id(node[0])][0],
						result[id(node[-1])][1])
			else:
				result[id(node)] = (node.label.index, node.label.index)
		return result

	# === Copy ==================================================
	def copy(self, deep=False):
		"""Create a copy of this tree.

		:param deep: if True, copy all descendants and labels as well;
			otherwise only this node is new and the children are shared."""
		if not deep:
			result = self.__class__(self.label, self.children)
		else:
			result = self.__class__(self.label.copy(),
					[child.copy(True) for child in self.children])
		result.head = self.head
		return result

	# === String Representations ================================
	def __repr__(self):
		childstr = ", ".join(repr(c) for c in self)
		return '%s(%r, [%s])' % (self.__class__.__name__,
				self.label.value, childstr)

	def __str__(self):
		return self._pprint_flat('()')

	def pprint(self, margin=70, indent=0, brackets='()'):
		"""	:returns: A pretty-printed string representation of this tree.
		:param margin: The right margin at which to do line-wrapping.
		:param indent: The indentation level at which printing begins. This
			number is used to decide how far to indent subsequent lines."""
		# Try writing it on one line.
		s = self._pprint_flat(brackets)
		if len(s) + indent < margin or not self.children:
			return s
		# If it doesn't fit on one line, then write it on multi-lines.
		s = '%s%s' % (brackets[0], self.label)
		for child in self.children:
			s += '\n' + ' ' * (indent + 2) + child.pprint(margin,
					indent + 2, brackets)
		return s + brackets[1]

	def _pprint_flat(self, brackets):
		"""Pretty-printing helper function."""
		if not self.children:
			return str(self.label)
		childstrs = [child._pprint_flat(brackets) for child in self.children]
		return '%s%s %s%s' % (brackets[0], self.label,
				' '.join(childstrs), brackets[1])


__all__ = ['Label', 'Tree']
