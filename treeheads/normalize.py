"""Normalization of trees as they are read from a treebank.

A normalizer is invoked by the tree reader for every terminal and nonterminal
label, and for every tree once it has been completely read. The whole-tree
hook may modify the tree in-place, or reject it by returning None."""
import logging
from .tree import Tree
from .punctuation import basiccategory

LOG = logging.getLogger(__name__)
EMPTYTAGS = frozenset({'-NONE-'})


class TreeNormalizer(object):
	"""The identity normalizer; subclasses override one or more hooks."""

	def normalizeterminal(self, token):
		"""Normalize a word."""
		return token

	def normalizenonterminal(self, category):
		"""Normalize a category; must be idempotent."""
		return category

	def normalizewholetree(self, tree):
		"""Normalize a complete tree.

		:returns: the normalized tree, or None to reject the tree."""
		return tree

	def __repr__(self):
		return '%s()' % self.__class__.__name__


class NormalizerPipeline(TreeNormalizer):
	"""Apply a sequence of normalizers in order."""

	def __init__(self, *normalizers):
		self.normalizers = normalizers

	def normalizeterminal(self, token):
		for normalizer in self.normalizers:
			token = normalizer.normalizeterminal(token)
		return token

	def normalizenonterminal(self, category):
		for normalizer in self.normalizers:
			category = normalizer.normalizenonterminal(category)
		return category

	def normalizewholetree(self, tree):
		for normalizer in self.normalizers:
			tree = normalizer.normalizewholetree(tree)
			if tree is None:
				LOG.debug('tree rejected by %r', normalizer)
				return None
		return tree

	def __repr__(self):
		return '%s(%s)' % (self.__class__.__name__,
				', '.join(repr(a) for a in self.normalizers))


class BasicCategoryNormalizer(TreeNormalizer):
	"""Strip function tags and coindexation from categories.

	e.g., ``NP-SBJ-1 => NP``; an unlabeled root node is given the label
	``root``."""

	def __init__(self, root='ROOT'):
		self.root = root

	def normalizenonterminal(self, category):
		return basiccategory(category)

	def normalizewholetree(self, tree):
		if tree.label.value is None and self.root is not None:
			tree.label.value = self.root
		return tree


class EmptyNodeNormalizer(TreeNormalizer):
	"""Remove empty elements (traces, null complementizers).

	Preterminals with a tag in ``emptytags`` are removed, together with any
	ancestors that become empty; the leaves are then renumbered. Trees that
	consist only of empty elements are rejected."""

	def __init__(self, emptytags=EMPTYTAGS):
		self.emptytags = frozenset(emptytags)

	def normalizewholetree(self, tree):
		if not removeemptynodes(tree, self.emptytags):
			return None
		tree.indexleaves()
		return tree


class UnaryNormalizer(TreeNormalizer):
	"""Splice out unary chains with identical categories: ``(NP (NP ...))``.

	Preterminals are never spliced."""

	def normalizewholetree(self, tree):
		return splicesameunary(tree)


class PTBNormalizer(NormalizerPipeline):
	"""Standard cleanup of Penn treebank trees.

	Strips function tags, removes empty elements, splices ``X -> X`` unary
	chains, and labels the root."""

	def __init__(self, root='ROOT', emptytags=EMPTYTAGS):
		super().__init__(BasicCategoryNormalizer(root),
				EmptyNodeNormalizer(emptytags), UnaryNormalizer())


def removeemptynodes(tree, emptytags=EMPTYTAGS):
	"""Remove preterminals with an empty tag, and any empty ancestors.

	:returns: False if nothing remains of the tree, True otherwise."""
	emptied = set()  # ids of nonterminals which lost all their children
	for node in list(tree.postorder(lambda n: n.children)):
		node.children = [child for child in node
				if id(child) not in emptied
				and not (child.ispreterminal()
					and child.label.value in emptytags)]
		if not node.children:
			emptied.add(id(node))
	return bool(tree.children)


def splicesameunary(tree):
	"""Splice out any node with a single child with the same category."""
	for node in list(tree.subtrees(lambda n: n.children)):
		while (len(node) == 1 and not node.ispreterminal()
				and node[0].label.value == node.label.value):
			node.children = node[0].children
	return tree


__all__ = ['TreeNormalizer', 'NormalizerPipeline', 'BasicCategoryNormalizer',
		'EmptyNodeNormalizer', 'UnaryNormalizer', 'PTBNormalizer',
		'removeemptynodes', 'splicesameunary']
