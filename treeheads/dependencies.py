"""Extraction of bilexical dependencies from head-marked constituency trees.

Each constituent with two or more children yields one dependency for every
child that is not its head; the governor is the lexical head of the head
child, and the dependent is the lexical head of the other child. The relation
follows Collins (1999): a tuple of the categories of the parent, the head
child, and the modifier, and whether the modifier is to the left or right of
the head. The lexical head of the whole tree depends on a synthetic start
symbol with index 0, so that every terminal has exactly one governor."""
import logging
from collections import namedtuple
from .tree import Label
from .heads import LEFT, RIGHT

LOG = logging.getLogger(__name__)
NORMPOSTAG = 'TAG'  # the canonical tag used when normpos=True
FORMATS = ('conll', 'mst')

CollinsRelation = namedtuple('CollinsRelation',
		('parent', 'head', 'modifier', 'direction'))
Dependency = namedtuple('Dependency',
		('head', 'dependent', 'relation', 'direction'))
DependencyResult = namedtuple('DependencyResult',
		('deps', 'numterminals', 'complete', 'leafindices'))


def extractdependencies(tree, startsymbol, headfinder, normpos=False):
	"""Extract Collins-style dependencies from a tree.

	:param startsymbol: the category of the synthetic root; a unary root node
		with this category is stripped before extraction, and the head of the
		tree depends on a label with this value and index 0.
	:param headfinder: a :class:`treeheads.heads.HeadFinder` instance.
	:param normpos: if True, use a single canonical tag for preterminals in
		the relations; does not affect head selection.
	:returns: a :class:`DependencyResult`; ``deps`` is a list of
		:class:`Dependency` tuples sorted by the index of the dependent, and
		``complete`` is False if the number of dependencies does not match
		the number of terminals (a warning is logged in that case)."""
	def relation(node, headidx, n, direction):
		return CollinsRelation(_relcat(node, normpos),
				_relcat(node[headidx], normpos), _relcat(node[n], normpos),
				direction)

	root = _striproot(tree, startsymbol)
	deps = []
	lexhead = _makedep(root, None, headfinder, deps, relation)
	deps.append(Dependency(Label(startsymbol, index=0), lexhead,
			CollinsRelation(startsymbol, startsymbol, _relcat(root, normpos),
				RIGHT), RIGHT))
	return _result(root, deps)


def mapdependencies(tree, headfinder, rootname=None):
	"""Extract unnamed dependencies between the lexical heads of a tree.

	:param rootname: if given, add a dependency from a label with this value
		and index 0 to the lexical head of the tree, with ``rootname`` as
		relation.
	:returns: a :class:`DependencyResult` with ``relation`` of the
		dependencies set to None."""
	deps = []
	root = _striproot(tree, None)
	lexhead = _makedep(root, None, headfinder, deps,
			lambda node, headidx, n, direction: None)
	if rootname is not None:
		deps.append(Dependency(Label(rootname, index=0), lexhead, rootname,
				RIGHT))
	return _result(root, deps, rootname is not None)


def _striproot(tree, startsymbol):
	"""Remove unary start symbol or unlabeled nodes at the root, and index
	the leaves if necessary."""
	root = tree
	while (root.label.value in (startsymbol, None) and len(root) == 1
			and root[0].children):
		root = root[0]
	if not root.children:
		raise ValueError('cannot extract dependencies from a leaf: %r' % root)
	if any(leaf.label.index is None for leaf in root.leaves()):
		root.indexleaves()
	return root


def _makedep(node, parent, headfinder, deps, relation):
	"""Traverse a tree, append dependencies to deps.

	:returns: the label of the lexical head of node."""
	if not node.children:
		return node.label
	headidx = headfinder.headindex(node, parent)
	lexheads = [_makedep(child, node, headfinder, deps, relation)
			for child in node]
	for n, lexheadofchild in enumerate(lexheads):
		if n != headidx:
			direction = LEFT if n < headidx else RIGHT
			deps.append(Dependency(lexheads[headidx], lexheadofchild,
					relation(node, headidx, n, direction), direction))
	return lexheads[headidx]


def _relcat(node, normpos):
	"""The category of a node as used in a relation."""
	if normpos and node.ispreterminal():
		return NORMPOSTAG
	return node.label.value or ''


def _result(root, deps, checkcount=True):
	"""Sort dependencies and check that each terminal has one governor."""
	leafindices = [leaf.label.index for leaf in root.leaves()]
	numterminals = len(leafindices)
	deps.sort(key=lambda dep: dep.dependent.index)
	complete = (len(deps) == numterminals
			and len({dep.dependent.index for dep in deps}) == numterminals)
	if checkcount and not complete:
		LOG.warning('%d dependencies for %d terminals in tree: %s',
				len(deps), numterminals, root)
	return DependencyResult(deps, numterminals, complete, leafindices)


def _positions(result):
	"""Map leaf indices to 1-based positions in the yield of the tree from
	which dependencies were extracted; the leaves of a subtree keep the
	indices they have in the whole tree. The root maps to 0."""
	positions = {index: n for n, index in enumerate(result.leafindices, 1)}
	positions[0] = 0
	return positions


def dependencyheads(result):
	""":returns: a list with the position of the governor of each terminal,
		in order; 0 for the root, None for a terminal without governor."""
	positions = _positions(result)
	heads = {positions.get(dep.dependent.index): positions.get(dep.head.index)
			for dep in result.deps}
	return [heads.get(n) for n in range(1, result.numterminals + 1)]


def dependencyrelations(result):
	""":returns: a list with the relation label of each terminal; i.e.,
		the category of the modifier, or ``root``."""
	positions = _positions(result)
	rels = {}
	for dep in result.deps:
		n = positions.get(dep.dependent.index)
		if dep.head.index == 0:
			rels[n] = 'root'
		elif isinstance(dep.relation, CollinsRelation):
			rels[n] = dep.relation.modifier
		else:
			rels[n] = dep.relation or '-'
	return [rels.get(n, '-') for n in range(1, result.numterminals + 1)]


def writedependencies(tree, result, fmt='conll'):
	"""Convert the result of extraction to ``mst`` or ``conll`` format.

	:param tree: the tree from which ``result`` was extracted; supplies words
		and tags."""
	labels = tree.yieldlabels()
	words = [label.value for label in labels]
	tags = [label.tag or '_' for label in labels]
	heads = ['_' if head is None else str(head)
			for head in dependencyheads(result)]
	rels = dependencyrelations(result)
	if fmt == 'mst':  # MST parser can read this format
		# https://github.com/travisbrown/mstparser#3a-input-data-format
		return '\n'.join((
			'\t'.join(words),
			'\t'.join(tags),
			'\t'.join(rels),
			'\t'.join(heads),
			)) + '\n\n'
	elif fmt == 'conll':
		# Cf. https://depparse.uvt.nl/DataFormat.html
		return '\n'.join('%d\t%s\t_\t%s\t%s\t_\t%s\t%s\t_\t_' % (
				n, word, tag, tag, head, rel)
				for n, (word, tag, head, rel)
				in enumerate(zip(words, tags, heads, rels), 1)) + '\n\n'
	raise ValueError('unrecognized format: %r; choices: %s' % (
			fmt, ', '.join(FORMATS)))


def deplen(result):
	"""Compute dependency length from the result of extraction.

	:returns: tuple ``(totaldeplen, numdeps)``, not counting the root."""
	lengths = [abs(dep.head.index - dep.dependent.index)
			for dep in result.deps if dep.head.index != 0]
	return (sum(lengths), float(len(lengths)))


__all__ = ['CollinsRelation', 'Dependency', 'DependencyResult',
		'extractdependencies', 'mapdependencies', 'dependencyheads',
		'dependencyrelations', 'writedependencies', 'deplen']
