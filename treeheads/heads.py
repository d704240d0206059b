"""Functions related to finding the linguistic head of a constituent.

Head rules are read from files with one clause per line, e.g.:
``NP rightdis NN NNP NNPS NNS NX POS JJR``, which means: traverse the
children of an NP constituent from right to left; the first child with a
label of NN, NNP, NNPS, NNS, NX, POS, or JJR will be marked as head. If no
child matches, the next clause for NP is tried."""
import io
import os
import re
import logging
from collections import namedtuple
from .punctuation import basiccategory, ispuncttag

LOG = logging.getLogger(__name__)
LEFT, RIGHT, LEFTDIS, RIGHTDIS, LEFTEXCEPT, RIGHTEXCEPT = DIRECTIONS = (
		'left', 'right', 'leftdis', 'rightdis', 'leftexcept', 'rightexcept')
DIRECTIONALIASES = {'left-to-right': LEFT, 'right-to-left': RIGHT}
HEADRULERE = re.compile(r'^(\S+)\s+(\S+)(?:\s+(.*))?$')
HEADRULEDIR = os.path.join(os.path.dirname(__file__), 'headrules')
HEADRULES = {
		'collins': 'collins.headrules',
		'modcollins': 'modcollins.headrules',
		'negra': 'negra.headrules'}
COORDINATORS = frozenset({'CC', 'CONJP'})
PTBPUNCTTAGS = frozenset({"''", '``', '-LRB-', '-RRB-', '.', ':', ','})
NEGRAPUNCTTAGS = frozenset({'$,', '$.', '$(', '$['})
NEGRAHEADFUNC = 'HD'

HeadRule = namedtuple('HeadRule', ('direction', 'categories'))


class MissingHeadRuleError(LookupError):
	"""Raised when a category has no head rule and there is no default."""


def makeheadrule(direction, categories):
	"""Validate a direction and return a :class:`HeadRule`.

	:raises ValueError: for an unknown direction."""
	direction = direction.lower()
	direction = DIRECTIONALIASES.get(direction, direction)
	if direction not in DIRECTIONS:
		raise ValueError('unknown direction %r; expected one of %s.' % (
				direction, ', '.join(DIRECTIONS)))
	return HeadRule(direction, tuple(categories))


class HeadRuleTable(object):
	"""An immutable mapping of categories to their head rules.

	The head rule of a category is a sequence of clauses, each a
	:class:`HeadRule` with a direction and a list of candidate categories."""

	def __init__(self, rules, defaultrule=None, name=None):
		"""
		:param rules: a mapping of categories to sequences of
			``(direction, categories)`` pairs.
		:param defaultrule: a ``(direction, categories)`` pair applied to
			categories without a rule; if None, such categories are an error.
		:param name: an identifier for the table."""
		self.name = name
		self._rules = {label: tuple(makeheadrule(*clause) for clause in clauses)
				for label, clauses in rules.items()}
		for label, clauses in self._rules.items():
			if not clauses:
				raise ValueError('no clauses for category %r' % label)
		self._defaultrule = (None if defaultrule is None
				else makeheadrule(*defaultrule))

	@property
	def defaultrule(self):
		"""The clause for categories without a rule, or None."""
		return self._defaultrule

	def get(self, category):
		""":returns: tuple of clauses for category, or None."""
		return self._rules.get(category)

	def __contains__(self, category):
		return category in self._rules

	def __iter__(self):
		return iter(self._rules)

	def __len__(self):
		return len(self._rules)

	def __repr__(self):
		return '%s(name=%r, %d categories)' % (
				self.__class__.__name__, self.name, len(self._rules))


def readheadrules(filename, name=None):
	"""Read a file containing heuristic rules for head assignment.

	Example line: ``s right-to-left vmfin vafin vaimp``, which means
	traverse siblings of an S constituent from right to left, the first child
	with a label of vmfin, vafin, or vaimp will be marked as head.
	Lines starting with ``%`` are comments. The category ``*`` defines the
	default rule for categories without a rule; the direction ``like``
	copies the clauses of another category.

	:raises ValueError: for malformed lines and unknown directions."""
	rules = {}
	defaultrule = None
	with io.open(filename, encoding='utf8') as inp:
		for n, line in enumerate(inp, 1):
			line = line.strip()
			if not line or line.startswith('%'):
				continue
			match = HEADRULERE.match(line)
			if match is None:
				raise ValueError('%s:%d: expected category and direction: %r'
						% (filename, n, line))
			label, direction, heads = match.groups()
			heads = heads.split() if heads else []
			if direction.lower() == 'like':
				if len(heads) != 1 or heads[0] not in rules:
					raise ValueError('%s:%d: like should refer to a single '
							'category defined earlier: %r' % (filename, n, line))
				rules.setdefault(label, []).extend(rules[heads[0]])
				continue
			try:
				clause = makeheadrule(direction, heads)
			except ValueError as err:
				raise ValueError('%s:%d: %s' % (filename, n, err)) from err
			if label == '*':
				defaultrule = clause
			else:
				rules.setdefault(label, []).append(clause)
	return HeadRuleTable(rules, defaultrule,
			name=name or os.path.splitext(os.path.basename(filename))[0])


def loadheadrules(name):
	"""Load one of the head rule tables in ``HEADRULES`` or a file."""
	if name in HEADRULES:
		return readheadrules(os.path.join(HEADRULEDIR, HEADRULES[name]), name)
	return readheadrules(name)


class HeadFinder(object):
	"""Select the head child of a constituent using a table of head rules.

	For a given constituent we perform the following for the ``left`` and
	``right`` directions::

		for clause in clauses of category:
			for category in clause:
				for index = 1 to n [or n to 1 if right]:
					if category equals child[index], choose it.

	The ``leftdis`` and ``rightdis`` directions swap the two inner loops,
	while ``leftexcept`` and ``rightexcept`` choose the first child which is
	not in the list. If the last clause does not match, the first child in
	the direction of that clause is chosen, skipping categories to avoid.
	In any clause, children with a category to avoid are only chosen if no
	other child matches."""

	def __init__(self, table, categoriestoavoid=()):
		"""
		:param table: a :class:`HeadRuleTable`, or a name or filename
			accepted by :func:`loadheadrules`.
		:param categoriestoavoid: categories which should be the head only
			as a last resort; e.g., punctuation."""
		if isinstance(table, str):
			table = loadheadrules(table)
		self.table = table
		self.categoriestoavoid = frozenset(categoriestoavoid)
		avoid = tuple(sorted(self.categoriestoavoid))
		if avoid:
			self.defaultleftrule = HeadRule(LEFTEXCEPT, avoid)
			self.defaultrightrule = HeadRule(RIGHTEXCEPT, avoid)
		else:
			self.defaultleftrule = HeadRule(LEFT, ())
			self.defaultrightrule = HeadRule(RIGHT, ())

	def determinehead(self, node, parent=None):
		"""Determine which child of node is its head.

		:param parent: the parent of node, if known.
		:returns: one of the children of node.
		:raises ValueError: if node is a leaf.
		:raises MissingHeadRuleError: if there is no rule for the category of
			node, and the table has no default rule."""
		return node[self.headindex(node, parent)]

	def headindex(self, node, parent=None):
		""":returns: the index of the head child of node; cf.
			:meth:`determinehead`."""
		if not node.children:
			raise ValueError("can't determine head of leaf %r" % node)
		headidx = self.findmarkedhead(node)
		if headidx is not None:
			return headidx
		elif len(node) == 1:
			return 0
		return self.nontrivialhead(node, parent)

	def findmarkedhead(self, node):  # pylint: disable=no-self-use,unused-argument
		"""Return the index of a child explicitly marked as head, or None.

		To be overridden for treebanks with head annotations."""
		return None

	def nontrivialhead(self, node, parent=None):  # pylint: disable=unused-argument
		"""Apply the head rules to a node with two or more children."""
		category = self.category(node)
		if category.startswith('@'):  # binarized node
			category = category[1:]
		clauses = self.table.get(category)
		if clauses is None:
			if self.table.defaultrule is None:
				raise MissingHeadRuleError(
						'No head rule defined for %r in %r: %s' % (
						category, self.table, node))
			LOG.debug('no rule for %r; using default rule', category)
			return self.traverselocate(node.children,
					self.table.defaultrule, True)
		for n, clause in enumerate(clauses, 1):
			headidx = self.traverselocate(node.children, clause,
					n == len(clauses))
			if headidx is not None:
				return headidx
		raise ValueError('last resort returned no head')  # not reached

	@staticmethod
	def category(node):
		"""The basic category of a node, or '' if it has no label."""
		return basiccategory(node.label.value) or ''

	def traverselocate(self, children, clause, lastresort):
		"""Attempt to locate the head among children with a single clause.

		:param lastresort: if True and the clause does not match, pick the
			leftmost or rightmost child not to be avoided (depending on the
			direction of the clause), or else the leftmost or rightmost
			child.
		:returns: an index, or None if nothing matched and ``lastresort`` is
			False."""
		categories = [self.category(child) for child in children]
		headidx = findhead(categories, clause, self.categoriestoavoid)
		if headidx is None:
			if not lastresort:
				return None
			if clause.direction.startswith(LEFT):
				headidx, defaultrule = 0, self.defaultleftrule
			else:
				headidx, defaultrule = len(children) - 1, self.defaultrightrule
			# NB: the default rule applies postoperationfix once if it matches
			result = self.traverselocate(children, defaultrule, False)
			return headidx if result is None else result
		return self.postoperationfix(headidx, children)

	def postoperationfix(self, headidx, children):  # pylint: disable=no-self-use,unused-argument
		"""Hook to revise the head index chosen by a clause."""
		return headidx

	def __repr__(self):
		return '%s(%r)' % (self.__class__.__name__, self.table)


def findhead(categories, clause, avoid=frozenset()):
	"""Search a list of categories using a single clause.

	:returns: an index into ``categories``, or None."""
	direction, heads = clause
	if direction in (LEFT, LEFTDIS, LEFTEXCEPT):
		positions = range(len(categories))
	else:
		positions = range(len(categories) - 1, -1, -1)
	if direction in (LEFTEXCEPT, RIGHTEXCEPT):
		for i in positions:
			if categories[i] not in heads:
				return i
		return None
	for skip in ((avoid, frozenset()) if avoid else (frozenset(), )):
		if direction in (LEFT, RIGHT):
			for head in heads:
				for i in positions:
					if categories[i] == head and head not in skip:
						return i
		else:
			for i in positions:
				if categories[i] in heads and categories[i] not in skip:
					return i
	return None


class CollinsHeadFinder(HeadFinder):
	"""The head finder of Collins (1999), for the Penn treebank.

	In a coordination ``X CC X``, the first conjunct is the head."""

	def __init__(self, table='collins', categoriestoavoid=()):
		super().__init__(table, categoriestoavoid)

	def postoperationfix(self, headidx, children):
		if (headidx >= 2
				and self.category(children[headidx - 1]) in COORDINATORS):
			newidx = headidx - 2
			while (newidx >= 0 and children[newidx].ispreterminal()
					and ispuncttag(children[newidx].label.value)):
				newidx -= 1
			if newidx >= 0:
				headidx = newidx
		return headidx


class ModCollinsHeadFinder(CollinsHeadFinder):
	"""Revised English head rules; punctuation is avoided as head."""

	def __init__(self, table='modcollins', categoriestoavoid=PTBPUNCTTAGS):
		super().__init__(table, categoriestoavoid)


class NegraHeadFinder(HeadFinder):
	"""Head finder for the German Negra and Tiger treebanks.

	Children with the grammatical function HD (e.g., ``VVFIN-HD``) are
	explicitly marked heads."""

	def __init__(self, table='negra', categoriestoavoid=NEGRAPUNCTTAGS):
		super().__init__(table, categoriestoavoid)

	def findmarkedhead(self, node):
		for n, child in enumerate(node):
			if (child.children and child.label.value
					and NEGRAHEADFUNC in child.label.value.split('-')[1:]):
				return n
		return None


HEADFINDERS = {
		'collins': CollinsHeadFinder,
		'modcollins': ModCollinsHeadFinder,
		'negra': NegraHeadFinder}


def getheadfinder(name):
	"""Return a head finder for one of the names in ``HEADFINDERS``, or
	a generic :class:`HeadFinder` for a file with head rules."""
	if name in HEADFINDERS:
		return HEADFINDERS[name]()
	return HeadFinder(readheadrules(name))


def headterminal(node, headfinder, parent=None):
	""":returns: the leaf that is the lexical head of node."""
	while node.children:
		node, parent = headfinder.determinehead(node, parent), node
	return node


def headpreterminal(node, headfinder):
	""":returns: the preterminal that is the head of node.

	:raises ValueError: if node is a leaf."""
	if not node.children:
		raise ValueError('Called headpreterminal on a leaf: %r' % node)
	parent = None
	while not node.ispreterminal():
		node, parent = headfinder.determinehead(node, parent), node
		if not node.children:
			raise ValueError('head of %r is a leaf without preterminal'
					% parent)
	return node


def applyheadrules(tree, headfinder):
	"""Apply head rules and set head attribute of internal nodes to the
	index of their head child."""
	agenda = [(tree, None)]
	while agenda:
		node, parent = agenda.pop()
		if node.children:
			node.head = headfinder.headindex(node, parent)
			agenda.extend((child, node) for child in node)


def getheadpos(node):
	"""Get head preterminal dominated by this node, following the head
	attributes set by :func:`applyheadrules`.

	:returns: a preterminal node, or None if heads are missing."""
	child = node
	while child.children:
		if child.ispreterminal():
			return child
		elif child.head is None:
			break
		child = child[child.head]
	return None


__all__ = ['HeadRule', 'HeadRuleTable', 'MissingHeadRuleError',
		'makeheadrule', 'readheadrules', 'loadheadrules', 'findhead',
		'HeadFinder', 'CollinsHeadFinder', 'ModCollinsHeadFinder',
		'NegraHeadFinder', 'getheadfinder', 'headterminal', 'headpreterminal',
		'applyheadrules', 'getheadpos']
