"""Unit tests for treeheads modules."""
# pylint: disable=C0111,W0232
import gzip
import logging
import threading
import pytest
import numpy as np
from treeheads.tree import Label, Tree
from treeheads.treereader import (BracketTreeReader, MalformedTreeError,
		tokenize, readtrees, parsetree)
from treeheads.normalize import (TreeNormalizer, BasicCategoryNormalizer,
		EmptyNodeNormalizer, UnaryNormalizer, PTBNormalizer)
from treeheads.punctuation import basiccategory, ispunct
from treeheads.heads import (HeadRuleTable, HeadFinder, CollinsHeadFinder,
		ModCollinsHeadFinder, NegraHeadFinder, MissingHeadRuleError,
		readheadrules, loadheadrules, getheadfinder, headterminal,
		headpreterminal, applyheadrules, getheadpos, LEFTDIS, RIGHTDIS)
from treeheads.dependencies import (extractdependencies, mapdependencies,
		dependencyheads, writedependencies, deplen)
from treeheads.treebank import (TreebankIterator, CategoryIndex,
		readtreebank, iterfiles, suffixfilter, regexfilter, numbase)
from treeheads.eval import CollinsDepEvaluator
from treeheads.util import readparam, openread, SynchronizedIterator
from treeheads import cli

SENT = ('(ROOT (S (NP (DT The) (NN cat)) (VP (VBD sat) (PP (IN on) '
		'(NP (DT the) (NN mat)))) (. .)))')
PTBTREES = '''\
( (S (NP-SBJ (DT The) (NN cat))
    (VP (VBD sat)
      (PP-LOC (IN on) (NP (DT the) (NN mat))))
    (. .)) )
( (S (NP-SBJ-1 (NNP John))
    (VP (VBD wanted)
      (S (NP-SBJ (-NONE- *-1))
        (VP (TO to) (VP (VB leave)))))
    (. .)) )
( (S (NP-SBJ (NP (NNS cats)) (CC and) (NP (NNS dogs)))
    (VP (VBP fight)) (. !)) )
( (SINV (`` ``) (S-TPC (NP-SBJ (PRP I)) (VP (VBP agree)))
    (, ,) ('' '') (VP (VBD said) (S (-NONE- *T*-1)))
    (NP-SBJ (NNP Mary)) (. .)) )
'''


class Test_tree(object):
	def test_parse_print(self):
		treestr = '(S (NP (DT the) (NN dog)) (VP (VBZ barks)))'
		tree = Tree.parse(treestr)
		assert str(tree) == treestr
		assert [leaf.label.index for leaf in tree.leaves()] == [1, 2, 3]
		assert [leaf.label.tag for leaf in tree.leaves()] == [
				'DT', 'NN', 'VBZ']
		assert [str(label) for label in tree.yieldlabels()] == [
				'the', 'dog', 'barks']
		assert tree.yieldlabels()[1] == Label('dog', tag='NN', index=2)
		assert tree.height() == 4
		assert tree[0, 0, 0].height() == 1

	def test_structure(self):
		tree = Tree.parse('(S (NP (DT the) (NN dog)) (VP (VBZ barks)))')
		assert tree[0, 1].label.value == 'NN'
		assert tree[0, 1, 0].label.value == 'dog'
		assert tree[0, 1].ispreterminal()
		assert tree[0].isphrasal()
		assert tree[0, 1, 0].isleaf()
		assert len(tree.preterminals()) == 3
		assert tree.childindex(tree[1]) == 1
		assert tree[()] is tree
		assert [node.label.value for node in tree.postorder(Tree.isphrasal)
				] == ['NP', 'VP', 'S']
		spans = tree.spans()
		assert spans[id(tree)] == (1, 3)
		assert spans[id(tree[0])] == (1, 2)
		assert spans[id(tree[1])] == (3, 3)

	def test_listoperations(self):
		tree = Tree.parse('(S (NP (DT the) (NN dog)) (VP (VBZ barks)))')
		adv = Tree.parse('(ADVP (RB now))')
		tree.insert(1, adv)
		assert [child.label.value for child in tree] == ['NP', 'ADVP', 'VP']
		assert tree.index(Tree.parse('(ADVP (RB now))')) == 1
		assert tree.childindex(adv) == 1
		with pytest.raises(ValueError):
			tree.childindex(Tree.parse('(ADVP (RB now))'))
		tree.remove(Tree.parse('(ADVP (RB now))'))
		assert len(tree) == 2
		assert tree.pop().label.value == 'VP'
		assert str(tree) == '(S (NP (DT the) (NN dog)))'

	def test_copy(self):
		tree = Tree.parse('(S (NP (DT the) (NN dog)) (VP (VBZ barks)))')
		copy = tree.copy(deep=True)
		assert copy == tree
		copy[0, 0].label.value = 'XX'
		assert copy != tree
		assert tree[0, 0].label.value == 'DT'

	def test_construct(self):
		tree = Tree('S', [Tree('X', [Tree.leaf('a')])])
		assert str(tree) == '(S (X a))'
		assert tree.indexleaves() == 2
		assert tree.leaves()[0].label == Label('a', index=1)
		with pytest.raises(TypeError):
			Tree('S', 'abc')

	def test_anonymous_root(self):
		tree = Tree.parse('( (S (X a)) )')
		assert tree.label.value is None
		assert str(tree) == '( (S (X a)))'

	def test_pprint(self):
		tree = Tree.parse(SENT)
		assert tree.pprint(margin=1000) == SENT
		lines = tree.pprint(margin=30).splitlines()
		assert len(lines) > 1
		assert lines[0] == '(ROOT'
		assert Tree.parse(' '.join(lines)) == tree


class Test_treereader(object):
	def test_tokenize(self):
		assert list(tokenize('(S\n  (X a))')) == [
				'(', 'S', '(', 'X', 'a', ')', ')']

	def test_roundtrip(self):
		for tree in readtrees(PTBTREES):
			again = Tree.parse(str(tree))
			assert again == tree
			assert str(again) == str(tree)
		for tree in readtrees(PTBTREES, PTBNormalizer()):
			again = Tree.parse(str(tree), PTBNormalizer())
			assert again == tree
			assert str(again) == str(tree)

	def test_wrappers(self):
		tree = Tree.parse('(( (S (X a))))')
		assert str(tree) == '( (S (X a)))'
		assert Tree.parse('(( (S (X a))))', BasicCategoryNormalizer()) == (
				Tree.parse('(ROOT (S (X a)))'))

	def test_escapes(self):
		tree = Tree.parse('(S (NN 1\\/2) (SYM \\*))')
		assert [leaf.label.value for leaf in tree.leaves()] == ['1/2', '*']

	def test_stray_text(self):
		trees = readtrees('hello (S (X a))\nworld (S (Y b))\n')
		assert [str(tree) for tree in trees] == ['(S (X a))', '(S (Y b))']

	def test_empty_brackets(self):
		assert str(Tree.parse('(S () (X a))')) == '(S (X a))'
		assert readtrees('()') == []
		assert readtrees('() (S (X a))') == [Tree.parse('(S (X a))')]

	def test_malformed(self, caplog):
		with caplog.at_level(logging.WARNING):
			reader = BracketTreeReader('(S (NP foo) (VP bar)')
			assert reader.readtree() is None
		assert reader.numskipped == 1
		assert 'malformed tree' in caplog.text

	def test_malformed_recovery(self, caplog):
		stream = '(S (NP foo) (VP bar)\n(S (NP baz) (VP qux))\n'
		with caplog.at_level(logging.WARNING):
			reader = BracketTreeReader(stream, filename='test.mrg',
					recover=True)
			trees = list(reader)
		assert [str(tree) for tree in trees] == ['(S (NP baz) (VP qux))']
		assert [leaf.label.index for leaf in trees[0].leaves()] == [1, 2]
		assert reader.numskipped == 1
		assert 'test.mrg:1: malformed tree 1' in caplog.text

	def test_without_recovery(self, caplog):
		stream = '(S (NP foo) (VP bar)\n(S (NP baz) (VP qux))\n'
		with caplog.at_level(logging.WARNING):
			reader = BracketTreeReader(stream)
			assert list(reader) == []
		assert reader.numskipped == 1
		assert 'unexpected end of input' in caplog.text

	def test_unindented_lines(self, caplog):
		with caplog.at_level(logging.WARNING):
			reader = BracketTreeReader(
					'(ROOT\n(S (NP (DT a) (NN b)) (VP (VBZ c))))\n')
			trees = list(reader)
			assert [str(tree) for tree in trees] == [
					'(ROOT (S (NP (DT a) (NN b)) (VP (VBZ c))))']
			assert reader.numskipped == 0
			reader = BracketTreeReader('(\n(S (X a)))\n')
			assert [str(tree) for tree in reader] == ['( (S (X a)))']
			assert reader.numskipped == 0
		assert 'malformed' not in caplog.text

	def test_stray_closing_bracket(self, caplog):
		with caplog.at_level(logging.WARNING):
			reader = BracketTreeReader('(S (X a))) (S (Y b))')
			trees = list(reader)
		assert len(trees) == 2
		assert reader.numskipped == 1
		assert 'unmatched closing bracket' in caplog.text

	def test_strict(self):
		with pytest.raises(MalformedTreeError):
			BracketTreeReader('(S (NP foo)', strict=True).readtree()
		with pytest.raises(ValueError):
			parsetree('(S (X a)) (S (Y b))')
		with pytest.raises(ValueError):
			parsetree('no tree here')

	def test_rejected(self):
		reader = BracketTreeReader('(S (-NONE- *T*))\n(S (X a))\n',
				EmptyNodeNormalizer())
		trees = list(reader)
		assert [str(tree) for tree in trees] == ['(S (X a))']
		assert reader.numrejected == 1
		assert reader.numread == 1

	def test_stream(self, tmp_path):
		path = tmp_path / 'trees.mrg'
		path.write_text(PTBTREES)
		with BracketTreeReader(open(str(path))) as reader:
			assert reader.filename == str(path)
			assert len(list(reader)) == 4


class Test_normalize(object):
	def test_basiccategory(self):
		assert basiccategory('NP-SBJ-1') == 'NP'
		assert basiccategory('PP-LOC=2') == 'PP'
		assert basiccategory('NP=2') == 'NP'
		assert basiccategory('-NONE-') == '-NONE-'
		assert basiccategory('-LRB-') == '-LRB-'
		assert basiccategory('-LRB--TMP') == '-LRB-'
		assert basiccategory('S') == 'S'
		assert basiccategory(None) is None

	def test_ispunct(self):
		assert ispunct(',', ',')
		assert ispunct('--', ':')
		assert ispunct('...', 'XX')
		assert not ispunct('cat', 'NN')

	def test_ptb(self):
		tree = Tree.parse('( (S (NP-SBJ-1 (-NONE- *T*-1)) (VP (VBD left)) '
				'(. .)) )', PTBNormalizer())
		assert str(tree) == '(ROOT (S (VP (VBD left)) (. .)))'
		assert [leaf.label.index for leaf in tree.leaves()] == [1, 2]

	def test_unary(self):
		tree = Tree.parse('(S (NP (NP (NN dogs))) (VP (VBP bark)))',
				UnaryNormalizer())
		assert str(tree) == '(S (NP (NN dogs)) (VP (VBP bark)))'

	def test_idempotent(self):
		for normalizer in (TreeNormalizer(), BasicCategoryNormalizer(),
				PTBNormalizer()):
			for label in ('NP-SBJ-1', '-NONE-', '-LRB-', 'PP-LOC=2', 'S'):
				once = normalizer.normalizenonterminal(label)
				assert normalizer.normalizenonterminal(once) == once
			for tree in readtrees(PTBTREES, normalizer):
				assert Tree.parse(str(tree), normalizer) == tree


class Test_heads(object):
	def test_rightdis_tiebreak(self):
		table = HeadRuleTable({'NP': [(RIGHTDIS, ['NN']), ('left', ['NP'])]})
		node = Tree.parse('(NP (DT the) (NN dog))')
		assert str(HeadFinder(table).determinehead(node)) == '(NN dog)'

	def test_avoid(self):
		node = Tree.parse('(ADJP (, ,) (JJ red))')
		table = HeadRuleTable({'ADJP': [('left', ['JJ'])]})
		headfinder = HeadFinder(table, categoriestoavoid={','})
		assert str(headfinder.determinehead(node)) == '(JJ red)'
		# an avoided category is only chosen if nothing else matches
		table = HeadRuleTable({'ADJP': [('left', [',', 'JJ'])]})
		assert str(HeadFinder(table, {','}).determinehead(node)) == '(JJ red)'
		assert str(HeadFinder(table).determinehead(node)) == '(, ,)'

	def test_lastresort(self):
		table = HeadRuleTable({'X': [('left', ['Z'])], 'Y': [('right', [])]})
		node = Tree.parse('(X (, ,) (A a) (B b))')
		assert HeadFinder(table, {','}).headindex(node) == 1
		assert HeadFinder(table).headindex(node) == 0
		node = Tree.parse('(Y (A a) (B b) (, ,))')
		assert HeadFinder(table, {','}).headindex(node) == 1
		# every child is avoided
		node = Tree.parse('(X (, ,) (, ;))')
		assert HeadFinder(table, {','}).headindex(node) == 0

	def test_directions(self):
		node = Tree.parse('(X (A a) (B b) (A c) (B d))')
		for direction, cands, expected in (
				('left', ['B', 'A'], 1), ('right', ['B', 'A'], 3),
				(LEFTDIS, ['B', 'A'], 0), (RIGHTDIS, ['B', 'A'], 3),
				('leftexcept', ['A'], 1), ('rightexcept', ['B'], 2)):
			table = HeadRuleTable({'X': [(direction, cands)]})
			assert HeadFinder(table).headindex(node) == expected, direction

	def test_missing_rule(self):
		node = Tree.parse('(X (A a) (B b))')
		with pytest.raises(MissingHeadRuleError):
			HeadFinder(HeadRuleTable({})).determinehead(node)
		table = HeadRuleTable({}, defaultrule=('right', []))
		assert str(HeadFinder(table).determinehead(node)) == '(B b)'

	def test_trivial(self):
		headfinder = HeadFinder(HeadRuleTable({}))
		with pytest.raises(ValueError):
			headfinder.determinehead(Tree.leaf('a'))
		node = Tree.parse('(X (A a))')
		assert headfinder.determinehead(node) is node[0]

	def test_determinism(self):
		tree = Tree.parse(SENT)
		for name in ('collins', 'modcollins'):
			first = [getheadfinder(name).headindex(node)
					for node in tree.subtrees(lambda n: n.children)]
			headfinder = getheadfinder(name)
			for _ in range(2):
				assert first == [headfinder.headindex(node)
						for node in tree.subtrees(lambda n: n.children)]

	def test_readheadrules(self, tmp_path):
		path = tmp_path / 'test.headrules'
		path.write_text('% comment\nNP\trightdis\tNN NNS\nNP\tLEFT-TO-RIGHT\tNP'
				'\nNX like NP\n*\tright\n')
		table = readheadrules(str(path))
		assert table.name == 'test'
		assert table.get('NP') == (('rightdis', ('NN', 'NNS')),
				('left', ('NP', )))
		assert table.get('NX') == table.get('NP')
		assert table.defaultrule == ('right', ())
		assert 'VP' not in table and len(table) == 2
		path.write_text('NP\tupwards\tNN\n')
		with pytest.raises(ValueError):
			readheadrules(str(path))
		with pytest.raises(ValueError):
			HeadRuleTable({'X': [('up', ['A'])]})

	def test_loadheadrules(self):
		for name in ('collins', 'modcollins', 'negra'):
			table = loadheadrules(name)
			assert 'NP' in table
			assert len(table) > 20
		assert loadheadrules('collins').get('TOP') == (
				loadheadrules('collins').get('ROOT'))
		assert loadheadrules('negra').defaultrule is not None

	def test_collins_coordination(self):
		node = Tree.parse('(NP (NN cats) (CC and) (NN dogs))')
		assert str(CollinsHeadFinder().determinehead(node)) == '(NN cats)'
		assert str(HeadFinder('collins').determinehead(node)) == '(NN dogs)'
		node = Tree.parse('(NP (NN cats) (, ,) (CC and) (NN dogs))')
		assert str(CollinsHeadFinder().determinehead(node)) == '(NN cats)'

	def test_modcollins(self):
		tree = Tree.parse(SENT)
		headfinder = ModCollinsHeadFinder()
		assert headterminal(tree, headfinder).label.value == 'sat'
		assert str(headpreterminal(tree, headfinder)) == '(VBD sat)'
		assert str(headfinder.determinehead(tree[0])) == str(tree[0, 1])
		applyheadrules(tree, headfinder)
		assert tree.head == 0
		assert tree[0].head == 1
		assert str(getheadpos(tree)) == '(VBD sat)'
		assert str(getheadpos(tree[0, 1, 1])) == '(IN on)'

	def test_negra(self):
		headfinder = NegraHeadFinder()
		node = Tree.parse('(S (NP-SB (NN Hans)) (VVFIN-HD schlaeft))')
		assert headfinder.headindex(node) == 1
		node = Tree.parse('(S (PPER er) (VVFIN schlaeft) ($. .))')
		assert headfinder.headindex(node) == 1
		node = Tree.parse('(S ($, ,) (UNKNOWN x))')
		assert headfinder.headindex(node) == 1


class Test_dependencies(object):
	def test_extract(self):
		tree = Tree.parse(SENT)
		result = extractdependencies(tree, 'ROOT', ModCollinsHeadFinder())
		assert result.complete
		assert result.numterminals == 7
		assert dependencyheads(result) == [2, 3, 0, 3, 6, 4, 3]
		assert result.deps[0].relation == ('NP', 'NN', 'DT', 'left')
		assert result.deps[1].relation == ('S', 'VP', 'NP', 'left')
		assert result.deps[3].relation == ('VP', 'VBD', 'PP', 'right')
		root = result.deps[2]
		assert root.head.value == 'ROOT' and root.head.index == 0
		assert root.dependent.value == 'sat'
		assert root.relation == ('ROOT', 'ROOT', 'S', 'right')

	def test_normpos(self):
		tree = Tree.parse(SENT)
		result = extractdependencies(tree, 'ROOT', ModCollinsHeadFinder(),
				normpos=True)
		assert result.deps[0].relation == ('NP', 'TAG', 'TAG', 'left')
		assert result.deps[1].relation == ('S', 'VP', 'NP', 'left')
		assert result.deps[6].relation == ('S', 'VP', 'TAG', 'right')
		# normpos does not affect heads
		assert dependencyheads(result) == [2, 3, 0, 3, 6, 4, 3]

	def test_completeness(self):
		for name in ('collins', 'modcollins'):
			headfinder = getheadfinder(name)
			for normalizer in (BasicCategoryNormalizer(), PTBNormalizer()):
				for tree in readtrees(PTBTREES, normalizer):
					result = extractdependencies(tree, 'ROOT', headfinder)
					assert result.complete
					assert len(result.deps) == len(tree.leaves())
					assert sorted(dep.dependent.index for dep in result.deps
							) == list(range(1, len(tree.leaves()) + 1))

	def test_incomplete(self, caplog):
		tree = Tree.parse('(S (A a) (B b))')
		tree[1, 0].label.index = 1
		with caplog.at_level(logging.WARNING):
			result = extractdependencies(tree, 'ROOT',
					HeadFinder(HeadRuleTable({'S': [('left', [])]})))
		assert not result.complete
		assert len(result.deps) == 2
		assert 'dependencies for 2 terminals' in caplog.text

	def test_unindexed(self):
		tree = Tree('S', [Tree('A', [Tree.leaf('a')]),
				Tree('B', [Tree.leaf('b')])])
		result = extractdependencies(tree, 'ROOT',
				HeadFinder(HeadRuleTable({'S': [('right', [])]})))
		assert result.complete
		assert dependencyheads(result) == [2, 0]

	def test_subtree(self):
		tree = Tree.parse(SENT)
		pp = tree[0, 1, 1]
		assert pp.label.value == 'PP'
		result = extractdependencies(pp, 'ROOT', ModCollinsHeadFinder())
		assert result.complete
		assert result.leafindices == [4, 5, 6]
		assert dependencyheads(result) == [0, 3, 1]
		assert deplen(result) == (3, 2.0)
		conll = writedependencies(pp, result, 'conll').splitlines()
		assert conll == ['1\ton\t_\tIN\tIN\t_\t0\troot\t_\t_',
				'2\tthe\t_\tDT\tDT\t_\t3\tDT\t_\t_',
				'3\tmat\t_\tNN\tNN\t_\t1\tNP\t_\t_']
		# the whole tree keeps its indices
		assert [leaf.label.index for leaf in tree.leaves()] == list(range(1, 8))

	def test_mapdependencies(self):
		tree = Tree.parse(SENT)
		result = mapdependencies(tree, ModCollinsHeadFinder())
		assert {(dep.head.index, dep.dependent.index) for dep in result.deps
				} == {(2, 1), (3, 2), (3, 4), (6, 5), (4, 6), (3, 7)}
		assert all(dep.relation is None for dep in result.deps)
		result = mapdependencies(tree, ModCollinsHeadFinder(), rootname='ROOT')
		assert result.complete
		assert result.deps[2].relation == 'ROOT'

	def test_write(self):
		tree = Tree.parse(SENT)
		result = extractdependencies(tree, 'ROOT', ModCollinsHeadFinder())
		conll = writedependencies(tree, result, 'conll').splitlines()
		assert conll[0] == '1\tThe\t_\tDT\tDT\t_\t2\tDT\t_\t_'
		assert conll[1] == '2\tcat\t_\tNN\tNN\t_\t3\tNP\t_\t_'
		assert conll[2] == '3\tsat\t_\tVBD\tVBD\t_\t0\troot\t_\t_'
		mst = writedependencies(tree, result, 'mst').splitlines()
		assert mst[0] == 'The\tcat\tsat\ton\tthe\tmat\t.'
		assert mst[3] == '2\t3\t0\t3\t6\t4\t3'
		with pytest.raises(ValueError):
			writedependencies(tree, result, 'xml')

	def test_deplen(self):
		tree = Tree.parse(SENT)
		result = extractdependencies(tree, 'ROOT', ModCollinsHeadFinder())
		assert deplen(result) == (10, 6.0)


@pytest.fixture
def corpus(tmp_path):
	(tmp_path / 'a.mrg').write_text('(S (X a))\n(S (X b))\n')
	(tmp_path / 'z.mrg').write_text('(S (Z z))\n')
	(tmp_path / 'notes.txt').write_text('(S (N n))\n')
	for name in ('sub1', 'sub2', 'sub1/deep'):
		(tmp_path / name).mkdir()
	(tmp_path / 'sub1' / 'b.mrg').write_text('(S (Y c))\n')
	(tmp_path / 'sub1' / 'deep' / 'd.mrg').write_text('(S (Y d))\n')
	(tmp_path / 'sub2' / 'c.mrg').write_text('(S (X e))\n')
	return tmp_path


class Test_treebank(object):
	def test_bfs(self, corpus):
		items = list(TreebankIterator(str(corpus), suffixfilter('.mrg')))
		assert [(item.filename, item.ordinal) for item in items] == [
				(str(corpus / 'a.mrg'), 1), (str(corpus / 'a.mrg'), 2),
				(str(corpus / 'z.mrg'), 1), (str(corpus / 'sub1' / 'b.mrg'), 1),
				(str(corpus / 'sub2' / 'c.mrg'), 1),
				(str(corpus / 'sub1' / 'deep' / 'd.mrg'), 1)]
		assert [item.tree.leaves()[0].label.value for item in items] == [
				'a', 'b', 'z', 'c', 'e', 'd']
		assert items[1].tree.label.docid == str(corpus / 'a.mrg')
		assert items[1].tree.label.sentindex == 1

	def test_dfs(self, corpus):
		items = readtreebank(str(corpus), suffixfilter('.mrg'), bfs=False)
		assert [item.tree.leaves()[0].label.value for item in items] == [
				'a', 'b', 'z', 'c', 'd', 'e']

	def test_single_file(self, corpus):
		with TreebankIterator(str(corpus / 'notes.txt'),
				suffixfilter('.mrg')) as treebank:
			items = list(treebank)
			assert treebank.numfiles == 1
		assert [str(item.tree) for item in items] == ['(S (N n))']

	def test_regexfilter(self, corpus):
		files = list(iterfiles(str(corpus), regexfilter(r'^[bc]\.mrg$')))
		assert files == [str(corpus / 'sub1' / 'b.mrg'),
				str(corpus / 'sub2' / 'c.mrg')]

	def test_numbase(self):
		assert sorted(['wsj_10.mrg', 'wsj_9.mrg', 'wsj_1.mrg'], key=numbase
				) == ['wsj_1.mrg', 'wsj_9.mrg', 'wsj_10.mrg']

	def test_malformed_provenance(self, tmp_path, caplog):
		path = tmp_path / 'bad.mrg'
		path.write_text('(S (X a))\n(S (NP foo) (VP bar)\n(S (X b))\n')
		with caplog.at_level(logging.WARNING):
			treebank = TreebankIterator(str(path), recover=True)
			items = list(treebank)
		assert [item.ordinal for item in items] == [1, 2]
		assert treebank.numskipped == 1
		assert '%s:2: malformed tree 2' % path in caplog.text

	def test_unindented(self, tmp_path, caplog):
		path = tmp_path / 'flat.mrg'
		path.write_text('(ROOT\n(S (NP (DT a) (NN b))\n(VP (VBZ c))))\n'
				'(\n(S (X d)))\n')
		with caplog.at_level(logging.WARNING):
			treebank = TreebankIterator(str(path))
			items = list(treebank)
		assert [str(item.tree) for item in items] == [
				'(ROOT (S (NP (DT a) (NN b)) (VP (VBZ c))))', '( (S (X d)))']
		assert treebank.numskipped == 0
		assert 'malformed' not in caplog.text

	def test_gzip(self, tmp_path):
		path = str(tmp_path / 'a.mrg.gz')
		with gzip.open(path, 'wt', encoding='utf8') as out:
			out.write('(S (X a))\n')
		with openread(path) as inp:
			assert inp.read() == '(S (X a))\n'
		assert len(readtreebank(path)) == 1

	def test_categoryindex(self, corpus):
		items = readtreebank(str(corpus), suffixfilter('.mrg'))
		index = CategoryIndex(items)
		assert len(index) == 6
		assert list(index.query('S', 'X')) == [0, 1, 4]
		assert list(index.query('Y')) == [3, 5]
		assert list(index.query('X', 'Y')) == []
		assert list(index.query('NOPE')) == []
		assert index.provenance(3) == (str(corpus / 'sub1' / 'b.mrg'), 1)
		assert 'Z' in index

	def test_synchronized(self, corpus):
		treebank = SynchronizedIterator(
				TreebankIterator(str(corpus), suffixfilter('.mrg')))
		result = []

		def consume():
			for item in treebank:
				result.append((item.filename, item.ordinal))

		threads = [threading.Thread(target=consume) for _ in range(4)]
		for thread in threads:
			thread.start()
		for thread in threads:
			thread.join()
		assert len(result) == len(set(result)) == 6


class Test_eval(object):
	gold = ('(ROOT (S (NP (NN John)) (VP (VBD saw) (NP (DT the) (NN man)) '
			'(PP (IN with) (NP (NN binoculars))))))')
	guess = ('(ROOT (S (NP (NN John)) (VP (VBD saw) (NP (NP (DT the) '
			'(NN man)) (PP (IN with) (NP (NN binoculars)))))))')

	def test_identical(self):
		evaluator = CollinsDepEvaluator(ModCollinsHeadFinder())
		tree = Tree.parse(SENT)
		result = evaluator.evaluate(tree, tree)
		assert all(a == (1.0, 1.0, 1.0) for a in result.values())
		assert evaluator.total() == (1.0, 1.0, 1.0)

	def test_attachment(self):
		evaluator = CollinsDepEvaluator(ModCollinsHeadFinder())
		result = evaluator.evaluate(Tree.parse(self.gold),
				Tree.parse(self.guess))
		assert result[('VP', 'TAG', 'PP', 'right')] == (0.0, 0.0, 0.0)
		assert result[('NP', 'NP', 'PP', 'right')] == (0.0, 0.0, 0.0)
		assert result[('NP', 'TAG', 'TAG', 'left')] == (1.0, 1.0, 1.0)
		scores = evaluator.scores()
		score = scores[('VP', 'TAG', 'PP', 'right')]
		assert np.isnan(score.precision)
		assert score.recall == 0 and score.gold == 1 and score.guessed == 0
		prec, rec, f1 = evaluator.total()
		assert prec == pytest.approx(5 / 6)
		assert rec == pytest.approx(5 / 6)
		assert f1 == pytest.approx(5 / 6)
		summary = evaluator.summary()
		assert 'total\tLP: 83.33\tLR: 83.33\tF1: 83.33' in summary
		assert 'VP/TAG/PP/right\tLP:   N/A' in summary

	def test_sentence_average(self):
		evaluator = CollinsDepEvaluator(ModCollinsHeadFinder())
		gold, guess = Tree.parse(self.gold), Tree.parse(self.guess)
		evaluator.evaluate(gold, guess)
		evaluator.evaluate(gold, gold)
		score = evaluator.scores()[('VP', 'TAG', 'PP', 'right')]
		assert score.sentrecall == pytest.approx(0.5)
		assert score.recall == pytest.approx(0.5)
		assert evaluator.numsents == 2


class Test_util(object):
	def test_readparam(self, tmp_path):
		path = tmp_path / 'params.prm'
		path.write_text("headrules='collins',\nnormpos=True,\n")
		params = readparam(str(path))
		assert params.headrules == 'collins'
		assert params.normpos is True
		assert params.startsymbol == 'ROOT'
		path.write_text("headrule='collins'")
		with pytest.raises(ValueError):
			readparam(str(path))


class Test_cli(object):
	def test_deps(self, tmp_path, capsys):
		path = tmp_path / 'a.mrg'
		path.write_text(PTBTREES)
		cli.deps([str(path), '--headrules=modcollins', '--fmt=conll'])
		out = capsys.readouterr().out
		sents = out.strip().split('\n\n')
		assert len(sents) == 4
		assert sents[0].splitlines()[0] == '1\tThe\t_\tDT\tDT\t_\t2\tDT\t_\t_'
		assert sents[0].splitlines()[2] == '3\tsat\t_\tVBD\tVBD\t_\t0\troot\t_\t_'

	def test_heads(self, tmp_path, capsys):
		path = tmp_path / 'a.mrg'
		path.write_text(PTBTREES)
		cli.heads([str(path)])
		out = capsys.readouterr().out
		assert 'ROOT\tsat\tVBD' in out.splitlines()
		assert 'PP\ton\tIN' in out.splitlines()

	def test_heads_bareleaf(self, tmp_path, capsys):
		path = tmp_path / 'frag.mrg'
		path.write_text('(FRAG (NP (NN b)) a)\n')
		cli.heads([str(path), '--normalizer=none'])
		lines = capsys.readouterr().out.splitlines()
		assert lines[0] == '(FRAG (NP (NN b)) a)'
		assert 'FRAG\ta\t-' in lines
		assert 'NP\tb\tNN' in lines

	def test_eval(self, tmp_path, capsys):
		gold = tmp_path / 'gold.mrg'
		gold.write_text(Test_eval.gold + '\n')
		guess = tmp_path / 'guess.mrg'
		guess.write_text(Test_eval.guess + '\n')
		cli.evaldeps([str(gold), str(guess)])
		out = capsys.readouterr().out
		assert 'total\tLP: 83.33' in out

	def test_params(self, tmp_path, capsys):
		path = tmp_path / 'a.mrg'
		path.write_text(SENT + '\n')
		params = tmp_path / 'deps.prm'
		params.write_text("fmt='mst'")
		cli.deps([str(path), '--params=%s' % params])
		out = capsys.readouterr().out
		assert out.splitlines()[0] == 'The\tcat\tsat\ton\tthe\tmat\t.'
