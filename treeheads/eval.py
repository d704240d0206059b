"""Evaluation of trees by comparing their Collins dependencies.

Dependencies are extracted from gold and candidate trees with the same head
finder and grouped by relation. For each relation, precision and recall are
computed per sentence and accumulated in two ways: averaged over sentences,
and pooled over all dependencies as in evalb."""
from collections import namedtuple
import numpy as np
from .dependencies import extractdependencies

# columns of the accumulator for each relation
SENTPREC, SENTREC, SENTF1, MATCHEDGUESS, NUMGUESS, MATCHEDGOLD, NUMGOLD = range(7)

RelationScore = namedtuple('RelationScore', ('precision', 'recall', 'f1',
		'guessed', 'gold', 'sentprecision', 'sentrecall', 'sentf1'))


def depkey(dep):
	"""The part of a dependency that is compared; the relation is the key
	under which dependencies are grouped."""
	return (dep.head.index, dep.head.value,
			dep.dependent.index, dep.dependent.value)


def precision(reference, candidate):
	"""Get precision score for two sets; 0 if candidate is empty."""
	if not candidate:
		return 0.0
	return len(reference & candidate) / len(candidate)


def recall(reference, candidate):
	"""Get recall score for two sets; 0 if reference is empty."""
	return precision(candidate, reference)


def f_measure(prec, rec):
	"""Harmonic mean of precision and recall; 0 if either is 0."""
	if prec > 0 and rec > 0:
		return 2.0 / (1.0 / prec + 1.0 / rec)
	return 0.0


class CollinsDepEvaluator(object):
	"""Compute labeled precision, recall, and F1 for each Collins relation.

	>>> from treeheads.heads import ModCollinsHeadFinder
	>>> from treeheads.tree import Tree
	>>> evaluator = CollinsDepEvaluator(ModCollinsHeadFinder())
	>>> gold = Tree.parse('(ROOT (S (NP (DT the) (NN cat)) (VP (VBZ sleeps))))')
	>>> evaluator.evaluate(gold, gold)[('NP', 'TAG', 'TAG', 'left')]
	(1.0, 1.0, 1.0)
	"""

	def __init__(self, headfinder, startsymbol='ROOT', normpos=True):
		"""
		:param headfinder: a :class:`treeheads.heads.HeadFinder` instance.
		:param normpos: if True, POS tags in relations are replaced by a
			single canonical tag."""
		self.headfinder = headfinder
		self.startsymbol = startsymbol
		self.normpos = normpos
		self.numsents = 0
		self.accumulators = {}  # CollinsRelation => numpy array

	def _groupbyrelation(self, tree):
		result = {}
		for dep in extractdependencies(tree, self.startsymbol,
				self.headfinder, self.normpos).deps:
			result.setdefault(dep.relation, set()).add(depkey(dep))
		return result

	def evaluate(self, gold, guess):
		"""Compare the dependencies of a gold and a candidate tree, and add
		the result to the accumulated scores.

		:returns: a dictionary with a tuple ``(precision, recall, f1)`` for
			each relation in either tree."""
		golddeps = self._groupbyrelation(gold)
		guessdeps = self._groupbyrelation(guess)
		self.numsents += 1
		result = {}
		for rel in golddeps.keys() | guessdeps.keys():
			thisgold = golddeps.get(rel, set())
			thisguess = guessdeps.get(rel, set())
			prec = precision(thisgold, thisguess)
			rec = recall(thisgold, thisguess)
			f1 = f_measure(prec, rec)
			if rel not in self.accumulators:
				self.accumulators[rel] = np.zeros(7)
			self.accumulators[rel] += (prec, rec, f1,
					len(thisguess) * prec, len(thisguess),
					len(thisgold) * rec, len(thisgold))
			result[rel] = (prec, rec, f1)
		return result

	def scores(self):
		""":returns: a dictionary with a :class:`RelationScore` for each
			relation; undefined scores are NaN."""
		if not self.accumulators:
			return {}
		relations = list(self.accumulators)
		acc = np.array([self.accumulators[rel] for rel in relations])
		with np.errstate(divide='ignore', invalid='ignore'):
			prec = acc[:, MATCHEDGUESS] / acc[:, NUMGUESS]
			rec = acc[:, MATCHEDGOLD] / acc[:, NUMGOLD]
			f1 = 2 * prec * rec / (prec + rec)
		sentave = acc[:, [SENTPREC, SENTREC, SENTF1]] / self.numsents
		return {rel: RelationScore(prec[n], rec[n], f1[n],
					int(acc[n, NUMGUESS]), int(acc[n, NUMGOLD]),
					*sentave[n])
				for n, rel in enumerate(relations)}

	def total(self):
		""":returns: tuple ``(precision, recall, f1)`` pooled over all
			relations."""
		if not self.accumulators:
			return (float('nan'), ) * 3
		acc = np.array(list(self.accumulators.values())).sum(axis=0)
		with np.errstate(divide='ignore', invalid='ignore'):
			prec = np.float64(acc[MATCHEDGUESS]) / acc[NUMGUESS]
			rec = np.float64(acc[MATCHEDGOLD]) / acc[NUMGOLD]
			f1 = 2 * prec * rec / (prec + rec)
		return (float(prec), float(rec), float(f1))

	def summary(self):
		""":returns: a string with a table of the scores for each relation,
			in order of descending F1."""
		def fmt(value):
			return '  N/A' if np.isnan(value) else '%5.2f' % (100 * value)

		scores = self.scores()
		lines = [' Collins dependencies -- final statistics (%d sentences)'
				% self.numsents, '=' * 80]
		for rel, score in sorted(scores.items(), key=lambda a: (
				-np.nan_to_num(a[1].f1, nan=-1.0), a[0])):
			lines.append('%s\tLP: %s\tguessed: %d\tLR: %s\tgold: %d\tF1: %s'
					% ('/'.join(rel), fmt(score.precision), score.guessed,
					fmt(score.recall), score.gold, fmt(score.f1)))
		lines.append('=' * 80)
		prec, rec, f1 = self.total()
		lines.append('total\tLP: %s\tLR: %s\tF1: %s' % (
				fmt(prec), fmt(rec), fmt(f1)))
		return '\n'.join(lines)


__all__ = ['CollinsDepEvaluator', 'RelationScore', 'depkey', 'precision',
		'recall', 'f_measure']
