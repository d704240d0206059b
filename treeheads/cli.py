"""Command-line interfaces to modules."""
import logging
from sys import argv, stderr
from sys import exit as sysexit
from getopt import gnu_getopt, GetoptError
from itertools import zip_longest
from .util import DictObj, DEFAULTS, readparam
from .normalize import TreeNormalizer, BasicCategoryNormalizer, PTBNormalizer

COMMANDS = {
		'deps': 'Extract dependencies from treebanks in conll or mst format.',
		'heads': 'Print the head word of each constituent.',
		'eval': 'Evaluate trees by comparing their Collins dependencies.',
	}
FLAGS = ('help', 'normpos', 'verbose', 'quiet', 'dfs', 'recover')
OPTIONS = ('params=', 'headrules=', 'startsymbol=', 'normalizer=',
		'encoding=', 'suffix=', 'fmt=', 'maxlen=')
USAGEOPTIONS = """
Options:
  --params=<file>   read options from a parameter file with key=value pairs;
                    options on the command line take precedence.
  --headrules=<x>   one of collins, modcollins, negra, or a file with head
                    rules [default: modcollins].
  --startsymbol=<x> category of the root node [default: ROOT].
  --normalizer=<x>  one of ptb, basic, none [default: ptb].
  --normpos         replace POS tags in relations by a single tag.
  --encoding=<x>    encoding of treebank files [default: utf8].
  --suffix=<x>      in directories, read files with this suffix
                    [default: .mrg].
  --dfs             read directories depth-first instead of breadth-first.
  --recover         an opening bracket in the first column starts a new tree,
                    discarding an incomplete previous tree; only for files
                    that indent continuation lines.
  -v, --verbose     print debug messages.
  -q, --quiet       only print errors."""


def main():
	"""Expose command-line interfaces."""
	from os.path import basename
	thiscmd = basename(argv[0])
	if len(argv) == 2 and argv[1] in ('--version', ):
		from treeheads import __version__
		print(__version__)
	elif len(argv) <= 1 or argv[1] not in COMMANDS:
		print('Usage: %s <command> [arguments]\n' % thiscmd, file=stderr)
		print('Command is one of:', file=stderr)
		for a, b in COMMANDS.items():
			print('   %s  %s' % (a.ljust(15), b), file=stderr)
		print('for additional instructions issue: %s <command> --help'
			% thiscmd, file=stderr)
		sysexit(2)
	else:
		cmd = argv[1]
		{'deps': deps, 'heads': heads, 'eval': evaldeps}[cmd](argv[2:])


def getoptions(args, usage):
	"""Parse command line options and merge them with parameters.

	:returns: a tuple ``(params, args)`` where params is a DictObj."""
	try:
		opts, args = gnu_getopt(args, 'hvq', FLAGS + OPTIONS)
	except GetoptError as err:
		print('error:', err, file=stderr)
		print(usage, file=stderr)
		sysexit(2)
	opts = dict(opts)
	if '--help' in opts or '-h' in opts:
		print(usage)
		sysexit(0)
	params = (readparam(opts['--params']) if '--params' in opts
			else DictObj(DEFAULTS))
	for key in ('headrules', 'startsymbol', 'normalizer', 'encoding',
			'suffix', 'fmt'):
		if '--' + key in opts:
			params.update({key: opts['--' + key]})
	if '--normpos' in opts:
		params.update(normpos=True)
	params.update(bfs='--dfs' not in opts, recover='--recover' in opts,
			maxlen=int(opts['--maxlen']) if '--maxlen' in opts else None)
	if '--verbose' in opts or '-v' in opts:
		level = logging.DEBUG
	elif '--quiet' in opts or '-q' in opts:
		level = logging.ERROR
	else:
		level = logging.INFO
	logging.basicConfig(level=level, format='%(message)s')
	return params, args


def getnormalizer(name, startsymbol):
	"""Return the normalizer for a name given as option."""
	if name == 'ptb':
		return PTBNormalizer(root=startsymbol)
	elif name == 'basic':
		return BasicCategoryNormalizer(root=startsymbol)
	elif name == 'none':
		return TreeNormalizer()
	raise ValueError('unrecognized normalizer: %r' % name)


def itertreebanks(paths, params):
	"""Yield the items of one or more treebanks; '-' is standard input."""
	from .treebank import TreebankIterator, suffixfilter
	normalizer = getnormalizer(params.normalizer, params.startsymbol)
	for path in paths or ['-']:
		with TreebankIterator(path, suffixfilter(params.suffix), normalizer,
				params.encoding, params.bfs, params.recover) as treebank:
			yield from treebank
			if treebank.numskipped:
				logging.warning('%s: skipped %d malformed trees',
						path, treebank.numskipped)


def deps(args):
	"""Usage: treeheads deps [<treebank>...] [options]

Extract the dependencies of trees using head rules; a treebank is a file or
directory; if no treebank is given, trees are read from standard input.
  --fmt=<x>         output format: conll or mst [default: conll]."""
	from .heads import getheadfinder
	from .dependencies import extractdependencies, writedependencies
	params, args = getoptions(args, deps.__doc__ + USAGEOPTIONS)
	headfinder = getheadfinder(params.headrules)
	numtrees = incomplete = 0
	for item in itertreebanks(args, params):
		result = extractdependencies(item.tree, params.startsymbol,
				headfinder, params.normpos)
		if not result.complete:
			logging.warning('%s:%d: incomplete dependencies',
					item.filename, item.ordinal)
			incomplete += 1
		print(writedependencies(item.tree, result, params.fmt), end='')
		numtrees += 1
	logging.info('converted %d trees; %d with incomplete dependencies',
			numtrees, incomplete)


def heads(args):
	"""Usage: treeheads heads [<treebank>...] [options]

Print each tree followed by the category, head word, and head tag of each of
its constituents; if no treebank is given, trees are read from standard
input."""
	from .heads import getheadfinder, applyheadrules, getheadpos
	params, args = getoptions(args, heads.__doc__ + USAGEOPTIONS)
	headfinder = getheadfinder(params.headrules)
	for item in itertreebanks(args, params):
		applyheadrules(item.tree, headfinder)
		print(item.tree)
		for node in item.tree.subtrees(lambda n: n.isphrasal()):
			headpos = getheadpos(node)
			if headpos is None:  # lexical head without preterminal
				word = node
				while word.children:
					word = word[word.head]
				print('%s\t%s\t-' % (node.label, word.label))
			else:
				print('%s\t%s\t%s' % (node.label, headpos[0].label,
						headpos.label))
		print()


def evaldeps(args):
	"""Usage: treeheads eval <gold> <guess> [options]

Compare the Collins dependencies of two treebanks with the same trees in the
same order; reports labeled precision, recall, and F1 for each relation.
  --maxlen=<n>      only evaluate sentences with at most n words."""
	from .heads import getheadfinder
	from .eval import CollinsDepEvaluator
	usage = evaldeps.__doc__ + USAGEOPTIONS
	params, args = getoptions(args, usage)
	if len(args) != 2:
		print('error: expected 2 treebanks', file=stderr)
		print(usage, file=stderr)
		sysexit(2)
	evaluator = CollinsDepEvaluator(getheadfinder(params.headrules),
			params.startsymbol, normpos=True)
	goldtrees = itertreebanks(args[:1], params)
	guesstrees = itertreebanks(args[1:], params)
	for gold, guess in zip_longest(goldtrees, guesstrees):
		if gold is None or guess is None:
			logging.warning('treebanks have different numbers of trees')
			break
		if len(gold.tree.leaves()) != len(guess.tree.leaves()):
			raise ValueError('%s:%d and %s:%d: sentence length mismatch' % (
					gold.filename, gold.ordinal, guess.filename, guess.ordinal))
		if params.maxlen is None or len(gold.tree.leaves()) <= params.maxlen:
			evaluator.evaluate(gold.tree, guess.tree)
	print(evaluator.summary())


__all__ = ['main', 'deps', 'heads', 'evaldeps']
