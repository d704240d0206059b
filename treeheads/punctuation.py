"""Treebank specific metadata: basic categories and punctuation."""

# Characters which introduce an annotation on a category; e.g., NP-SBJ, NP=2.
ANNOTATIONCHARS = frozenset('-=|#^~_')

# Treebank specific parameters for detecting punctuation.
PUNCTTAGS = frozenset({"''", '``', '-LRB-', '-RRB-', '.', ':', ',',  # PTB
		'$,', '$.', '$(', '$[',  # Negra/Tiger
		'PU', 'PUNC', 'PUNCT'})

# NB: ' is not in this list of tokens, because if it occurs as a possesive
# marker it should be left alone; occurrences of ' as quotation marker may
# still be identified using tags.
PUNCTUATION = frozenset('.,():-";?/!*&`[]<>{}|=\xab\xbb\xb7\xad\\'
		) | {'..', '...', '....', '!!', '!!!', '??', '???', "''", '``', ',,',
		'--', '---', '-LRB-', '-RRB-', '-LCB-', '-RCB-', '-LSB-', '-RSB-'}


def basiccategory(label):
	"""Strip any annotations from a category.

	Annotations are introduced by one of the characters in
	``ANNOTATIONCHARS``; e.g., ``NP-SBJ-1 => NP``, ``NP=2 => NP``. A label
	that starts with an annotation character is never truncated at position
	zero, and a second occurrence of that same character is skipped as well,
	so that ``-NONE-`` and ``-LRB-`` are left intact.

	>>> basiccategory('NP-SBJ-1')
	'NP'
	>>> basiccategory('-NONE-')
	'-NONE-'
	>>> basiccategory('-LRB--TMP')
	'-LRB-'"""
	if label is None:
		return None
	sawatzero = None
	for i, char in enumerate(label):
		if char not in ANNOTATIONCHARS:
			continue
		if i == 0:
			sawatzero = char
		elif sawatzero is not None and i > 1 and char == sawatzero:
			sawatzero = None
		else:
			return label[:i]
	return label


def ispuncttag(tag):
	"""Test whether a POS tag is a punctuation tag."""
	return tag in PUNCTTAGS


def ispunct(word, tag):
	"""Test whether a word with a given tag is punctuation."""
	return tag in PUNCTTAGS or word in PUNCTUATION


__all__ = ['basiccategory', 'ispuncttag', 'ispunct']
