"""Head finding and dependency extraction for phrase-structure treebanks.

Main components:

- A reader for trees in bracket notation, with pluggable normalization of
  labels and trees.
- Table-driven head finders for the Penn treebank (Collins 1999, and a
  revised variant) and the German Negra/Tiger treebanks.
- Extraction of bilexical dependencies from trees, with the relations of
  Collins (1999), and evaluation of trees by comparing these dependencies.
"""
__version__ = '0.1.0'
