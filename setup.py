"""Generic setup.py for a pure Python package."""
import sys
from setuptools import setup

from treeheads import __version__

with open('README.rst') as inp:
	README = inp.read()

REQUIRES = [
		'numpy',  # '>=1.17',
		'roaringbitmap',  # '>=0.4',
		]
METADATA = dict(name='treeheads',
		version=__version__,
		description='Head finding and dependency extraction for treebanks',
		long_description=README,
		classifiers=[
				'Development Status :: 4 - Beta',
				'Environment :: Console',
				'Intended Audience :: Science/Research',
				'License :: OSI Approved :: GNU General Public License (GPL)',
				'Operating System :: POSIX',
				'Programming Language :: Python :: 3',
				'Topic :: Text Processing :: Linguistic',
		],
		packages=['treeheads'],
		package_data={'treeheads': ['headrules/*.headrules']},
		install_requires=REQUIRES,
		extras_require={'test': ['pytest']},
		entry_points={'console_scripts': ['treeheads = treeheads.cli:main']},
	)

if __name__ == '__main__':
	if sys.version_info[:2] < (3, 6):
		raise RuntimeError('Python version 3.6+ required.')
	setup(**METADATA)
