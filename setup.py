from setuptools import setup, find_packages
from codecs import open
import os

__author__ = "The cellpairs developers"

here = os.path.abspath(os.path.dirname(__file__))
package_name = 'cellpairs'
package_description = ('Cell list neighbor search for periodic '
                       'simulation cells')

# Get the long description from the README file
with open(os.path.join(here, 'README.md'), encoding='utf-8') as fp:
    long_description = fp.read()

# Get version number from the VERSION file
with open(os.path.join(here, package_name, 'VERSION')) as fp:
    version = fp.read().strip()

setup(
    name=package_name,
    version=version,
    description=package_description,
    long_description=long_description,
    long_description_content_type='text/markdown',
    author=__author__,
    license='MPL',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Physics',
        'Topic :: Scientific/Engineering :: Chemistry',
        'License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)',
        'Programming Language :: Python :: 3'
    ],
    keywords=['molecular simulation', 'neighbor list', 'cell list'],
    packages=find_packages(exclude=['tests']),
    package_data={package_name: ['VERSION']},
    python_requires='>=3.8',
    install_requires=['numpy>=1.20.1',
                      'pandas>=1.2.4'],
    extras_require={
        'test': ['pytest>=7.0',
                 'scipy>=1.6.2']
    }
)
