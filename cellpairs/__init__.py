"""
Periodic cell list neighbor search.

"""

import os

from .exceptions import ConfigurationError, InternalError, PointIndexError
from .nblist import (AtomPair, NeighborList, compute_neighbor_pairs,
                     pairs_to_array, pairs_to_dataframe)
from .unitcell import Unitcell

with open(os.path.join(os.path.dirname(__file__), 'VERSION')) as fp:
    __version__ = fp.read().strip()
