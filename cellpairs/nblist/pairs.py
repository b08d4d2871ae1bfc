"""
Neighbor pair records and their conversion to array and table formats.

"""

from collections import namedtuple

import numpy as np
import pandas as pd

__author__ = "The cellpairs developers"
__date__ = "2026-10-19"

# i < j; d2 is the squared minimum image distance
AtomPair = namedtuple("AtomPair", ["i", "j", "d2"])

PAIR_DTYPE = np.dtype([("i", np.int64), ("j", np.int64), ("d2", np.float64)])


def pairs_to_array(pairs):
    """
    Convert a sequence of AtomPair into a structured ndarray with the
    fields `i', `j', and `d2'.

    """

    arr = np.empty(len(pairs), dtype=PAIR_DTYPE)
    for k, (i, j, d2) in enumerate(pairs):
        arr[k] = (i, j, d2)
    return arr


def pairs_to_dataframe(pairs):
    """
    Convert a sequence of AtomPair into a pandas DataFrame with the
    columns `i', `j', `d2', and `distance'.

    """

    df = pd.DataFrame(pairs_to_array(pairs))
    df["distance"] = np.sqrt(df["d2"])
    return df
