"""
Index arithmetic and rounding helpers shared by the voxel grid and the
neighbor queries.

"""

import numpy as np

from .exceptions import InternalError

__author__ = "The cellpairs developers"
__date__ = "2026-10-19"


def round_half_away(x):
    """
    Round to the nearest integer with ties rounded away from zero.

    NumPy's `rint' rounds ties to even and `floor(x + 0.5)' is off by
    one for the largest double below 0.5, so ties are detected
    explicitly.  `x - trunc(x)' is exact in floating point.

    Arguments:
      x     scalar or array of floats

    Returns:
      ndarray (or scalar) of the same shape holding integral floats
    """

    x = np.asarray(x, dtype=float)
    whole = np.trunc(x)
    ties = np.abs(x - whole) == 0.5
    return np.where(ties, whole + np.sign(x), np.rint(x))


def minimum_image(ds):
    """
    Wrap fractional displacements into [-0.5, 0.5] per component.

    """
    ds = np.asarray(ds, dtype=float)
    return ds - round_half_away(ds)


def wrap_index(i, n):
    """
    Bring the integer voxel coordinate I into the interval [0, n[.

    """

    while i < 0:
        i += n
    while i >= n:
        i -= n
    return i


def unique_wrapped_range(center, d, n):
    """
    Voxel coordinates center-d, ..., center+d wrapped into [0, n[.

    The visiting order is kept and every coordinate occurs only once,
    which matters when 2*d + 1 > n, i.e., when the search window is
    wider than the grid.
    """

    wrapped = [wrap_index(k, n) for k in range(center - d, center + d + 1)]
    return list(dict.fromkeys(wrapped))


def flat_index(x, y, z, nx, ny, nz):
    """
    Row-major flattening of the voxel coordinates (x, y, z).

    The mapping is only collision free for coordinates within the grid,
    so anything else is rejected.
    """

    if not (0 <= x < nx and 0 <= y < ny and 0 <= z < nz):
        raise InternalError(
            "Voxel coordinates ({}, {}, {}) outside of grid "
            "({}, {}, {}).".format(x, y, z, nx, ny, nz))
    return (x*ny + y)*nz + z
