"""
Partitioning of a periodic unit cell into a grid of voxels, and the
linked-list assignment of points to voxels.

"""

import logging
import numbers

import numpy as np

from ..exceptions import ConfigurationError
from ..util import flat_index

__author__ = "The cellpairs developers"
__date__ = "2026-10-19"

logger = logging.getLogger(__name__)

FINAL = -1


class VoxelGrid(object):
    """
    Uniform grid of voxels along the three lattice directions.

    Each voxel is at least 2*cutoff long along its lattice vector.
    Voxel coordinates are computed from fractional coordinates, which
    may lie outside of [0, 1[; they are reduced periodically.

    Attributes:
      num_voxels    number of voxels per lattice direction (nx, ny, nz)
      voxel_size    voxel edge lengths in Cartesian units
      voxel_size_r  voxel edge lengths in fractional units (1/n)
      d_index       number of voxel layers to search on each side of
                    the home voxel per lattice direction
    """

    def __init__(self, cutoff, unitcell, max_voxels=None):
        """
        Arguments:
          cutoff      neighbor cutoff distance (> 0)
          unitcell    instance of cellpairs.unitcell.Unitcell
          max_voxels  (optional) upper bound for the total number of
                      voxels; the grid is coarsened by halving until it
                      fits
        """

        try:
            cutoff = float(cutoff)
        except (TypeError, ValueError):
            raise ConfigurationError(
                "Cutoff must be a number, got {!r}.".format(cutoff))
        if not (np.isfinite(cutoff) and cutoff > 0.0):
            raise ConfigurationError(
                "Cutoff must be positive and finite, got {}.".format(cutoff))
        if max_voxels is not None and (
                isinstance(max_voxels, bool)
                or not isinstance(max_voxels, numbers.Integral)
                or max_voxels < 1):
            raise ConfigurationError(
                "max_voxels must be an integer of at least 1, "
                "got {!r}.".format(max_voxels))

        self._cutoff = cutoff
        self._unitcell = unitcell

        lengths = unitcell.lengths
        n = np.maximum(1, np.floor(lengths/(2.0*cutoff))).astype(int)
        if max_voxels is not None:
            while np.prod(n) > max_voxels:
                n = np.maximum(n // 2, 1)
        self._n = n
        self._nx, self._ny, self._nz = (int(k) for k in n)

        self._voxel_size = lengths/n
        self._voxel_size_r = 1.0/n

        # Thickness of one voxel layer perpendicular to the other two
        # lattice directions.  A neighbor within the cutoff can be at
        # most cutoff/spacing layers away.
        spacing = unitcell.face_distances/n
        self._d_index = (np.floor(cutoff/spacing) + 1).astype(int)

        self._degenerate = tuple(int(k) for k in np.flatnonzero(n == 1))

        logger.debug("cell lengths: %s, cutoff: %.3f", lengths, cutoff)
        logger.debug("voxel grid: %s, voxel size: %s",
                     tuple(self.num_voxels), self._voxel_size)
        logger.debug("search radius (voxels): %s", tuple(self.d_index))
        if self._degenerate:
            logger.warning(
                "Cell shorter than twice the cutoff (%.3f) along lattice "
                "direction(s) %s; a single voxel is used there and the "
                "search degrades towards an all-pairs scan.",
                cutoff, self._degenerate)

    def __str__(self):
        return "VoxelGrid(num_voxels={}, d_index={})".format(
            tuple(self.num_voxels), tuple(self.d_index))

    def __repr__(self):
        return self.__str__()

    @property
    def cutoff(self):
        return self._cutoff

    @property
    def unitcell(self):
        return self._unitcell

    @property
    def num_voxels(self):
        """
        Number of voxels per lattice direction.
        """
        return (self._nx, self._ny, self._nz)

    @property
    def num_voxels_total(self):
        return self._nx*self._ny*self._nz

    @property
    def voxel_size(self):
        return self._voxel_size

    @property
    def voxel_size_r(self):
        return self._voxel_size_r

    @property
    def d_index(self):
        """
        Search radius in voxels per lattice direction.
        """
        return tuple(int(d) for d in self._d_index)

    @property
    def degenerate_axes(self):
        """
        Lattice directions along which the grid collapsed to a single
        voxel because the cell is shorter than 2*cutoff.
        """
        return self._degenerate

    def voxel_coords(self, frac_coords):
        """
        Voxel coordinates reduced into [0, n[ for fractional coordinates.

        Arguments:
          frac_coords   single fractional 3-vector or (N, 3) array

        Returns:
          integer ndarray of the same shape
        """

        s = np.asarray(frac_coords, dtype=float)
        raw = np.floor(s*self._n).astype(int)
        # numpy's integer modulo takes the sign of the divisor
        return np.mod(raw, self._n)

    def voxel_id(self, x, y, z):
        return flat_index(x, y, z, self._nx, self._ny, self._nz)

    def voxel_index(self, frac_coords):
        """
        Flattened voxel index of a single fractional position.

        """
        x, y, z = self.voxel_coords(frac_coords)
        return self.voxel_id(int(x), int(y), int(z))


class VoxelMap(object):
    """
    Assignment of points to the voxels of a VoxelGrid, stored as linked
    lists: `first[v]' is the first point in voxel v and `next[i]' the
    point following i in the same voxel (FINAL marks the end).

    Points within a voxel are listed in ascending order.  The map is
    filled once on construction and never modified afterwards.
    """

    def __init__(self, grid, frac_coords):
        """
        Arguments:
          grid          instance of VoxelGrid
          frac_coords   (N, 3) array of fractional coordinates
        """

        self._grid = grid
        num_points = len(frac_coords)
        self._voxel = np.empty(num_points, dtype=int)
        self._first = np.empty(grid.num_voxels_total, dtype=int)
        self._first[:] = FINAL
        self._next = np.empty(num_points, dtype=int)
        self._next[:] = FINAL

        coords = grid.voxel_coords(frac_coords)
        # prepending in reverse order leaves every list ascending
        for i in range(num_points - 1, -1, -1):
            vid = grid.voxel_id(*(int(k) for k in coords[i]))
            self._voxel[i] = vid
            self._add_to_voxel(vid, i)

        logger.debug("%d points in %d of %d voxels", num_points,
                     len(self.occupied()), grid.num_voxels_total)

    def __len__(self):
        return len(self._voxel)

    @property
    def grid(self):
        return self._grid

    def _add_to_voxel(self, vid, i):
        """
        Add point I to voxel VID.
        """

        self._next[i] = self._first[vid]
        self._first[vid] = i

    def voxel_of(self, i):
        """
        Flattened index of the voxel that contains point I.
        """
        return int(self._voxel[i])

    def contents(self, vid):
        """
        Return list of all point indices of voxel VID.
        """

        ids = []
        i = self._first[vid]
        while i != FINAL:
            ids.append(int(i))
            i = self._next[i]
        return ids

    def occupied(self):
        """
        Flattened indices of all non-empty voxels.
        """
        return [int(v) for v in np.flatnonzero(self._first != FINAL)]
