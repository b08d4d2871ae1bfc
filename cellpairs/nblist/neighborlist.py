"""
Linked cell neighbor search for points in a periodic unit cell.

All pairs of points closer than a cutoff are found using the minimum
image convention.  The search is accelerated by a grid of voxels that
are at least twice as long as the cutoff, so that only the voxels
around the home voxel of a point need to be checked.  An all-pairs
scan with identical results is available for validation and for very
small systems.

Example:

    >>> nbl = NeighborList(2.0, [[0.0, 0.0, 0.0], [9.0, 0.0, 0.0]],
    ...                    np.diag([10.0, 10.0, 10.0]))
    >>> [(p.i, p.j, round(p.d2, 6)) for p in nbl.get_neighbors(0)]
    [(0, 1, 1.0)]

"""

import logging
import numbers

import numpy as np

from .. import config as cfg
from ..exceptions import ConfigurationError, PointIndexError
from ..unitcell import Unitcell
from ..util import minimum_image, unique_wrapped_range
from .grid import VoxelGrid, VoxelMap
from .pairs import AtomPair

__author__ = "The cellpairs developers"
__date__ = "2026-10-19"

logger = logging.getLogger(__name__)


class NeighborList(object):

    def __init__(self, cutoff, positions, lattice_vectors, num_points=None,
                 max_voxels=None, naive_threshold=None):
        """
        cutoff            pairs closer than this distance are neighbors
        positions         Nx3 array of Cartesian coordinates, or a flat
                          array of 3*N coordinates (x1, y1, z1, x2, ...)
        lattice_vectors   3x3 array whose rows are the lattice vectors,
                          or the 9 components in row-major order
        num_points        (optional) number of points N; if given, the
                          size of `positions' is checked against it
        max_voxels        (optional) maximum total number of voxels;
                          default from the configuration file
        naive_threshold   (optional) get_all_pairs() uses the all-pairs
                          scan for N <= naive_threshold; default from
                          the configuration file

        The point set is only read here.  Changing `positions'
        afterwards has no effect on the neighbor list.
        """

        if max_voxels is None or naive_threshold is None:
            settings = cfg.read('nblist')
            if max_voxels is None:
                max_voxels = settings['max_voxels']
            if naive_threshold is None:
                naive_threshold = settings['naive_threshold']

        self._unitcell = Unitcell(lattice_vectors)
        self._grid = VoxelGrid(cutoff, self._unitcell, max_voxels=max_voxels)
        self._cutoff = self._grid.cutoff
        self._cutoff2 = self._cutoff*self._cutoff
        if (isinstance(naive_threshold, bool)
                or not isinstance(naive_threshold, numbers.Integral)):
            raise ConfigurationError(
                "naive_threshold must be an integer, got {!r}.".format(
                    naive_threshold))
        self._naive_threshold = naive_threshold

        coords = self._check_positions(positions, num_points)
        self._num_points = len(coords)
        self._frac = self._unitcell.to_fractional(coords)
        self._frac.setflags(write=False)

        self._voxels = VoxelMap(self._grid, self._frac)

    @classmethod
    def from_ase_atoms(cls, atoms, cutoff, **kwargs):
        """
        Factory method: initialize neighbor list for an instance of
        ase.Atoms.

        Keyword arguments are passed on to the regular constructor.

        """

        return cls(cutoff, atoms.get_positions(),
                   np.array(atoms.get_cell()), **kwargs)

    @classmethod
    def from_pymatgen_structure(cls, structure, cutoff, **kwargs):
        """
        Factory method: initialize neighbor list for an instance of
        pymatgen.core.structure.Structure.

        Keyword arguments are passed on to the regular constructor.

        """

        return cls(cutoff, structure.cart_coords,
                   structure.lattice.matrix, **kwargs)

    def __str__(self):
        ostr = "\n Instance of the NeighborList class\n\n"
        ostr += " cutoff                       : {}\n".format(self._cutoff)
        ostr += " voxels per lattice direction :"
        ostr += " {} {} {}\n".format(*self.num_voxels)
        ostr += " voxel layers searched        :"
        ostr += " {} {} {}\n".format(*self.d_index)
        ostr += " total number of points       : {}\n".format(
            self._num_points)
        ostr += " av. number of points / voxel : {}\n".format(
            float(self._num_points)/float(self._grid.num_voxels_total))
        return ostr

    def __repr__(self):
        return self.__str__()

    @property
    def cutoff(self):
        return self._cutoff

    @property
    def num_points(self):
        """
        Total number of points.
        """
        return self._num_points

    @property
    def naive_threshold(self):
        return self._naive_threshold

    @property
    def unitcell(self):
        return self._unitcell

    @property
    def grid(self):
        return self._grid

    @property
    def voxel_map(self):
        return self._voxels

    @property
    def fractional_positions(self):
        """
        Fractional coordinates of all points (read only, not wrapped
        into the home cell).
        """
        return self._frac

    @property
    def num_voxels(self):
        return self._grid.num_voxels

    @property
    def d_index(self):
        return self._grid.d_index

    @property
    def degenerate_axes(self):
        return self._grid.degenerate_axes

    @staticmethod
    def _check_positions(positions, num_points):
        try:
            coords = np.array(positions, dtype=float)
        except (TypeError, ValueError):
            raise ConfigurationError("Positions are not numeric.")

        if coords.ndim == 1 and coords.size % 3 == 0:
            coords = coords.reshape(-1, 3)
        elif coords.ndim != 2 or coords.shape[1] != 3:
            raise ConfigurationError(
                "Positions must be an Nx3 array or a flat array of 3*N "
                "values; got shape {}.".format(coords.shape))

        if num_points is not None and len(coords) != num_points:
            raise ConfigurationError(
                "Expected {} points, got {}.".format(num_points, len(coords)))
        if len(coords) == 0:
            raise ConfigurationError("The point set is empty.")
        if not np.all(np.isfinite(coords)):
            raise ConfigurationError("Positions contain non-finite values.")

        return coords

    def _check_index(self, i):
        # booleans are integers to Python but never point indices
        if isinstance(i, bool) or not isinstance(i, numbers.Integral):
            raise PointIndexError(i, self._num_points)
        if not (0 <= i < self._num_points):
            raise PointIndexError(i, self._num_points)
        return int(i)

    def _distance2(self, si, sj):
        """
        Squared minimum image distances between the fractional position
        SI and each of the fractional positions SJ.
        """

        r = self._unitcell.from_fractional(minimum_image(si - sj))
        return ((r[..., 0]*r[..., 0] + r[..., 1]*r[..., 1])
                + r[..., 2]*r[..., 2])

    def _collect(self, i, candidates, neighbors):
        """
        Append all CANDIDATES (indices j > i) within the cutoff of point
        I to NEIGHBORS.  Coincident points (d2 = 0) are not neighbors.
        """

        if len(candidates) == 0:
            return
        j = np.asarray(candidates, dtype=int)
        d2 = self._distance2(self._frac[i], self._frac[j])
        idx = (d2 > 0.0) & (d2 < self._cutoff2)
        neighbors.extend(AtomPair(i, int(jj), float(dd))
                         for jj, dd in zip(j[idx], d2[idx]))

    def get_neighbors(self, i, neighbors=None):
        """
        Find all neighbors j > i of point i by searching the voxels
        around the voxel of point i.

        Arguments:
          i          index of the query point
          neighbors  (optional) list that the pairs are appended to

        Returns:
          The list `neighbors' (a new list if none was given) extended by
          one AtomPair(i, j, d2) per neighbor j > i, where d2 is the
          squared minimum image distance.
        """

        i = self._check_index(i)
        if neighbors is None:
            neighbors = []

        nx, ny, nz = self._grid.num_voxels
        dx, dy, dz = self._grid.d_index
        cx, cy, cz = (int(k) for k in self._grid.voxel_coords(self._frac[i]))

        candidates = []
        for x in unique_wrapped_range(cx, dx, nx):
            for y in unique_wrapped_range(cy, dy, ny):
                for z in unique_wrapped_range(cz, dz, nz):
                    vid = self._grid.voxel_id(x, y, z)
                    # only pairs (i, j) with j > i
                    candidates += [j for j in self._voxels.contents(vid)
                                   if j > i]

        self._collect(i, candidates, neighbors)
        return neighbors

    def get_neighbors_naive(self, i, neighbors=None):
        """
        Same as get_neighbors(), but all points j > i are checked.

        """

        i = self._check_index(i)
        if neighbors is None:
            neighbors = []
        self._collect(i, np.arange(i + 1, self._num_points), neighbors)
        return neighbors

    def get_all_pairs(self, naive=None):
        """
        All neighbor pairs of the point set, ordered by the first index.

        Arguments:
          naive   if True, use the all-pairs scan; if False, use the
                  voxel grid; if None, use the all-pairs scan only for
                  systems with at most `naive_threshold' points

        Returns:
          list of AtomPair
        """

        if naive is None:
            naive = self._num_points <= self._naive_threshold
        query = self.get_neighbors_naive if naive else self.get_neighbors
        pairs = []
        for i in range(self._num_points):
            query(i, pairs)
        logger.debug("%d pairs within %.3f found (%s)", len(pairs),
                     self._cutoff, "all-pairs scan" if naive else "voxel grid")
        return pairs

    def pair_distance2(self, i, j):
        """
        Squared minimum image distance between points i and j.

        """

        i = self._check_index(i)
        j = self._check_index(j)
        return float(self._distance2(self._frac[i], self._frac[j]))


def compute_neighbor_pairs(positions, lattice_vectors, cutoff, naive=False,
                           **kwargs):
    """
    Convenience wrapper: build a NeighborList and return all pairs.

    Keyword arguments are passed on to the NeighborList constructor.

    """

    nbl = NeighborList(cutoff, positions, lattice_vectors, **kwargs)
    return nbl.get_all_pairs(naive=naive)
