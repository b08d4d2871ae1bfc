"""
Periodic unit cell spanned by three (possibly non-orthogonal) lattice
vectors, and the transformation between Cartesian and fractional
lattice coordinates.

"""

import numpy as np

from .exceptions import ConfigurationError

__author__ = "The cellpairs developers"
__date__ = "2026-10-19"


class Unitcell(object):
    """
    Lattice vectors are stored as the rows of `avec'; a fractional
    coordinate vector s corresponds to the Cartesian vector s.avec.

    Attributes:
      avec       3x3 matrix with the lattice vectors in rows
      bvec       inverse of avec; its columns are the reciprocal
                 lattice vectors (without the factor 2*pi)
    """

    def __init__(self, lattice_vectors):
        """
        Arguments:
          lattice_vectors   3x3 array (rows are the lattice vectors) or
                            flat sequence of 9 floats in row-major order
        """

        try:
            avec = np.array(lattice_vectors, dtype=float)
        except (TypeError, ValueError):
            raise ConfigurationError(
                "Lattice vectors are not numeric: {}".format(
                    lattice_vectors))
        if avec.size != 9:
            raise ConfigurationError(
                "Expected 9 lattice vector components, got {}.".format(
                    avec.size))
        avec = avec.reshape(3, 3)
        if not np.all(np.isfinite(avec)):
            raise ConfigurationError(
                "Lattice vectors contain non-finite values.")

        self._avec = avec
        self._lengths = np.linalg.norm(avec, axis=1)
        if np.any(self._lengths <= 0.0):
            raise ConfigurationError(
                "Degenerate cell: lattice vector lengths {}.".format(
                    self._lengths))

        self._volume = abs(np.linalg.det(avec))
        # relative to the volume of the box with the same edge lengths
        if self._volume <= 1.0e-10*np.prod(self._lengths):
            raise ConfigurationError(
                "Degenerate cell: lattice vectors are linearly "
                "dependent (volume {}).".format(self._volume))

        self._bvec = np.linalg.inv(avec)
        self._face_distances = 1.0/np.linalg.norm(self._bvec, axis=0)

    def __str__(self):
        ostr = "Unitcell(\n"
        for v in self._avec:
            ostr += "  [{:12.6f} {:12.6f} {:12.6f}]\n".format(*v)
        ostr += ")"
        return ostr

    def __repr__(self):
        return self.__str__()

    @property
    def avec(self):
        """
        Matrix of lattice vectors (in rows).
        """
        return self._avec

    @property
    def bvec(self):
        return self._bvec

    @property
    def lengths(self):
        """
        Lengths of the three lattice vectors.
        """
        return self._lengths

    @property
    def face_distances(self):
        """
        Distances between the pairs of opposite cell faces, i.e., the
        widths of the cell perpendicular to the planes spanned by the
        other two lattice vectors.  Identical to `lengths' for
        orthorhombic cells and shorter otherwise.
        """
        return self._face_distances

    @property
    def volume(self):
        return self._volume

    def to_fractional(self, cart_coords):
        """
        Convert Cartesian coordinates to fractional lattice coordinates.

        Arguments:
          cart_coords[i,j]  j-th component of the Cartesian coordinates of
                            the i-th point, or a single 3-vector

        Returns:
          frac_coords  ndarray with the fractional coordinates
        """

        return np.dot(np.asarray(cart_coords, dtype=float), self._bvec)

    def from_fractional(self, frac_coords):
        """
        Convert fractional lattice coordinates to Cartesian coordinates.

        The products are summed explicitly instead of calling a matrix
        product so that one fractional vector always yields the same
        Cartesian vector, no matter how many vectors are converted at
        once.

        Arguments:
          frac_coords[i,j]   j-th component of the fractional coordinates
                             of the i-th point, or a single 3-vector

        Returns:
          cart_coords  ndarray with the Cartesian coordinates
        """

        s = np.asarray(frac_coords, dtype=float)
        a = self._avec
        return (s[..., 0:1]*a[0] + s[..., 1:2]*a[1]) + s[..., 2:3]*a[2]
