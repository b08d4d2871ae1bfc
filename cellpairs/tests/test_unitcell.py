import unittest

import numpy as np

from ..exceptions import ConfigurationError
from ..unitcell import Unitcell


class UnitcellTest(unittest.TestCase):

    def setUp(self):
        self.avec = np.array([[10.0, 0.0, 0.0],
                              [3.0, 9.0, 0.0],
                              [-2.0, 2.5, 11.0]])

    def test_orthorhombic(self):
        cell = Unitcell([4.0, 0.0, 0.0, 0.0, 5.0, 0.0, 0.0, 0.0, 6.0])
        self.assertTrue(np.allclose(cell.lengths, [4.0, 5.0, 6.0]))
        self.assertTrue(np.allclose(cell.face_distances, cell.lengths))
        self.assertAlmostEqual(cell.volume, 120.0)
        self.assertTrue(np.allclose(cell.to_fractional([2.0, 5.0, -3.0]),
                                    [0.5, 1.0, -0.5]))

    def test_triclinic(self):
        cell = Unitcell(self.avec)
        self.assertAlmostEqual(cell.volume, 990.0)
        self.assertTrue(np.all(cell.face_distances <= cell.lengths + 1e-12))
        # the third lattice vector is the only one with a z component
        self.assertAlmostEqual(cell.face_distances[2], 11.0)
        self.assertTrue(np.allclose(np.dot(cell.avec, cell.bvec), np.eye(3)))

    def test_fractional_roundtrip(self):
        cell = Unitcell(self.avec)
        cart = np.array([[0.0, 0.0, 0.0],
                         [1.0, -2.0, 3.0],
                         [25.0, 13.0, -7.5]])
        frac = cell.to_fractional(cart)
        self.assertTrue(np.allclose(frac[1], cell.to_fractional(cart[1])))
        self.assertTrue(np.allclose(cell.from_fractional(frac), cart))
        self.assertTrue(np.allclose(cell.from_fractional([1.0, 1.0, 1.0]),
                                    np.sum(self.avec, axis=0)))

    def test_from_fractional_batch_independent(self):
        cell = Unitcell(self.avec)
        rng = np.random.RandomState(0)
        frac = rng.uniform(-0.5, 0.5, size=(50, 3))
        batch = cell.from_fractional(frac)
        for k in range(len(frac)):
            self.assertEqual(cell.from_fractional(frac[k]).tolist(),
                             batch[k].tolist())

    def test_degenerate(self):
        with self.assertRaises(ConfigurationError):
            Unitcell(np.zeros((3, 3)))
        with self.assertRaises(ConfigurationError):
            Unitcell([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [1.0, 1.0, 0.0]])
        with self.assertRaises(ConfigurationError):
            Unitcell([1.0, 0.0, 0.0, 0.0, 1.0])
        with self.assertRaises(ConfigurationError):
            Unitcell(np.diag([1.0, np.inf, 1.0]))
        with self.assertRaises(ConfigurationError):
            Unitcell("abc")


if __name__ == "__main__":
    unittest.main()
