import unittest

import numpy as np
from numpy import pi
from numpy import testing

from skcollision.coordinates import as_coords
from skcollision.coordinates import Coordinates
from skcollision.coordinates.math import matrix2quaternion
from skcollision.coordinates.math import normalize_vectors
from skcollision.coordinates.math import quaternion2matrix
from skcollision.coordinates.math import rotation_matrix


class TestCoordinates(unittest.TestCase):

    def test_init(self):
        c = Coordinates()
        testing.assert_equal(c.translation, np.zeros(3))
        testing.assert_equal(c.rotation, np.eye(3))

        T = np.eye(4)
        T[:3, :3] = rotation_matrix(pi / 2.0, 'x')
        T[:3, 3] = [1, 2, 3]
        c = Coordinates(pos=T)
        testing.assert_almost_equal(c.T(), T)

        c = Coordinates(rot=[1, 0, 0, 0])
        testing.assert_almost_equal(c.rotation, np.eye(3))

        with self.assertRaises(ValueError):
            Coordinates(rot=[1, 1, 0, 0])
        with self.assertRaises(ValueError):
            Coordinates(rot=np.eye(3) * 2.0)
        with self.assertRaises(ValueError):
            Coordinates(pos=[1, 2])

    def test_translate(self):
        c = Coordinates().rotate(pi / 2.0, 'z')
        c.translate([1, 0, 0])
        testing.assert_almost_equal(c.translation, [0, 1, 0])
        c.translate([1, 0, 0], 'world')
        testing.assert_almost_equal(c.translation, [1, 1, 0])
        with self.assertRaises(ValueError):
            c.translate([1, 0, 0], 'parent')

    def test_transform_vector(self):
        c = Coordinates(pos=[1, 0, 0]).rotate(pi / 2.0, 'z')
        testing.assert_almost_equal(
            c.transform_vector([1, 0, 0]), [1, 1, 0])
        points = np.array([[1, 0, 0], [0, 1, 0]])
        testing.assert_almost_equal(
            c.transform_vector(points), [[1, 1, 0], [0, 0, 0]])
        testing.assert_almost_equal(
            c.inverse_transform_vector(c.transform_vector(points)), points)
        testing.assert_almost_equal(
            c.rotate_vector(points), [[0, 1, 0], [-1, 0, 0]])

    def test_mul(self):
        c1 = Coordinates(pos=[1, 0, 0]).rotate(pi / 2.0, 'z')
        c2 = Coordinates(pos=[1, 0, 0])
        c3 = c1 * c2
        testing.assert_almost_equal(c3.translation, [1, 1, 0])
        testing.assert_almost_equal(c3.rotation, c1.rotation)
        # operands are unchanged
        testing.assert_almost_equal(c2.translation, [1, 0, 0])

    def test_inverse_transformation(self):
        c = Coordinates(pos=[0.1, 0.2, 0.3]).rotate(pi / 5.0, 'y')
        identity = c * c.inverse_transformation()
        testing.assert_almost_equal(identity.T(), np.eye(4))

    def test_as_coords(self):
        testing.assert_equal(as_coords(None).T(), np.eye(4))
        testing.assert_equal(as_coords([1, 2, 3]).translation, [1, 2, 3])

        c = Coordinates(pos=[1, 2, 3])
        copied = as_coords(c)
        copied.translate([1, 0, 0])
        testing.assert_equal(c.translation, [1, 2, 3])


class TestMath(unittest.TestCase):

    def test_rotation_matrix(self):
        testing.assert_almost_equal(
            rotation_matrix(pi / 2.0, 'y'),
            [[0, 0, 1], [0, 1, 0], [-1, 0, 0]])
        testing.assert_almost_equal(
            rotation_matrix(pi / 2.0, '-z'), rotation_matrix(-pi / 2.0, 'z'))
        testing.assert_almost_equal(
            rotation_matrix(pi / 3.0, [0, 0, 2]),
            rotation_matrix(pi / 3.0, 'z'))

    def test_quaternion(self):
        q = np.array([0.965, 0.0, 0.258, 0.0])
        q = q / np.linalg.norm(q)
        m = quaternion2matrix(q)
        testing.assert_almost_equal(m.dot(m.T), np.eye(3))
        testing.assert_almost_equal(matrix2quaternion(m), q)

        # rotation of pi around x, where w vanishes
        m = rotation_matrix(pi, 'x')
        testing.assert_almost_equal(
            np.abs(matrix2quaternion(m)), [0, 1, 0, 0])
        testing.assert_almost_equal(
            quaternion2matrix(matrix2quaternion(m)), m)

    def test_normalize_vectors(self):
        vs = np.array([[3.0, 0.0, 4.0], [0.0, 0.0, 0.0]])
        testing.assert_almost_equal(
            normalize_vectors(vs), [[0.6, 0.0, 0.8], [0.0, 0.0, 0.0]])
