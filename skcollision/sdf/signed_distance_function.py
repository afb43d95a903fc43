"""Analytic signed distance functions of primitive shapes.

Distances are measured in the shape's local frame, negative inside and
positive outside. They are the exact reference that
:class:`skcollision.sdf.DistanceField` samples onto its grid.
"""

import numpy as np

from skcollision.model.shapes import Box
from skcollision.model.shapes import Cylinder
from skcollision.model.shapes import Sphere


def _box_signed_distance(points, half_extent):
    # works for any dimension, the cylinder uses it in 2d
    q = np.abs(points) - half_extent
    outside = np.linalg.norm(np.maximum(q, 0.0), axis=1)
    inside = np.minimum(np.max(q, axis=1), 0.0)
    return outside + inside


class SignedDistanceFunction(object):
    """Base of analytic SDFs.

    Subclasses implement `_signed_distance(points)` for an (n_point, 3)
    array in the shape frame.
    """

    _surface_threshold = 1e-6

    def __call__(self, points):
        """Return (n_point,) signed distances of points in the shape frame.

        A single (3,) point is accepted too.
        """
        points = np.atleast_2d(np.array(points, dtype=np.float64))
        return self._signed_distance(points)

    def on_surface(self, points):
        """Return (on_surface, signed_distances) of points.

        A point is on the surface when its distance is below a threshold
        relative to the shape's size.
        """
        sd = self(points)
        return np.abs(sd) < self._surface_threshold, sd

    def _signed_distance(self, points):
        raise NotImplementedError


class BoxSDF(SignedDistanceFunction):
    """Box of full `extents` centered at the origin."""

    def __init__(self, extents):
        self._half_extent = 0.5 * np.array(extents, dtype=np.float64)
        self._surface_threshold = 2e-2 * self._half_extent.min()

    def _signed_distance(self, points):
        return _box_signed_distance(points, self._half_extent)


class SphereSDF(SignedDistanceFunction):

    def __init__(self, radius):
        self._radius = float(radius)
        self._surface_threshold = 1e-2 * self._radius

    def _signed_distance(self, points):
        return np.linalg.norm(points, axis=1) - self._radius


class CylinderSDF(SignedDistanceFunction):
    """Cylinder along the z axis, centered at the origin."""

    def __init__(self, height, radius):
        self._height = float(height)
        self._radius = float(radius)
        self._surface_threshold = 1e-2 * min(self._radius, self._height)

    def _signed_distance(self, points):
        # a box in the (distance from axis, z) plane
        planar = np.column_stack(
            [np.linalg.norm(points[:, :2], axis=1), points[:, 2]])
        return _box_signed_distance(
            planar, np.array([self._radius, 0.5 * self._height]))


def shape2sdf(shape):
    """Return analytic SDF of a primitive shape.

    Parameters
    ----------
    shape : skcollision.model.shapes.Shape

    Returns
    -------
    sdf : SignedDistanceFunction or None
        None if the shape has no analytic SDF (e.g. a mesh).
    """
    if isinstance(shape, Box):
        return BoxSDF(shape.extents)
    if isinstance(shape, Sphere):
        return SphereSDF(shape.radius)
    if isinstance(shape, Cylinder):
        return CylinderSDF(height=shape.height, radius=shape.radius)
    return None
