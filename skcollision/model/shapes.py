"""Immutable collision shapes.

Shapes are expressed in their own local frame. Box and mesh are given
as-is, sphere is centered at the origin and the cylinder axis is the
local z axis. Placing a shape in the world is always done from outside,
by the link, attached body or world object that owns it.

Example
-------
>>> from skcollision.model.shapes import Box
>>> box = Box(extents=[0.1, 0.2, 0.3])
>>> box.bounds
array([[-0.05, -0.1 , -0.15],
       [ 0.05,  0.1 ,  0.15]])
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from skcollision._lazy_imports import _lazy_trimesh


def _readonly(arr, dtype, shape_msg, ndim_cols=3):
    arr = np.array(arr, dtype=dtype)
    if arr.ndim != 2 or arr.shape[1] != ndim_cols:
        raise ValueError(shape_msg)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Shape:
    """Base class for collision shapes."""

    @property
    def bounds(self):
        """Axis aligned bounds in the local frame.

        Returns
        -------
        bounds : numpy.ndarray
            (2, 3) array of [lower, upper] corners.
        """
        raise NotImplementedError

    @property
    def extents(self):
        lower, upper = self.bounds
        return upper - lower

    def to_trimesh(self):
        """Return a trimesh.Trimesh of this shape in the local frame."""
        raise NotImplementedError


@dataclass(frozen=True, eq=False)
class Box(Shape):
    """Box centered at the origin.

    Parameters
    ----------
    extents : array-like (3,)
        Full side lengths along x, y and z.
    """
    extents: Optional[np.ndarray] = None

    def __post_init__(self):
        extents = np.ones(3) if self.extents is None else self.extents
        extents = np.array(extents, dtype=np.float64).reshape(3)
        if np.any(extents < 0):
            raise ValueError(
                'Box extents must not be negative, get {}'.format(extents))
        extents.flags.writeable = False
        object.__setattr__(self, 'extents', extents)

    @property
    def half_extents(self):
        return self.extents * 0.5

    @property
    def bounds(self):
        return np.array([-self.half_extents, self.half_extents])

    def to_trimesh(self):
        trimesh = _lazy_trimesh()
        mesh = trimesh.creation.box(extents=self.extents)
        mesh.metadata['shape'] = 'box'
        mesh.metadata['extents'] = self.extents
        return mesh


@dataclass(frozen=True, eq=False)
class Sphere(Shape):
    """Sphere centered at the origin."""
    radius: float = 1.0

    def __post_init__(self):
        radius = float(self.radius)
        if radius < 0:
            raise ValueError(
                'Sphere radius must not be negative, get {}'.format(radius))
        object.__setattr__(self, 'radius', radius)

    @property
    def bounds(self):
        r = np.full(3, self.radius)
        return np.array([-r, r])

    def to_trimesh(self):
        trimesh = _lazy_trimesh()
        mesh = trimesh.creation.icosphere(subdivisions=3, radius=self.radius)
        mesh.metadata['shape'] = 'sphere'
        mesh.metadata['radius'] = self.radius
        return mesh


@dataclass(frozen=True, eq=False)
class Cylinder(Shape):
    """Cylinder centered at the origin whose axis is the local z axis."""
    radius: float = 1.0
    height: float = 1.0

    def __post_init__(self):
        radius = float(self.radius)
        height = float(self.height)
        if radius < 0 or height < 0:
            raise ValueError(
                'Cylinder radius and height must not be negative, '
                'get radius={} height={}'.format(radius, height))
        object.__setattr__(self, 'radius', radius)
        object.__setattr__(self, 'height', height)

    @property
    def bounds(self):
        half = np.array([self.radius, self.radius, 0.5 * self.height])
        return np.array([-half, half])

    def to_trimesh(self):
        trimesh = _lazy_trimesh()
        mesh = trimesh.creation.cylinder(
            radius=self.radius, height=self.height, sections=32)
        mesh.metadata['shape'] = 'cylinder'
        mesh.metadata['radius'] = self.radius
        mesh.metadata['height'] = self.height
        return mesh


@dataclass(frozen=True, eq=False)
class Mesh(Shape):
    """Closed triangle mesh.

    Parameters
    ----------
    vertices : array-like (n_vertex, 3)
    faces : array-like (n_face, 3)
        Vertex indices of each triangle.
    """
    vertices: Optional[np.ndarray] = None
    faces: Optional[np.ndarray] = None

    def __post_init__(self):
        vertices = _readonly(
            np.zeros((0, 3)) if self.vertices is None else self.vertices,
            np.float64, 'Mesh vertices must be (n, 3) array')
        faces = _readonly(
            np.zeros((0, 3)) if self.faces is None else self.faces,
            np.int64, 'Mesh faces must be (n, 3) array')
        if len(faces) > 0 and (faces.min() < 0
                               or faces.max() >= len(vertices)):
            raise ValueError('Mesh faces refer to missing vertices')
        object.__setattr__(self, 'vertices', vertices)
        object.__setattr__(self, 'faces', faces)

    @classmethod
    def from_trimesh(cls, mesh):
        """Create Mesh from trimesh.Trimesh."""
        return cls(vertices=mesh.vertices, faces=mesh.faces)

    @property
    def bounds(self):
        if len(self.vertices) == 0:
            return np.zeros((2, 3))
        return np.array([self.vertices.min(axis=0),
                         self.vertices.max(axis=0)])

    def to_trimesh(self):
        trimesh = _lazy_trimesh()
        return trimesh.Trimesh(vertices=np.array(self.vertices),
                               faces=np.array(self.faces),
                               process=False)
