import numpy as np

from skcollision.coordinates.math import _check_valid_rotation
from skcollision.coordinates.math import _check_valid_translation
from skcollision.coordinates.math import matrix2quaternion
from skcollision.coordinates.math import quaternion2matrix
from skcollision.coordinates.math import rotation_matrix


class Coordinates(object):

    """Rigid pose: rotation and translation.

    Poses of links, attached shapes and world objects are all
    Coordinates. Unlike a kinematic frame, a Coordinates has no parent,
    so every instance is a plain value expressed in whatever frame the
    caller chose.

    Parameters
    ----------
    pos : list or numpy.ndarray or None
        (3,) translation or 4x4 homogeneous matrix. When a matrix is
        given, `rot` is ignored. Zero if None.
    rot : list or numpy.ndarray or None
        3x3 rotation matrix or unit quaternion [w, x, y, z]. Identity if
        None.
    name : str or None
    """

    def __init__(self, pos=None, rot=None, name=None):
        self._rotation = np.eye(3)
        self._translation = np.zeros(3)
        if pos is not None:
            pos = np.array(pos, dtype=np.float64)
            if pos.shape == (4, 4):
                pos, rot = pos[:3, 3], pos[:3, :3]
            self.translation = pos
        if rot is not None:
            self.rotation = rot
        self.name = name or ''

    @property
    def rotation(self):
        """3x3 rotation matrix."""
        return self._rotation

    @rotation.setter
    def rotation(self, rotation):
        rotation = np.array(rotation, dtype=np.float64)
        if rotation.shape == (4,):
            rotation = quaternion2matrix(rotation)
        self._rotation = _check_valid_rotation(rotation).copy()

    @property
    def translation(self):
        """(3,) translation vector."""
        return self._translation

    @translation.setter
    def translation(self, translation):
        translation = np.array(translation, dtype=np.float64)
        self._translation = _check_valid_translation(
            translation).reshape(3).copy()

    @property
    def quaternion(self):
        """Rotation as quaternion [w, x, y, z]."""
        return matrix2quaternion(self._rotation)

    def T(self):
        """Return 4x4 homogeneous matrix."""
        matrix = np.eye(4)
        matrix[:3, :3] = self._rotation
        matrix[:3, 3] = self._translation
        return matrix

    def translate(self, vec, wrt='local'):
        """Move by vec, given in this frame ('local') or in 'world'."""
        vec = np.array(vec, dtype=np.float64)
        if wrt == 'local':
            vec = self._rotation.dot(vec)
        elif wrt != 'world':
            raise ValueError('wrt {} not supported'.format(wrt))
        self._translation = self._translation + vec
        return self

    def rotate(self, theta, axis, wrt='local'):
        """Rotate by theta [rad] around axis, keeping the translation."""
        rot = rotation_matrix(theta, axis)
        if wrt == 'local':
            self._rotation = self._rotation.dot(rot)
        elif wrt == 'world':
            self._rotation = rot.dot(self._rotation)
        else:
            raise ValueError('wrt {} not supported'.format(wrt))
        return self

    def transform_vector(self, v):
        """Map points from this frame to the outer frame.

        Parameters
        ----------
        v : numpy.ndarray
            (3,) point or (n_point, 3) points.

        Returns
        -------
        transformed : numpy.ndarray
            same shape as v.
        """
        v = np.array(v, dtype=np.float64)
        return v.dot(self._rotation.T) + self._translation

    def inverse_transform_vector(self, v):
        """Map points from the outer frame into this frame."""
        v = np.array(v, dtype=np.float64)
        return (v - self._translation).dot(self._rotation)

    def rotate_vector(self, v):
        """Rotate (3,) or (n, 3) directions without translating them."""
        v = np.array(v, dtype=np.float64)
        return v.dot(self._rotation.T)

    def inverse_transformation(self):
        inv = Coordinates()
        inv._rotation = self._rotation.T.copy()
        inv._translation = -inv._rotation.dot(self._translation)
        return inv

    def copy_worldcoords(self):
        """Return an independent copy."""
        c = Coordinates(name=self.name)
        c._rotation = self._rotation.copy()
        c._translation = self._translation.copy()
        return c

    def __mul__(self, other):
        """Compose poses. `a * b` is b expressed through a.

        Neither operand is modified.
        """
        c = Coordinates()
        c._rotation = self._rotation.dot(other.rotation)
        c._translation = self._rotation.dot(other.translation) \
            + self._translation
        return c

    def __repr__(self):
        pos = self._translation
        q = self.quaternion
        prefix = self.__class__.__name__
        if self.name:
            prefix += ' ' + self.name
        return '<{} {:.3f} {:.3f} {:.3f} / {:.3f} {:.3f} {:.3f} {:.3f}>'.format(
            prefix, pos[0], pos[1], pos[2], q[0], q[1], q[2], q[3])


def as_coords(pose):
    """Convert pose-like input into a new Coordinates.

    Parameters
    ----------
    pose : Coordinates or numpy.ndarray or list or None
        Coordinates (copied), 4x4 homogeneous matrix, (3,) translation,
        or None for identity.

    Returns
    -------
    coords : Coordinates
    """
    if pose is None:
        return Coordinates()
    if isinstance(pose, Coordinates):
        return pose.copy_worldcoords()
    return Coordinates(pos=pose)
