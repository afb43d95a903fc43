from logging import getLogger

import numpy as np
from scipy import ndimage
from scipy.interpolate import RegularGridInterpolator

from skcollision._lazy_imports import _lazy_trimesh
from skcollision.config import resolve_padding
from skcollision.config import resolve_resolution
from skcollision.coordinates.math import normalize_vectors
from skcollision.exceptions import DegenerateShapeError
from skcollision.model.shapes import Mesh
from skcollision.sdf.signed_distance_function import shape2sdf


logger = getLogger(__name__)

# shapes thinner than this along any axis have no usable interior
DEGENERATE_EXTENT = 1e-6


def grid_points(origin, dims, resolution):
    """Return (prod(dims), 3) node positions of a grid in C order."""
    axes = [origin[i] + np.arange(dims[i]) * resolution for i in range(3)]
    mesh = np.meshgrid(*axes, indexing='ij')
    return np.stack(mesh, axis=-1).reshape(-1, 3)


def rasterize_mesh(vertices, faces, origin, dims, resolution):
    """Return boolean occupancy grid of a closed triangle mesh.

    Faces are subdivided until no edge is longer than half a cell, the
    resulting vertices are snapped to their nearest node, and the
    enclosed region of this surface shell is filled.
    """
    trimesh = _lazy_trimesh()
    vertices, _ = trimesh.remesh.subdivide_to_size(
        np.array(vertices, dtype=np.float64), np.array(faces),
        max_edge=0.5 * resolution, max_iter=50)
    indices = np.round((vertices - origin) / resolution).astype(np.int64)
    indices = np.clip(indices, 0, np.array(dims) - 1)
    occupied = np.zeros(tuple(dims), dtype=bool)
    occupied[indices[:, 0], indices[:, 1], indices[:, 2]] = True
    return ndimage.binary_fill_holes(occupied)


def occupancy_to_signed_distance(occupied, resolution):
    """Propagate signed distances from an occupancy grid.

    The surface is placed half a cell between occupied and free nodes,
    so boundary nodes get -0.5 and +0.5 cells respectively.
    """
    outside = ndimage.distance_transform_edt(~occupied)
    inside = ndimage.distance_transform_edt(occupied)
    return np.where(occupied, 0.5 - inside, outside - 0.5) * resolution


class DistanceField(object):
    """Immutable grid of signed distances in a shape's local frame.

    Distances and their gradients are linearly interpolated between
    grid nodes. Points outside the grid are reported at `far_distance`
    with a zero gradient, which never counts as a collision.

    Parameters
    ----------
    data : numpy.ndarray (nx, ny, nz)
        signed distance of each node.
    origin : numpy.ndarray (3,)
        position of node (0, 0, 0) in the local frame.
    resolution : float
        distance between neighboring nodes.
    padding : float
        margin that was added around the shape's bounds.
    center : numpy.ndarray (3,) or None
        center of the shape's bounding sphere. The grid center if None.
    bounding_radius : float or None
        radius of the shape's bounding sphere. Half of the grid diagonal
        if None.
    far_distance : float
        value reported for points outside the grid.

    Examples
    --------
    >>> from skcollision.model.shapes import Box
    >>> from skcollision.sdf import DistanceField
    >>> field = DistanceField.build(Box([0.2, 0.2, 0.2]), resolution=0.02)
    >>> distance, gradient = field.query([0.2, 0.0, 0.0])
    >>> round(float(distance), 6)
    0.1
    """

    def __init__(self, data, origin, resolution, padding=0.0,
                 center=None, bounding_radius=None, far_distance=np.inf):
        data = np.array(data, dtype=np.float64)
        if data.ndim != 3 or np.any(np.array(data.shape) < 2):
            raise ValueError(
                'data must be 3 dimensional with at least 2 nodes per axis, '
                'get shape {}'.format(data.shape))
        data.flags.writeable = False
        self._data = data
        self._dims = np.array(data.shape)
        self._origin = np.array(origin, dtype=np.float64).reshape(3)
        self._origin.flags.writeable = False
        self._resolution = float(resolution)
        self._padding = float(padding)
        self._far_distance = far_distance
        self._surface_threshold = self._resolution * np.sqrt(3) / 2.0

        axes = tuple(np.arange(d) * self._resolution for d in self._dims)
        self._itp = RegularGridInterpolator(
            axes, data, bounds_error=False, fill_value=far_distance)
        gradient = np.stack(np.gradient(data, self._resolution), axis=-1)
        self._gradient_itp = RegularGridInterpolator(
            axes, gradient, bounds_error=False, fill_value=0.0)

        lower, upper = self.bounds
        if center is None:
            center = 0.5 * (lower + upper)
        if bounding_radius is None:
            bounding_radius = 0.5 * np.linalg.norm(upper - lower)
        self._center = np.array(center, dtype=np.float64).reshape(3)
        self._center.flags.writeable = False
        self._bounding_radius = float(bounding_radius)

        self._surface_points = self._project_to_surface()
        self._surface_points.flags.writeable = False

    @classmethod
    def build(cls, shape, resolution=None, padding=None):
        """Build a distance field of a shape.

        Primitives are sampled from their analytic signed distance
        function. Meshes are rasterized and their distances propagated
        with a Euclidean distance transform.

        Parameters
        ----------
        shape : skcollision.model.shapes.Shape
        resolution : float or None
            cell size. ``skcollision.config.get_default_resolution()``
            if None.
        padding : float or None
            margin around the shape's bounds in which distances are known.
            ``skcollision.config.get_default_padding()`` if None.

        Returns
        -------
        field : DistanceField

        Raises
        ------
        DegenerateShapeError
            if the shape has (almost) zero extent along some axis or a
            mesh has no faces.
        ConfigurationError
            if resolution or padding is invalid.
        """
        resolution = resolve_resolution(resolution)
        padding = resolve_padding(padding)
        lower, upper = shape.bounds
        extents = upper - lower
        if np.any(extents < DEGENERATE_EXTENT):
            raise DegenerateShapeError(
                '{} has degenerate extents {}'.format(
                    shape.__class__.__name__, extents))

        # one extra cell so that every surface node has a free neighbor
        margin = padding + resolution
        origin = lower - margin
        dims = np.ceil((extents + 2 * margin) / resolution).astype(
            np.int64) + 1

        sdf = shape2sdf(shape)
        if sdf is not None:
            data = sdf(grid_points(origin, dims, resolution)).reshape(dims)
        elif isinstance(shape, Mesh):
            if len(shape.faces) == 0:
                raise DegenerateShapeError('Mesh has no faces')
            occupied = rasterize_mesh(shape.vertices, shape.faces,
                                      origin, dims, resolution)
            data = occupancy_to_signed_distance(occupied, resolution)
        else:
            raise TypeError(
                'shape type {} is not supported'.format(type(shape)))
        logger.debug('built distance field of %s: dims=%s resolution=%s',
                     shape.__class__.__name__, dims.tolist(), resolution)
        return cls(data, origin, resolution, padding=padding,
                   center=0.5 * (lower + upper),
                   bounding_radius=0.5 * np.linalg.norm(extents))

    @property
    def data(self):
        return self._data

    @property
    def dims(self):
        return self._dims.copy()

    @property
    def origin(self):
        return self._origin

    @property
    def resolution(self):
        return self._resolution

    @property
    def padding(self):
        return self._padding

    @property
    def far_distance(self):
        return self._far_distance

    @property
    def bounds(self):
        """(2, 3) array of the grid's [lower, upper] corners."""
        return np.array([self._origin,
                         self._origin + (self._dims - 1) * self._resolution])

    @property
    def center(self):
        return self._center

    @property
    def bounding_radius(self):
        return self._bounding_radius

    @property
    def surface_points(self):
        """Fixed sampling of the zero level set in the local frame.

        Returns
        -------
        points : numpy.ndarray (n_point, 3)
            read-only array, in grid enumeration order.
        """
        return self._surface_points

    def query(self, points):
        """Return signed distances and unit outward gradients.

        Parameters
        ----------
        points : numpy.ndarray (3,) or (n_point, 3)
            points w.r.t. the field's local frame.

        Returns
        -------
        distances : float or numpy.ndarray (n_point,)
        gradients : numpy.ndarray (3,) or (n_point, 3)
        """
        points = np.array(points, dtype=np.float64)
        single = points.ndim == 1
        points = np.atleast_2d(points)
        offset = points - self._origin[None, :]
        distances = self._itp(offset)
        gradients = normalize_vectors(self._gradient_itp(offset))
        if single:
            return distances[0], gradients[0]
        return distances, gradients

    def __call__(self, points):
        """Return signed distances only. See :meth:`query`."""
        return self.query(points)[0]

    def is_out_of_bounds(self, points):
        """Check if the input points are outside of the grid.

        Parameters
        ----------
        points : numpy.ndarray (n_point, 3)
            points w.r.t. the field's local frame.

        Returns
        -------
        is_out_arr : numpy.ndarray[bool] (n_point,)
        """
        points = np.atleast_2d(np.array(points, dtype=np.float64))
        points_grid = (points - self._origin[None, :]) / self._resolution
        return np.logical_or(
            (points_grid < 0).any(axis=1),
            (points_grid > self._dims - 1).any(axis=1))

    def on_surface(self, points):
        """Check if points lie within half a cell diagonal of the surface.

        Returns
        -------
        logicals : numpy.ndarray[bool] (n_point,)
        sd_vals : numpy.ndarray[float] (n_point,)
        """
        sd_vals = self.__call__(np.atleast_2d(points))
        logicals = np.abs(sd_vals) < self._surface_threshold
        return logicals, sd_vals

    def _project_to_surface(self, n_iteration=2):
        indices = np.argwhere(np.abs(self._data) <= self._surface_threshold)
        points = indices * self._resolution + self._origin[None, :]
        for _ in range(n_iteration):
            distances, gradients = self.query(points)
            distances = np.where(np.isfinite(distances), distances, 0.0)
            points = points - distances[:, None] * gradients
        distances = self.__call__(points)
        keep = np.abs(distances) < 0.5 * self._resolution
        return np.ascontiguousarray(points[keep])

    def __repr__(self):
        return '<{} dims={} resolution={}>'.format(
            self.__class__.__name__, self._dims.tolist(), self._resolution)
