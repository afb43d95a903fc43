"""Pair checking shared by self and world collision.

A body is checked against another body by sampling: the fixed surface
points of every distance field of one body are moved into the frame of
every field of the other body and looked up there. This is done in both
directions, so a small body completely enclosed by a large one is still
found.
"""

from logging import getLogger

import numpy as np

from skcollision.collision.collision_types import Contact
from skcollision.coordinates import as_coords
from skcollision.model.shapes import Shape


logger = getLogger(__name__)


def as_shape_list(shapes, poses=None):
    """Normalize shapes and their poses into two lists of equal length.

    Parameters
    ----------
    shapes : Shape or list[Shape]
    poses : pose-like or list of pose-like or None
        a single pose is accepted for a single shape. Identity if None.

    Returns
    -------
    shapes : list[Shape]
    poses : list[skcollision.coordinates.Coordinates]
    """
    if isinstance(shapes, Shape):
        shapes = [shapes]
        if poses is not None and not (
                isinstance(poses, (list, tuple)) and len(poses) == 1):
            poses = [poses]
    shapes = list(shapes)
    for shape in shapes:
        if not isinstance(shape, Shape):
            raise TypeError(
                'shape should be skcollision.model.shapes.Shape, '
                'get type {}'.format(type(shape)))
    if poses is None:
        poses = [None] * len(shapes)
    elif not isinstance(poses, (list, tuple)):
        poses = [poses]
    if len(poses) != len(shapes):
        raise ValueError(
            'length of poses ({}) and shapes ({}) differ'.format(
                len(poses), len(shapes)))
    return shapes, [as_coords(pose) for pose in poses]


class PosedBody(object):
    """A body with its distance fields placed in the world.

    Parameters
    ----------
    body : skcollision.collision.collision_types.Body
    fields : list[skcollision.sdf.DistanceField]
    transforms : list[skcollision.coordinates.Coordinates]
        world pose of each field's local frame.
    link_name : str or None
        link the body is bound to. For attached bodies this is the
        parent link.
    touch_links : frozenset[str]
        links this body may touch without being reported.
    """

    def __init__(self, body, fields, transforms, link_name=None,
                 touch_links=frozenset()):
        if len(fields) != len(transforms):
            raise ValueError(
                'length of fields ({}) and transforms ({}) differ'.format(
                    len(fields), len(transforms)))
        self.body = body
        self.fields = tuple(fields)
        self.transforms = tuple(transforms)
        self.link_name = link_name
        self.touch_links = frozenset(touch_links)

    @property
    def name(self):
        return self.body.name

    @property
    def type(self):
        return self.body.type

    def __iter__(self):
        return iter(zip(self.fields, self.transforms))

    def __len__(self):
        return len(self.fields)

    def __repr__(self):
        return '<{} {} {} ({} fields)>'.format(
            self.__class__.__name__, self.body.type.name, self.body.name,
            len(self.fields))


def _bounding_spheres_overlap(field_1, tf_1, field_2, tf_2, margin=0.0):
    center_1 = tf_1.transform_vector(field_1.center)
    center_2 = tf_2.transform_vector(field_2.center)
    distance = np.linalg.norm(center_1 - center_2)
    return distance <= (field_1.bounding_radius + field_2.bounding_radius
                        + margin)


def sample_distances(sampling_field, sampling_tf, queried_field, queried_tf):
    """Look up surface samples of one field in another field.

    Returns
    -------
    points_world : numpy.ndarray (n_point, 3)
        samples of `sampling_field` in the world frame.
    distances : numpy.ndarray (n_point,)
        signed distances of the samples in `queried_field`.
    gradients_world : numpy.ndarray (n_point, 3)
        unit gradients of `queried_field` at the samples, in the world
        frame. Zero for samples outside its grid.
    """
    points = sampling_field.surface_points
    if len(points) == 0:
        return np.zeros((0, 3)), np.zeros(0), np.zeros((0, 3))
    points_world = sampling_tf.transform_vector(points)
    points_local = queried_tf.inverse_transform_vector(points_world)
    distances, gradients = queried_field.query(points_local)
    return points_world, distances, queried_tf.rotate_vector(gradients)


def pair_penetrations(body_1, body_2, collision_tolerance=0.0,
                      stop_at_first=False):
    """Return penetrating samples between two posed bodies.

    Parameters
    ----------
    body_1 : PosedBody
    body_2 : PosedBody
    collision_tolerance : float
        samples shallower than this are ignored.
    stop_at_first : bool
        if True, return as soon as one shape pair penetrates.

    Returns
    -------
    positions : numpy.ndarray (n, 3)
        world positions of the penetrating samples.
    normals : numpy.ndarray (n, 3)
        unit normals pointing from body_2 towards body_1.
    depths : numpy.ndarray (n,)
        positive penetration depths.
    """
    positions = []
    normals = []
    depths = []
    for field_1, tf_1 in body_1:
        for field_2, tf_2 in body_2:
            if not _bounding_spheres_overlap(field_1, tf_1, field_2, tf_2):
                continue
            # body_1 samples inside body_2 are pushed out along body_2's
            # gradient, body_2 samples inside body_1 along the opposite
            # of body_1's gradient.
            for sampling, queried, sign in (
                    ((field_1, tf_1), (field_2, tf_2), 1.0),
                    ((field_2, tf_2), (field_1, tf_1), -1.0)):
                points, distances, gradients = sample_distances(
                    sampling[0], sampling[1], queried[0], queried[1])
                mask = distances < -collision_tolerance
                if not np.any(mask):
                    continue
                positions.append(points[mask])
                normals.append(sign * gradients[mask])
                depths.append(-distances[mask])
                if stop_at_first:
                    break
            if stop_at_first and len(depths) > 0:
                break
        if stop_at_first and len(depths) > 0:
            break
    if len(depths) == 0:
        return np.zeros((0, 3)), np.zeros((0, 3)), np.zeros(0)
    return (np.concatenate(positions), np.concatenate(normals),
            np.concatenate(depths))


def check_body_pair(body_1, body_2, request, result, collision_tolerance=0.0):
    """Check two posed bodies and accumulate into result.

    Parameters
    ----------
    body_1 : PosedBody
    body_2 : PosedBody
    request : skcollision.collision.CollisionRequest
    result : skcollision.collision.CollisionResult
    collision_tolerance : float

    Returns
    -------
    collision : bool
        True if the pair penetrates.
    """
    positions, normals, depths = pair_penetrations(
        body_1, body_2, collision_tolerance,
        stop_at_first=not request.contacts)
    if len(depths) == 0:
        return False
    result.collision = True
    if request.verbose:
        logger.info('collision between %s %s and %s %s, max depth %f',
                    body_1.type.name, body_1.name,
                    body_2.type.name, body_2.name, depths.max())
    if not request.contacts:
        return True

    n_contact = min(request.max_contacts_per_pair,
                    request.max_contacts - result.contact_count)
    order = np.argsort(-depths, kind='stable')[:max(n_contact, 0)]
    for i in order:
        result.add_contact(Contact(
            pos=positions[i].copy(),
            normal=normals[i].copy(),
            depth=float(depths[i]),
            body_name_1=body_1.name,
            body_type_1=body_1.type,
            body_name_2=body_2.name,
            body_type_2=body_2.type))
    return True


def body_pair_distance(body_1, body_2):
    """Return minimum sampled signed distance between two posed bodies.

    Samples outside the other body's grids are not measured, so the
    distance is inf when the bodies are farther apart than the padding.
    """
    min_distance = np.inf
    for field_1, tf_1 in body_1:
        for field_2, tf_2 in body_2:
            for sampling, queried in (((field_1, tf_1), (field_2, tf_2)),
                                      ((field_2, tf_2), (field_1, tf_1))):
                _, distances, _ = sample_distances(
                    sampling[0], sampling[1], queried[0], queried[1])
                if len(distances) > 0:
                    min_distance = min(min_distance, float(distances.min()))
    return min_distance


def check_pairs(pairs, acm, request, result, collision_tolerance=0.0):
    """Check candidate pairs in order until the request is satisfied.

    Parameters
    ----------
    pairs : iterable of (PosedBody, PosedBody)
    acm : AllowedCollisionMatrix or None
        allowed pairs are skipped before any geometry is evaluated.

    Returns
    -------
    done : bool
        True if the check stopped early, because a collision was found
        without contacts requested or because max_contacts was reached.
    """
    for body_1, body_2 in pairs:
        if acm is not None and acm.get_entry(body_1.name, body_2.name):
            logger.debug('skip allowed pair %s and %s',
                         body_1.name, body_2.name)
            continue
        collision = check_body_pair(body_1, body_2, request, result,
                                    collision_tolerance)
        if not collision:
            continue
        if not request.contacts:
            return True
        if result.contact_count >= request.max_contacts:
            return True
    return False


def pairs_distance(pairs, acm=None):
    """Return minimum sampled distance over non-allowed pairs."""
    min_distance = np.inf
    for body_1, body_2 in pairs:
        if acm is not None and acm.get_entry(body_1.name, body_2.name):
            continue
        min_distance = min(min_distance, body_pair_distance(body_1, body_2))
    return min_distance
