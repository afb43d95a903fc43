from collections import OrderedDict
from logging import getLogger

from skcollision.collision.body import as_shape_list
from skcollision.collision.body import check_pairs
from skcollision.collision.body import pairs_distance
from skcollision.collision.body import PosedBody
from skcollision.collision.collision_types import Body
from skcollision.collision.collision_types import BodyType
from skcollision.collision.collision_types import CollisionResult
from skcollision.config import resolve_collision_tolerance
from skcollision.config import resolve_padding
from skcollision.config import resolve_resolution
from skcollision.coordinates import as_coords
from skcollision.exceptions import ConfigurationError
from skcollision.exceptions import UnknownBodyError
from skcollision.sdf import DistanceField


logger = getLogger(__name__)


class AttachedBody(object):
    """Shapes rigidly bound to a robot link.

    Parameters
    ----------
    name : str
    link_name : str
        parent link.
    shapes : list[skcollision.model.shapes.Shape]
    poses : list[skcollision.coordinates.Coordinates]
        pose of each shape relative to the parent link.
    touch_links : frozenset[str]
        links allowed to touch this body.
    fields : list[skcollision.sdf.DistanceField]
    """

    def __init__(self, name, link_name, shapes, poses, touch_links, fields):
        self.name = name
        self.link_name = link_name
        self.shapes = tuple(shapes)
        self.poses = tuple(poses)
        self.touch_links = frozenset(touch_links)
        self.fields = tuple(fields)

    def __repr__(self):
        return '<{} {} on {}>'.format(
            self.__class__.__name__, self.name, self.link_name)


class CollisionRobot(object):
    """Self collision checker of a robot using distance fields.

    One distance field is built for each collision shape of each link
    at construction, and one for each shape of an attached body when it
    is attached. Link poses are read from the state on every check, so
    the fields are never rebuilt when the robot moves.

    Parameters
    ----------
    robot_model : skcollision.model.RobotModel
    resolution : float or None
        cell size of the distance fields.
    padding : float or None
        margin around each shape in which distances are known.
    collision_tolerance : float or None
        penetrations shallower than this are not reported.

    Examples
    --------
    >>> from skcollision.collision import AllowedCollisionMatrix
    >>> from skcollision.collision import CollisionRequest
    >>> from skcollision.collision import CollisionRobot
    >>> from skcollision.model import RobotState
    >>> from skcollision.models import BoxRobot
    >>> robot_model = BoxRobot()
    >>> robot = CollisionRobot(robot_model)
    >>> acm = AllowedCollisionMatrix.from_robot_model(robot_model)
    >>> state = RobotState(robot_model)
    >>> robot.check_self_collision(
    ...     CollisionRequest(), state, acm).collision
    False
    """

    def __init__(self, robot_model, resolution=None, padding=None,
                 collision_tolerance=None):
        self.robot_model = robot_model
        self.resolution = resolve_resolution(resolution)
        self.padding = resolve_padding(padding)
        self.collision_tolerance = resolve_collision_tolerance(
            collision_tolerance)
        self._link_fields = OrderedDict()
        self._link_index = {}
        for index, link in enumerate(robot_model.link_list):
            self._link_index[link.name] = index
            self._link_fields[link.name] = tuple(
                DistanceField.build(shape, self.resolution, self.padding)
                for shape in link.collision_shapes)
        self._attached_bodies = OrderedDict()
        logger.debug('built distance fields of %d links of %s',
                     len(self._link_fields), robot_model.name)

    @property
    def link_names(self):
        return list(self._link_fields.keys())

    def get_link_fields(self, link_name):
        """Return distance fields of link, one per collision shape."""
        try:
            return self._link_fields[link_name]
        except KeyError:
            raise UnknownBodyError(link_name, kind='link')

    # attached bodies

    def attach_body(self, name, link_name, shapes, poses=None,
                    touch_links=None):
        """Bind shapes to a link.

        Parameters
        ----------
        name : str
            name of the attached body. An existing body with the same
            name is replaced.
        link_name : str
            parent link.
        shapes : Shape or list[Shape]
        poses : Coordinates or list[Coordinates] or None
            pose of each shape relative to the parent link. Identity if
            None.
        touch_links : list[str] or None
            links that may touch the body without being reported.

        Returns
        -------
        attached_body : AttachedBody
        """
        if link_name not in self._link_fields:
            raise UnknownBodyError(link_name, kind='link')
        if name in self._link_fields:
            raise ConfigurationError(
                'attached body name {!r} clashes with a link name'.format(
                    name))
        shapes, poses = as_shape_list(shapes, poses)
        if touch_links is None:
            touch_links = []
        elif isinstance(touch_links, str):
            touch_links = [touch_links]
        fields = [DistanceField.build(shape, self.resolution, self.padding)
                  for shape in shapes]
        if name in self._attached_bodies:
            logger.info('replace attached body %s', name)
            del self._attached_bodies[name]
        attached_body = AttachedBody(
            name, link_name, shapes, poses, touch_links, fields)
        self._attached_bodies[name] = attached_body
        logger.info('attach body %s to %s', name, link_name)
        return attached_body

    def clear_attached_body(self, name):
        """Remove an attached body and release its fields."""
        if name not in self._attached_bodies:
            raise UnknownBodyError(name, kind='attached body')
        del self._attached_bodies[name]
        logger.info('clear attached body %s', name)

    def clear_attached_bodies(self, link_name=None):
        """Remove every attached body, or only those bound to link_name."""
        names = [name for name, body in self._attached_bodies.items()
                 if link_name is None or body.link_name == link_name]
        for name in names:
            self.clear_attached_body(name)

    def get_attached_body(self, name):
        try:
            return self._attached_bodies[name]
        except KeyError:
            raise UnknownBodyError(name, kind='attached body')

    @property
    def attached_bodies(self):
        return list(self._attached_bodies.values())

    # checks

    def get_posed_bodies(self, state, group_name=None):
        """Place active links and attached bodies at their world poses.

        Parameters
        ----------
        state : skcollision.model.RobotState
            anything providing `get_link_transform(link_name)`.
        group_name : str or None
            every link if None.

        Returns
        -------
        links : list[PosedBody]
            active links in model order.
        attached_bodies : list[PosedBody]
            attached bodies whose parent link is active.
        """
        link_names = self.robot_model.group_link_names(group_name)
        links = []
        for link_name in link_names:
            link = self.robot_model.link(link_name)
            link_coords = as_coords(state.get_link_transform(link_name))
            links.append(PosedBody(
                Body(BodyType.ROBOT_LINK, link_name,
                     self._link_index[link_name]),
                self._link_fields[link_name],
                [link_coords * origin for origin in link.collision_origins],
                link_name=link_name))

        active = set(link_names)
        attached_bodies = []
        for index, attached_body in enumerate(self._attached_bodies.values()):
            if attached_body.link_name not in active:
                continue
            link_coords = as_coords(
                state.get_link_transform(attached_body.link_name))
            attached_bodies.append(PosedBody(
                Body(BodyType.ROBOT_ATTACHED, attached_body.name, index),
                attached_body.fields,
                [link_coords * pose for pose in attached_body.poses],
                link_name=attached_body.link_name,
                touch_links=attached_body.touch_links))
        return links, attached_bodies

    @staticmethod
    def _self_collision_pairs(links, attached_bodies):
        for i, link_a in enumerate(links):
            for link_b in links[i + 1:]:
                yield link_a, link_b
        for link in links:
            for attached_body in attached_bodies:
                if link.name in attached_body.touch_links:
                    continue
                yield link, attached_body
        for i, body_a in enumerate(attached_bodies):
            for body_b in attached_bodies[i + 1:]:
                if body_a.link_name == body_b.link_name:
                    continue
                yield body_a, body_b

    def check_self_collision(self, request, state, acm, result=None):
        """Check the robot against itself.

        Parameters
        ----------
        request : skcollision.collision.CollisionRequest
        state : skcollision.model.RobotState
        acm : skcollision.collision.AllowedCollisionMatrix or None
            allowed pairs are skipped. Every pair is checked if None.
        result : skcollision.collision.CollisionResult or None
            result to accumulate into. A new one if None.

        Returns
        -------
        result : skcollision.collision.CollisionResult
        """
        if result is None:
            result = CollisionResult()
        request.validate()
        links, attached_bodies = self.get_posed_bodies(
            state, request.group_name)
        check_pairs(self._self_collision_pairs(links, attached_bodies),
                    acm, request, result, self.collision_tolerance)
        return result

    def distance_self(self, state, acm=None, group_name=None):
        """Return the minimum sampled signed distance between robot bodies.

        Pairs farther apart than the padding are not measured, so inf is
        returned if every pair is.
        """
        links, attached_bodies = self.get_posed_bodies(state, group_name)
        return pairs_distance(
            self._self_collision_pairs(links, attached_bodies), acm)

    def __repr__(self):
        return '<{} {} ({} links, {} attached bodies)>'.format(
            self.__class__.__name__, self.robot_model.name,
            len(self._link_fields), len(self._attached_bodies))
