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
from skcollision.exceptions import UnknownBodyError
from skcollision.sdf import DistanceField


logger = getLogger(__name__)


class WorldObject(object):
    """Named set of shapes placed in the world."""

    def __init__(self, name, shapes, poses, fields):
        self.name = name
        self.shapes = tuple(shapes)
        self.poses = tuple(poses)
        self.fields = tuple(fields)

    def __repr__(self):
        return '<{} {} ({} shapes)>'.format(
            self.__class__.__name__, self.name, len(self.shapes))


class CollisionWorld(object):
    """Obstacles the robot is checked against.

    Parameters
    ----------
    resolution : float or None
        cell size of the distance fields.
    padding : float or None
        margin around each shape in which distances are known.
    collision_tolerance : float or None
        penetrations shallower than this are not reported.

    Examples
    --------
    >>> from skcollision.collision import CollisionWorld
    >>> from skcollision.model.shapes import Box
    >>> world = CollisionWorld()
    >>> world.add_to_object('table', Box([1.0, 1.0, 0.05]), [0.8, 0, 0.7])
    >>> world.object_names
    ['table']
    """

    def __init__(self, resolution=None, padding=None,
                 collision_tolerance=None):
        self.resolution = resolve_resolution(resolution)
        self.padding = resolve_padding(padding)
        self.collision_tolerance = resolve_collision_tolerance(
            collision_tolerance)
        self._objects = OrderedDict()

    def add_to_object(self, name, shapes, poses=None):
        """Insert an object or replace the one with the same name.

        Parameters
        ----------
        name : str
        shapes : Shape or list[Shape]
        poses : Coordinates or numpy.ndarray or list of them or None
            world pose of each shape. Identity if None.
        """
        shapes, poses = as_shape_list(shapes, poses)
        fields = [DistanceField.build(shape, self.resolution, self.padding)
                  for shape in shapes]
        if name in self._objects:
            logger.info('replace world object %s', name)
        else:
            logger.info('add world object %s', name)
        self._objects[name] = WorldObject(name, shapes, poses, fields)

    def remove_object(self, name):
        """Remove an object and release its fields."""
        if name not in self._objects:
            raise UnknownBodyError(name, kind='world object')
        del self._objects[name]
        logger.info('remove world object %s', name)

    def move_object(self, name, poses):
        """Change world poses of an object's shapes.

        The distance fields are kept as they are.
        """
        obj = self.get_object(name)
        shapes = obj.shapes[0] if len(obj.shapes) == 1 else obj.shapes
        _, poses = as_shape_list(shapes, poses)
        self._objects[name] = WorldObject(name, obj.shapes, poses, obj.fields)

    def has_object(self, name):
        return name in self._objects

    @property
    def object_names(self):
        return list(self._objects.keys())

    def get_object(self, name):
        try:
            return self._objects[name]
        except KeyError:
            raise UnknownBodyError(name, kind='world object')

    def clear_objects(self):
        self._objects.clear()

    def get_posed_bodies(self):
        return [PosedBody(Body(BodyType.WORLD_OBJECT, obj.name, index),
                          obj.fields, obj.poses)
                for index, obj in enumerate(self._objects.values())]

    def _robot_world_pairs(self, robot, state, group_name):
        links, attached_bodies = robot.get_posed_bodies(state, group_name)
        objects = self.get_posed_bodies()
        for robot_body in links + attached_bodies:
            for obj in objects:
                yield robot_body, obj

    def check_robot_collision(self, request, robot, state, acm, result=None):
        """Check robot links and attached bodies against every object.

        Parameters
        ----------
        request : skcollision.collision.CollisionRequest
        robot : skcollision.collision.CollisionRobot
        state : skcollision.model.RobotState
        acm : skcollision.collision.AllowedCollisionMatrix or None
            allowed pairs are skipped. World object names share the
            namespace of links and attached bodies.
        result : skcollision.collision.CollisionResult or None

        Returns
        -------
        result : skcollision.collision.CollisionResult
        """
        if result is None:
            result = CollisionResult()
        request.validate()
        check_pairs(self._robot_world_pairs(robot, state, request.group_name),
                    acm, request, result, self.collision_tolerance)
        return result

    def check_collision(self, request, robot, state, acm, result=None):
        """Check the robot against the world and then against itself."""
        if result is None:
            result = CollisionResult()
        request.validate()
        done = check_pairs(
            self._robot_world_pairs(robot, state, request.group_name),
            acm, request, result, self.collision_tolerance)
        if done:
            return result
        return robot.check_self_collision(request, state, acm, result)

    def distance_robot(self, robot, state, acm=None, group_name=None):
        """Return the minimum sampled signed distance of robot and world."""
        return pairs_distance(
            self._robot_world_pairs(robot, state, group_name), acm)

    def __repr__(self):
        return '<{} ({} objects)>'.format(
            self.__class__.__name__, len(self._objects))
