"""Distance field based collision checking.

Allowed Collision Matrix
------------------------
- AllowedCollisionMatrix: pairs of bodies whose collisions are ignored

Checkers
--------
- CollisionRobot: self collision of links and attached bodies
- CollisionWorld: robot against world objects

Types
-----
- CollisionRequest, CollisionResult, Contact
- Body, BodyType

Example
-------
>>> from skcollision.collision import AllowedCollisionMatrix
>>> from skcollision.collision import CollisionRequest
>>> from skcollision.collision import CollisionRobot
>>> from skcollision.model import RobotState
>>> from skcollision.models import BoxRobot
>>> robot_model = BoxRobot()
>>> robot = CollisionRobot(robot_model)
>>> acm = AllowedCollisionMatrix.from_robot_model(robot_model)
>>> request = CollisionRequest(group_name='right_arm', contacts=True)
>>> result = robot.check_self_collision(request, RobotState(robot_model), acm)
"""

from skcollision.collision.allowed_collision_matrix import \
    AllowedCollisionMatrix
from skcollision.collision.body import PosedBody
from skcollision.collision.collision_robot import AttachedBody
from skcollision.collision.collision_robot import CollisionRobot
from skcollision.collision.collision_types import Body
from skcollision.collision.collision_types import BodyType
from skcollision.collision.collision_types import CollisionRequest
from skcollision.collision.collision_types import CollisionResult
from skcollision.collision.collision_types import Contact
from skcollision.collision.collision_world import CollisionWorld
from skcollision.collision.collision_world import WorldObject


__all__ = [
    'AllowedCollisionMatrix',
    # Checkers
    'CollisionRobot',
    'CollisionWorld',
    'AttachedBody',
    'WorldObject',
    # Types
    'Body',
    'BodyType',
    'PosedBody',
    'CollisionRequest',
    'CollisionResult',
    'Contact',
]
