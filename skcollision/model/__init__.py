# flake8: noqa

from skcollision.model.shapes import Box
from skcollision.model.shapes import Cylinder
from skcollision.model.shapes import Mesh
from skcollision.model.shapes import Shape
from skcollision.model.shapes import Sphere

from skcollision.model.robot_model import Link
from skcollision.model.robot_model import RobotModel
from skcollision.model.robot_state import RobotState
