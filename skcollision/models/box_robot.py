from cached_property import cached_property
import numpy as np

from skcollision.coordinates import Coordinates
from skcollision.model import Box
from skcollision.model import Cylinder
from skcollision.model import Link
from skcollision.model import RobotModel
from skcollision.model import Sphere


def _arm_links(prefix, side):
    """Return arm links. side is -1 for the right arm and 1 for the left."""
    y = 0.4 * side
    upper_arm_origin = Coordinates().rotate(np.pi / 2.0, 'y')
    return [
        Link(prefix + 'shoulder_link',
             Box([0.15, 0.15, 0.2]),
             parent_link_name='torso_lift_link',
             default_coords=[0.0, y, 1.0]),
        Link(prefix + 'upper_arm_link',
             Cylinder(radius=0.05, height=0.4),
             collision_origins=[upper_arm_origin],
             parent_link_name=prefix + 'shoulder_link',
             default_coords=[0.25, y, 1.0]),
        Link(prefix + 'forearm_link',
             Box([0.3, 0.08, 0.08]),
             parent_link_name=prefix + 'upper_arm_link',
             default_coords=[0.6, y, 1.0]),
        Link(prefix + 'gripper_palm_link',
             Box([0.1, 0.1, 0.1]),
             parent_link_name=prefix + 'forearm_link',
             default_coords=[0.8, y, 1.0]),
        Link(prefix + 'gripper_finger_link',
             Box([0.08, 0.02, 0.02]),
             parent_link_name=prefix + 'gripper_palm_link',
             default_coords=[0.89, y, 1.0]),
    ]


class BoxRobot(RobotModel):

    """PR2 like mobile manipulator made of primitive shapes.

    Every link frame is at the center of its collision shape and
    `default_coords` is its world pose in the default state. In the
    default state only parent and child links touch or overlap, every
    other pair is at least 0.02 [m] apart.
    """

    def __init__(self, name='box_robot'):
        link_list = [
            Link('base_link', Box([0.6, 0.6, 0.3]),
                 default_coords=[0.0, 0.0, 0.15]),
            Link('base_bellow_link', Box([0.2, 0.3, 0.4]),
                 parent_link_name='base_link',
                 default_coords=[-0.1, 0.0, 0.5]),
            Link('torso_lift_link', Box([0.3, 0.6, 0.38]),
                 parent_link_name='base_link',
                 default_coords=[-0.1, 0.0, 0.91]),
            Link('head_link', Sphere(0.1),
                 parent_link_name='torso_lift_link',
                 default_coords=[-0.1, 0.0, 1.25]),
        ]
        link_list += _arm_links('r_', -1)
        link_list += _arm_links('l_', 1)
        super(BoxRobot, self).__init__(link_list=link_list, name=name)

        self.add_group('whole_body', self.link_names)
        self.add_group('right_arm', [l.name for l in self.rarm])
        self.add_group('left_arm', [l.name for l in self.larm])

    @cached_property
    def rarm(self):
        rarm_links = [
            self.r_shoulder_link, self.r_upper_arm_link, self.r_forearm_link,
            self.r_gripper_palm_link, self.r_gripper_finger_link]
        return rarm_links

    @cached_property
    def larm(self):
        larm_links = [
            self.l_shoulder_link, self.l_upper_arm_link, self.l_forearm_link,
            self.l_gripper_palm_link, self.l_gripper_finger_link]
        return larm_links
