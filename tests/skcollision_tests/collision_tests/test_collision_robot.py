import unittest

import numpy as np
from numpy import testing

from skcollision.collision import AllowedCollisionMatrix
from skcollision.collision import BodyType
from skcollision.collision import CollisionRequest
from skcollision.collision import CollisionResult
from skcollision.collision import CollisionRobot
from skcollision.coordinates import Coordinates
from skcollision.coordinates.math import quaternion_normalize
from skcollision.exceptions import ConfigurationError
from skcollision.exceptions import UnknownBodyError
from skcollision.exceptions import UnknownGroupError
from skcollision.model import Box
from skcollision.model import RobotState
from skcollision.models import BoxRobot


class TestCollisionRobot(unittest.TestCase):

    @classmethod
    def setup_class(cls):
        cls.robot_model = BoxRobot()
        cls.crobot = CollisionRobot(cls.robot_model, resolution=0.02,
                                    padding=0.1)

    def setUp(self):
        self.acm = AllowedCollisionMatrix(self.robot_model.link_names, True)
        self.state = RobotState(self.robot_model)
        self.offset = Coordinates(pos=[0.01, 0.0, 0.0])

    def tearDown(self):
        self.crobot.clear_attached_bodies()

    def test_link_fields(self):
        self.assertEqual(self.crobot.link_names, self.robot_model.link_names)
        fields = self.crobot.get_link_fields('head_link')
        self.assertEqual(len(fields), 1)
        self.assertEqual(fields[0].resolution, 0.02)
        with self.assertRaises(UnknownBodyError):
            self.crobot.get_link_fields('tail_link')

    def test_default_not_in_collision(self):
        request = CollisionRequest()
        result = self.crobot.check_self_collision(
            request, self.state, self.acm)
        self.assertFalse(result.collision)

        # only parent and child links touch in the default state
        acm = AllowedCollisionMatrix.from_robot_model(self.robot_model)
        request = CollisionRequest(group_name='whole_body', contacts=True,
                                   max_contacts=10)
        result = self.crobot.check_self_collision(request, self.state, acm)
        self.assertFalse(result.collision)
        self.assertEqual(result.contact_count, 0)

    def test_change_torso_position(self):
        request = CollisionRequest(group_name='right_arm')
        result = CollisionResult()
        self.crobot.check_self_collision(request, self.state, self.acm,
                                         result)
        torso = self.state.get_link_transform('torso_lift_link')
        torso.translate([0.0, 0.0, 0.15])
        self.state.set_link_transform('torso_lift_link', torso)
        self.crobot.check_self_collision(request, self.state, self.acm,
                                         result)
        self.crobot.check_self_collision(request, self.state, self.acm,
                                         result)
        self.assertFalse(result.collision)

    def test_links_in_collision(self):
        request = CollisionRequest(group_name='whole_body')
        state = self.state
        acm = self.acm

        state.set_link_transform('base_link', Coordinates())
        state.set_link_transform('base_bellow_link', self.offset)
        acm.set_entry('base_link', 'base_bellow_link', False)
        result = self.crobot.check_self_collision(request, state, acm)
        self.assertTrue(result.collision)

        acm.set_entry('base_link', 'base_bellow_link', True)
        result = self.crobot.check_self_collision(request, state, acm)
        self.assertFalse(result.collision)

        state.set_link_transform('r_gripper_palm_link', Coordinates())
        state.set_link_transform('l_gripper_palm_link', self.offset)
        acm.set_entry('r_gripper_palm_link', 'l_gripper_palm_link', False)
        result = self.crobot.check_self_collision(request, state, acm)
        self.assertTrue(result.collision)

    def test_without_contacts(self):
        request = CollisionRequest(contacts=False)
        self.state.set_link_transform('base_link', Coordinates())
        self.state.set_link_transform('base_bellow_link', self.offset)
        self.acm.set_entry('base_link', 'base_bellow_link', False)
        result = self.crobot.check_self_collision(
            request, self.state, self.acm)
        self.assertTrue(result.collision)
        self.assertEqual(result.contact_count, 0)
        self.assertEqual(len(result.contacts), 0)

    def test_contact_reporting(self):
        request = CollisionRequest(group_name='whole_body', contacts=True,
                                   max_contacts=1)
        state = self.state
        state.set_link_transform('base_link', Coordinates())
        state.set_link_transform('base_bellow_link', self.offset)
        state.set_link_transform('r_gripper_palm_link', Coordinates())
        state.set_link_transform('l_gripper_palm_link', self.offset)
        self.acm.set_entry('base_link', 'base_bellow_link', False)
        self.acm.set_entry('r_gripper_palm_link', 'l_gripper_palm_link',
                           False)

        result = self.crobot.check_self_collision(request, state, self.acm)
        self.assertTrue(result.collision)
        self.assertEqual(len(result.contacts), 1)
        self.assertEqual(len(list(result.contacts.values())[0]), 1)
        self.assertEqual(result.contact_count, 1)

        result.clear()
        request.max_contacts = 2
        request.max_contacts_per_pair = 1
        self.crobot.check_self_collision(request, state, self.acm, result)
        self.assertTrue(result.collision)
        self.assertEqual(result.contact_count, 2)
        self.assertEqual(
            list(result.contacts.keys()),
            [('base_link', 'base_bellow_link'),
             ('r_gripper_palm_link', 'l_gripper_palm_link')])
        for contacts in result.contacts.values():
            self.assertEqual(len(contacts), 1)

        result.clear()
        request.max_contacts = 10
        request.max_contacts_per_pair = 2
        acm = AllowedCollisionMatrix(self.robot_model.link_names, False)
        self.crobot.check_self_collision(request, state, acm, result)
        self.assertTrue(result.collision)
        self.assertLessEqual(result.contact_count, 10)
        self.assertEqual(result.contact_count,
                         sum(len(c) for c in result.contacts.values()))
        for contacts in result.contacts.values():
            self.assertLessEqual(len(contacts), 2)
            depths = [c.depth for c in contacts]
            self.assertEqual(depths, sorted(depths, reverse=True))

    def test_contact_positions(self):
        request = CollisionRequest(group_name='whole_body', contacts=True,
                                   max_contacts=1)
        state = self.state
        self.acm.set_entry('r_gripper_palm_link', 'l_gripper_palm_link',
                           False)

        state.set_link_transform('r_gripper_palm_link', [5.0, 0.0, 0.0])
        state.set_link_transform('l_gripper_palm_link', [5.01, 0.0, 0.0])
        result = self.crobot.check_self_collision(request, state, self.acm)
        self.assertTrue(result.collision)
        self.assertEqual(len(result.contacts), 1)
        contacts = result.contacts[
            ('r_gripper_palm_link', 'l_gripper_palm_link')]
        self.assertEqual(len(contacts), 1)
        contact = contacts[0]
        self.assertLess(abs(contact.pos[0] - 5.0), 0.33)
        self.assertGreater(contact.depth, 0.0)
        self.assertAlmostEqual(np.linalg.norm(contact.normal), 1.0)
        self.assertEqual(contact.body_type_1, BodyType.ROBOT_LINK)
        self.assertEqual(contact.body_type_2, BodyType.ROBOT_LINK)

        q = quaternion_normalize([0.965, 0.0, 0.258, 0.0])
        state.set_link_transform('r_gripper_palm_link', [3.0, 0.0, 0.0])
        state.set_link_transform('l_gripper_palm_link',
                                 Coordinates(pos=[3.0, 0.0, 0.0], rot=q))
        result = self.crobot.check_self_collision(request, state, self.acm)
        self.assertTrue(result.collision)
        self.assertEqual(len(result.contacts), 1)
        contact = list(result.contacts.values())[0][0]
        self.assertLess(abs(contact.pos[0] - 3.0), 0.33)

    def test_idempotent(self):
        request = CollisionRequest(contacts=True, max_contacts=5,
                                   max_contacts_per_pair=3)
        self.state.set_link_transform('base_link', Coordinates())
        self.state.set_link_transform('base_bellow_link', self.offset)
        self.acm.set_entry('base_link', 'base_bellow_link', False)
        result_1 = self.crobot.check_self_collision(
            request, self.state, self.acm)
        result_2 = self.crobot.check_self_collision(
            request, self.state, self.acm)
        self.assertEqual(result_1.collision, result_2.collision)
        self.assertEqual(result_1.contact_count, result_2.contact_count)
        for contacts_1, contacts_2 in zip(result_1.contacts.values(),
                                          result_2.contacts.values()):
            for c1, c2 in zip(contacts_1, contacts_2):
                testing.assert_equal(c1.pos, c2.pos)
                self.assertEqual(c1.depth, c2.depth)

    def test_collision_tolerance(self):
        crobot = CollisionRobot(self.robot_model, resolution=0.02,
                                padding=0.1, collision_tolerance=0.05)
        self.state.set_link_transform('base_link', Coordinates())
        self.state.set_link_transform('base_bellow_link', [0.0, 0.0, 0.32])
        self.acm.set_entry('base_link', 'base_bellow_link', False)
        request = CollisionRequest()
        # the bellow sinks 0.03 [m] into the base
        self.assertTrue(self.crobot.check_self_collision(
            request, self.state, self.acm).collision)
        self.assertFalse(crobot.check_self_collision(
            request, self.state, self.acm).collision)

    def test_errors(self):
        with self.assertRaises(UnknownGroupError):
            self.crobot.check_self_collision(
                CollisionRequest(group_name='legs'), self.state, self.acm)
        with self.assertRaises(ConfigurationError):
            self.crobot.check_self_collision(
                CollisionRequest(contacts=True, max_contacts=0),
                self.state, self.acm)
        with self.assertRaises(ConfigurationError):
            CollisionRobot(self.robot_model, resolution=-1.0)
        with self.assertRaises(ConfigurationError):
            CollisionRobot(self.robot_model, collision_tolerance=-1.0)

    def test_distance_self(self):
        acm = AllowedCollisionMatrix.from_robot_model(self.robot_model)
        # base_bellow_link and torso_lift_link are 0.02 [m] apart
        self.assertAlmostEqual(
            self.crobot.distance_self(self.state, acm), 0.02, places=3)
        self.assertEqual(
            self.crobot.distance_self(self.state, self.acm), np.inf)

        self.state.set_link_transform('base_link', Coordinates())
        self.state.set_link_transform('base_bellow_link', self.offset)
        self.assertLess(
            self.crobot.distance_self(self.state, acm=None), 0.0)


class TestAttachedBody(unittest.TestCase):

    @classmethod
    def setup_class(cls):
        cls.robot_model = BoxRobot()
        cls.crobot = CollisionRobot(cls.robot_model, resolution=0.02,
                                    padding=0.1)

    def setUp(self):
        self.acm = AllowedCollisionMatrix(self.robot_model.link_names, True)
        self.state = RobotState(self.robot_model)
        self.state.set_link_transform('r_gripper_palm_link', [1.0, 0.0, 0.0])
        self.request = CollisionRequest(group_name='right_arm')

    def tearDown(self):
        self.crobot.clear_attached_bodies()

    def test_attached_body(self):
        crobot = self.crobot
        result = crobot.check_self_collision(
            self.request, self.state, self.acm)
        self.assertFalse(result.collision)

        crobot.attach_body('box', 'r_gripper_palm_link',
                           Box([0.25, 0.25, 0.25]))
        result = crobot.check_self_collision(
            self.request, self.state, self.acm)
        self.assertTrue(result.collision)

        crobot.clear_attached_body('box')
        crobot.attach_body('box', 'r_gripper_palm_link', Box([0.1, 0.1, 0.1]),
                           poses=[Coordinates()],
                           touch_links=['r_gripper_palm_link'])
        result = crobot.check_self_collision(
            self.request, self.state, self.acm)
        self.assertFalse(result.collision)

    def test_attached_body_contacts(self):
        self.crobot.attach_body('box', 'r_gripper_palm_link',
                                Box([0.25, 0.25, 0.25]))
        request = CollisionRequest(group_name='right_arm', contacts=True)
        result = self.crobot.check_self_collision(
            request, self.state, self.acm)
        self.assertTrue(result.collision)
        contact = result.contacts[('r_gripper_palm_link', 'box')][0]
        self.assertEqual(contact.body_type_1, BodyType.ROBOT_LINK)
        self.assertEqual(contact.body_type_2, BodyType.ROBOT_ATTACHED)

        # the matrix also applies to attached bodies
        self.acm.set_entry('box', 'r_gripper_palm_link', True)
        result = self.crobot.check_self_collision(
            request, self.state, self.acm)
        self.assertFalse(result.collision)

    def test_attached_body_pose(self):
        # 0.2 [m] above the palm, clear of every link
        self.crobot.attach_body('box', 'r_gripper_palm_link',
                                Box([0.1, 0.1, 0.1]), [0.0, 0.0, 0.2])
        result = self.crobot.check_self_collision(
            self.request, self.state, self.acm)
        self.assertFalse(result.collision)

        # follows the palm
        self.state.set_link_transform('r_gripper_palm_link',
                                      [0.6, -0.4, 0.8])
        result = self.crobot.check_self_collision(
            self.request, self.state, self.acm)
        self.assertTrue(result.collision)

    def test_inactive_attached_body(self):
        self.crobot.attach_body('box', 'r_gripper_palm_link',
                                Box([0.25, 0.25, 0.25]))
        request = CollisionRequest(group_name='left_arm')
        result = self.crobot.check_self_collision(
            request, self.state, self.acm)
        self.assertFalse(result.collision)

    def test_attached_bodies_on_different_links(self):
        state = self.state
        state.set_link_transform('l_gripper_palm_link', [1.0, 0.5, 0.0])
        self.crobot.attach_body('r_box', 'r_gripper_palm_link',
                                Box([0.1, 0.1, 0.1]), [0.0, 0.25, 0.0],
                                touch_links=['r_gripper_palm_link'])
        self.crobot.attach_body('l_box', 'l_gripper_palm_link',
                                Box([0.1, 0.1, 0.1]), [0.0, -0.22, 0.0],
                                touch_links='l_gripper_palm_link')
        request = CollisionRequest(contacts=True)
        result = self.crobot.check_self_collision(request, state, self.acm)
        self.assertTrue(result.collision)
        self.assertEqual(list(result.contacts.keys()), [('r_box', 'l_box')])

        # bodies on the same link are never checked against each other
        self.crobot.clear_attached_bodies()
        self.crobot.attach_body('box_1', 'r_gripper_palm_link',
                                Box([0.1, 0.1, 0.1]), [0.0, 0.25, 0.0])
        self.crobot.attach_body('box_2', 'r_gripper_palm_link',
                                Box([0.1, 0.1, 0.1]), [0.0, 0.22, 0.0])
        result = self.crobot.check_self_collision(request, state, self.acm)
        self.assertFalse(result.collision)

    def test_attach_and_clear(self):
        crobot = self.crobot
        crobot.attach_body('box', 'r_gripper_palm_link', Box([0.1, 0.1, 0.1]))
        crobot.attach_body('box', 'r_gripper_palm_link', Box([0.2, 0.2, 0.2]))
        self.assertEqual(len(crobot.attached_bodies), 1)
        attached_body = crobot.get_attached_body('box')
        testing.assert_almost_equal(attached_body.shapes[0].extents,
                                    [0.2, 0.2, 0.2])
        self.assertEqual(len(attached_body.fields), 1)

        crobot.attach_body('cup', 'l_gripper_palm_link', Box([0.1, 0.1, 0.1]))
        crobot.clear_attached_bodies('r_gripper_palm_link')
        self.assertEqual([b.name for b in crobot.attached_bodies], ['cup'])
        crobot.clear_attached_body('cup')
        self.assertEqual(crobot.attached_bodies, [])

        with self.assertRaises(UnknownBodyError):
            crobot.clear_attached_body('cup')
        with self.assertRaises(UnknownBodyError):
            crobot.get_attached_body('cup')
        with self.assertRaises(UnknownBodyError):
            crobot.attach_body('box', 'tail_link', Box([0.1, 0.1, 0.1]))
        with self.assertRaises(ConfigurationError):
            crobot.attach_body('head_link', 'r_gripper_palm_link',
                               Box([0.1, 0.1, 0.1]))
        with self.assertRaises(ValueError):
            crobot.attach_body('box', 'r_gripper_palm_link',
                               [Box([0.1, 0.1, 0.1])],
                               poses=[Coordinates(), Coordinates()])
