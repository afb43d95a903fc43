# flake8: noqa

from skcollision.models.box_robot import BoxRobot
