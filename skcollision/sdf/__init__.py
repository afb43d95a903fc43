# flake8: noqa

from skcollision.sdf.distance_field import DistanceField
from skcollision.sdf.signed_distance_function import BoxSDF
from skcollision.sdf.signed_distance_function import CylinderSDF
from skcollision.sdf.signed_distance_function import shape2sdf
from skcollision.sdf.signed_distance_function import SignedDistanceFunction
from skcollision.sdf.signed_distance_function import SphereSDF
