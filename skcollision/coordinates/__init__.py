# flake8: noqa

from .base import as_coords
from .base import Coordinates

from .math import matrix2quaternion
from .math import normalize_vector
from .math import normalize_vectors
from .math import quaternion2matrix
from .math import rotation_matrix
