"""Package wide defaults.

Every default can be overridden per process with an environment variable,
or per instance with the keyword arguments of
:class:`skcollision.sdf.DistanceField`,
:class:`skcollision.collision.CollisionRobot` and
:class:`skcollision.collision.CollisionWorld`.

=====================================  =======
environment variable                   default
=====================================  =======
``SKCOLLISION_RESOLUTION``             0.02
``SKCOLLISION_PADDING``                0.1
``SKCOLLISION_COLLISION_TOLERANCE``    0.0
=====================================  =======
"""

import os

from skcollision.exceptions import ConfigurationError


_default_resolution = 0.02
_default_padding = 0.1
_default_collision_tolerance = 0.0


def _float_from_env(key, default):
    value = os.environ.get(key)
    if value is None or value == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(
            'environment variable {} must be a float, got {!r}'.format(
                key, value))


def get_default_resolution():
    """Return grid cell size [m] of distance fields."""
    return _float_from_env('SKCOLLISION_RESOLUTION', _default_resolution)


def get_default_padding():
    """Return the margin [m] added around a shape's bounding box."""
    return _float_from_env('SKCOLLISION_PADDING', _default_padding)


def get_default_collision_tolerance():
    """Return penetration depth [m] below which samples are ignored."""
    return _float_from_env('SKCOLLISION_COLLISION_TOLERANCE',
                           _default_collision_tolerance)


def resolve_resolution(resolution=None):
    if resolution is None:
        resolution = get_default_resolution()
    resolution = float(resolution)
    if not resolution > 0.0:
        raise ConfigurationError(
            'resolution must be positive, got {}'.format(resolution))
    return resolution


def resolve_padding(padding=None):
    if padding is None:
        padding = get_default_padding()
    padding = float(padding)
    if padding < 0.0:
        raise ConfigurationError(
            'padding must not be negative, got {}'.format(padding))
    return padding


def resolve_collision_tolerance(collision_tolerance=None):
    if collision_tolerance is None:
        collision_tolerance = get_default_collision_tolerance()
    collision_tolerance = float(collision_tolerance)
    if collision_tolerance < 0.0:
        raise ConfigurationError(
            'collision_tolerance must not be negative, got {}'.format(
                collision_tolerance))
    return collision_tolerance
