class CollisionError(Exception):
    """Base class of the errors raised by skcollision."""


class ConfigurationError(CollisionError, ValueError):
    """Malformed request, invalid parameter or name clash."""


class UnknownGroupError(ConfigurationError):
    """The requested group is not defined by the robot model."""

    def __init__(self, group_name, known_groups=()):
        self.group_name = group_name
        self.known_groups = tuple(known_groups)
        super(UnknownGroupError, self).__init__(
            'unknown group {!r}, known groups are {}'.format(
                group_name, list(self.known_groups)))


class DegenerateShapeError(CollisionError, ValueError):
    """The shape cannot yield a usable distance field."""


class UnknownBodyError(CollisionError, LookupError):
    """A body (link, attached body or world object) name is not known."""

    def __init__(self, name, kind='body'):
        self.name = name
        self.kind = kind
        super(UnknownBodyError, self).__init__(
            'unknown {} {!r}'.format(kind, name))

    def __str__(self):
        return self.args[0]
