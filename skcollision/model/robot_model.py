from collections import OrderedDict
from logging import getLogger

from skcollision.coordinates import as_coords
from skcollision.coordinates import Coordinates
from skcollision.exceptions import ConfigurationError
from skcollision.exceptions import UnknownBodyError
from skcollision.exceptions import UnknownGroupError
from skcollision.model.shapes import Shape


logger = getLogger(__name__)


class Link(object):
    """Rigid link with its collision geometry.

    Parameters
    ----------
    name : str
        unique link name.
    collision_shapes : list[skcollision.model.shapes.Shape] or Shape
        collision shapes of this link.
    collision_origins : list[Coordinates] or None
        pose of each shape in the link frame. Identity if not given.
    parent_link_name : str or None
        name of the parent link in the kinematic tree.
    default_coords : Coordinates or numpy.ndarray or None
        world pose of the link in the default state.
    """

    def __init__(self, name, collision_shapes=None, collision_origins=None,
                 parent_link_name=None, default_coords=None):
        self.name = name
        if collision_shapes is None:
            collision_shapes = []
        elif isinstance(collision_shapes, Shape):
            collision_shapes = [collision_shapes]
        collision_shapes = list(collision_shapes)
        for shape in collision_shapes:
            if not isinstance(shape, Shape):
                raise TypeError(
                    'collision shape should be skcollision.model.shapes.'
                    'Shape, get type {}'.format(type(shape)))
        if collision_origins is None:
            collision_origins = [Coordinates() for _ in collision_shapes]
        elif not isinstance(collision_origins, (list, tuple)):
            collision_origins = [collision_origins]
        if len(collision_origins) != len(collision_shapes):
            raise ValueError(
                'length of collision_origins ({}) and collision_shapes ({}) '
                'differ'.format(len(collision_origins),
                                len(collision_shapes)))
        self._collision_shapes = tuple(collision_shapes)
        self._collision_origins = tuple(
            as_coords(c) for c in collision_origins)
        self.parent_link_name = parent_link_name
        self.default_coords = as_coords(default_coords)

    @property
    def collision_shapes(self):
        return self._collision_shapes

    @property
    def collision_origins(self):
        return self._collision_origins

    def __repr__(self):
        return '<{} {} ({} shapes)>'.format(
            self.__class__.__name__, self.name, len(self._collision_shapes))


class RobotModel(object):
    """Links and named groups of links.

    This is the model side of the collision engine: it neither computes
    kinematics nor parses robot descriptions. Link world poses come from
    :class:`skcollision.model.RobotState`.

    Parameters
    ----------
    link_list : list[Link]
    groups : dict[str, list[str]] or None
        group name to link names.
    name : str or None
    """

    def __init__(self, link_list=None, groups=None, name=None):
        self.name = name if name is not None else ''
        self._links = OrderedDict()
        self._groups = OrderedDict()
        for link in link_list or []:
            self.add_link(link)
        for group_name, link_names in (groups or {}).items():
            self.add_group(group_name, link_names)

    def add_link(self, link):
        if link.name in self._links:
            raise ConfigurationError(
                'link {!r} is already defined'.format(link.name))
        self._links[link.name] = link
        return link

    def add_group(self, group_name, link_names):
        link_names = list(link_names)
        for link_name in link_names:
            if link_name not in self._links:
                raise UnknownBodyError(link_name, kind='link')
        if group_name in self._groups:
            logger.warning('group %s is overwritten', group_name)
        self._groups[group_name] = tuple(link_names)

    @property
    def link_list(self):
        return list(self._links.values())

    @property
    def link_names(self):
        return list(self._links.keys())

    @property
    def group_names(self):
        return list(self._groups.keys())

    def has_link(self, link_name):
        return link_name in self._links

    def link(self, link_name):
        try:
            return self._links[link_name]
        except KeyError:
            raise UnknownBodyError(link_name, kind='link')

    def group_link_names(self, group_name=None):
        """Return link names of group in model order.

        Parameters
        ----------
        group_name : str or None
            If None, every link of the model is returned.

        Raises
        ------
        UnknownGroupError
            If group_name is not defined.
        """
        if group_name is None:
            return self.link_names
        if group_name not in self._groups:
            raise UnknownGroupError(group_name, self._groups.keys())
        members = set(self._groups[group_name])
        return [name for name in self._links if name in members]

    def adjacent_link_pairs(self):
        """Return (parent, child) link name pairs of the kinematic tree."""
        pairs = []
        for link in self._links.values():
            if link.parent_link_name is not None \
               and link.parent_link_name in self._links:
                pairs.append((link.parent_link_name, link.name))
        return pairs

    def __getattr__(self, name):
        links = self.__dict__.get('_links')
        if links is not None and name in links:
            return links[name]
        raise AttributeError(
            "'{}' object has no attribute '{}'".format(
                self.__class__.__name__, name))
