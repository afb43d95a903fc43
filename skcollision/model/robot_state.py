from skcollision.coordinates import as_coords
from skcollision.exceptions import UnknownBodyError


class RobotState(object):
    """World transform of every link of a robot model.

    The collision engine only reads this object through
    :meth:`get_link_transform`, so any object providing that method can
    stand in for it (for example a wrapper around a forward kinematics
    solver).

    Parameters
    ----------
    robot_model : skcollision.model.RobotModel
    """

    def __init__(self, robot_model):
        self.robot_model = robot_model
        self._link_transforms = {}
        self.set_to_default_values()

    def set_to_default_values(self):
        """Reset every link to its default world pose."""
        self._link_transforms = {
            link.name: link.default_coords.copy_worldcoords()
            for link in self.robot_model.link_list}
        return self

    def set_link_transform(self, link_name, coords):
        """Overwrite the world transform of a link.

        Parameters
        ----------
        link_name : str
        coords : Coordinates or numpy.ndarray
            Coordinates, 4x4 homogeneous matrix or (3,) translation.
        """
        if link_name not in self._link_transforms:
            raise UnknownBodyError(link_name, kind='link')
        self._link_transforms[link_name] = as_coords(coords)
        return self

    def update_link_transforms(self, transforms):
        """Overwrite several link transforms given as a dict."""
        for link_name, coords in transforms.items():
            self.set_link_transform(link_name, coords)
        return self

    def get_link_transform(self, link_name):
        """Return world transform of link.

        Returns
        -------
        coords : skcollision.coordinates.Coordinates
            a copy, so callers may keep or modify it freely.
        """
        try:
            return self._link_transforms[link_name].copy_worldcoords()
        except KeyError:
            raise UnknownBodyError(link_name, kind='link')

    def copy(self):
        state = RobotState.__new__(RobotState)
        state.robot_model = self.robot_model
        state._link_transforms = {
            name: coords.copy_worldcoords()
            for name, coords in self._link_transforms.items()}
        return state
