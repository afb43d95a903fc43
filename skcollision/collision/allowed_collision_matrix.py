def _names(name_or_names):
    if isinstance(name_or_names, str):
        return [name_or_names]
    return list(name_or_names)


class AllowedCollisionMatrix(object):
    """Symmetric table of body pairs whose collisions are ignored.

    An entry of ``True`` means the pair is allowed to collide, so the
    checkers skip it before any geometry is evaluated. A lookup is
    resolved in this order:

    1. the explicit entry of the pair, if set.
    2. the default entries of the two names, if any is set. The pair is
       allowed if either default allows it.
    3. the global `default_entry`.

    Names are links, attached bodies and world objects alike and are
    inserted on demand, so a lookup never fails.

    Parameters
    ----------
    names : list[str]
        names whose pairs all get the explicit entry `allowed`.
    allowed : bool
    default_entry : bool
        value of pairs with no other information.

    Examples
    --------
    >>> acm = AllowedCollisionMatrix(['a', 'b', 'c'], allowed=False)
    >>> acm.set_entry('a', 'b', True)
    >>> acm.get_entry('b', 'a')
    True
    >>> acm.get_entry('a', 'unknown')
    False
    """

    def __init__(self, names=(), allowed=False, default_entry=False):
        self._entries = {}
        self._default_entries = {}
        self._default_entry = bool(default_entry)
        names = _names(names)
        for i, name_a in enumerate(names):
            self._entries.setdefault(name_a, {})
            for name_b in names[i + 1:]:
                self.set_entry(name_a, name_b, allowed)

    @classmethod
    def from_robot_model(cls, robot_model, allow_adjacent=True,
                         default_entry=False):
        """Create matrix of every link pair of robot_model.

        Parameters
        ----------
        robot_model : skcollision.model.RobotModel
        allow_adjacent : bool
            if True, parent and child links are allowed to collide.

        Returns
        -------
        acm : AllowedCollisionMatrix
        """
        acm = cls(robot_model.link_names, allowed=False,
                  default_entry=default_entry)
        if allow_adjacent:
            for parent, child in robot_model.adjacent_link_pairs():
                acm.set_entry(parent, child, True)
        return acm

    @property
    def default_entry(self):
        return self._default_entry

    @default_entry.setter
    def default_entry(self, allowed):
        self._default_entry = bool(allowed)

    def set_entry(self, name, other_names, allowed):
        """Set the symmetric entry of name and each of other_names.

        Parameters
        ----------
        name : str
        other_names : str or list[str]
        allowed : bool
        """
        allowed = bool(allowed)
        for other in _names(other_names):
            self._entries.setdefault(name, {})[other] = allowed
            self._entries.setdefault(other, {})[name] = allowed

    def has_entry(self, name, other_name=None):
        """Return True if an explicit entry exists.

        If other_name is None, return True if name appears in the matrix.
        """
        if other_name is None:
            return name in self._entries
        return other_name in self._entries.get(name, {})

    def get_entry(self, name, other_name):
        """Return True if the pair is allowed to collide."""
        row = self._entries.get(name)
        if row is not None and other_name in row:
            return row[other_name]
        default_a = self._default_entries.get(name)
        default_b = self._default_entries.get(other_name)
        if default_a is not None or default_b is not None:
            return bool(default_a) or bool(default_b)
        return self._default_entry

    def remove_entry(self, name, other_name):
        """Remove the explicit entry of the pair, if any."""
        self._entries.get(name, {}).pop(other_name, None)
        self._entries.get(other_name, {}).pop(name, None)

    def remove_entries(self, name):
        """Remove name and every explicit entry that refers to it."""
        row = self._entries.pop(name, {})
        for other in row:
            self._entries.get(other, {}).pop(name, None)
        self._default_entries.pop(name, None)

    def set_default_entry(self, name, allowed):
        """Set the value used for pairs of name that have no entry."""
        self._default_entries[name] = bool(allowed)

    def get_default_entry(self, name):
        """Return the default entry of name, or None if not set."""
        return self._default_entries.get(name)

    def get_all_entry_names(self):
        """Return sorted names known to this matrix."""
        names = set(self._entries.keys())
        names.update(self._default_entries.keys())
        return sorted(names)

    def clear(self):
        self._entries.clear()
        self._default_entries.clear()

    def copy(self):
        acm = AllowedCollisionMatrix(default_entry=self._default_entry)
        acm._entries = {
            name: dict(row) for name, row in self._entries.items()}
        acm._default_entries = dict(self._default_entries)
        return acm

    def __len__(self):
        return len(self.get_all_entry_names())

    def __repr__(self):
        return '<{} {} names, default_entry={}>'.format(
            self.__class__.__name__, len(self), self._default_entry)
