"""Request, result and body types shared by the collision checkers."""

from collections import OrderedDict
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Optional

import numpy as np

from skcollision.exceptions import ConfigurationError


class BodyType(Enum):
    """Kind of a collision body."""
    ROBOT_LINK = 'robot_link'
    ROBOT_ATTACHED = 'robot_attached'
    WORLD_OBJECT = 'world_object'


@dataclass(frozen=True)
class Body:
    """A collision body.

    Parameters
    ----------
    type : BodyType
    name : str
        name used by the allowed collision matrix and in contacts.
    index : int
        position of the body in its owner's enumeration.
    """
    type: BodyType
    name: str
    index: int = 0


@dataclass
class Contact:
    """Single penetration between two bodies.

    `normal` points from body 2 towards body 1, and moving body 1 along
    it by `depth` resolves this penetration.
    """
    pos: np.ndarray
    normal: np.ndarray
    depth: float
    body_name_1: str
    body_type_1: BodyType
    body_name_2: str
    body_type_2: BodyType


@dataclass
class CollisionRequest:
    """What to compute in a collision check.

    Parameters
    ----------
    group_name : str or None
        group whose links are checked. Every link if None.
    contacts : bool
        if True, contacts are computed and stored in the result.
        Otherwise the check returns at the first collision.
    max_contacts : int
        total number of contacts to compute.
    max_contacts_per_pair : int
        number of contacts to compute for one pair of bodies.
    verbose : bool
        if True, every colliding pair is logged at info level.
    """
    group_name: Optional[str] = None
    contacts: bool = False
    max_contacts: int = 1
    max_contacts_per_pair: int = 1
    verbose: bool = False

    def validate(self):
        if self.contacts:
            if self.max_contacts < 1:
                raise ConfigurationError(
                    'max_contacts must be positive when contacts are '
                    'requested, got {}'.format(self.max_contacts))
            if self.max_contacts_per_pair < 1:
                raise ConfigurationError(
                    'max_contacts_per_pair must be positive when contacts '
                    'are requested, got {}'.format(
                        self.max_contacts_per_pair))
        return self


@dataclass
class CollisionResult:
    """Outcome of one or more collision checks.

    `contacts` maps a (body_name_1, body_name_2) pair to its contacts,
    in the order the pairs were found.
    """
    collision: bool = False
    contact_count: int = 0
    contacts: OrderedDict = field(default_factory=OrderedDict)

    def clear(self):
        self.collision = False
        self.contact_count = 0
        self.contacts = OrderedDict()

    def add_contact(self, contact):
        key = (contact.body_name_1, contact.body_name_2)
        self.contacts.setdefault(key, []).append(contact)
        self.contact_count += 1

    def contacts_of(self, name_1, name_2):
        """Return contacts of the pair in either order."""
        contacts = self.contacts.get((name_1, name_2))
        if contacts is None:
            contacts = self.contacts.get((name_2, name_1), [])
        return contacts
