"""Collision-interaction groups.

A body belongs to some groups (memberships) and accepts contacts from some
groups (filter). Two bodies interact only if each one's memberships
intersect the other's filter. Robot links accept the environment and free
objects but not each other.
"""

import enum
from dataclasses import dataclass


class Group(enum.IntFlag):
    NONE = 0
    GROUP_1 = 1 << 0
    GROUP_2 = 1 << 1
    GROUP_3 = 1 << 2
    ALL = 0xFFFFFFFF


@dataclass(frozen=True)
class CollisionGroups:
    label: str
    memberships: Group
    filter: Group

    def interacts_with(self, other: "CollisionGroups") -> bool:
        return bool(self.memberships & other.filter) and bool(other.memberships & self.filter)


ENVIRONMENT = CollisionGroups("environment", Group.GROUP_1, Group.ALL)
ROBOT_BODY = CollisionGroups("robot-body", Group.GROUP_2, Group.GROUP_1 | Group.GROUP_3)
FREE_OBJECT = CollisionGroups("free-object", Group.GROUP_3, Group.ALL)
