"""Exceptions raised while reading, configuring and compiling robot scenes.

Every compile error names the link or joint that caused it. None of them are
worth retrying: the same description always reproduces the same error.
"""

from typing import Sequence


class SceneCompileError(ValueError):
    """Base class for structural and numerical compile errors."""


class DuplicateLink(SceneCompileError):
    def __init__(self, link_name: str):
        self.link_name = link_name
        super().__init__(f"Link '{link_name}' is defined more than once")


class UnknownLinkReference(SceneCompileError):
    def __init__(self, joint_name: str, link_name: str):
        self.joint_name = joint_name
        self.link_name = link_name
        super().__init__(
            f"Joint '{joint_name}' references unknown link '{link_name}'"
        )


class MultipleParents(SceneCompileError):
    def __init__(self, link_name: str, joint_names: Sequence[str] = ()):
        self.link_name = link_name
        self.joint_names = tuple(joint_names)
        detail = f" (joints: {', '.join(self.joint_names)})" if self.joint_names else ""
        super().__init__(f"Link '{link_name}' is the child of more than one joint{detail}")


class CyclicKinematics(SceneCompileError):
    def __init__(self, link_names: Sequence[str]):
        self.link_names = tuple(link_names)
        super().__init__(
            "Kinematic cycle through links: " + " -> ".join(self.link_names)
        )


class MissingAxis(SceneCompileError):
    def __init__(self, joint_name: str):
        self.joint_name = joint_name
        super().__init__(f"Joint '{joint_name}' requires an axis but none was given")


class UnsupportedJointKind(SceneCompileError):
    def __init__(self, joint_name: str, kind: str):
        self.joint_name = joint_name
        self.kind = kind
        super().__init__(f"Joint '{joint_name}' has unsupported kind '{kind}'")


class UnsupportedGeometry(SceneCompileError):
    def __init__(self, owner_name: str, geometry_kind: str):
        self.owner_name = owner_name
        self.geometry_kind = geometry_kind
        super().__init__(
            f"Link '{owner_name}' uses unsupported collision geometry '{geometry_kind}'"
        )


class InvalidInertiaTensor(SceneCompileError):
    def __init__(self, link_name: str, reason: str):
        self.link_name = link_name
        self.reason = reason
        super().__init__(f"Invalid inertia on link '{link_name}': {reason}")


class UrdfParseError(ValueError):
    """The URDF document could not be turned into a robot description."""


class ConfigError(ValueError):
    """Settings could not be loaded or merged."""
