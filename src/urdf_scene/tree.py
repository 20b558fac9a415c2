"""Kinematic tree construction from name-referenced links and joints.

Links get dense integer ids in description order. Joints are resolved against
those ids and checked for dangling names, links with several parents and
cycles, which leaves an ordered forest.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .core.descriptors import JointDescriptor, LinkDescriptor
from .errors import CyclicKinematics, DuplicateLink, MultipleParents, UnknownLinkReference

logger = logging.getLogger(__name__)

_UNVISITED, _IN_PROGRESS, _DONE = 0, 1, 2


@dataclass(frozen=True)
class JointEdge:
    """A joint resolved to parent and child link ids."""
    name: str
    parent: int
    child: int
    descriptor: JointDescriptor


@dataclass(frozen=True)
class SceneSkeleton:
    """Ordered forest of link ids.

    Attributes:
        link_names: Link names; index is the link id.
        link_ids: Read-only mapping from link name to id.
        joints: Resolved joints in description order.
        parents: Parent id of each link, None for roots.
        parent_joints: Index into `joints` of each link's parent joint, None for roots.
        children: Child ids of each link in joint order.
        roots: Ids of links that are never a child, in description order.
    """
    link_names: Tuple[str, ...]
    link_ids: Mapping[str, int]
    joints: Tuple[JointEdge, ...]
    parents: Tuple[Optional[int], ...]
    parent_joints: Tuple[Optional[int], ...]
    children: Tuple[Tuple[int, ...], ...]
    roots: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.link_names)

    def order(self) -> Tuple[int, ...]:
        """Depth-first pre-order over the forest, roots in description order."""
        ordered = []
        for root in self.roots:
            stack = [root]
            while stack:
                node = stack.pop()
                ordered.append(node)
                stack.extend(reversed(self.children[node]))
        return tuple(ordered)


def build(links: Sequence[LinkDescriptor], joints: Sequence[JointDescriptor]) -> SceneSkeleton:
    """Resolve links and joints into an ordered kinematic forest.

    Args:
        links: Link descriptors in description order.
        joints: Joint descriptors in description order.

    Returns:
        SceneSkeleton: Id mapping, resolved joints and forest topology.

    Raises:
        DuplicateLink: Two links share a name.
        UnknownLinkReference: A joint names a link that does not exist.
        MultipleParents: A link is the child of more than one joint.
        CyclicKinematics: The parent -> child relation has a cycle.
    """
    link_ids: Dict[str, int] = {}
    for link in links:
        if link.name in link_ids:
            raise DuplicateLink(link.name)
        link_ids[link.name] = len(link_ids)
    link_names = tuple(link_ids)

    edges: List[JointEdge] = []
    for joint in joints:
        for link_name in (joint.parent, joint.child):
            if link_name not in link_ids:
                raise UnknownLinkReference(joint.name, link_name)
        edges.append(JointEdge(joint.name, link_ids[joint.parent], link_ids[joint.child], joint))

    num_links = len(link_names)
    parents: List[Optional[int]] = [None] * num_links
    parent_joints: List[Optional[int]] = [None] * num_links
    children: List[List[int]] = [[] for _ in range(num_links)]
    for joint_id, edge in enumerate(edges):
        previous = parent_joints[edge.child]
        if previous is not None:
            raise MultipleParents(link_names[edge.child], (edges[previous].name, edge.name))
        parent_joints[edge.child] = joint_id
        parents[edge.child] = edge.parent
        children[edge.parent].append(edge.child)

    _check_acyclic(link_names, children)

    roots = tuple(i for i in range(num_links) if parents[i] is None)
    logger.debug("Kinematic forest: %d links, %d joints, roots %s",
                 num_links, len(edges), [link_names[i] for i in roots])

    return SceneSkeleton(
        link_names=link_names,
        link_ids=MappingProxyType(link_ids),
        joints=tuple(edges),
        parents=tuple(parents),
        parent_joints=tuple(parent_joints),
        children=tuple(tuple(c) for c in children),
        roots=roots,
    )


def _check_acyclic(link_names: Sequence[str], children: Sequence[Sequence[int]]) -> None:
    """Depth-first search tracking in-progress links; raises on a back edge."""
    state = [_UNVISITED] * len(link_names)
    for start in range(len(link_names)):
        if state[start] != _UNVISITED:
            continue
        state[start] = _IN_PROGRESS
        path = [start]
        stack = [iter(children[start])]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                state[path.pop()] = _DONE
                continue
            if state[child] == _IN_PROGRESS:
                cycle = path[path.index(child):] + [child]
                raise CyclicKinematics([link_names[i] for i in cycle])
            if state[child] == _UNVISITED:
                state[child] = _IN_PROGRESS
                path.append(child)
                stack.append(iter(children[child]))
