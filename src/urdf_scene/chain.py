"""Rest-pose world frames of a compiled scene.

At rest every child link sits at its joint origin relative to its parent.
Composing those placements down the forest gives the world frame the
presentation side attaches visuals to. Roots are placed at the world origin.
"""

from typing import Dict

import jax.numpy as jnp
from jax import Array

from .core.scene_graph import SceneGraph
from .transforms import se3


def rest_poses_world(scene: SceneGraph) -> Array:
    """Array of shape (num_links, 4, 4) with the world pose of every link.

    Index i corresponds to link id i.
    """
    world = [None] * len(scene.links)
    stack = list(reversed(scene.roots))
    while stack:
        link_id = stack.pop()
        joint = scene.joint_for_child(link_id)
        if joint is None:
            world[link_id] = se3.identity()
        else:
            world[link_id] = se3.multiply(world[joint.parent], joint.origin.matrix)
        stack.extend(reversed(scene.links[link_id].children))

    return jnp.stack(world)


def rest_poses(scene: SceneGraph) -> Dict[str, Array]:
    """Dictionary mapping link names to their 4x4 world poses at rest."""
    world = rest_poses_world(scene)
    return {link.name: world[link.id] for link in scene.links}
