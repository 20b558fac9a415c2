"""Inertia diagonalization: symmetric tensors to principal-axis mass properties.

Physics engines take a body's inertia as three principal moments plus the
rotation onto the principal axes. This module computes both from the raw
tensor of a link description and refuses tensors that cannot describe a
physical body, naming the offending link.
"""

import logging
from typing import Callable, Optional, Sequence, Tuple

import jax
import jax.numpy as jnp

from .core.scene_graph import MassProperties
from .errors import InvalidInertiaTensor
from .transforms import so3

Array = jax.Array
EigenSolver = Callable[[Array], Tuple[Array, Array]]

logger = logging.getLogger(__name__)


def tensor_from_entries(ixx: float, ixy: float, ixz: float,
                        iyy: float, iyz: float, izz: float) -> Array:
    """Assemble the symmetric 3x3 tensor from its six independent entries."""
    return jnp.array([
        [ixx, ixy, ixz],
        [ixy, iyy, iyz],
        [ixz, iyz, izz],
    ], dtype=jnp.float64)


def rotate_tensor(tensor: Array, rotation: Array) -> Array:
    """Express a tensor given in a rotated frame in the parent frame: R I R^T."""
    return jnp.matmul(rotation, jnp.matmul(tensor, so3.inverse(rotation)))


def _canonical_basis(eigenvectors: Array) -> Array:
    """Fix eigenvector signs so the basis is deterministic and right-handed.

    Each column's largest component is made positive; if the result is still
    a reflection, the last column is flipped.
    """
    dominant = jnp.argmax(jnp.abs(eigenvectors), axis=0)
    signs = jnp.sign(eigenvectors[dominant, jnp.arange(3)])
    signs = jnp.where(signs == 0, 1.0, signs)
    basis = eigenvectors * signs[None, :]
    if float(jnp.linalg.det(basis)) < 0:
        basis = basis.at[:, 2].multiply(-1.0)
    return basis


def diagonalize(
    tensor: Array,
    center_of_mass: Sequence[float],
    mass: float,
    *,
    name: str = "<unnamed>",
    tolerance: float = 1e-5,
    strict: bool = True,
    min_mass: float = 1e-9,
    eigensolver: EigenSolver = jnp.linalg.eigh,
) -> Optional[MassProperties]:
    """Convert a symmetric inertia tensor into principal-axis mass properties.

    Args:
        tensor: (3, 3) symmetric inertia tensor in the link frame.
        center_of_mass: Center of mass in the link frame.
        mass: Body mass.
        name: Link name used in log messages and errors.
        tolerance: Orthonormality tolerance for the eigenbasis, also used
            (relative to the largest moment) for symmetry and sign checks.
        strict: Raise on tensors violating the triangle inequality instead of
            only logging them.
        min_mass: Masses below this are reported as near-zero.
        eigensolver: Symmetric eigen-decomposition returning (values, vectors).

    Returns:
        MassProperties, or None if the tensor is exactly zero.

    Raises:
        InvalidInertiaTensor: For non-finite input, asymmetric tensors, a
            non-orthonormal eigenbasis, significantly negative moments, or
            (when strict) moments violating the triangle inequality.
    """
    tensor = jnp.asarray(tensor, dtype=jnp.float64)
    center_of_mass = jnp.asarray(center_of_mass, dtype=jnp.float64)

    if tensor.shape != (3, 3):
        raise InvalidInertiaTensor(name, f"expected a 3x3 tensor, got shape {tensor.shape}")
    if center_of_mass.shape != (3,):
        raise InvalidInertiaTensor(name, f"expected a 3-vector center of mass, got shape {center_of_mass.shape}")
    if not (bool(jnp.all(jnp.isfinite(tensor))) and bool(jnp.all(jnp.isfinite(center_of_mass)))
            and bool(jnp.isfinite(mass))):
        raise InvalidInertiaTensor(name, "non-finite mass, center of mass or tensor entry")

    if mass < 0:
        raise InvalidInertiaTensor(name, f"negative mass {mass}")

    if not bool(jnp.any(tensor != 0.0)):
        logger.debug("Link '%s' has a zero inertia tensor; no mass properties", name)
        return None

    if mass < min_mass:
        logger.warning("Link '%s' has near-zero mass %g with a non-zero inertia tensor", name, mass)

    scale = float(jnp.max(jnp.abs(tensor)))
    asymmetry = float(jnp.max(jnp.abs(tensor - tensor.T)))
    if asymmetry > tolerance * max(scale, 1.0):
        raise InvalidInertiaTensor(name, f"tensor is not symmetric (max asymmetry {asymmetry:g})")

    eigenvalues, eigenvectors = eigensolver(tensor)
    eigenvalues = jnp.asarray(eigenvalues, dtype=jnp.float64)
    eigenvectors = jnp.asarray(eigenvectors, dtype=jnp.float64)

    if not (bool(jnp.all(jnp.isfinite(eigenvalues))) and bool(jnp.all(jnp.isfinite(eigenvectors)))):
        raise InvalidInertiaTensor(name, "eigen-decomposition produced non-finite values")
    if not so3.is_orthonormal(eigenvectors, tolerance):
        raise InvalidInertiaTensor(name, "eigenbasis is not orthonormal")

    largest = float(jnp.max(jnp.abs(eigenvalues)))
    smallest = float(jnp.min(eigenvalues))
    if smallest < -tolerance * largest:
        raise InvalidInertiaTensor(name, f"negative principal moment {smallest:g}")
    if smallest < 0:
        logger.warning("Link '%s': clamping principal moment %g to zero", name, smallest)
        eigenvalues = jnp.maximum(eigenvalues, 0.0)

    total = float(jnp.sum(eigenvalues))
    worst = float(jnp.max(2.0 * eigenvalues - total))
    if worst > tolerance * largest:
        message = "principal moments violate the triangle inequality"
        if strict:
            raise InvalidInertiaTensor(name, message)
        logger.warning("Link '%s': %s (%s)", name, message, eigenvalues.tolist())

    basis = _canonical_basis(eigenvectors)
    logger.debug("Link '%s' principal moments %s", name, eigenvalues.tolist())

    return MassProperties(
        mass=jnp.asarray(mass, dtype=jnp.float64),
        local_center_of_mass=center_of_mass,
        principal_inertia=eigenvalues,
        principal_inertia_orientation=so3.to_quaternion(basis),
    )
