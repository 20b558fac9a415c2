"""SO(3) rotation utilities in JAX.

Rotations are represented either as (..., 3, 3) matrices or as unit
quaternions in (w, x, y, z) order. Every frame in a compiled scene is built
from the roll-pitch-yaw convention implemented by `from_rpy`, so collision,
visual, inertial and joint origins all agree on orientation.
"""

import jax
import jax.numpy as jnp

Array = jax.Array


def _rot_x(angle: Array) -> Array:
    c, s = jnp.cos(angle), jnp.sin(angle)
    one, zero = jnp.ones_like(angle), jnp.zeros_like(angle)
    return jnp.stack([
        jnp.stack([one, zero, zero], axis=-1),
        jnp.stack([zero, c, -s], axis=-1),
        jnp.stack([zero, s, c], axis=-1),
    ], axis=-2)


def _rot_y(angle: Array) -> Array:
    c, s = jnp.cos(angle), jnp.sin(angle)
    one, zero = jnp.ones_like(angle), jnp.zeros_like(angle)
    return jnp.stack([
        jnp.stack([c, zero, s], axis=-1),
        jnp.stack([zero, one, zero], axis=-1),
        jnp.stack([-s, zero, c], axis=-1),
    ], axis=-2)


def _rot_z(angle: Array) -> Array:
    c, s = jnp.cos(angle), jnp.sin(angle)
    one, zero = jnp.ones_like(angle), jnp.zeros_like(angle)
    return jnp.stack([
        jnp.stack([c, -s, zero], axis=-1),
        jnp.stack([s, c, zero], axis=-1),
        jnp.stack([zero, zero, one], axis=-1),
    ], axis=-2)


def from_rpy(rpy: Array) -> Array:
    """
    Convert roll-pitch-yaw angles to a rotation matrix.

    The composition is R = R_z(yaw) @ R_y(pitch) @ R_x(roll), i.e. yaw is
    applied first about the fixed frame's Z, then pitch, then roll, which is
    the URDF convention.

    Args:
        rpy: (..., 3) array of [roll, pitch, yaw] angles in radians

    Returns:
        (..., 3, 3) array of rotation matrices
    """
    rpy = jnp.asarray(rpy)
    roll, pitch, yaw = rpy[..., 0], rpy[..., 1], rpy[..., 2]
    return jnp.matmul(_rot_z(yaw), jnp.matmul(_rot_y(pitch), _rot_x(roll)))


def inverse(R: Array) -> Array:
    """
    Compute inverse of rotation matrix.

    For rotation matrices, the inverse is simply the transpose.
    """
    return jnp.swapaxes(R, -1, -2)


def normalize_quaternions(quaternions: Array) -> Array:
    """Normalize quaternions to unit length."""
    return quaternions / jnp.linalg.norm(quaternions, axis=-1, keepdims=True)


def from_quaternion(quaternions: Array) -> Array:
    """
    Convert quaternions to rotation matrices.

    Args:
        quaternions: (..., 4) array of quaternions in (w, x, y, z) format

    Returns:
        (..., 3, 3) array of rotation matrices
    """
    quaternions = normalize_quaternions(jnp.asarray(quaternions))

    w, x, y, z = jnp.moveaxis(quaternions, -1, 0)

    xx, yy, zz = x*x, y*y, z*z
    wx, wy, wz = w*x, w*y, w*z
    xy, xz, yz = x*y, x*z, y*z

    return jnp.stack([
        jnp.stack([1 - 2*(yy + zz), 2*(xy - wz), 2*(xz + wy)], axis=-1),
        jnp.stack([2*(xy + wz), 1 - 2*(xx + zz), 2*(yz - wx)], axis=-1),
        jnp.stack([2*(xz - wy), 2*(yz + wx), 1 - 2*(xx + yy)], axis=-1)
    ], axis=-2)


def to_quaternion(matrix: Array) -> Array:
    """
    Convert rotation matrices to quaternions (w, x, y, z).

    Picks the numerically best of the four standard extraction branches per
    matrix, so it stays stable for rotations close to 180 degrees. The result
    has a non-negative scalar part.

    Args:
        matrix: (..., 3, 3) array of proper rotation matrices

    Returns:
        (..., 4) array of unit quaternions
    """
    matrix = jnp.asarray(matrix)
    m00, m01, m02 = matrix[..., 0, 0], matrix[..., 0, 1], matrix[..., 0, 2]
    m10, m11, m12 = matrix[..., 1, 0], matrix[..., 1, 1], matrix[..., 1, 2]
    m20, m21, m22 = matrix[..., 2, 0], matrix[..., 2, 1], matrix[..., 2, 2]

    trace = m00 + m11 + m22
    eps = jnp.finfo(matrix.dtype).eps

    # One candidate per dominant component
    candidates = [
        (jnp.stack([trace + 1.0, m21 - m12, m02 - m20, m10 - m01], axis=-1),
         1.0 + trace),
        (jnp.stack([m21 - m12, m00 - m11 - m22 + 1.0, m01 + m10, m02 + m20], axis=-1),
         1.0 + m00 - m11 - m22),
        (jnp.stack([m02 - m20, m01 + m10, m11 - m00 - m22 + 1.0, m12 + m21], axis=-1),
         1.0 + m11 - m00 - m22),
        (jnp.stack([m10 - m01, m02 + m20, m12 + m21, m22 - m00 - m11 + 1.0], axis=-1),
         1.0 + m22 - m00 - m11),
    ]
    q0, q1, q2, q3 = [
        0.5 * q / jnp.sqrt(jnp.maximum(s, eps))[..., None] for q, s in candidates
    ]

    mask0 = trace > 0
    mask1 = (~mask0) & (m00 > m11) & (m00 > m22)
    mask2 = (~mask0) & (~mask1) & (m11 > m22)
    mask3 = (~mask0) & (~mask1) & (~mask2)

    quaternion = (
        jnp.where(mask0[..., None], q0, 0) +
        jnp.where(mask1[..., None], q1, 0) +
        jnp.where(mask2[..., None], q2, 0) +
        jnp.where(mask3[..., None], q3, 0)
    )

    quaternion = jnp.where(quaternion[..., 0:1] < 0, -quaternion, quaternion)
    return normalize_quaternions(quaternion)


def is_orthonormal(matrix: Array, tolerance: float = 1e-5) -> bool:
    """Return True when the columns of a concrete 3x3 matrix are orthonormal."""
    matrix = jnp.asarray(matrix)
    gram = jnp.matmul(inverse(matrix), matrix)
    return bool(jnp.max(jnp.abs(gram - jnp.eye(3, dtype=matrix.dtype))) <= tolerance)
