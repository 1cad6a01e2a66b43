"""Fallback per-vertex normal synthesis from triangle geometry."""

from __future__ import annotations

import logging

import numpy as np

from .mesh_data import MeshData

logger = logging.getLogger(__name__)

UP_AXIS = (0.0, 1.0, 0.0)
_EPS = 1e-12


def compute_vertex_normals(
    positions: np.ndarray,
    indices: np.ndarray | None = None,
    default_normal: tuple[float, float, float] = UP_AXIS,
) -> np.ndarray:
    """Compute smooth unit normals by accumulating unit face normals.

    Args:
        positions: Flat (3V,) or (V, 3) vertex positions.
        indices: Flat triangle indices. When None, every three consecutive
            positions form one triangle.
        default_normal: Used for vertices whose accumulated normal is zero
            (isolated vertices, or only degenerate neighbours).

    Returns:
        Flat (3V,) float32 array of unit normals.
    """
    points = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    vertex_count = len(points)

    if indices is None:
        if vertex_count % 3:
            raise ValueError(
                f"unindexed triangle list needs a multiple of 3 vertices, got {vertex_count}"
            )
        tris = np.arange(vertex_count, dtype=np.int64).reshape(-1, 3)
    else:
        flat = np.asarray(indices, dtype=np.int64).reshape(-1)
        if flat.size % 3:
            raise ValueError(f"index count {flat.size} is not a multiple of 3")
        if flat.size and (flat.min() < 0 or flat.max() >= vertex_count):
            raise IndexError(f"triangle index out of range for {vertex_count} vertices")
        tris = flat.reshape(-1, 3)

    accum = np.zeros((vertex_count, 3), dtype=np.float64)
    if len(tris):
        v1 = points[tris[:, 0]]
        v2 = points[tris[:, 1]]
        v3 = points[tris[:, 2]]

        face = np.cross(v2 - v1, v3 - v1)
        length = np.linalg.norm(face, axis=1, keepdims=True)
        # Zero-area triangles keep a zero face normal.
        face = np.divide(face, length, out=np.zeros_like(face), where=length > _EPS)

        np.add.at(accum, tris[:, 0], face)
        np.add.at(accum, tris[:, 1], face)
        np.add.at(accum, tris[:, 2], face)

    length = np.linalg.norm(accum, axis=1, keepdims=True)
    normals = np.divide(accum, length, out=np.zeros_like(accum), where=length > _EPS)

    isolated = length[:, 0] <= _EPS
    if np.any(isolated):
        normals[isolated] = np.asarray(default_normal, dtype=np.float64)
        logger.debug(f"{int(isolated.sum())} vertices fell back to the default normal")

    return normals.astype(np.float32).reshape(-1)


def normals_missing(mesh: MeshData) -> bool:
    """True when the mesh carries no usable normals (absent or all zero)."""
    return not mesh.has_normals()


def with_synthesized_normals(
    mesh: MeshData,
    *,
    force: bool = False,
    default_normal: tuple[float, float, float] = UP_AXIS,
) -> tuple[MeshData, bool]:
    """Return the mesh with computed normals if it has none.

    Returns:
        (mesh, synthesized) where ``synthesized`` tells whether normals were
        computed.
    """
    if not force and not normals_missing(mesh):
        return mesh, False

    normals = compute_vertex_normals(mesh.positions, mesh.indices, default_normal)
    logger.info(f"Synthesized normals for {mesh.vertex_count} vertices")
    return mesh.replace_normals(normals), True
