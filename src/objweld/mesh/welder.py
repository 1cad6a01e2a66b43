"""Vertex welding: unify per-corner (position, uv, normal) indices.

OBJ indexes each attribute stream separately per face corner, while a GPU
draw call reads every attribute through one shared index. The welder gives
every distinct VertexKey one output vertex, in order of first use, and emits
that vertex's index at every corner that uses the key.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from .errors import PositionIndexError
from .mesh_data import ABSENT, Diagnostic, MeshData, RawAttributeStore, Triangle, VertexKey

logger = logging.getLogger(__name__)


def _gather_optional(
    source: list[float],
    stride: int,
    element_indices: np.ndarray,
    stream: str,
    unique_keys: list[VertexKey],
    diagnostics: list[Diagnostic] | None,
) -> np.ndarray:
    """Copy ``stride`` floats per key, zero where the index is absent or out of range."""
    table = np.asarray(source, dtype=np.float32).reshape(-1, stride)
    out = np.zeros((len(element_indices), stride), dtype=np.float32)

    present = element_indices != ABSENT
    in_range = present & (element_indices >= 0) & (element_indices < len(table))
    out[in_range] = table[element_indices[in_range]]

    bad = np.flatnonzero(present & ~in_range)
    if bad.size:
        logger.warning(
            f"{bad.size} vertices reference a missing {stream}; substituting zeros"
        )
        if diagnostics is not None:
            for i in bad:
                diagnostics.append(
                    Diagnostic(
                        kind=f"{stream}_out_of_range",
                        message=(
                            f"{stream} index {int(element_indices[i])} of vertex key "
                            f"{tuple(unique_keys[i])} exceeds {len(table)} declared; "
                            f"using default"
                        ),
                    )
                )
    return out.reshape(-1)


def weld(
    store: RawAttributeStore,
    triangles: Iterable[Triangle],
    diagnostics: list[Diagnostic] | None = None,
) -> MeshData:
    """Deduplicate vertex keys into flat attribute buffers and one index buffer.

    Args:
        store: Raw attribute streams from the parser.
        triangles: Triangles of VertexKeys in winding order.
        diagnostics: Optional list that receives a Diagnostic for every
            distinct key whose uv or normal index is out of range.

    Returns:
        MeshData with one vertex per distinct key.

    Raises:
        PositionIndexError: a key references a position that was not declared.
    """
    cache: dict[VertexKey, int] = {}
    unique_keys: list[VertexKey] = []
    indices: list[int] = []
    next_index = 0

    for triangle in triangles:
        for key in triangle:
            # Index 0 is a valid assignment, so test membership, never the value.
            if key not in cache:
                cache[key] = next_index
                unique_keys.append(key)
                next_index += 1
            indices.append(cache[key])

    if not unique_keys:
        return MeshData.empty()

    keys = np.array(unique_keys, dtype=np.int64).reshape(-1, 3)

    position_table = np.asarray(store.positions, dtype=np.float32).reshape(-1, 3)
    position_indices = keys[:, 0]
    invalid = (position_indices < 0) | (position_indices >= len(position_table))
    if np.any(invalid):
        first = int(position_indices[np.argmax(invalid)])
        raise PositionIndexError(first, len(position_table))
    positions = position_table[position_indices].reshape(-1)

    uvs = _gather_optional(store.uvs, 2, keys[:, 1], "uv", unique_keys, diagnostics)
    normals = _gather_optional(store.normals, 3, keys[:, 2], "normal", unique_keys, diagnostics)

    logger.info(
        f"Welded {len(indices)} corners into {next_index} vertices "
        f"({len(indices) // 3} triangles)"
    )
    return MeshData(positions=positions, uvs=uvs, normals=normals, indices=indices)
