"""Value types shared by the parser, welder and normal synthesizer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

# Sentinel for an omitted uv/normal field. Never a valid element index.
ABSENT = -1


class VertexKey(NamedTuple):
    """(position, uv, normal) element indices of one face corner."""

    position: int
    uv: int = ABSENT
    normal: int = ABSENT


Triangle = tuple[VertexKey, VertexKey, VertexKey]


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem found while ingesting a mesh."""

    kind: str
    message: str
    line: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.kind}: {self.message}"
        return f"line {self.line}: {self.kind}: {self.message}"


def _readonly(values, dtype) -> np.ndarray:
    arr = np.array(values, dtype=dtype).reshape(-1)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class MeshData:
    """Welded, renderer-ready mesh.

    All buffers are flat, read-only arrays: ``positions`` and ``normals`` hold
    three floats per vertex, ``uvs`` two, and ``indices`` three entries per
    triangle, each addressing a vertex.
    """

    positions: np.ndarray  # (3V,) float32
    uvs: np.ndarray        # (2V,) float32
    normals: np.ndarray    # (3V,) float32
    indices: np.ndarray    # (3T,) uint32

    def __post_init__(self):
        object.__setattr__(self, "positions", _readonly(self.positions, np.float32))
        object.__setattr__(self, "uvs", _readonly(self.uvs, np.float32))
        object.__setattr__(self, "normals", _readonly(self.normals, np.float32))
        object.__setattr__(self, "indices", _readonly(self.indices, np.uint32))

        if self.positions.size % 3 or self.indices.size % 3:
            raise ValueError("positions and indices must have a length divisible by 3")
        vertex_count = self.positions.size // 3
        if self.uvs.size != 2 * vertex_count or self.normals.size != 3 * vertex_count:
            raise ValueError(
                f"attribute buffers disagree on vertex count: positions={vertex_count}, "
                f"uvs={self.uvs.size / 2:g}, normals={self.normals.size / 3:g}"
            )
        if self.indices.size and int(self.indices.max()) >= vertex_count:
            raise ValueError(f"index {int(self.indices.max())} >= vertex count {vertex_count}")

    @property
    def vertex_count(self) -> int:
        return self.positions.size // 3

    @property
    def triangle_count(self) -> int:
        return self.indices.size // 3

    def has_normals(self) -> bool:
        """True when at least one normal component is non-zero."""
        return bool(self.normals.size) and bool(np.any(self.normals))

    def replace_normals(self, normals: np.ndarray) -> MeshData:
        return MeshData(
            positions=self.positions,
            uvs=self.uvs,
            normals=normals,
            indices=self.indices,
        )

    @classmethod
    def empty(cls) -> MeshData:
        return cls(positions=[], uvs=[], normals=[], indices=[])


@dataclass
class RawAttributeStore:
    """Per-stream float lists filled by one parse pass."""

    positions: list[float] = field(default_factory=list)
    uvs: list[float] = field(default_factory=list)
    normals: list[float] = field(default_factory=list)

    @property
    def position_count(self) -> int:
        return len(self.positions) // 3

    @property
    def uv_count(self) -> int:
        return len(self.uvs) // 2

    @property
    def normal_count(self) -> int:
        return len(self.normals) // 3
