"""I/O utilities: MeshData archives and interleaved GPU buffer files."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np

from objweld.mesh.mesh_data import Diagnostic, MeshData


# ── MeshData archives ────────────────────────────────────────────────

def save_mesh_npz(path: Path, mesh: MeshData) -> Path:
    """Write the four MeshData buffers to an uncompressed .npz archive."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez(
        path,
        positions=mesh.positions,
        uvs=mesh.uvs,
        normals=mesh.normals,
        indices=mesh.indices,
    )
    return path


def load_mesh_npz(path: Path) -> MeshData:
    """Read a MeshData written by save_mesh_npz."""
    with np.load(Path(path)) as data:
        missing = {"positions", "uvs", "normals", "indices"} - set(data.files)
        if missing:
            raise ValueError(f"{path} is missing arrays: {sorted(missing)}")
        return MeshData(
            positions=data["positions"],
            uvs=data["uvs"],
            normals=data["normals"],
            indices=data["indices"],
        )


def write_diagnostics(path: Path, diagnostics: list[Diagnostic]) -> Path:
    path = Path(path)
    records = [
        {"kind": d.kind, "message": d.message, "line": d.line} for d in diagnostics
    ]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=2)
    return path


# ── Interleaved vertex / index buffers ───────────────────────────────

def pad_to_4_bytes(size: int) -> int:
    """Round a byte count up to the next multiple of 4."""
    return (size + 3) & ~3


def vertex_layout(include_color: bool) -> list[tuple[str, int]]:
    """(attribute, float count) in interleaved order."""
    layout = [("position", 3)]
    if include_color:
        layout.append(("color", 4))
    layout += [("uv", 2), ("normal", 3)]
    return layout


def interleave_vertices(
    mesh: MeshData,
    *,
    include_color: bool = True,
    color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0),
) -> np.ndarray:
    """Pack per-vertex attributes into one (V, floats_per_vertex) float32 array.

    Layout is position, [RGBA color], uv, normal.
    """
    count = mesh.vertex_count
    columns = [mesh.positions.reshape(count, 3)]
    if include_color:
        columns.append(np.tile(np.asarray(color, dtype=np.float32), (count, 1)))
    columns.append(mesh.uvs.reshape(count, 2))
    columns.append(mesh.normals.reshape(count, 3))
    return np.hstack(columns).astype(np.float32, copy=False)


def _write_padded(path: Path, payload: bytes) -> int:
    padded = pad_to_4_bytes(len(payload))
    with open(path, "wb") as f:
        f.write(payload)
        f.write(b"\x00" * (padded - len(payload)))
    return padded


def write_buffers(
    output_dir: Path,
    mesh: MeshData,
    *,
    include_color: bool = True,
    color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0),
) -> dict:
    """Write vertices.bin, indices.bin and layout.json for a buffer uploader.

    Both binaries are little-endian and padded to a 4-byte multiple.
    Returns the layout dict that was written.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    vertices = interleave_vertices(mesh, include_color=include_color, color=color)
    vertex_bytes = vertices.astype("<f4").tobytes()
    index_bytes = mesh.indices.astype("<u4").tobytes()

    vertex_path = output_dir / "vertices.bin"
    index_path = output_dir / "indices.bin"
    vertex_size = _write_padded(vertex_path, vertex_bytes)
    index_size = _write_padded(index_path, index_bytes)

    attributes = []
    offset = 0
    for attribute, floats in vertex_layout(include_color):
        attributes.append({"name": attribute, "components": floats, "byte_offset": offset})
        offset += floats * 4

    layout = {
        "vertex_file": vertex_path.name,
        "index_file": index_path.name,
        "vertex_count": mesh.vertex_count,
        "index_count": int(mesh.indices.size),
        "array_stride": offset,
        "index_format": "uint32",
        "vertex_buffer_size": vertex_size,
        "index_buffer_size": index_size,
        "attributes": attributes,
    }
    with open(output_dir / "layout.json", "w", encoding="utf-8") as f:
        json.dump(layout, f, indent=2)
    return layout
