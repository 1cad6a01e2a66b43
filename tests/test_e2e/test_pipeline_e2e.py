"""End-to-end pipeline test: OBJ file in, packed GPU buffers out."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import numpy as np
import pytest

from objweld.core.pipeline_runner import run_pipeline
from objweld.mesh import ingest_obj

logger = logging.getLogger(__name__)


@pytest.mark.e2e
def test_pipeline_e2e(pipeline_config: Path, data_root: Path, tmp_path: Path):
    """Hexagonal prism with uvs on the caps and no normals, through all steps."""
    lines = []
    for z in (0.0, 1.0):
        for k in range(6):
            angle = np.pi * k / 3
            lines.append(f"v {np.cos(angle):.6f} {np.sin(angle):.6f} {z}")
    for k in range(6):
        angle = np.pi * k / 3
        lines.append(f"vt {0.5 + 0.5 * np.cos(angle):.6f} {0.5 + 0.5 * np.sin(angle):.6f}")
    lines.append("g caps")
    lines.append("f " + " ".join(f"{k}/{k}" for k in range(6, 0, -1)))
    lines.append("f " + " ".join(f"{k + 6}/{k}" for k in range(1, 7)))
    lines.append("g sides")
    for k in range(1, 7):
        nxt = k % 6 + 1
        lines.append(f"f {k} {nxt} {nxt + 6} {k + 6}")
    obj_path = tmp_path / "prism.obj"
    obj_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    results = run_pipeline(pipeline_config, overrides={"import_obj": {"obj_path": obj_path}})

    s01 = results["import_obj"]
    # caps: 4 triangles each; sides: 2 each
    assert s01.num_triangles == 4 + 4 + 12
    # cap corners carry a uv, side corners do not: 12 + 12 distinct keys
    assert s01.num_vertices == 24
    assert s01.num_diagnostics == 0
    logger.info(f"S01 welded {s01.num_vertices} vertices")

    s02 = results["normals"]
    assert s02.normals_synthesized is True

    s03 = results["pack_buffers"]
    with open(s03.layout_path) as f:
        layout = json.load(f)
    assert layout["array_stride"] == 48
    assert layout["index_count"] == 3 * s01.num_triangles

    vertices = np.fromfile(s03.vertex_buffer_path, dtype="<f4").reshape(-1, 12)
    indices = np.fromfile(s03.index_buffer_path, dtype="<u4")
    assert indices.max() < len(vertices)
    normals = vertices[:, 9:12]
    np.testing.assert_allclose(np.linalg.norm(normals, axis=1), 1.0, atol=1e-5)

    # pipeline output agrees with the in-memory API
    direct = ingest_obj(obj_path.read_text(encoding="utf-8"))
    np.testing.assert_array_equal(indices, direct.mesh.indices)
    np.testing.assert_allclose(normals.reshape(-1), direct.mesh.normals, atol=1e-6)

    for step_dir in ["import_obj", "normals", "pack_buffers"]:
        assert (data_root / "interim" / step_dir / "step_meta.json").exists()
