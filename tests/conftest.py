"""Shared pytest fixtures for objweld tests."""

from pathlib import Path

import pytest
import yaml

CUBE_CORNERS = [
    (-1.0, -1.0, -1.0),
    (1.0, -1.0, -1.0),
    (1.0, 1.0, -1.0),
    (-1.0, 1.0, -1.0),
    (-1.0, -1.0, 1.0),
    (1.0, -1.0, 1.0),
    (1.0, 1.0, 1.0),
    (-1.0, 1.0, 1.0),
]

# Six outward-wound quads; fan triangulation gives 12 triangles.
CUBE_FACES = [
    (1, 4, 3, 2),
    (5, 6, 7, 8),
    (1, 2, 6, 5),
    (4, 8, 7, 3),
    (1, 5, 8, 4),
    (2, 3, 7, 6),
]


def make_cube_obj() -> str:
    lines = ["# unit cube, positions only", "o cube"]
    lines += [f"v {x} {y} {z}" for x, y, z in CUBE_CORNERS]
    lines += ["f " + " ".join(str(i) for i in face) for face in CUBE_FACES]
    return "\n".join(lines) + "\n"


@pytest.fixture
def cube_obj_text() -> str:
    return make_cube_obj()


@pytest.fixture
def textured_quad_obj_text() -> str:
    """A single quad with uvs and one shared normal."""
    return (
        "v 0 0 0\n"
        "v 1 0 0\n"
        "v 1 1 0\n"
        "v 0 1 0\n"
        "vt 0 0\n"
        "vt 1 0\n"
        "vt 1 1\n"
        "vt 0 1\n"
        "vn 0 0 1\n"
        "f 1/1/1 2/2/1 3/3/1 4/4/1\n"
    )


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Temporary data root with the standard directory structure."""
    for subdir in ["raw", "interim", "processed"]:
        (tmp_path / "data" / subdir).mkdir(parents=True, exist_ok=True)
    return tmp_path / "data"


@pytest.fixture
def cube_obj_path(data_root: Path, cube_obj_text: str) -> Path:
    path = data_root / "raw" / "cube.obj"
    path.write_text(cube_obj_text, encoding="utf-8")
    return path


@pytest.fixture
def pipeline_config(tmp_path: Path, data_root: Path, cube_obj_path: Path) -> Path:
    """pipeline.yaml wiring all three steps, with step configs beside it."""
    config_dir = tmp_path / "configs"
    (config_dir / "steps").mkdir(parents=True, exist_ok=True)

    with open(config_dir / "steps" / "s01.yaml", "w") as f:
        yaml.dump({"strict": False}, f)
    with open(config_dir / "steps" / "s02.yaml", "w") as f:
        yaml.dump({"enabled": True, "force": False}, f)
    with open(config_dir / "steps" / "s03.yaml", "w") as f:
        yaml.dump({"include_color": True}, f)

    config = {
        "project_name": "test_project",
        "data_root": "../data",
        "steps": [
            {"name": "import_obj", "module": "objweld.steps.s01_import_obj",
             "config_file": "steps/s01.yaml", "inputs": {"obj_path": str(cube_obj_path)}},
            {"name": "normals", "module": "objweld.steps.s02_normals",
             "config_file": "steps/s02.yaml", "depends_on": ["import_obj"]},
            {"name": "pack_buffers", "module": "objweld.steps.s03_pack_buffers",
             "config_file": "steps/s03.yaml", "depends_on": ["normals"]},
        ],
    }
    config_file = config_dir / "pipeline.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config, f)
    return config_file


@pytest.fixture
def cube_corners() -> list[tuple[float, float, float]]:
    return list(CUBE_CORNERS)
