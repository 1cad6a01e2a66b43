"""Step 01: Import a Wavefront OBJ file and weld it into MeshData."""

from __future__ import annotations

import logging
from typing import ClassVar

from objweld.core.step_base import BaseStep
from objweld.mesh.obj_parser import parse_obj
from objweld.mesh.welder import weld
from objweld.utils.io import save_mesh_npz, write_diagnostics
from .config import ImportObjConfig
from .contracts import ImportObjInput, ImportObjOutput

logger = logging.getLogger(__name__)


class ImportObjStep(BaseStep[ImportObjInput, ImportObjOutput, ImportObjConfig]):
    """Parse, triangulate and weld an .obj file.

    Writes mesh.npz (normals left as found, zeros when absent) and
    diagnostics.json.
    """

    name: ClassVar[str] = "import_obj"
    input_type: ClassVar = ImportObjInput
    output_type: ClassVar = ImportObjOutput
    config_type: ClassVar = ImportObjConfig

    def validate_inputs(self, inputs: ImportObjInput) -> bool:
        if not inputs.obj_path.exists():
            logger.error(f"OBJ file not found: {inputs.obj_path}")
            return False
        if inputs.obj_path.suffix.lower() != ".obj":
            logger.error(f"Expected .obj file, got: {inputs.obj_path.suffix}")
            return False
        return True

    def run(self, inputs: ImportObjInput) -> ImportObjOutput:
        output_dir = self.output_dir

        # --- 1. Read and parse ---
        text = inputs.obj_path.read_text(encoding=self.config.encoding)
        parsed = parse_obj(text, strict=self.config.strict)

        # --- 2. Weld ---
        diagnostics = list(parsed.diagnostics)
        mesh = weld(parsed.store, parsed.triangles, diagnostics)
        if mesh.triangle_count == 0 and self.config.fail_on_empty_mesh:
            raise RuntimeError(
                f"No triangles could be read from {inputs.obj_path.name} "
                f"({len(diagnostics)} diagnostics). Check the input file."
            )

        # --- 3. Save outputs ---
        mesh_path = save_mesh_npz(output_dir / "mesh.npz", mesh)
        diagnostics_path = write_diagnostics(output_dir / "diagnostics.json", diagnostics)
        logger.info(
            f"Saved {mesh.vertex_count} vertices / {mesh.triangle_count} triangles -> {mesh_path}"
        )

        return ImportObjOutput(
            mesh_path=mesh_path,
            diagnostics_path=diagnostics_path,
            num_vertices=mesh.vertex_count,
            num_triangles=mesh.triangle_count,
            num_diagnostics=len(diagnostics),
            has_normals=mesh.has_normals(),
        )
