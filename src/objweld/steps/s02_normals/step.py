"""Step 02: Fill in per-vertex normals for meshes that carry none."""

from __future__ import annotations

import logging
from typing import ClassVar

from objweld.core.step_base import BaseStep
from objweld.mesh.normals import with_synthesized_normals
from objweld.utils.io import load_mesh_npz, save_mesh_npz
from .config import NormalsConfig
from .contracts import NormalsInput, NormalsOutput

logger = logging.getLogger(__name__)


class NormalsStep(BaseStep[NormalsInput, NormalsOutput, NormalsConfig]):
    name: ClassVar[str] = "normals"
    input_type: ClassVar = NormalsInput
    output_type: ClassVar = NormalsOutput
    config_type: ClassVar = NormalsConfig

    def validate_inputs(self, inputs: NormalsInput) -> bool:
        if not inputs.mesh_path.exists():
            logger.error(f"Mesh archive not found: {inputs.mesh_path}")
            return False
        return True

    def run(self, inputs: NormalsInput) -> NormalsOutput:
        mesh = load_mesh_npz(inputs.mesh_path)

        synthesized = False
        if self.config.enabled:
            mesh, synthesized = with_synthesized_normals(
                mesh,
                force=self.config.force,
                default_normal=tuple(self.config.default_normal),
            )
        if not synthesized:
            logger.info("Keeping normals from source mesh")

        mesh_path = save_mesh_npz(self.output_dir / "mesh.npz", mesh)
        return NormalsOutput(
            mesh_path=mesh_path,
            normals_synthesized=synthesized,
            num_vertices=mesh.vertex_count,
        )
