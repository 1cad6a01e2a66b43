"""Step 03: Pack a welded mesh into interleaved vertex and index buffers.

The output is what a GPU uploader maps straight into vertex/index buffers:
position, RGBA color, uv and normal per vertex, and 32-bit indices.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from objweld.core.step_base import BaseStep
from objweld.utils.io import load_mesh_npz, write_buffers
from .config import PackBuffersConfig
from .contracts import PackBuffersInput, PackBuffersOutput

logger = logging.getLogger(__name__)


class PackBuffersStep(BaseStep[PackBuffersInput, PackBuffersOutput, PackBuffersConfig]):
    name: ClassVar[str] = "pack_buffers"
    input_type: ClassVar = PackBuffersInput
    output_type: ClassVar = PackBuffersOutput
    config_type: ClassVar = PackBuffersConfig

    def validate_inputs(self, inputs: PackBuffersInput) -> bool:
        if not inputs.mesh_path.exists():
            logger.error(f"Mesh archive not found: {inputs.mesh_path}")
            return False
        return True

    def run(self, inputs: PackBuffersInput) -> PackBuffersOutput:
        mesh = load_mesh_npz(inputs.mesh_path)
        if not mesh.has_normals():
            logger.warning("Packing a mesh without normals; run the normals step first")

        output_dir = self.data_root / "processed"
        layout = write_buffers(
            output_dir,
            mesh,
            include_color=self.config.include_color,
            color=tuple(self.config.vertex_color),
        )
        logger.info(
            f"Packed {layout['vertex_count']} vertices (stride {layout['array_stride']} B), "
            f"{layout['index_count']} indices -> {output_dir}"
        )

        return PackBuffersOutput(
            vertex_buffer_path=output_dir / layout["vertex_file"],
            index_buffer_path=output_dir / layout["index_file"],
            layout_path=output_dir / "layout.json",
            array_stride=layout["array_stride"],
            vertex_count=layout["vertex_count"],
            index_count=layout["index_count"],
        )
