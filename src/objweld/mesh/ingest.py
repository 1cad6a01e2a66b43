"""One-call OBJ ingestion: parse, weld, and fill in missing normals."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .errors import UnparseableInputError
from .mesh_data import Diagnostic, MeshData
from .normals import UP_AXIS, with_synthesized_normals
from .obj_parser import parse_obj
from .welder import weld

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestResult:
    mesh: MeshData
    diagnostics: list[Diagnostic] = field(default_factory=list)
    normals_synthesized: bool = False
    face_count: int = 0


def ingest_obj(
    text: str,
    *,
    strict: bool = False,
    synthesize_normals: bool = True,
    default_normal: tuple[float, float, float] = UP_AXIS,
) -> IngestResult:
    """Turn OBJ text into a welded MeshData.

    Holds no state between calls. Normals are synthesized only when the
    welded mesh has none and ``synthesize_normals`` is set.

    Raises:
        EmptyInputError: ``text`` is empty.
        UnparseableInputError: no triangle remains and at least one line
            was rejected. Input with only comments or unsupported
            directives gives an empty mesh instead.
        MalformedTokenError: strict mode only.
    """
    parsed = parse_obj(text, strict=strict)
    if not parsed.triangles and parsed.diagnostics:
        raise UnparseableInputError(len(parsed.diagnostics))
    diagnostics = list(parsed.diagnostics)
    mesh = weld(parsed.store, parsed.triangles, diagnostics)

    synthesized = False
    if synthesize_normals and mesh.vertex_count:
        mesh, synthesized = with_synthesized_normals(mesh, default_normal=default_normal)

    if diagnostics:
        logger.warning(f"Ingested with {len(diagnostics)} diagnostics")
    return IngestResult(
        mesh=mesh,
        diagnostics=diagnostics,
        normals_synthesized=synthesized,
        face_count=parsed.face_count,
    )
