"""Pure OBJ ingestion core: parser, welder, normal synthesis."""

from .errors import (
    EmptyInputError,
    MalformedTokenError,
    ObjParseError,
    PositionIndexError,
    UnparseableInputError,
)
from .ingest import IngestResult, ingest_obj
from .mesh_data import ABSENT, Diagnostic, MeshData, RawAttributeStore, VertexKey
from .normals import compute_vertex_normals, normals_missing, with_synthesized_normals
from .obj_parser import ParsedObj, parse_obj, resolve_index, triangulate_fan
from .welder import weld

__all__ = [
    "ABSENT",
    "Diagnostic",
    "EmptyInputError",
    "IngestResult",
    "MalformedTokenError",
    "MeshData",
    "ObjParseError",
    "ParsedObj",
    "PositionIndexError",
    "RawAttributeStore",
    "UnparseableInputError",
    "VertexKey",
    "compute_vertex_normals",
    "ingest_obj",
    "normals_missing",
    "parse_obj",
    "resolve_index",
    "triangulate_fan",
    "weld",
    "with_synthesized_normals",
]
