"""Wavefront OBJ text parser with fan triangulation.

Reads ``v``/``vt``/``vn``/``f`` directives into a RawAttributeStore and a list
of triangles made of VertexKeys. Other directives (``o``, ``g``, ``s``,
``usemtl``, ``mtllib``, ``l``, ...) are counted and otherwise ignored.

Problems local to one line are reported as Diagnostics and the line is
dropped; only an empty input (or any malformed token in strict mode) fails
the whole parse.
"""

from __future__ import annotations

import logging
import math
import re
from collections import Counter
from dataclasses import dataclass, field

from .errors import EmptyInputError, MalformedTokenError
from .mesh_data import ABSENT, Diagnostic, RawAttributeStore, Triangle, VertexKey

logger = logging.getLogger(__name__)

# components read per attribute directive; a trailing w is ignored
_ATTRIBUTE_ARITY = {
    "v": 3,
    "vt": 2,
    "vn": 3,
}

_INDEX_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class _LineRejected(Exception):
    """Internal: the current line is dropped with a diagnostic."""

    def __init__(self, kind: str, token: str, message: str):
        self.kind = kind
        self.token = token
        super().__init__(message)


@dataclass
class ParsedObj:
    """Result of one parse pass, before welding."""

    store: RawAttributeStore = field(default_factory=RawAttributeStore)
    triangles: list[Triangle] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    face_count: int = 0
    ignored_directives: Counter = field(default_factory=Counter)


def resolve_index(token: str, count: int) -> int:
    """Resolve a 1-based or relative OBJ index to a 0-based element index.

    ``count`` is the number of elements of that stream declared so far.
    Negative tokens count back from the most recent element, so ``-1`` is
    ``count - 1``. The result may lie outside ``[0, count)``; range checks
    are left to the caller.

    Raises:
        ValueError: the token is not an integer or is ``0``.
    """
    if not _INDEX_RE.fullmatch(token):
        raise ValueError(f"index {token!r} is not an integer")
    n = int(token)
    if n == 0:
        raise ValueError("index 0 is not valid in OBJ")
    if n > 0:
        return n - 1
    return count + n


def parse_vertex_ref(ref: str, store: RawAttributeStore) -> tuple[VertexKey, list[str]]:
    """Parse a ``pos[/uv][/normal]`` face reference.

    Returns the key and the names of optional streams ("uv", "normal") whose
    relative index pointed before the first element; those fields are set to
    ABSENT so the welder substitutes its default.

    Raises:
        ValueError: a field is not an integer, is ``0``, the position is
            missing, or there are more than three fields.
    """
    fields = ref.split("/")
    if len(fields) > 3:
        raise ValueError(f"too many fields in vertex reference {ref!r}")
    if not fields[0]:
        raise ValueError(f"vertex reference {ref!r} has no position")

    position = resolve_index(fields[0], store.position_count)
    uv = normal = ABSENT
    underflow = []

    if len(fields) > 1 and fields[1]:
        uv = resolve_index(fields[1], store.uv_count)
        if uv < 0:
            underflow.append("uv")
            uv = ABSENT
    if len(fields) > 2 and fields[2]:
        normal = resolve_index(fields[2], store.normal_count)
        if normal < 0:
            underflow.append("normal")
            normal = ABSENT

    return VertexKey(position, uv, normal), underflow


def triangulate_fan(keys: list[VertexKey]) -> list[Triangle]:
    """Split a convex polygon into triangles sharing its first corner."""
    if len(keys) < 3:
        return []
    anchor = keys[0]
    return [(anchor, keys[i], keys[i + 1]) for i in range(1, len(keys) - 1)]


def _parse_floats(directive: str, tokens: list[str]) -> list[float]:
    arity = _ATTRIBUTE_ARITY[directive]
    if len(tokens) < arity:
        raise _LineRejected(
            "malformed_attribute",
            " ".join(tokens),
            f"'{directive}' expects {arity} components, got {len(tokens)}",
        )
    values = []
    for token in tokens[:arity]:
        if not _FLOAT_RE.fullmatch(token):
            raise _LineRejected(
                "malformed_number", token, f"'{directive}' component is not a number"
            )
        value = float(token)
        if not math.isfinite(value):
            raise _LineRejected(
                "malformed_number", token, f"'{directive}' component is not finite"
            )
        values.append(value)
    return values


def _parse_face(
    tokens: list[str], store: RawAttributeStore, line_number: int
) -> tuple[list[VertexKey], list[Diagnostic]]:
    keys = []
    pending = []
    for ref in tokens:
        try:
            key, underflow = parse_vertex_ref(ref, store)
        except ValueError as exc:
            raise _LineRejected("malformed_face", ref, str(exc)) from None
        # Relative positions resolve against what is declared so far; absolute
        # ones are checked once the whole file has been read.
        if key.position < 0:
            raise _LineRejected(
                "position_out_of_range",
                ref,
                f"relative reference {ref!r} precedes the first position",
            )
        pending.extend(
            Diagnostic(
                kind=f"{stream}_out_of_range",
                message=f"relative {stream} index in {ref!r} precedes the first element",
                line=line_number,
            )
            for stream in underflow
        )
        keys.append(key)
    return keys, pending


def _report(result: ParsedObj, diagnostic: Diagnostic) -> None:
    logger.warning(str(diagnostic))
    result.diagnostics.append(diagnostic)


def parse_obj(text: str, *, strict: bool = False) -> ParsedObj:
    """Parse OBJ text into raw attribute streams and triangles.

    A leading UTF-8 byte-order mark is dropped. Faces may reference
    positions declared later in the file.

    Args:
        text: Full OBJ document.
        strict: Raise MalformedTokenError on the first malformed line instead
            of dropping it.

    Raises:
        EmptyInputError: ``text`` is empty.
        MalformedTokenError: strict mode only.
    """
    text = text.removeprefix("\ufeff")
    if len(text) == 0:
        raise EmptyInputError("OBJ input is empty")

    result = ParsedObj()
    store = result.store
    faces: list[tuple[int, list[str], list[VertexKey], list[Diagnostic]]] = []

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        directive, *tokens = line.split()
        try:
            if directive == "v":
                store.positions.extend(_parse_floats(directive, tokens))
            elif directive == "vt":
                store.uvs.extend(_parse_floats(directive, tokens))
            elif directive == "vn":
                store.normals.extend(_parse_floats(directive, tokens))
            elif directive == "f":
                if len(tokens) < 3:
                    _report(
                        result,
                        Diagnostic(
                            kind="degenerate_face",
                            message=f"face has {len(tokens)} references, needs at least 3",
                            line=line_number,
                        ),
                    )
                    continue
                keys, pending = _parse_face(tokens, store, line_number)
                faces.append((line_number, tokens, keys, pending))
            else:
                result.ignored_directives[directive] += 1
        except _LineRejected as exc:
            if strict:
                raise MalformedTokenError(line_number, exc.token, str(exc)) from None
            _report(result, Diagnostic(kind=exc.kind, message=str(exc), line=line_number))

    position_count = store.position_count
    for line_number, tokens, keys, pending in faces:
        bad = next((i for i, key in enumerate(keys) if key.position >= position_count), None)
        if bad is not None:
            message = (
                f"reference {tokens[bad]!r} resolves to position {keys[bad].position}, "
                f"but the file declares {position_count} positions"
            )
            if strict:
                raise MalformedTokenError(line_number, tokens[bad], message)
            _report(
                result,
                Diagnostic(kind="position_out_of_range", message=message, line=line_number),
            )
            continue
        for diagnostic in pending:
            _report(result, diagnostic)
        result.triangles.extend(triangulate_fan(keys))
        result.face_count += 1

    result.diagnostics.sort(key=lambda d: d.line)
    if result.ignored_directives:
        logger.debug(f"Ignored directives: {dict(result.ignored_directives)}")
    logger.info(
        f"Parsed {store.position_count} positions, {store.uv_count} uvs, "
        f"{store.normal_count} normals, {result.face_count} faces "
        f"-> {len(result.triangles)} triangles"
    )
    return result
