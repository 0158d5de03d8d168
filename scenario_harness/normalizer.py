"""Normalization of values returned by in-page script evaluation.

Remote results arrive wrapped in envelopes: a mapping whose reserved ``value``
key holds the real payload next to metadata such as ``type`` or ``handle``.
Raw data is classified once into an explicit variant tree, then flattened into
plain lists, dicts and scalars.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

RESERVED_KEY = "value"
MAX_DEPTH = 256


class NormalizationDepthError(ValueError):
    """Raised when a remote value nests deeper than the allowed depth.

    Cyclic input always ends up here.
    """


@dataclass(frozen=True, slots=True)
class Plain:
    """Scalar or null-like leaf."""

    value: Any


@dataclass(frozen=True, slots=True)
class Wrapped:
    """Envelope whose reserved key holds the payload; metadata is dropped."""

    payload: "RemoteNode"


@dataclass(frozen=True, slots=True)
class SequenceNode:
    """Ordered sequence of remote values."""

    items: tuple["RemoteNode", ...]


@dataclass(frozen=True, slots=True)
class MappingNode:
    """Keyed mapping without a reserved key."""

    entries: tuple[tuple[Any, "RemoteNode"], ...]


type RemoteNode = Plain | Wrapped | SequenceNode | MappingNode


def is_sequence(raw: object) -> bool:
    """Check if a value is an ordered sequence of remote values."""
    return isinstance(raw, Sequence) and not isinstance(
        raw, str | bytes | bytearray
    )


def classify(raw: Any, max_depth: int = MAX_DEPTH) -> RemoteNode:
    """Resolve a raw remote value into its variant tree.

    A mapping counts as wrapped whenever it carries the reserved key, even
    when that key holds ``None``.

    Raises:
        NormalizationDepthError: If nesting exceeds ``max_depth`` or the
            interpreter recursion limit

    """
    try:
        return _classify(raw, max_depth, 0)
    except RecursionError as exc:
        raise NormalizationDepthError(
            "Remote value nests deeper than the interpreter stack allows"
            f" (max_depth={max_depth})"
        ) from exc


def _classify(raw: Any, max_depth: int, depth: int) -> RemoteNode:
    if depth > max_depth:
        raise NormalizationDepthError(
            f"Remote value nests deeper than {max_depth} levels"
        )

    if is_sequence(raw):
        return SequenceNode(
            items=tuple(_classify(item, max_depth, depth + 1) for item in raw)
        )

    if isinstance(raw, Mapping):
        if RESERVED_KEY in raw:
            return Wrapped(payload=_classify(raw[RESERVED_KEY], max_depth, depth + 1))
        return MappingNode(
            entries=tuple(
                (key, _classify(item, max_depth, depth + 1))
                for key, item in raw.items()
            )
        )

    return Plain(value=raw)


def to_plain(node: RemoteNode) -> Any:
    """Flatten a variant tree into plain lists, dicts and scalars."""
    match node:
        case Wrapped(payload=payload):
            return to_plain(payload)
        case SequenceNode(items=items):
            return [to_plain(item) for item in items]
        case MappingNode(entries=entries):
            return {key: to_plain(item) for key, item in entries}
        case Plain(value=value):
            return value


def normalize(raw: Any, max_depth: int = MAX_DEPTH) -> Any:
    """Convert a possibly wrapped remote value into plain data.

    Examples:
        >>> normalize([{"value": 1}, {"value": {"value": 2}}, 3])
        [1, 2, 3]
        >>> normalize({"type": "object", "value": {"title": "Home"}})
        {'title': 'Home'}

    """
    return to_plain(classify(raw, max_depth))
