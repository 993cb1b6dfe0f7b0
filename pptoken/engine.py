"""
Boundary with the preprocessing engine.

The engine hands over tokens as ``(kind, value, position)`` triples.  This
module turns them into Token objects and back:

  • wrap_token / wrap_tokens   engine triple  → Token
  • unwrap_token               Token          → engine triple
  • from_record / to_record    the dict form lexer front ends emit
                               { "type", "value", "line", "column", "file" }

Wrapping copies everything; the Token never shares storage with the
engine value it came from.
"""

from typing import Iterable, Iterator, Mapping, NamedTuple, Optional, Union

from .exc import InvalidArgumentError
from .kinds import TokenKind, kind_from_name, token_name
from .position import UNKNOWN_FILE, Position
from .token import Token, coerce_kind


class EngineToken(NamedTuple):
    """A token as the engine produces it."""

    kind: int = TokenKind.UNKNOWN
    value: Union[str, bytes] = ""
    position: Position = Position()


def _lexeme_from_engine(value) -> bytes:
    if value is None:
        return b""
    if isinstance(value, str):
        # Lone surrogates cannot be stored; they become "?".
        return value.encode("utf-8", "replace")
    if isinstance(value, (bytes, bytearray, memoryview)):
        # Re-encode so the stored lexeme is always valid UTF-8.
        return bytes(value).decode("utf-8", "replace").encode("utf-8")
    raise InvalidArgumentError("value", value, "str or bytes")


def wrap_token(engine_token) -> Token:
    """
    Build a Token from an engine token.

    *engine_token* is an EngineToken or any object with ``kind``, ``value``
    and ``position`` attributes, or a plain 3-tuple.
    """
    if isinstance(engine_token, tuple) and not hasattr(engine_token, "_fields"):
        if len(engine_token) != 3:
            raise InvalidArgumentError(
                "engine_token", engine_token, "a (kind, value, position) triple"
            )
        kind, value, position = engine_token
    else:
        kind = engine_token.kind
        value = engine_token.value
        position = engine_token.position
    try:
        position = Position.coerce(position)
    except (TypeError, ValueError):
        raise InvalidArgumentError(
            "position", position, "a (file, line, column) sequence"
        ) from None
    return Token._from_parts(
        coerce_kind(kind, "kind"), _lexeme_from_engine(value), position,
    )


def wrap_tokens(engine_tokens: Iterable) -> Iterator[Token]:
    for engine_token in engine_tokens:
        yield wrap_token(engine_token)


def unwrap_token(token: Optional[Token]) -> EngineToken:
    """Copy a Token back into the engine form; None gives the default token."""
    if token is None:
        return EngineToken()
    return EngineToken(token.get_kind(), token.value, token.position)


# ── Dict records ───────────────────────────────────────────────────────────
def _record_kind(record: Mapping) -> int:
    kind = record.get("kind", record.get("type", TokenKind.UNKNOWN))
    if isinstance(kind, str):
        return kind_from_name(kind)
    return coerce_kind(kind, "kind")


def from_record(record: Mapping) -> Token:
    """
    Wrap a dict record.

    ``kind`` (or ``type``) may be an integer id or a symbolic name such as
    ``"T_IDENTIFIER"``.  Missing position fields fall back to the
    unknown-source sentinel.
    """
    position = (
        record.get("file") or UNKNOWN_FILE,
        record.get("line", 0),
        record.get("column", 0),
    )
    return wrap_token(EngineToken(_record_kind(record), record.get("value", ""), position))


def to_record(token: Token) -> dict:
    position = token.position
    return {
        "kind":   token.kind,
        "type":   token_name(token.kind),
        "value":  token.value,
        "file":   position.file,
        "line":   position.line,
        "column": position.column,
    }
