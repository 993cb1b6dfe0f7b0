"""
Token  –  one lexical unit handed over by the preprocessing engine.

A Token owns three things:
  • kind      – integer classification (see kinds.py), the only mutable field
  • lexeme    – the token text, held as valid UTF-8 bytes
  • position  – file / line / column, frozen at construction

Tokens are built either directly by Python code (``Token(id, value)``) or
by wrapping an engine token (engine.wrap_token).  Both paths end in the
same fully-initialised state; release() tears it down exactly once.
"""

import operator
from enum import Enum
from typing import Optional, Protocol

from .exc import ConversionError, InvalidArgumentError, TokenReleasedError
from .kinds import TokenCategory, category_of, token_name
from .logs import get_logger
from .position import Position

log = get_logger(__name__)

_MISSING = object()


class Renderable(Protocol):
    """Anything that can render itself as text via ``str()``."""

    def __str__(self) -> str: ...


class TokenState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED   = "initialized"
    RELEASED      = "released"


# ── Conversion helpers ─────────────────────────────────────────────────────
def coerce_kind(value, field: str = "kind") -> int:
    """Return *value* as a plain int or raise InvalidArgumentError."""
    try:
        return int(operator.index(value))
    except TypeError:
        raise InvalidArgumentError(field, value) from None


def render_lexeme(value: Renderable) -> bytes:
    """
    Stringify *value* and encode it as UTF-8.

    A failure in either step is a ConversionError; it is logged and the
    lexeme falls back to empty.  Out-of-memory is not a conversion
    failure and propagates.
    """
    try:
        return str(value).encode("utf-8")
    except MemoryError:
        raise
    except Exception as exc:
        err = ConversionError(type(value).__name__, exc)
        log.debug("lexeme.conversion_failed", error=str(err))
        return b""


# ── Token ──────────────────────────────────────────────────────────────────
class Token:
    """
    A preprocessing token.

    ``str(token)`` is the lexeme as source text.  ``repr(token)`` is the
    debug form ``Token(T_<KIND>, '<lexeme>', <file>:<line>:<column>)``.
    """

    __slots__ = ("_kind", "_lexeme", "_position", "_state")

    def __init__(self, id: int = 0, value: Renderable = _MISSING):
        self._kind: Optional[int] = None
        self._lexeme: Optional[bytes] = None
        self._position: Optional[Position] = None
        self._state = TokenState.UNINITIALIZED

        kind = coerce_kind(id, "id")
        lexeme = b"" if value is _MISSING else render_lexeme(value)
        self._adopt(kind, lexeme, Position.unknown())

    @classmethod
    def _from_parts(cls, kind: int, lexeme: bytes, position: Position) -> "Token":
        token = cls.__new__(cls)
        token._kind = None
        token._lexeme = None
        token._position = None
        token._state = TokenState.UNINITIALIZED
        token._adopt(kind, lexeme, position)
        return token

    def _adopt(self, kind: int, lexeme: bytes, position: Position):
        self._kind = kind
        self._lexeme = lexeme
        self._position = position
        self._state = TokenState.INITIALIZED

    def _require_live(self):
        state = self.state
        if state is TokenState.UNINITIALIZED:
            raise TokenReleasedError("Token was never initialised")
        if state is TokenState.RELEASED:
            raise TokenReleasedError()

    # ── Kind ───────────────────────────────────────────────────────────────
    def get_kind(self) -> int:
        self._require_live()
        return self._kind

    def set_kind(self, kind: int):
        """
        Replace the classification.

        Any integer is stored as-is; whether the engine knows the id is
        not this layer's concern.
        """
        self._require_live()
        self._kind = coerce_kind(kind, "kind")

    kind = property(get_kind, set_kind)
    token_id = kind

    @property
    def category(self) -> Optional[TokenCategory]:
        return category_of(self.get_kind())

    # ── Lexeme / position ──────────────────────────────────────────────────
    @property
    def lexeme(self) -> bytes:
        self._require_live()
        return self._lexeme

    @property
    def value(self) -> str:
        self._require_live()
        return self._lexeme.decode("utf-8")

    @property
    def position(self) -> Position:
        self._require_live()
        return self._position

    # ── String projections ─────────────────────────────────────────────────
    def to_display_string(self) -> str:
        return self.value

    def to_debug_string(self) -> str:
        self._require_live()
        return "Token(T_%s, '%s', %s)" % (
            token_name(self._kind), self.value, self._position,
        )

    def __str__(self) -> str:
        return self.to_display_string()

    def __repr__(self) -> str:
        state = self.state
        if state is not TokenState.INITIALIZED:
            return f"Token(<{state.value}>)"
        return self.to_debug_string()

    # ── Lifecycle ──────────────────────────────────────────────────────────
    @property
    def state(self) -> TokenState:
        return getattr(self, "_state", TokenState.UNINITIALIZED)

    @property
    def released(self) -> bool:
        return self.state is TokenState.RELEASED

    def release(self):
        """
        Drop the owned lexeme and position.

        Safe to call more than once, and on a token whose constructor
        never finished.
        """
        if self.state is TokenState.RELEASED:
            return
        self._lexeme = None
        self._position = None
        self._state = TokenState.RELEASED
