"""Source positions carried by tokens."""

import operator
from dataclasses import dataclass

from .exc import InvalidArgumentError

UNKNOWN_FILE = "?"


@dataclass(frozen=True)
class Position:
    """
    Where a token came from.

    Attributes
    ----------
    file: str
        Source file name, ``"?"`` when the engine did not know it.
    line: int
        Line number, 0 when unknown.
    column: int
        Column number, 0 when unknown.
    """

    file: str = UNKNOWN_FILE
    line: int = 0
    column: int = 0

    def __post_init__(self):
        if not isinstance(self.file, str):
            raise InvalidArgumentError("file", self.file, "a str")
        for field in ("line", "column"):
            value = getattr(self, field)
            try:
                number = int(operator.index(value))
            except TypeError:
                raise InvalidArgumentError(field, value) from None
            object.__setattr__(self, field, number)

    @classmethod
    def unknown(cls) -> "Position":
        return _UNKNOWN

    @classmethod
    def coerce(cls, value) -> "Position":
        """
        Accept a Position, a ``(file, line, column)`` sequence, or None.

        Missing trailing fields take their defaults, so ``("a.c",)`` is
        ``a.c:0:0``.  Fields are taken as they are: a non-str file or a
        non-integer line/column raises InvalidArgumentError.
        """
        if value is None:
            return _UNKNOWN
        if isinstance(value, cls):
            return value
        if isinstance(value, (str, bytes)):
            raise TypeError("position must be a (file, line, column) sequence")
        fields = tuple(value)
        if len(fields) > 3:
            raise TypeError(f"position takes at most 3 fields, got {len(fields)}")
        file = fields[0] if len(fields) > 0 else UNKNOWN_FILE
        line = fields[1] if len(fields) > 1 else 0
        column = fields[2] if len(fields) > 2 else 0
        return cls(UNKNOWN_FILE if file is None else file, line, column)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


_UNKNOWN = Position()
