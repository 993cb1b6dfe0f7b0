"""
Error taxonomy for the token layer.

Every error derives from TokenError.  The ones a caller may reasonably
catch by their builtin meaning (TypeError, KeyError, RuntimeError) also
derive from that builtin.
"""


class TokenError(Exception):
    """Base class for all token-layer errors."""


class ConversionError(TokenError):
    """A value could not be turned into a UTF-8 lexeme."""

    def __init__(self, value_type: str, reason: Exception):
        self.value_type = value_type
        self.reason = reason
        super().__init__(f"Cannot convert {value_type} value to a lexeme: {reason}")


class InvalidArgumentError(TokenError, TypeError):
    """A value could not be coerced to the primitive type a field needs."""

    def __init__(self, field: str, value, expected: str = "an integer"):
        self.field = field
        self.value = value
        super().__init__(
            f"{field} must be {expected}, not {type(value).__name__}"
        )


class UnknownKindError(TokenError, KeyError):
    """A symbolic kind name is not in the engine's name table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f'Unknown token kind "{self.name}"'


class TokenReleasedError(TokenError, RuntimeError):
    """The token's storage has already been released."""

    def __init__(self, message: str = "Token has been released"):
        super().__init__(message)
