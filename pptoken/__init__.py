from .engine import EngineToken, from_record, to_record, unwrap_token, wrap_token, wrap_tokens
from .exc import (ConversionError, InvalidArgumentError, TokenError,
                  TokenReleasedError, UnknownKindError)
from .kinds import TokenCategory, TokenKind, kind_from_name, token_name
from .position import Position
from .token import Token

__all__ = ["Token", "Position", "TokenKind", "TokenCategory",
           "token_name", "kind_from_name",
           "EngineToken", "wrap_token", "wrap_tokens", "unwrap_token",
           "from_record", "to_record",
           "TokenError", "ConversionError", "InvalidArgumentError",
           "UnknownKindError", "TokenReleasedError"]
