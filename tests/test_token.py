"""Tests for the Token value type."""

import pytest

from pptoken import InvalidArgumentError, Position, Token, TokenKind, TokenReleasedError
from pptoken.kinds import TokenCategory
from pptoken.token import TokenState

from conftest import Rendered, Unprintable


# ── Construction ───────────────────────────────────────────────────────────

def test_default_token():
    token = Token()
    assert token.get_kind() == 0
    assert token.value == ""
    assert token.lexeme == b""
    assert token.position == Position("?", 0, 0)
    assert token.state is TokenState.INITIALIZED


@pytest.mark.parametrize("kind", [0, 1, 5, 255, TokenKind.IDENTIFIER, -1,
                                  2**31 - 1, -(2**31), 2**63, -(2**70)])
def test_id_is_stored_exactly(kind):
    assert Token(id=kind).get_kind() == kind


def test_id_from_enum_is_plain_int():
    token = Token(id=TokenKind.IDENTIFIER)
    assert type(token.kind) is int
    assert token.kind == TokenKind.IDENTIFIER


@pytest.mark.parametrize("bad", ["5", 1.5, None, [1], object()])
def test_non_integer_id_is_rejected(bad):
    with pytest.raises(InvalidArgumentError) as excinfo:
        Token(id=bad)
    assert isinstance(excinfo.value, TypeError)
    assert excinfo.value.field == "id"


def test_int_and_value_scenario():
    token = Token(id=5, value=42)
    assert token.to_display_string() == "42"
    token.set_kind(9)
    assert token.get_kind() == 9


@pytest.mark.parametrize("value, text", [
    ("foo", "foo"),
    (42, "42"),
    (1.5, "1.5"),
    (True, "True"),
    (None, "None"),
    (b"ab", "b'ab'"),
    ("héllo wörld", "héllo wörld"),
    ("日本語", "日本語"),
    (Rendered("#define"), "#define"),
])
def test_value_is_stringified(value, text):
    token = Token(value=value)
    assert str(token) == text
    assert token.lexeme == text.encode("utf-8")


def test_value_whose_str_raises_gives_empty_lexeme():
    token = Token(id=3, value=Unprintable())
    assert str(token) == ""
    assert token.get_kind() == 3
    assert token.state is TokenState.INITIALIZED


def test_value_that_cannot_be_encoded_gives_empty_lexeme():
    token = Token(value="bad \ud800 surrogate")
    assert token.to_display_string() == ""
    assert token.lexeme == b""


def test_str_returning_non_text_gives_empty_lexeme():
    token = Token(value=Rendered(12))
    assert str(token) == ""


def test_memory_error_is_not_swallowed():
    class Exhausting:
        def __str__(self):
            raise MemoryError

    with pytest.raises(MemoryError):
        Token(value=Exhausting())


# ── Kind ───────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("kind", [0, 7, TokenKind.PP_DEFINE, 0x7FFFFFFF, 10**20, -3])
def test_set_then_get_kind(kind):
    token = Token(value="x")
    token.set_kind(kind)
    assert token.get_kind() == kind
    token.set_kind(kind)
    assert token.get_kind() == kind


def test_kind_property_and_token_id_alias():
    token = Token(id=TokenKind.IDENTIFIER, value="main")
    token.kind = TokenKind.INT
    assert token.token_id == TokenKind.INT
    token.token_id = 12345
    assert token.kind == 12345


def test_set_kind_rejects_non_integer_and_keeps_old_kind():
    token = Token(id=4, value="x")
    with pytest.raises(InvalidArgumentError):
        token.set_kind("IDENTIFIER")
    with pytest.raises(TypeError):
        token.kind = 2.0
    assert token.get_kind() == 4


def test_kind_cannot_be_deleted():
    token = Token()
    with pytest.raises(AttributeError):
        del token.kind


@pytest.mark.parametrize("attr", ["value", "lexeme", "position", "category"])
def test_read_only_fields(attr):
    token = Token(value="x")
    with pytest.raises(AttributeError):
        setattr(token, attr, "y")


def test_no_extra_attributes():
    token = Token()
    with pytest.raises(AttributeError):
        token.extra = 1


def test_category_follows_kind():
    token = Token(id=TokenKind.STRINGLIT, value='"s"')
    assert token.category is TokenCategory.STRING_LITERAL
    token.kind = TokenKind.IF
    assert token.category is TokenCategory.KEYWORD
    token.kind = 5
    assert token.category is None


# ── String projections ─────────────────────────────────────────────────────

def test_debug_string_default_position():
    assert repr(Token(id=0, value="foo")) == "Token(T_UNKNOWN, 'foo', ?:0:0)"


def test_debug_string_named_kind():
    token = Token(id=TokenKind.IDENTIFIER, value="x")
    assert token.to_debug_string() == "Token(T_IDENTIFIER, 'x', ?:0:0)"


@pytest.mark.parametrize("kind, value, debug", [
    (0x0804017C, "x", "Token(T_IDENTIFIER, 'x', ?:0:0)"),
    (0x1804018C, "#", "Token(T_POUND, '#', ?:0:0)"),
    (0x2804018E, "#include", "Token(T_PP_INCLUDE, '#include', ?:0:0)"),
    (0x182C0101, "and", "Token(T_ANDAND, 'and', ?:0:0)"),
])
def test_debug_string_engine_ids(kind, value, debug):
    assert repr(Token(id=kind, value=value)) == debug


def test_debug_string_unknown_kind():
    assert repr(Token(id=5, value="?")) == "Token(T_UNKNOWN_5, '?', ?:0:0)"


def test_debug_string_does_not_escape_lexeme():
    token = Token(id=TokenKind.CHARLIT, value="'\\n'")
    assert repr(token) == "Token(T_CHARLIT, ''\\n'', ?:0:0)"


def test_display_string_has_no_kind_or_position():
    token = Token(id=TokenKind.PLUS, value="+")
    assert str(token) == "+"


# ── Lifecycle ──────────────────────────────────────────────────────────────

def test_release_twice_is_harmless():
    token = Token(id=1, value="x")
    token.release()
    token.release()
    assert token.released
    assert token.state is TokenState.RELEASED


def test_released_token_refuses_access():
    token = Token(value="x")
    token.release()
    with pytest.raises(TokenReleasedError):
        token.get_kind()
    with pytest.raises(TokenReleasedError):
        str(token)
    with pytest.raises(TokenReleasedError):
        token.kind = 3
    assert repr(token) == "Token(<released>)"


def test_release_on_unconstructed_token():
    token = Token.__new__(Token)
    assert token.state is TokenState.UNINITIALIZED
    assert repr(token) == "Token(<uninitialized>)"
    with pytest.raises(TokenReleasedError):
        token.value
    token.release()
    token.release()
    assert token.released
