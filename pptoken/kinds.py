"""
Token kind definitions shared with the preprocessing engine.

Kinds are the engine's own integers, bit for bit:

    bits 23..30   category   (identifier, keyword, operator, literal …)
    bits 19..22   ext flags  (alternative spelling, trigraph, conditional)
    bit  18       pp-token   (set on every "real" preprocessing token)
    bits  0..17   base id    (first real token is 256)

Every integer is a legal kind for this layer.  The table below only names
the ones the engine is known to produce; anything else renders as
``UNKNOWN_<n>``.
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Optional

from .exc import UnknownKindError

# ── Bit layout ─────────────────────────────────────────────────────────────
TOKEN_TYPE_MASK      = 0x7F800000
EXT_TOKEN_TYPE_MASK  = 0x7FF80000
EXT_TOKEN_ONLY_MASK  = 0x00780000
TOKEN_VALUE_MASK     = 0x0003FFFF
MAIN_TOKEN_MASK      = 0x7F83FFFF
FAMILY_MASK          = 0x78000000

PP_TOKEN_FLAG        = 0x00040000
ALT_TOKEN            = 0x00080000     # <%  <:  %:  %:%:
TRIGRAPH_TOKEN       = 0x00100000     # ??=  ??(  ??<  …
ALT_EXT_TOKEN        = 0x00280000     # and  bitor  not_eq …

FIRST_TOKEN          = 256


class TokenCategory(IntEnum):
    """Category constants as the engine defines them (pp-token flag included)."""

    IDENTIFIER        = 0x08040000
    KEYWORD           = 0x10040000
    OPERATOR          = 0x18040000
    LITERAL           = 0x20040000
    INTEGER_LITERAL   = 0x20840000
    FLOATING_LITERAL  = 0x21040000
    STRING_LITERAL    = 0x21840000
    CHARACTER_LITERAL = 0x22040000
    BOOL_LITERAL      = 0x22840000
    PREPROCESSOR      = 0x28040000
    PP_CONDITIONAL    = 0x28440000
    UNKNOWN           = 0x50000000
    EOL               = 0x58000000
    EOF               = 0x60000000
    WHITESPACE        = 0x68000000
    INTERNAL          = 0x70040000


def _kind(base: int, category: TokenCategory, flags: int = 0) -> int:
    return base | int(category) | flags


_OP = TokenCategory.OPERATOR
_KW = TokenCategory.KEYWORD
_PP = TokenCategory.PREPROCESSOR
_PPC = TokenCategory.PP_CONDITIONAL
_INT = TokenCategory.INTEGER_LITERAL


class TokenKind(IntEnum):
    """
    Kinds produced by the preprocessing engine.

    Primary kinds come first; the alternative and trigraph spellings that
    follow share a base id with one of them.
    """

    UNKNOWN = 0                 # default-constructed token

    # ── Operators and punctuators ──────────────────────────────────────────
    AND                = _kind(256, _OP)
    ANDAND             = _kind(257, _OP)
    ASSIGN             = _kind(258, _OP)
    ANDASSIGN          = _kind(259, _OP)
    OR                 = _kind(260, _OP)
    ORASSIGN           = _kind(261, _OP)
    XOR                = _kind(262, _OP)
    XORASSIGN          = _kind(263, _OP)
    COMMA              = _kind(264, _OP)
    COLON              = _kind(265, _OP)
    DIVIDE             = _kind(266, _OP)
    DIVIDEASSIGN       = _kind(267, _OP)
    DOT                = _kind(268, _OP)
    DOTSTAR            = _kind(269, _OP)
    ELLIPSIS           = _kind(270, _OP)
    EQUAL              = _kind(271, _OP)
    GREATER            = _kind(272, _OP)
    GREATEREQUAL       = _kind(273, _OP)
    LEFTBRACE          = _kind(274, _OP)
    LESS               = _kind(275, _OP)
    LESSEQUAL          = _kind(276, _OP)
    LEFTPAREN          = _kind(277, _OP)
    LEFTBRACKET        = _kind(278, _OP)
    MINUS              = _kind(279, _OP)
    MINUSASSIGN        = _kind(280, _OP)
    MINUSMINUS         = _kind(281, _OP)
    PERCENT            = _kind(282, _OP)
    PERCENTASSIGN      = _kind(283, _OP)
    NOT                = _kind(284, _OP)
    NOTEQUAL           = _kind(285, _OP)
    OROR               = _kind(286, _OP)
    PLUS               = _kind(287, _OP)
    PLUSASSIGN         = _kind(288, _OP)
    PLUSPLUS           = _kind(289, _OP)
    ARROW              = _kind(290, _OP)
    ARROWSTAR          = _kind(291, _OP)
    QUESTION_MARK      = _kind(292, _OP)
    RIGHTBRACE         = _kind(293, _OP)
    RIGHTPAREN         = _kind(294, _OP)
    RIGHTBRACKET       = _kind(295, _OP)
    COLON_COLON        = _kind(296, _OP)
    SEMICOLON          = _kind(297, _OP)
    SHIFTLEFT          = _kind(298, _OP)
    SHIFTLEFTASSIGN    = _kind(299, _OP)
    SHIFTRIGHT         = _kind(300, _OP)
    SHIFTRIGHTASSIGN   = _kind(301, _OP)
    STAR               = _kind(302, _OP)
    COMPL              = _kind(303, _OP)
    STARASSIGN         = _kind(304, _OP)

    # ── Keywords ───────────────────────────────────────────────────────────
    ASM                = _kind(305, _KW)
    AUTO               = _kind(306, _KW)
    BOOL               = _kind(307, _KW)
    FALSE              = _kind(308, TokenCategory.BOOL_LITERAL)
    TRUE               = _kind(309, TokenCategory.BOOL_LITERAL)
    BREAK              = _kind(310, _KW)
    CASE               = _kind(311, _KW)
    CATCH              = _kind(312, _KW)
    CHAR               = _kind(313, _KW)
    CLASS              = _kind(314, _KW)
    CONST              = _kind(315, _KW)
    CONSTCAST          = _kind(316, _KW)
    CONTINUE           = _kind(317, _KW)
    DEFAULT            = _kind(318, _KW)
    DELETE             = _kind(319, _KW)
    DO                 = _kind(320, _KW)
    DOUBLE             = _kind(321, _KW)
    DYNAMICCAST        = _kind(322, _KW)
    ELSE               = _kind(323, _KW)
    ENUM               = _kind(324, _KW)
    EXPLICIT           = _kind(325, _KW)
    EXPORT             = _kind(326, _KW)
    EXTERN             = _kind(327, _KW)
    FLOAT              = _kind(328, _KW)
    FOR                = _kind(329, _KW)
    FRIEND             = _kind(330, _KW)
    GOTO               = _kind(331, _KW)
    IF                 = _kind(332, _KW)
    INLINE             = _kind(333, _KW)
    INT                = _kind(334, _KW)
    LONG               = _kind(335, _KW)
    MUTABLE            = _kind(336, _KW)
    NAMESPACE          = _kind(337, _KW)
    NEW                = _kind(338, _KW)
    OPERATOR           = _kind(339, _KW)
    PRIVATE            = _kind(340, _KW)
    PROTECTED          = _kind(341, _KW)
    PUBLIC             = _kind(342, _KW)
    REGISTER           = _kind(343, _KW)
    REINTERPRETCAST    = _kind(344, _KW)
    RETURN             = _kind(345, _KW)
    SHORT              = _kind(346, _KW)
    SIGNED             = _kind(347, _KW)
    SIZEOF             = _kind(348, _KW)
    STATIC             = _kind(349, _KW)
    STATICCAST         = _kind(350, _KW)
    STRUCT             = _kind(351, _KW)
    SWITCH             = _kind(352, _KW)
    TEMPLATE           = _kind(353, _KW)
    THIS               = _kind(354, _KW)
    THROW              = _kind(355, _KW)
    TRY                = _kind(356, _KW)
    TYPEDEF            = _kind(357, _KW)
    TYPEID             = _kind(358, _KW)
    TYPENAME           = _kind(359, _KW)
    UNION              = _kind(360, _KW)
    UNSIGNED           = _kind(361, _KW)
    USING              = _kind(362, _KW)
    VIRTUAL            = _kind(363, _KW)
    VOID               = _kind(364, _KW)
    VOLATILE           = _kind(365, _KW)
    WCHART             = _kind(366, _KW)
    WHILE              = _kind(367, _KW)

    # ── Preprocessor directives ────────────────────────────────────────────
    PP_DEFINE          = _kind(368, _PP)
    PP_IF              = _kind(369, _PPC)
    PP_IFDEF           = _kind(370, _PPC)
    PP_IFNDEF          = _kind(371, _PPC)
    PP_ELSE            = _kind(372, _PPC)
    PP_ELIF            = _kind(373, _PPC)
    PP_ENDIF           = _kind(374, _PPC)
    PP_ERROR           = _kind(375, _PP)
    PP_LINE            = _kind(376, _PP)
    PP_PRAGMA          = _kind(377, _PP)
    PP_UNDEF           = _kind(378, _PP)
    PP_WARNING         = _kind(379, _PP)

    # ── Identifiers, literals, whitespace ──────────────────────────────────
    IDENTIFIER         = _kind(380, TokenCategory.IDENTIFIER)
    OCTALINT           = _kind(381, _INT)
    DECIMALINT         = _kind(382, _INT)
    HEXAINT            = _kind(383, _INT)
    INTLIT             = _kind(384, _INT)
    LONGINTLIT         = _kind(385, _INT)
    FLOATLIT           = _kind(386, TokenCategory.FLOATING_LITERAL)
    CCOMMENT           = _kind(387, TokenCategory.WHITESPACE, ALT_TOKEN)
    CPPCOMMENT         = _kind(388, TokenCategory.WHITESPACE, ALT_TOKEN)
    CHARLIT            = _kind(389, TokenCategory.CHARACTER_LITERAL)
    STRINGLIT          = _kind(390, TokenCategory.STRING_LITERAL)
    CONTLINE           = _kind(391, TokenCategory.EOL)
    SPACE              = _kind(392, TokenCategory.WHITESPACE)
    SPACE2             = _kind(393, TokenCategory.WHITESPACE)
    NEWLINE            = _kind(394, TokenCategory.EOL)
    POUND_POUND        = _kind(395, _OP)
    POUND              = _kind(396, _OP)
    ANY                = _kind(397, TokenCategory.UNKNOWN)
    PP_INCLUDE         = _kind(398, _PP)
    PP_QHEADER         = _kind(399, _PP)
    PP_HHEADER         = _kind(400, _PP)
    EOF                = _kind(401, TokenCategory.EOF)
    EOI                = _kind(402, TokenCategory.EOF)
    PP_NUMBER          = _kind(403, TokenCategory.INTERNAL)

    # ── Microsoft extensions ───────────────────────────────────────────────
    MSEXT_INT8         = _kind(404, _KW)
    MSEXT_INT16        = _kind(405, _KW)
    MSEXT_INT32        = _kind(406, _KW)
    MSEXT_INT64        = _kind(407, _KW)
    MSEXT_BASED        = _kind(408, _KW)
    MSEXT_DECLSPEC     = _kind(409, _KW)
    MSEXT_CDECL        = _kind(410, _KW)
    MSEXT_FASTCALL     = _kind(411, _KW)
    MSEXT_STDCALL      = _kind(412, _KW)
    MSEXT_TRY          = _kind(413, _KW)
    MSEXT_EXCEPT       = _kind(414, _KW)
    MSEXT_FINALLY      = _kind(415, _KW)
    MSEXT_LEAVE        = _kind(416, _KW)
    MSEXT_INLINE       = _kind(417, _KW)
    MSEXT_ASM          = _kind(418, _KW)
    MSEXT_PP_REGION    = _kind(419, _PP)
    MSEXT_PP_ENDREGION = _kind(420, _PP)

    # ── C++11 ──────────────────────────────────────────────────────────────
    IMPORT             = _kind(421, _KW)
    ALIGNAS            = _kind(422, _KW)
    ALIGNOF            = _kind(423, _KW)
    CHAR16_T           = _kind(424, _KW)
    CHAR32_T           = _kind(425, _KW)
    CONSTEXPR          = _kind(426, _KW)
    DECLTYPE           = _kind(427, _KW)
    NOEXCEPT           = _kind(428, _KW)
    NULLPTR            = _kind(429, _KW)
    STATICASSERT       = _kind(430, _KW)
    THREADLOCAL        = _kind(431, _KW)
    RAWSTRINGLIT       = _kind(432, TokenCategory.STRING_LITERAL)

    UNKNOWN_UNIVERSALCHAR = _kind(ord("\\"), TokenCategory.UNKNOWN)

    # ── Alternative spellings ──────────────────────────────────────────────
    AND_ALT            = _kind(256, _OP, ALT_EXT_TOKEN)
    ANDAND_ALT         = _kind(257, _OP, ALT_EXT_TOKEN)
    ANDASSIGN_ALT      = _kind(259, _OP, ALT_EXT_TOKEN)
    OR_ALT             = _kind(260, _OP, ALT_EXT_TOKEN)
    ORASSIGN_ALT       = _kind(261, _OP, ALT_EXT_TOKEN)
    XOR_ALT            = _kind(262, _OP, ALT_EXT_TOKEN)
    XORASSIGN_ALT      = _kind(263, _OP, ALT_EXT_TOKEN)
    LEFTBRACE_ALT      = _kind(274, _OP, ALT_TOKEN)
    LEFTBRACKET_ALT    = _kind(278, _OP, ALT_TOKEN)
    NOT_ALT            = _kind(284, _OP, ALT_EXT_TOKEN)
    NOTEQUAL_ALT       = _kind(285, _OP, ALT_EXT_TOKEN)
    OROR_ALT           = _kind(286, _OP, ALT_EXT_TOKEN)
    RIGHTBRACE_ALT     = _kind(293, _OP, ALT_TOKEN)
    RIGHTBRACKET_ALT   = _kind(295, _OP, ALT_TOKEN)
    COMPL_ALT          = _kind(303, _OP, ALT_EXT_TOKEN)
    FIXEDPOINTLIT      = _kind(386, TokenCategory.FLOATING_LITERAL, ALT_TOKEN)
    GENERATEDNEWLINE   = _kind(394, TokenCategory.EOL, ALT_TOKEN)
    POUND_POUND_ALT    = _kind(395, _OP, ALT_TOKEN)
    POUND_ALT          = _kind(396, _OP, ALT_TOKEN)
    PP_INCLUDE_NEXT    = _kind(398, _PP, ALT_TOKEN)
    PP_QHEADER_NEXT    = _kind(399, _PP, ALT_TOKEN)
    PP_HHEADER_NEXT    = _kind(400, _PP, ALT_TOKEN)

    # ── Trigraph spellings ─────────────────────────────────────────────────
    OR_TRIGRAPH           = _kind(260, _OP, TRIGRAPH_TOKEN)
    ORASSIGN_TRIGRAPH     = _kind(261, _OP, TRIGRAPH_TOKEN)
    XOR_TRIGRAPH          = _kind(262, _OP, TRIGRAPH_TOKEN)
    XORASSIGN_TRIGRAPH    = _kind(263, _OP, TRIGRAPH_TOKEN)
    LEFTBRACE_TRIGRAPH    = _kind(274, _OP, TRIGRAPH_TOKEN)
    LEFTBRACKET_TRIGRAPH  = _kind(278, _OP, TRIGRAPH_TOKEN)
    OROR_TRIGRAPH         = _kind(286, _OP, TRIGRAPH_TOKEN)
    RIGHTBRACE_TRIGRAPH   = _kind(293, _OP, TRIGRAPH_TOKEN)
    RIGHTBRACKET_TRIGRAPH = _kind(295, _OP, TRIGRAPH_TOKEN)
    COMPL_TRIGRAPH        = _kind(303, _OP, TRIGRAPH_TOKEN)
    POUND_POUND_TRIGRAPH  = _kind(395, _OP, TRIGRAPH_TOKEN)
    POUND_TRIGRAPH        = _kind(396, _OP, TRIGRAPH_TOKEN)
    ANY_TRIGRAPH          = _kind(397, TokenCategory.UNKNOWN, TRIGRAPH_TOKEN)


# ── Name tables ────────────────────────────────────────────────────────────
# Built once at import and never mutated afterwards, so readers on any
# thread can share them.

def base_id(kind: int) -> int:
    """Strip category, ext flags and the pp-token flag."""
    return kind & ~(EXT_TOKEN_TYPE_MASK | PP_TOKEN_FLAG)


def _build_tables():
    by_kind = {0: TokenKind.UNKNOWN.name}
    by_base = {}
    by_name = {TokenKind.UNKNOWN.name: 0}
    for member in TokenKind:
        if not member:
            continue
        base = base_id(member)
        if base in by_base:
            continue        # alternative spelling of an earlier kind
        by_base[base] = member.name
        by_kind[int(member)] = member.name
        by_name[member.name] = int(member)
    return by_kind, by_base, by_name


_by_kind, _by_base, _by_name = _build_tables()

KIND_NAMES = MappingProxyType(_by_kind)
BASE_NAMES = MappingProxyType(_by_base)
NAME_KINDS = MappingProxyType(_by_name)


def _build_category_index():
    index = {}
    for category in TokenCategory:
        index.setdefault(category & TOKEN_TYPE_MASK, []).append(category)
    # Categories that need extra ext bits are tried first.
    for categories in index.values():
        categories.sort(key=lambda c: c & EXT_TOKEN_ONLY_MASK, reverse=True)
    return MappingProxyType({k: tuple(v) for k, v in index.items()})


_CATEGORIES_BY_TYPE = _build_category_index()


# ── Lookups ────────────────────────────────────────────────────────────────
def category_of(kind: int) -> Optional[TokenCategory]:
    """Return the category encoded in *kind*, or None if the bits are not one we know."""
    for category in _CATEGORIES_BY_TYPE.get(kind & TOKEN_TYPE_MASK, ()):
        ext = category & EXT_TOKEN_ONLY_MASK
        if kind & ext == ext:
            return category
    return None


def is_category(kind: int, category: TokenCategory) -> bool:
    """
    True if *kind* belongs to *category*.

    The broad categories (LITERAL, PREPROCESSOR) also match their
    sub-categories, so an INTEGER_LITERAL kind is a LITERAL too.
    """
    if category_of(kind) is category:
        return True
    if category & ((TOKEN_TYPE_MASK & ~FAMILY_MASK) | EXT_TOKEN_ONLY_MASK):
        return False
    return (kind & FAMILY_MASK) == (category & FAMILY_MASK)


def token_name(kind: int) -> str:
    """
    Symbolic name of *kind* without the ``T_`` prefix.

    Exact ids win; flagged spellings fall back to their base id so
    ``and`` reports as ANDAND just like ``&&`` does.
    """
    name = KIND_NAMES.get(kind)
    if name is not None:
        return name
    if kind > 0:
        name = BASE_NAMES.get(base_id(kind))
        if name is not None:
            return name
    return f"UNKNOWN_{kind}"


def kind_from_name(name: str) -> int:
    """Reverse of token_name(); a leading ``T_`` is accepted."""
    key = name.strip().upper()
    if key.startswith("T_"):
        key = key[2:]
    try:
        return NAME_KINDS[key]
    except KeyError:
        raise UnknownKindError(name) from None
