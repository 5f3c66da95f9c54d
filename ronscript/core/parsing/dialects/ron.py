"""
RoN script dialect configuration.

Defines RON_DIALECT: the keyword sets of Rise of Nations scenario
scripts (.bhs), a small C-like language without pointers, structs or
preprocessor directives.

Declarations recognized:
- variable: `int a, b = 2;`, `string[] names;`
- function: `scenario name(...)`, `conquest name(...)`, `ai name(...)`
- label: entries of a `labels { ... }` block
"""

from ..config import DialectConfig


# =============================================================================
# Keyword Sets
# =============================================================================

RON_TYPE_KEYWORDS = [
    "int", "real", "float", "string", "String", "anytype", "void", "bool",
]

RON_FUNCTION_KEYWORDS = ["scenario", "conquest", "ai"]

# `trigger` blocks are not functions, but no variable may be named after them
RON_DECLARATOR_KEYWORDS = RON_FUNCTION_KEYWORDS + ["trigger"]

RON_MODIFIERS = ["ref", "static", "local"]

RON_COMPLETION_KEYWORDS = [
    "static", "int", "real", "float", "string", "void", "bool", "anytype",
    "scenario", "conquest", "ai", "trigger",
]


# =============================================================================
# Configuration
# =============================================================================

RON_DIALECT = DialectConfig(
    name="RoN Script",
    extensions={'.bhs', '.bhsi'},
    type_keywords=RON_TYPE_KEYWORDS,
    function_keywords=RON_FUNCTION_KEYWORDS,
    declarator_keywords=RON_DECLARATOR_KEYWORDS,
    modifiers=RON_MODIFIERS,
    label_block_keyword="labels",
    completion_keywords=RON_COMPLETION_KEYWORDS,
)
