"""
Dialect configuration data structures.

Defines DialectConfig, the keyword sets a script dialect is recognized by,
and compiles them into the patterns the extractors scan masked text with.

Design principle: New dialects are added via config, not code changes.
"""

import re
from dataclasses import dataclass, field
from typing import List, Pattern, Set


@dataclass
class DialectConfig:
    """
    Configuration for recognizing declarations in a script dialect.

    Encapsulates all dialect-specific rules:
    - File extensions to match
    - Type keywords that open a variable declaration
    - Function keywords that open a function header
    - Modifiers that may precede a type in a declaration list
    - Keywords offered as static completions

    Attributes:
        name: Human-readable name (e.g., "RoN Script")
        extensions: File extensions this config handles (e.g., {'.bhs'})
        type_keywords: Type names; also reserved as variable names
        function_keywords: Keywords introducing a function header
        declarator_keywords: Words that may never be a declared variable's
            first name (function keywords plus any extra ones)
        modifiers: Declaration modifiers (e.g., "ref", "static")
        label_block_keyword: Keyword opening a label block
        completion_keywords: Keywords offered in the static completion list
        token_chars: Regex character class of cursor-token characters
        hover_forward_chars: Regex character class the hover scan extends
            over to the right of the cursor
        pointer_marker: Character that marks a pointer declaration
        source: Tag attached to diagnostics
    """
    # Identity
    name: str
    extensions: Set[str]

    # Keyword sets
    type_keywords: List[str] = field(default_factory=list)
    function_keywords: List[str] = field(default_factory=list)
    declarator_keywords: List[str] = field(default_factory=list)
    modifiers: List[str] = field(default_factory=list)
    label_block_keyword: str = "labels"
    completion_keywords: List[str] = field(default_factory=list)

    # Cursor scanning
    token_chars: str = r"[a-zA-Z0-9_#@]"
    hover_forward_chars: str = r"[a-zA-Z0-9_]"

    pointer_marker: str = "*"
    source: str = "ronscript"

    def __post_init__(self):
        self._patterns: dict = {}

    def is_type_keyword(self, word: str) -> bool:
        """Check if a word is a reserved type keyword."""
        return word in self.type_keywords

    # =========================================================================
    # Compiled patterns
    # =========================================================================

    def _alternation(self, words: List[str]) -> str:
        # Longest first so "String" never loses to a shorter prefix
        return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))

    def _compiled(self, key: str, build) -> Pattern:
        if key not in self._patterns:
            self._patterns[key] = re.compile(build())
        return self._patterns[key]

    @property
    def declaration_pattern(self) -> Pattern:
        """
        Typed declaration: a type keyword followed by a comma-separated
        identifier list, each entry optionally initialized.

        A later entry that itself starts with a type keyword or a modifier
        begins a new declaration and ends the list.
        """
        def build() -> str:
            types = self._alternation(self.type_keywords)
            declarators = self._alternation(self.declarator_keywords or self.function_keywords)
            stops = self._alternation(self.type_keywords + self.modifiers)
            marker = re.escape(self.pointer_marker)
            entry_tail = r"(?:\[\])?\s*(?:=\s*[^;]+)?"
            return (
                rf"\b(?:{types})(?:\[\])?(?=[\s{marker}])"
                rf"\s*{marker}*\s*(?!(?:{declarators})\b)\w+{entry_tail}"
                rf"(?:\s*,\s*(?!(?:{stops})(?:\[\])?\s){marker}*\s*\w+{entry_tail})*"
            )
        return self._compiled("declaration", build)

    @property
    def type_prefix_pattern(self) -> Pattern:
        """Leading type keyword of a declaration match."""
        return self._compiled(
            "type_prefix",
            lambda: rf"^(?:{self._alternation(self.type_keywords)})(?:\[\])?",
        )

    @property
    def function_pattern(self) -> Pattern:
        """Function header or forward declaration: `scenario foo(int a) {` or `;`."""
        return self._compiled(
            "function",
            lambda: (
                rf"\b(?P<keyword>{self._alternation(self.function_keywords)})\s+"
                r"(?P<name>\w+)\s*\((?P<params>[^;]*?)\)\s*[{;]"
            ),
        )

    @property
    def forward_declaration_pattern(self) -> Pattern:
        """Forward declaration including an optional return type."""
        return self._compiled(
            "forward_declaration",
            lambda: (
                rf"(?:\b(?:{self._alternation(self.type_keywords)})(?:\[\])?\s+)?"
                rf"\b(?:{self._alternation(self.function_keywords)})\s+\w+\s*\([^;()]*\)\s*;"
            ),
        )

    @property
    def function_body_pattern(self) -> Pattern:
        """Function header that opens a body."""
        return self._compiled(
            "function_body",
            lambda: (
                rf"\b(?:{self._alternation(self.function_keywords)})\s+\w+\s*\([^;()]*\)\s*\{{"
            ),
        )

    @property
    def label_block_pattern(self) -> Pattern:
        """`labels { a, b = 2 }` block."""
        return self._compiled(
            "label_block",
            lambda: rf"\b{re.escape(self.label_block_keyword)}\s*\{{(?P<body>[^}}]+)\}}",
        )

    @property
    def token_char_pattern(self) -> Pattern:
        """Single character of a cursor token."""
        return self._compiled("token_char", lambda: self.token_chars)

    @property
    def hover_forward_pattern(self) -> Pattern:
        """Single character the hover scan may consume after the cursor."""
        return self._compiled("hover_forward", lambda: self.hover_forward_chars)
