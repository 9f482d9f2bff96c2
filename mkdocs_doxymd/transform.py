"""
Doxygen tag dialect to Markdown.

A single left-to-right pass over a comment body. Plain characters are
copied through, a ``@`` or ``\\`` marker starts a tag which is looked up in
a closed table of known tags and rendered as Markdown. ``@param``,
``@return`` and ``@see`` additionally open a section (``# Arguments``,
``# Returns``, ``# See also``) the first time one of them is seen.

The input is the comment *body*: delimiters such as ``/**``, ``*/`` and
leading ``*`` markers must already be gone (see :mod:`.comments`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .tokens import TokenStream

TAG_MARKERS = frozenset("@\\")

ARGUMENTS_HEADER = "# Arguments"
RETURNS_HEADER = "# Returns"
SEE_ALSO_HEADER = "# See also"

_SECTION_SPACER = "\n\n"


class MalformedAttributeList(ValueError):
    """A ``@param[...]`` attribute list is missing its ``[`` or ``]``."""


class TagKind(Enum):
    PARAM = auto()
    CODE = auto()
    REF = auto()
    SEE = auto()
    EMPHASIS = auto()
    BOLD = auto()
    NOTE = auto()
    SINCE = auto()
    DEPRECATED = auto()
    REMARK = auto()
    LIST_ITEM = auto()
    PARAGRAPH = auto()
    RETURNS = auto()
    GROUP_START = auto()
    GROUP_END = auto()
    BRIEF = auto()
    UNKNOWN = auto()


_TAG_KINDS = {
    "param": TagKind.PARAM,
    "c": TagKind.CODE,
    "p": TagKind.CODE,
    "ref": TagKind.REF,
    "see": TagKind.SEE,
    "sa": TagKind.SEE,
    "a": TagKind.EMPHASIS,
    "e": TagKind.EMPHASIS,
    "em": TagKind.EMPHASIS,
    "b": TagKind.BOLD,
    "note": TagKind.NOTE,
    "since": TagKind.SINCE,
    "deprecated": TagKind.DEPRECATED,
    "remark": TagKind.REMARK,
    "remarks": TagKind.REMARK,
    "li": TagKind.LIST_ITEM,
    "par": TagKind.PARAGRAPH,
    "returns": TagKind.RETURNS,
    "return": TagKind.RETURNS,
    "result": TagKind.RETURNS,
    "{": TagKind.GROUP_START,
    "}": TagKind.GROUP_END,
    "brief": TagKind.BRIEF,
    "short": TagKind.BRIEF,
}

# Tags that only emit a fixed prefix; the text after them flows through
# the normal character loop.
_PREFIX_FRAGMENTS = {
    TagKind.NOTE: "> **Note** ",
    TagKind.SINCE: "> **Since** ",
    TagKind.DEPRECATED: "> **Deprecated** ",
    TagKind.REMARK: "> ",
    TagKind.LIST_ITEM: "- ",
    TagKind.PARAGRAPH: "# ",
}

_IGNORED = frozenset({TagKind.GROUP_START, TagKind.GROUP_END, TagKind.BRIEF})


@dataclass(frozen=True)
class Tag:
    marker: str
    name: str
    kind: TagKind

    @classmethod
    def parse(cls, marker, name):
        return cls(marker, name, _TAG_KINDS.get(name, TagKind.UNKNOWN))

    @property
    def raw(self):
        return f"{self.marker}{self.name}"


class MarkdownBuffer:
    """Ordered output fragments plus the set of section headers already emitted."""

    def __init__(self):
        self.fragments: list[str] = []
        self._sections: set[str] = set()

    def push(self, fragment: str) -> None:
        self.fragments.append(fragment)

    def section(self, header: str) -> None:
        if header in self._sections:
            return
        self._sections.add(header)
        self.push(header)
        self.push(_SECTION_SPACER)

    def render(self) -> str:
        return "".join(self.fragments)


def format_ref(target):
    if "://" in target:
        return f"[{target}]({target})"
    return f"`{target}`"


def _parse_param(tokens, out):
    out.section(ARGUMENTS_HEADER)
    name = tokens.take_word()
    attributes = ""
    if not name:
        if tokens.next_char() != "[":
            raise MalformedAttributeList("Expected opening '[' inside attribute list")
        attrs = tokens.take_while(lambda c: c != "]")
        if tokens.next_char() != "]":
            raise MalformedAttributeList("Expected closing ']' inside attribute list")
        attributes = f" [{attrs}] "
        tokens.skip_whitespace()
        name = tokens.take_word()
    out.push(f"* `{name}`{attributes} -")


def dispatch(tag: Tag, tokens: TokenStream, out: MarkdownBuffer) -> None:
    """Render one tag into ``out``, consuming its argument word(s) from ``tokens``."""
    kind = tag.kind
    if kind is TagKind.PARAM:
        _parse_param(tokens, out)
    elif kind is TagKind.CODE:
        out.push(f"`{tokens.take_word()}`")
    elif kind is TagKind.REF:
        out.push(format_ref(tokens.take_word()))
    elif kind is TagKind.SEE:
        out.section(SEE_ALSO_HEADER)
        out.push(f"> {format_ref(tokens.take_word())}")
    elif kind is TagKind.EMPHASIS:
        out.push(f"_{tokens.take_word()}_")
    elif kind is TagKind.BOLD:
        out.push(f"**{tokens.take_word()}**")
    elif kind in _PREFIX_FRAGMENTS:
        out.push(_PREFIX_FRAGMENTS[kind])
    elif kind is TagKind.RETURNS:
        out.section(RETURNS_HEADER)
    elif kind in _IGNORED:
        # @{ / @} groups and @brief carry no Markdown of their own
        pass
    else:
        out.push(f"{tag.raw} ")


def transform(text: str) -> str:
    """Convert a Doxygen comment body to Markdown.

    Leading whitespace is dropped, and so is the indentation after every
    newline. Raises :class:`MalformedAttributeList` if a ``@param`` has a
    broken ``[...]`` attribute list; nothing is returned in that case.
    """
    tokens = TokenStream(text)
    out = MarkdownBuffer()

    tokens.skip_whitespace()
    for char in tokens:
        if char in TAG_MARKERS:
            tag = Tag.parse(char, tokens.take_word())
            tokens.skip_whitespace()
            dispatch(tag, tokens, out)
        elif char == "\n":
            tokens.skip_whitespace()
            out.push(char)
        else:
            out.push(char)
    return out.render()
