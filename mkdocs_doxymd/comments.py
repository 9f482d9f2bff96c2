"""
C/C++ doc comment delimiters.

The transform works on bare comment bodies. This module strips the
``/** ... */`` / ``///`` decoration off raw comments found in sources and
puts it back around the converted Markdown.
"""

from __future__ import annotations

import re
import textwrap

_LINE_PREFIX_RE = re.compile(r"^[ \t]*//[/!][ \t]?", re.MULTILINE)

COMMENT_STYLES = ("block", "line")


def _clean_block_comment(raw):
    text = raw
    if text.startswith(("/**", "/*!")):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    if text.endswith("*/"):
        text = text[:-2]

    cleaned = []
    for line in text.split("\n"):
        s = line.lstrip()
        if s.startswith("* "):
            cleaned.append(s[2:])
        elif s.startswith("*"):
            cleaned.append(s[1:])
        else:
            cleaned.append(line)

    # Leftover decoration lines at either end
    while cleaned and not cleaned[-1].strip("* \t\r"):
        cleaned.pop()
    while cleaned and not cleaned[0].strip("* \t\r"):
        cleaned.pop(0)

    return textwrap.dedent("\n".join(cleaned)).strip()


def clean_comment(raw):
    """Return the body of a ``/** */``, ``/*! */``, ``///`` or ``//!`` comment."""
    if raw.lstrip().startswith(("///", "//!")):
        return _LINE_PREFIX_RE.sub("", raw).strip()
    return _clean_block_comment(raw.strip())


def is_comment(text):
    return text.lstrip().startswith(("/*", "//"))


def wrap_comment(markdown, indent="", style="block", newline="\n"):
    """Wrap Markdown back into a doc comment, indented by ``indent``.

    Lines are joined with ``newline`` so the comment matches the file it goes
    back into. Markdown containing ``*/`` cannot live inside a block comment
    and is always written as ``///`` lines.
    """
    if style not in COMMENT_STYLES:
        raise ValueError(f"unknown comment style: {style!r}")
    lines = markdown.rstrip("\r\n").split("\n")
    if style == "line" or "*/" in markdown:
        return newline.join(f"{indent}/// {ln}".rstrip() for ln in lines)
    body = newline.join(f"{indent} * {ln}".rstrip() for ln in lines)
    return f"{indent}/**{newline}{body}{newline}{indent} */"
