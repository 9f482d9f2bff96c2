#!/usr/bin/env python3
"""
Batch convert Doxygen tags to Markdown in C/C++ doc comments.

Usage:
    python -m mkdocs_doxymd.convert src/
    python -m mkdocs_doxymd.convert src/ntapi.h --dry-run
    python -m mkdocs_doxymd.convert src/ --ext .c .h --backup --style line
"""

import argparse
import logging
import os
import re
import shutil
import sys

from .comments import COMMENT_STYLES, clean_comment, wrap_comment
from .transform import TAG_MARKERS, MalformedAttributeList, transform

log = logging.getLogger("mkdocs.plugins.doxymd")

# Block doc comments and runs of /// (or //!) lines, only where they start a line
_DOC_COMMENT_RE = re.compile(
    r"^(?P<indent>[ \t]*)(?P<comment>"
    r"/\*[*!](?![*/]).*?\*/"
    r"|//[/!](?!/)[^\r\n]*(?:\r?\n[ \t]*//[/!](?!/)[^\r\n]*)*"
    r")",
    re.MULTILINE | re.DOTALL,
)


def _comment_style(comment):
    return "line" if comment.startswith("//") else "block"


def convert_text(text, *, strict=False, style=None, source="<string>"):
    """Convert every doc comment in ``text``.

    Returns ``(new_text, converted, malformed)``. Comments without any tag
    marker, or whose Markdown is identical to their body, are left
    byte-for-byte alone. ``style`` forces ``"block"`` or ``"line"`` output; by
    default each comment keeps its own. Rewritten comments use the text's
    line ending (CRLF if it has any).
    """
    counts = {"converted": 0, "malformed": 0}
    newline = "\r\n" if "\r\n" in text else "\n"

    def convert_match(m):
        full = m.group(0)
        indent = m.group("indent")
        comment = m.group("comment")
        body = clean_comment(comment)
        if not TAG_MARKERS.intersection(body):
            return full
        try:
            markdown = transform(body)
        except MalformedAttributeList as exc:
            if strict:
                raise
            line = text.count("\n", 0, m.start()) + 1
            log.warning("doxymd: %s:%d: %s, comment left unchanged", source, line, exc)
            counts["malformed"] += 1
            return full
        if markdown == body:
            return full
        counts["converted"] += 1
        return wrap_comment(
            markdown, indent=indent, style=style or _comment_style(comment), newline=newline
        )

    result = _DOC_COMMENT_RE.sub(convert_match, text)
    return result, counts["converted"], counts["malformed"]


def convert_file(path, dry_run=False, backup=False, strict=False, style=None):
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        original = f.read()

    result, converted, _ = convert_text(original, strict=strict, style=style, source=path)

    if result == original:
        return False

    log.debug("doxymd: %s: %d comments converted", path, converted)

    if dry_run:
        return True

    if backup:
        shutil.copy2(path, path + ".bak")

    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(result)
    return True


def _collect_files(target, exts):
    files = []
    if os.path.isfile(target):
        files.append(target)
    elif os.path.isdir(target):
        for dirpath, _, fnames in os.walk(target):
            for fn in sorted(fnames):
                _, ext = os.path.splitext(fn)
                if ext.lower() in exts:
                    files.append(os.path.join(dirpath, fn))
    else:
        return None
    return files


def main(argv=None):
    p = argparse.ArgumentParser(
        description="Convert Doxygen tags to Markdown in C/C++ doc comments"
    )
    p.add_argument("path", help="File or directory to convert")
    p.add_argument(
        "--ext",
        nargs="+",
        default=[".c", ".h", ".cpp", ".hpp"],
        help="File extensions to process (default: .c .h .cpp .hpp)",
    )
    p.add_argument(
        "--dry-run", action="store_true", help="Show what would change without modifying files"
    )
    p.add_argument("--backup", action="store_true", help="Create .bak files before modifying")
    p.add_argument(
        "--strict",
        action="store_true",
        help="Stop on the first malformed @param attribute list instead of skipping the comment",
    )
    p.add_argument(
        "--style",
        choices=COMMENT_STYLES,
        default=None,
        help="Rewrite comments as /** */ blocks or /// lines (default: keep each comment's style)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log every converted file")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    target = args.path
    exts = set(e if e.startswith(".") else f".{e}" for e in args.ext)

    files = _collect_files(target, exts)
    if files is None:
        print(f"error: {target} not found", file=sys.stderr)
        sys.exit(1)

    changed = 0
    for fpath in files:
        try:
            was_changed = convert_file(
                fpath,
                dry_run=args.dry_run,
                backup=args.backup,
                strict=args.strict,
                style=args.style,
            )
        except MalformedAttributeList as exc:
            print(f"error: {fpath}: {exc}", file=sys.stderr)
            sys.exit(1)
        if was_changed:
            changed += 1
            tag = "[dry-run] " if args.dry_run else ""
            print(f"{tag}converted: {fpath}")

    total = len(files)
    print(f"\n{changed}/{total} files {'would be ' if args.dry_run else ''}modified")


if __name__ == "__main__":
    main()
