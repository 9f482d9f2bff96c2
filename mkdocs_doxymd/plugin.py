"""
MkDocs plugin that renders Doxygen comment bodies embedded in pages.

A fenced block whose info string is one of ``fence_languages``::

    ```doxygen
    Suspends the current thread.
    @param Alertable Whether the wait is alertable.
    @return NTSTATUS
    ```

is replaced by its Markdown rendering before MkDocs converts the page.
Bodies pasted straight from a header (``/** ... */`` or ``///``) are cleaned
of their comment delimiters first.
"""

from __future__ import annotations

import logging
import re
import textwrap

from mkdocs.config import config_options
from mkdocs.config.base import Config as MkDocsConfig
from mkdocs.exceptions import PluginError
from mkdocs.plugins import BasePlugin

from .comments import clean_comment, is_comment
from .transform import MalformedAttributeList, transform

log = logging.getLogger("mkdocs.plugins.doxymd")

# Any fenced block, labeled or not, so fences nested inside another block are
# never rewritten. The closing fence may be longer than the opening one.
_FENCE_RE = re.compile(
    r"^(?P<indent>[ \t]*)(?P<fence>(?P<fchar>[`~])(?P=fchar){2,})(?!(?P=fchar))"
    r"[ \t]*(?P<lang>[\w.+-]*)[^\n]*\n"
    r"(?P<body>.*?)"
    r"^(?P=indent)(?P=fence)(?P=fchar)*[ \t]*$",
    re.MULTILINE | re.DOTALL,
)


class DoxymdConfig(MkDocsConfig):
    fence_languages = config_options.Type(list, default=["doxygen", "doxy"])
    strict = config_options.Type(bool, default=False)
    clean_comments = config_options.Type(bool, default=True)


def render_block(body, *, clean_comments=True):
    """Markdown for the contents of one fenced block."""
    text = textwrap.dedent(body)
    if clean_comments and is_comment(text):
        text = clean_comment(text)
    return transform(text).rstrip("\n")


class DoxymdPlugin(BasePlugin[DoxymdConfig]):

    def __init__(self):
        super().__init__()
        self._converted = 0
        self._skipped = 0

    def _languages(self):
        return {lang.lower() for lang in self.config["fence_languages"]}

    def _replace_block(self, m, src_uri, languages):
        if m.group("lang").lower() not in languages:
            return m.group(0)
        try:
            md = render_block(m.group("body"), clean_comments=self.config["clean_comments"])
        except MalformedAttributeList as exc:
            if self.config["strict"]:
                raise PluginError(f"doxymd: {src_uri}: {exc}") from exc
            log.warning("doxymd: %s: %s, block left unchanged", src_uri, exc)
            self._skipped += 1
            return m.group(0)
        self._converted += 1
        indent = m.group("indent")
        return textwrap.indent(md, indent) if indent else md

    # ── MkDocs lifecycle hooks ──

    def on_config(self, config, **kwargs):
        self._converted = 0
        self._skipped = 0
        if not self.config["fence_languages"]:
            log.warning("doxymd: fence_languages is empty, no blocks will be converted")
        return config

    def on_page_markdown(self, markdown, *, page, config, files, **kwargs):
        src_uri = getattr(page.file, "src_uri", None) or page.file.src_path
        languages = self._languages()
        if not languages:
            return markdown
        return _FENCE_RE.sub(lambda m: self._replace_block(m, src_uri, languages), markdown)

    def on_post_build(self, *, config, **kwargs):
        if self._converted or self._skipped:
            log.info(
                "doxymd: %d doxygen blocks converted, %d left unchanged",
                self._converted,
                self._skipped,
            )
