"""
mkdocs-doxymd — Doxygen comment tags to Markdown.

Rewrites Doxygen-style comment bodies (``@param``, ``\\li``, ``@see``, ...)
as Markdown, either in place inside C/C++ sources or inside MkDocs pages.
"""

from .transform import MalformedAttributeList, transform

__version__ = "0.1.0"

__all__ = ["MalformedAttributeList", "transform", "__version__"]
