"""Exceptions raised at the loading seams of csl-richtext.

Rendering itself never raises for incomplete data; these are only used where
styles, locales and item files enter the package.
"""

from __future__ import annotations


class CslRichTextError(Exception):
    """Base class for all package errors."""


class LocaleLoadError(CslRichTextError):
    """A locale term file could not be read or validated."""


class StyleLoadError(CslRichTextError):
    """A style reference did not resolve to a style model."""


class ItemDataError(CslRichTextError):
    """An item data file is not a list of CSL-JSON objects."""
