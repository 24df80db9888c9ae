"""Pagination Codecs."""

from catalog.application.pagination.native_cursor import NativeCursorCodec
from catalog.application.pagination.skip_token import SkipTokenCodec

__all__ = ["NativeCursorCodec", "SkipTokenCodec"]
