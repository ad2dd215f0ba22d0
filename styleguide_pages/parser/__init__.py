"""Default source parser producing the page map consumed by the builder."""

from .comments import DocComment, extract_comments
from .doc_parser import SUPPORTED_EXTENSIONS, DocParser

__all__ = ["SUPPORTED_EXTENSIONS", "DocComment", "DocParser", "extract_comments"]
