from .chunk import chunk_children
from .redact import redact
from .text import shorten_string, split_lines

__all__ = [
    "chunk_children",
    "redact",
    "shorten_string",
    "split_lines",
]
