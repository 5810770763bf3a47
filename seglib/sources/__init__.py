# sources/__init__.py
from seglib.sources.base import BaseSource
from seglib.sources.factory import SourceFactory, UnsupportedFormatError
from seglib.sources.pdf_source import PdfSource
from seglib.sources.txt_source import TxtSource

__all__ = [
    "BaseSource",
    "SourceFactory",
    "UnsupportedFormatError",
    "PdfSource",
    "TxtSource",
]
