# processor/pages/__init__.py
from seglib.processor.pages.concatenator import ConcatenatedText, TextConcatenator
from seglib.processor.pages.page_parser import DuplicatePageError, PageParser
from seglib.processor.pages.renderer import DocumentPage, render_marked_text

__all__ = [
    "ConcatenatedText",
    "TextConcatenator",
    "DuplicatePageError",
    "PageParser",
    "DocumentPage",
    "render_marked_text",
]
