# subdivision/__init__.py
from seglib.subdivision.prompt_builder import build_subdivision_prompt
from seglib.subdivision.request import SubdivisionRequest, build_subdivision_request
from seglib.subdivision.slicer import restrict_to_pages, slice_chapter_text

__all__ = [
    "build_subdivision_prompt",
    "build_subdivision_request",
    "restrict_to_pages",
    "slice_chapter_text",
    "SubdivisionRequest",
]
