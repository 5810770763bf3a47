from seglib.processor.models import (
    ChapterIndexEntry,
    InvalidIndexError,
    LocatedTitle,
    Page,
    SectionResult,
    Span,
    SubChapterRecord,
)

__all__ = [
    "ChapterIndexEntry",
    "InvalidIndexError",
    "LocatedTitle",
    "Page",
    "SectionResult",
    "Span",
    "SubChapterRecord",
]
