"""seglib — segmentación de documentos paginados en capítulos y subcapítulos."""
from seglib.processor.models import ChapterIndexEntry, SectionResult, SubChapterRecord
from seglib.processor.sections.extractor import ChapterExtractor
from seglib.processor.sections.models import ExtractorConfig
from seglib.processor.sections.planner import SubdivisionPlanner

__all__ = [
    "ChapterExtractor",
    "ChapterIndexEntry",
    "ExtractorConfig",
    "SectionResult",
    "SubChapterRecord",
    "SubdivisionPlanner",
]
