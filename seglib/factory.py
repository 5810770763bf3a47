# seglib/factory.py
from typing import Optional

from seglib.config_loader import load_extractor_config
from seglib.processor.sections.extractor import ChapterExtractor
from seglib.processor.sections.models import ExtractorConfig
from seglib.processor.sections.planner import SubdivisionPlanner
from seglib.processor.sections.token_estimator import build_estimator


def build_extractor(
    config:      Optional[ExtractorConfig] = None,
    config_path: Optional[str]             = None,
) -> ChapterExtractor:
    """
    Ensambla el ChapterExtractor con sus dependencias.
    Punto de entrada único para el CLI y los tests de integración.

    Si no se pasa config, se carga con load_extractor_config(config_path).
    """
    config = config or load_extractor_config(config_path)
    return ChapterExtractor(
        config    = config,
        estimator = build_estimator(config.token_estimator, config.tiktoken_model),
    )


def build_planner(config: Optional[ExtractorConfig] = None) -> SubdivisionPlanner:
    config = config or ExtractorConfig()
    return SubdivisionPlanner(
        tokens_per_section = config.tokens_per_section,
        min_sections       = config.min_sections,
        max_sections       = config.max_sections,
        estimator          = build_estimator(config.token_estimator, config.tiktoken_model),
    )
