# subdivision/request.py
import logging
from dataclasses import dataclass
from typing import Optional

from seglib.processor.sections.planner import SubdivisionPlanner
from seglib.processor.sections.token_estimator import TokenEstimator, WordTokenEstimator
from .prompt_builder import build_subdivision_prompt
from .slicer import slice_chapter_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubdivisionRequest:
    chapter_title: str
    content:       str
    total_tokens:  int
    section_count: int
    prompt:        str


def build_subdivision_request(
    text:               str,
    chapter_title:      str,
    next_chapter_title: Optional[str]                = None,
    planner:            Optional[SubdivisionPlanner] = None,
    estimator:          Optional[TokenEstimator]     = None,
    tokens_per_section: Optional[int]                = None,
) -> Optional[SubdivisionRequest]:
    """
    Recorta el capítulo, calcula en cuántas partes dividirlo y arma el prompt.
    Devuelve None si el capítulo no aparece en el texto.
    """
    content = slice_chapter_text(text, chapter_title, next_chapter_title)
    if not content:
        logger.info("Capítulo no encontrado para subdividir: '%s'", chapter_title)
        return None

    if planner is None:
        planner = SubdivisionPlanner(estimator=estimator or WordTokenEstimator())
    estimator = estimator or planner.estimator

    total_tokens  = estimator.estimate(content)
    section_count = planner.plan(total_tokens, tokens_per_section)

    logger.debug(
        "Capítulo '%s': %d tokens, %d secciones", chapter_title, total_tokens, section_count
    )

    return SubdivisionRequest(
        chapter_title = chapter_title,
        content       = content,
        total_tokens  = total_tokens,
        section_count = section_count,
        prompt        = build_subdivision_prompt(chapter_title, content, section_count),
    )
