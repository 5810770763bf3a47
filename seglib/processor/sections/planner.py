# sections/planner.py
from typing import Optional

from .token_estimator import TokenEstimator, WordTokenEstimator

MIN_SECTIONS = 1
MAX_SECTIONS = 15


def plan_subdivisions(
    total_tokens:       int,
    tokens_per_section: int,
    min_sections:       int = MIN_SECTIONS,
    max_sections:       int = MAX_SECTIONS,
) -> int:
    """clamp(ceil(total_tokens / tokens_per_section), min_sections, max_sections)"""
    if tokens_per_section <= 0:
        raise ValueError("tokens_per_section debe ser positivo")
    if total_tokens < 0:
        raise ValueError("total_tokens no puede ser negativo")

    sections = -(-total_tokens // tokens_per_section)   # ceil entero
    return max(min_sections, min(max_sections, sections))


class SubdivisionPlanner:
    """
    Decide en cuántos subcapítulos debería partir la IA un capítulo
    que no trae desglose propio. No parte nada: solo calcula el número.
    """

    def __init__(
        self,
        tokens_per_section: int                      = 700,
        min_sections:       int                      = MIN_SECTIONS,
        max_sections:       int                      = MAX_SECTIONS,
        estimator:          Optional[TokenEstimator] = None,
    ):
        if tokens_per_section <= 0:
            raise ValueError("tokens_per_section debe ser positivo")
        if min_sections < 1 or max_sections < min_sections:
            raise ValueError(f"Rango de secciones inválido: [{min_sections}, {max_sections}]")

        self._tokens_per_section = tokens_per_section
        self._min_sections       = min_sections
        self._max_sections       = max_sections
        self._estimator          = estimator or WordTokenEstimator()

    @property
    def tokens_per_section(self) -> int:
        return self._tokens_per_section

    @property
    def estimator(self) -> TokenEstimator:
        return self._estimator

    def plan(self, total_tokens: int, tokens_per_section: Optional[int] = None) -> int:
        return plan_subdivisions(
            total_tokens,
            tokens_per_section or self._tokens_per_section,
            self._min_sections,
            self._max_sections,
        )

    def plan_text(self, text: str, tokens_per_section: Optional[int] = None) -> int:
        return self.plan(self._estimator.estimate(text), tokens_per_section)
