# sections/matcher.py
import logging
import re
from typing import Optional

from .normalizer import collapse_whitespace, strip_leading_numbering

logger = logging.getLogger(__name__)

_SAMPLE_MAX_TOKENS = 3
_SAMPLE_MAX_CHARS  = 30


class TitleMatcher:
    """
    Localiza el offset de un título dentro de una región de texto.

    No es fuzzy matching: prueba variantes del título en orden de prioridad
    (contención sin distinguir mayúsculas) y devuelve el primer acierto.
    Ninguna variante se compara con otra una vez que una funciona.
    """

    def find(
        self,
        haystack:           str,
        needle:             str,
        haystack_collapsed: Optional[str] = None,
    ) -> Optional[int]:
        """
        Devuelve el offset del título en `haystack`, o None.

        Orden de variantes:
        1. título tal cual
        2. título sin numeración
        3. título con whitespace colapsado
        4. título con saltos de línea como espacios
        5. título colapsado dentro del haystack colapsado, mapeado de vuelta
           al original con una muestra corta (aproximado)
        """
        if not needle or not needle.strip() or not haystack or not haystack.strip():
            return None

        variants = [
            needle,
            strip_leading_numbering(needle),
            collapse_whitespace(needle),
            needle.replace("\r", " ").replace("\n", " "),
        ]
        for strategy, variant in enumerate(variants, start=1):
            if not variant or not variant.strip():
                continue
            pos = _index_of(haystack, variant)
            if pos is not None:
                logger.debug("'%s' encontrado con la variante %d en %d", needle, strategy, pos)
                return pos

        if not haystack_collapsed:
            haystack_collapsed = collapse_whitespace(haystack)
        pos = map_collapsed_match(haystack, haystack_collapsed, collapse_whitespace(needle))
        if pos is not None:
            logger.debug("'%s' encontrado en el texto colapsado, mapeado a %d", needle, pos)
        return pos

    def find_in_range(self, haystack: str, needle: str, start: int, end: int) -> Optional[int]:
        """Como find(), restringido a haystack[start:end]. Devuelve offset absoluto."""
        start = max(start, 0)
        end   = min(end, len(haystack))
        if start >= end:
            return None

        pos = self.find(haystack[start:end], needle)
        return start + pos if pos is not None else None

    # ------------------------------------------------------------------
    # Título tal cual y, si falla, sin numeración
    # ------------------------------------------------------------------

    def locate(
        self,
        haystack:           str,
        title:              str,
        haystack_collapsed: Optional[str] = None,
    ) -> Optional[int]:
        pos = self.find(haystack, title, haystack_collapsed)
        if pos is None:
            pos = self.find(haystack, strip_leading_numbering(title), haystack_collapsed)
        return pos

    def locate_in_range(self, haystack: str, title: str, start: int, end: int) -> Optional[int]:
        pos = self.find_in_range(haystack, title, start, end)
        if pos is None:
            pos = self.find_in_range(haystack, strip_leading_numbering(title), start, end)
        return pos


def sample_for_mapping(collapsed_needle: str) -> str:
    """Primeras palabras (máx. 3) del título colapsado, cortadas a 30 caracteres."""
    if not collapsed_needle or not collapsed_needle.strip():
        return ""
    tokens = [t for t in collapsed_needle.split(" ") if t.strip()]
    return " ".join(tokens[:_SAMPLE_MAX_TOKENS])[:_SAMPLE_MAX_CHARS]


def map_collapsed_match(
    haystack:           str,
    haystack_collapsed: str,
    collapsed_needle:   str,
) -> Optional[int]:
    """
    Si el título colapsado aparece en el texto colapsado, busca una muestra
    corta del título literalmente en el texto original para obtener un offset.
    Es un mapeo aproximado: si la muestra no aparece tal cual → None.
    """
    if not collapsed_needle or not haystack_collapsed:
        return None
    if _index_of(haystack_collapsed, collapsed_needle) is None:
        return None

    sample = sample_for_mapping(collapsed_needle)
    if not sample:
        return None
    return _index_of(haystack, sample)


def _index_of(haystack: str, needle: str) -> Optional[int]:
    """Búsqueda sin distinguir mayúsculas que conserva los offsets del original."""
    match = re.search(re.escape(needle), haystack, re.IGNORECASE)
    return match.start() if match else None
