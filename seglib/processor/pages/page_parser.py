# pages/page_parser.py
import logging
import re

from seglib.processor.models import Page
from seglib.processor.sections.models import DEFAULT_PAGE_MARKER

logger = logging.getLogger(__name__)


class DuplicatePageError(ValueError):
    """El mismo número de página aparece más de una vez (solo en modo estricto)."""
    pass


class PageParser:
    """
    Responsabilidad única: partir el texto marcado con '=== PÁGINA N ==='
    en una lista ordenada de Pages.

    - Sin marcadores reconocibles → todo el texto es la página 1.
    - Página repetida → gana la última aparición (con warning),
      salvo en modo estricto, donde se lanza DuplicatePageError.
    """

    def __init__(self, marker_pattern: str = DEFAULT_PAGE_MARKER, strict: bool = False):
        self._marker = re.compile(marker_pattern, re.IGNORECASE)
        self._strict = strict

    def parse(self, text: str) -> list[Page]:
        if not text or not text.strip():
            return []

        matches = list(self._marker.finditer(text))
        if not matches:
            logger.debug("Sin marcadores de página — el texto completo es la página 1")
            return [Page(number=1, text=text)]

        preamble = text[: matches[0].start()].strip()
        if preamble:
            logger.warning(
                "Se descartan %d caracteres previos al primer marcador de página",
                len(preamble),
            )

        pages: dict[int, str] = {}
        for i, match in enumerate(matches):
            number = int(match.group(1))
            start  = match.end()
            end    = matches[i + 1].start() if i + 1 < len(matches) else len(text)

            if number in pages:
                if self._strict:
                    raise DuplicatePageError(f"Página {number} repetida en el documento")
                logger.warning("Página %d repetida — se conserva la última aparición", number)

            pages[number] = text[start:end].strip()

        return [Page(number=n, text=pages[n]) for n in sorted(pages)]
