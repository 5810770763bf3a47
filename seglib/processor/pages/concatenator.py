# pages/concatenator.py
from bisect import bisect_right
from dataclasses import dataclass, field

from seglib.processor.models import Page
from seglib.processor.sections.normalizer import collapse_whitespace


@dataclass(frozen=True)
class ConcatenatedText:
    """
    Buffer único del documento + tabla de offsets de inicio por página.
    Todas las posiciones que maneja el extractor son offsets sobre `text`.
    """
    text:        str
    page_starts: tuple[tuple[int, int], ...]   # (página, offset de inicio), ascendente
    collapsed:   str = field(default="", compare=False, repr=False)

    def __len__(self) -> int:
        return len(self.text)

    @property
    def pages(self) -> list[int]:
        return [page for page, _ in self.page_starts]

    def page_for_offset(self, offset: int) -> int:
        """
        Mayor número de página cuyo inicio es <= offset.
        Offsets anteriores a la primera página caen en la primera.
        Tabla vacía → página 1.
        """
        if not self.page_starts:
            return 1
        starts = [start for _, start in self.page_starts]
        idx = bisect_right(starts, offset) - 1
        return self.page_starts[max(idx, 0)][0]


class TextConcatenator:
    """Une las páginas en orden ascendente registrando dónde empieza cada una."""

    def __init__(self, separator: str = "\n\n"):
        self._separator = separator

    def concatenate(self, pages: list[Page]) -> ConcatenatedText:
        parts:  list[str] = []
        starts: list[tuple[int, int]] = []
        length = 0

        for page in sorted(pages, key=lambda p: p.number):
            starts.append((page.number, length))
            parts.append(page.text)
            parts.append(self._separator)
            length += len(page.text) + len(self._separator)

        text = "".join(parts)
        return ConcatenatedText(
            text        = text,
            page_starts = tuple(starts),
            collapsed   = collapse_whitespace(text),
        )
