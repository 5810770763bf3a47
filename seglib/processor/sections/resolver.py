# sections/resolver.py
import logging
from bisect import bisect_right
from dataclasses import dataclass
from typing import Optional, Sequence

from seglib.processor.models import ChapterIndexEntry, LocatedTitle, Span
from seglib.processor.pages.concatenator import ConcatenatedText
from .matcher import TitleMatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChapterSpan:
    """Capítulo localizado y su rango [offset, siguiente capítulo)."""
    entry:    ChapterIndexEntry
    span:     Span
    position: int = 0   # posición en el índice declarado


@dataclass(frozen=True)
class SubchapterSpan:
    title:      str    # título tal como viene en el índice
    span:       Span
    in_chapter: bool   # False si solo se encontró con la búsqueda global


class RangeResolver:
    """
    Convierte offsets localizados en rangos que no se solapan.

    - Capítulos: se buscan en todo el documento y se ordenan por offset
      (no por el orden declarado en el índice).
    - Subcapítulos: se buscan dentro de su capítulo y, opcionalmente,
      en todo el documento como último recurso.
    """

    def __init__(self, matcher: TitleMatcher, global_fallback: bool = True):
        self._matcher         = matcher
        self._global_fallback = global_fallback

    # ------------------------------------------------------------------
    # Capítulos
    # ------------------------------------------------------------------

    def locate_chapters(
        self, document: ConcatenatedText, index: Sequence[ChapterIndexEntry]
    ) -> list[LocatedTitle]:
        return [
            LocatedTitle(
                title  = entry.title,
                offset = self._matcher.locate(document.text, entry.title, document.collapsed),
            )
            for entry in index
        ]

    def resolve_chapters(
        self, document: ConcatenatedText, index: Sequence[ChapterIndexEntry]
    ) -> list[ChapterSpan]:
        """
        Capítulos encontrados, ordenados por offset, con su rango.
        Los no encontrados se omiten. Si dos capítulos caen en el mismo
        offset, se queda el declarado primero.
        """
        found: list[tuple[ChapterIndexEntry, int, int]] = []
        claimed: set[int] = set()

        located_chapters = self.locate_chapters(document, index)
        for position, (entry, located) in enumerate(zip(index, located_chapters)):
            if not located.found:
                logger.info("Capítulo no encontrado, se omite: '%s'", entry.title)
                continue
            if located.offset in claimed:
                logger.warning(
                    "Capítulo '%s' cae en el mismo offset (%d) que otro anterior — se omite",
                    entry.title, located.offset,
                )
                continue
            claimed.add(located.offset)
            found.append((entry, located.offset, position))

        found.sort(key=lambda item: item[1])

        spans: list[ChapterSpan] = []
        for i, (entry, offset, position) in enumerate(found):
            end = found[i + 1][1] if i + 1 < len(found) else len(document)
            spans.append(ChapterSpan(entry=entry, span=Span(offset, end), position=position))
        return spans

    # ------------------------------------------------------------------
    # Subcapítulos
    # ------------------------------------------------------------------

    def locate_subchapter(
        self, document: ConcatenatedText, chapter: ChapterSpan, title: str
    ) -> LocatedTitle:
        """Primero dentro del capítulo; después, si está permitido, en todo el documento."""
        offset = self._matcher.locate_in_range(
            document.text, title, chapter.span.start, chapter.span.end
        )
        if offset is None and self._global_fallback:
            offset = self._matcher.locate(document.text, title, document.collapsed)
            if offset is not None:
                logger.info(
                    "Subcapítulo '%s' encontrado fuera de '%s' (offset %d)",
                    title, chapter.entry.title, offset,
                )
        return LocatedTitle(title=title, offset=offset)

    def subchapter_spans(
        self,
        document:       ConcatenatedText,
        chapter:        ChapterSpan,
        located:        Sequence[LocatedTitle],
        chapter_starts: Sequence[int],
    ) -> list[SubchapterSpan]:
        """
        Rango de cada subcapítulo encontrado, ordenado por inicio.

        El fin de un subcapítulo es el menor offset, mayor que el suyo,
        entre los demás subcapítulos encontrados del mismo capítulo;
        si no hay ninguno, el fin del capítulo que lo contiene.
        """
        claimed: set[int] = set()
        resolved: list[tuple[str, int]] = []
        for item in located:
            if not item.found:
                continue
            if item.offset in claimed:
                logger.warning(
                    "Subcapítulo '%s' repite el offset %d de otro subcapítulo — se omite",
                    item.title, item.offset,
                )
                continue
            claimed.add(item.offset)
            resolved.append((item.title, item.offset))

        offsets = sorted(claimed)
        spans: list[SubchapterSpan] = []

        for title, offset in sorted(resolved, key=lambda item: item[1]):
            in_chapter = chapter.span.contains(offset)
            limit = (
                chapter.span.end
                if in_chapter
                else _next_boundary(chapter_starts, offset, len(document))
            )
            following = _next_greater(offsets, offset)
            end = min(following, limit) if following is not None else limit
            spans.append(SubchapterSpan(title=title, span=Span(offset, end), in_chapter=in_chapter))

        return spans

    @staticmethod
    def header_span(chapter: ChapterSpan, spans: Sequence[SubchapterSpan]) -> Span:
        """Desde el inicio del capítulo hasta su primer subcapítulo interno."""
        inner = [s.span.start for s in spans if s.in_chapter]
        end = min(inner) if inner else chapter.span.end
        return Span(chapter.span.start, end)


def _next_greater(sorted_values: Sequence[int], value: int) -> Optional[int]:
    idx = bisect_right(sorted_values, value)
    return sorted_values[idx] if idx < len(sorted_values) else None


def _next_boundary(chapter_starts: Sequence[int], offset: int, text_length: int) -> int:
    following = _next_greater(sorted(chapter_starts), offset)
    return following if following is not None else text_length
