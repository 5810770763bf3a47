# sections/extractor.py
import logging
from typing import Optional, Sequence

from seglib.processor.models import (
    ChapterIndexEntry,
    LocatedTitle,
    SectionResult,
    Span,
    SubChapterRecord,
)
from seglib.processor.pages.concatenator import ConcatenatedText, TextConcatenator
from seglib.processor.pages.page_parser import DuplicatePageError, PageParser
from .matcher import TitleMatcher
from .models import ExtractorConfig
from .normalizer import clean_extracted_text, strip_leading_numbering
from .resolver import ChapterSpan, RangeResolver
from .token_estimator import TokenEstimator, build_estimator

logger = logging.getLogger(__name__)

_HEADER_JOINER = "\n\n"


class ChapterExtractor:
    """
    Punto de entrada público del segmentador.

    Recibe el texto paginado y el índice de capítulos y devuelve un
    SectionResult por cada subcapítulo localizado, con su texto limpio,
    su rango de páginas y su tamaño en tokens.

    Contrato: extract() nunca lanza. Un título que no aparece es una
    omisión; un fallo inesperado en un capítulo o subcapítulo se registra
    y se salta sin afectar a los demás.
    """

    def __init__(
        self,
        config:    Optional[ExtractorConfig] = None,
        estimator: Optional[TokenEstimator]  = None,
        matcher:   Optional[TitleMatcher]    = None,
    ):
        self._config       = config or ExtractorConfig()
        self._estimator    = estimator or build_estimator(
            self._config.token_estimator, self._config.tiktoken_model
        )
        self._page_parser  = PageParser(
            self._config.page_marker_pattern, strict=self._config.strict_pages
        )
        self._concatenator = TextConcatenator(self._config.page_separator)
        self._resolver     = RangeResolver(
            matcher or TitleMatcher(),
            global_fallback=self._config.global_subchapter_fallback,
        )

    def extract(self, text: str, index: Sequence[ChapterIndexEntry]) -> list[SectionResult]:
        results: list[SectionResult] = []

        if not text or not text.strip() or not index:
            logger.info("Texto o índice vacío — nada que extraer")
            return results

        try:
            document = self.build_document(text)
            chapters = self._resolver.resolve_chapters(document, index)
            chapter_starts = [c.span.start for c in chapters]

            logger.info(
                "%d de %d capítulos localizados en %d páginas",
                len(chapters), len(index), len(document.page_starts),
            )

            for chapter in chapters:
                try:
                    results.extend(self._extract_chapter(document, chapter, chapter_starts))
                except Exception:
                    logger.exception("Error procesando el capítulo '%s' — se omite", chapter.entry.title)

        except DuplicatePageError as e:
            logger.warning("Documento rechazado: %s", e)
            return []

        except Exception:
            logger.exception(
                "Error inesperado en la extracción — se devuelven %d secciones parciales",
                len(results),
            )

        return sorted(results, key=lambda r: (r.from_page, r.subchapter.subchapter_title))

    def locate(self, text: str, index: Sequence[ChapterIndexEntry]) -> list[LocatedTitle]:
        """
        Diagnóstico: dónde se encontró cada capítulo y subcapítulo del índice.
        Un capítulo descartado por repetir el offset de otro cuenta como no
        encontrado, igual que en extract(). Los subcapítulos de un capítulo
        no encontrado aparecen como no encontrados.
        """
        if not text or not text.strip() or not index:
            return []

        document = self.build_document(text)
        resolved = {c.position: c for c in self._resolver.resolve_chapters(document, index)}
        located: list[LocatedTitle] = []

        for position, entry in enumerate(index):
            chapter = resolved.get(position)
            located.append(LocatedTitle(
                title  = entry.title,
                offset = chapter.span.start if chapter else None,
            ))
            for title in entry.subchapter_titles:
                if chapter is None:
                    located.append(LocatedTitle(title=title, offset=None))
                else:
                    located.append(self._resolver.locate_subchapter(document, chapter, title))

        return located

    def build_document(self, text: str) -> ConcatenatedText:
        """Texto paginado → texto concatenado con su tabla de páginas."""
        pages = self._page_parser.parse(text)
        return self._concatenator.concatenate(pages)

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    def _extract_chapter(
        self,
        document:       ConcatenatedText,
        chapter:        ChapterSpan,
        chapter_starts: list[int],
    ) -> list[SectionResult]:
        entry = chapter.entry

        if not entry.subchapter_titles:
            if self._config.emit_bare_chapters:
                title = strip_leading_numbering(entry.title)
                return [self._build_result(document, entry.title, title, chapter.span, header="")]
            logger.info("Capítulo '%s' sin subcapítulos declarados", entry.title)
            return []

        located: list[LocatedTitle] = []
        for title in entry.subchapter_titles:
            try:
                hit = self._resolver.locate_subchapter(document, chapter, title)
            except Exception:
                logger.exception("Error localizando el subcapítulo '%s' — se omite", title)
                continue
            if not hit.found:
                logger.info("Subcapítulo no encontrado, se omite: '%s'", title)
            located.append(hit)

        spans  = self._resolver.subchapter_spans(document, chapter, located, chapter_starts)
        header = self._resolver.header_span(chapter, spans).slice(document.text).strip()

        results: list[SectionResult] = []
        for sub in spans:
            try:
                results.append(self._build_result(
                    document,
                    chapter_title = entry.title,
                    raw_title     = sub.title,
                    span          = sub.span,
                    header        = header,
                ))
            except Exception:
                logger.exception("Error extrayendo el subcapítulo '%s' — se omite", sub.title)

        logger.debug("Capítulo '%s': %d subcapítulos extraídos", entry.title, len(results))
        return results

    def _build_result(
        self,
        document:      ConcatenatedText,
        chapter_title: str,
        raw_title:     str,
        span:          Span,
        header:        str,
    ) -> SectionResult:
        body     = span.slice(document.text).strip()
        combined = f"{header}{_HEADER_JOINER}{body}" if header.strip() else body
        text     = clean_extracted_text(combined, raw_title)

        from_page = document.page_for_offset(span.start)
        to_page   = document.page_for_offset(max(0, span.end - 1))

        record = SubChapterRecord(
            chapter_title    = chapter_title,
            subchapter_title = strip_leading_numbering(raw_title),
            text             = text,
            from_page        = from_page,
            to_page          = to_page,
            token_count      = self._estimator.estimate(text),
        )
        return SectionResult(
            chapter_title = chapter_title,
            from_page     = from_page,
            to_page       = to_page,
            subchapter    = record,
        )
