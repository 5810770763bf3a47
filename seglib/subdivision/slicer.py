# subdivision/slicer.py
from typing import Optional

from seglib.processor.pages.page_parser import PageParser
from seglib.processor.pages.renderer import DocumentPage, render_marked_text
from seglib.processor.sections.models import DEFAULT_PAGE_MARKER
from seglib.processor.sections.normalizer import title_matches_line


def restrict_to_pages(
    text:           str,
    page_from:      Optional[int] = None,
    page_to:        Optional[int] = None,
    marker_pattern: str           = DEFAULT_PAGE_MARKER,
) -> str:
    """
    Texto marcado reducido a las páginas [page_from, page_to] (inclusivo).
    Se vuelve a renderizar con marcadores '=== PÁGINA N ==='.
    """
    if page_from is not None and page_to is not None and page_to < page_from:
        raise ValueError(f"Rango de páginas inválido: [{page_from}, {page_to}]")

    pages = PageParser(marker_pattern).parse(text)
    return render_marked_text(
        [DocumentPage(p.number, tuple(p.text.splitlines())) for p in pages],
        page_from = page_from,
        page_to   = page_to,
    )


def slice_chapter_text(
    text:               str,
    chapter_title:      str,
    next_chapter_title: Optional[str] = None,
) -> str:
    """
    Texto de un capítulo sin desglose, recortado por líneas.

    Empieza en la primera línea que coincide con chapter_title (incluida)
    y termina antes de la primera línea posterior que coincide con
    next_chapter_title. Las líneas en blanco se descartan.
    Devuelve "" si el título no aparece.
    """
    chapter_title = (chapter_title or "").strip()
    if not text or not chapter_title:
        return ""

    next_title = (next_chapter_title or "").strip()
    collected: list[str] = []
    found_start = False

    for line in text.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue

        if not found_start:
            if title_matches_line(trimmed, chapter_title):
                found_start = True
                collected.append(line)
            continue

        if next_title and title_matches_line(trimmed, next_title):
            break
        collected.append(line)

    return "\n".join(collected).strip()
