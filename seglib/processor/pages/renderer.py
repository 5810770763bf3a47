# pages/renderer.py
from dataclasses import dataclass, field
from typing import Iterable, Optional

PAGE_MARKER_TEMPLATE = "=== PÁGINA {number} ==="


@dataclass(frozen=True)
class DocumentPage:
    """Página tal como la devuelve el OCR: número + líneas de texto."""
    number: int
    lines:  tuple[str, ...] = field(default_factory=tuple)


def render_marked_text(
    pages:     Iterable[DocumentPage],
    page_from: Optional[int] = None,
    page_to:   Optional[int] = None,
    template:  str           = PAGE_MARKER_TEMPLATE,
) -> str:
    """
    Construye el texto marcado que consume el PageParser:

        === PÁGINA 3 ===
        primera línea
        segunda línea

    Las líneas en blanco se omiten. Si se indica un rango de páginas
    (inclusivo), solo se renderizan las páginas dentro del rango.
    """
    blocks: list[str] = []

    for page in sorted(pages, key=lambda p: p.number):
        if page_from is not None and page.number < page_from:
            continue
        if page_to is not None and page.number > page_to:
            continue

        lines = [line for line in page.lines if line and line.strip()]
        blocks.append("\n".join([template.format(number=page.number), *lines]))

    return "\n\n".join(blocks).strip()
