# sources/pdf_source.py
import logging

from seglib.processor.pages.renderer import DocumentPage, render_marked_text
from .base import BaseSource

logger = logging.getLogger(__name__)


class PdfSource(BaseSource):
    """
    PDF con capa de texto.

    Extrae las líneas de cada página con PyMuPDF (fitz) y las renderiza
    con marcadores '=== PÁGINA N ===' (numeración desde 1).
    No hace OCR: un PDF escaneado sin capa de texto produce páginas vacías.

    Requiere: pip install pymupdf
    """

    def can_handle(self, file_path: str) -> bool:
        return file_path.lower().endswith(".pdf")

    def load(self, file_path: str) -> str:
        try:
            import fitz  # pymupdf
        except ImportError:
            raise ImportError(
                "El soporte PDF requiere pymupdf. Instálalo con: pip install pymupdf"
            )

        doc = fitz.open(file_path)
        try:
            pages = [
                DocumentPage(
                    number = i + 1,
                    lines  = tuple(page.get_text("text").splitlines()),
                )
                for i, page in enumerate(doc)
            ]
        finally:
            doc.close()

        empty = sum(1 for p in pages if not any(line.strip() for line in p.lines))
        if empty:
            logger.warning("%d de %d páginas sin texto extraíble en %s", empty, len(pages), file_path)

        return render_marked_text(pages)
