import os

from .base import BaseSource
from .pdf_source import PdfSource
from .txt_source import TxtSource


class UnsupportedFormatError(Exception):
    """Se lanza cuando ninguna fuente registrada puede leer el archivo."""
    pass


class SourceFactory:
    """
    Registro central de fuentes de texto paginado.

    Uso básico:
        text = SourceFactory.load_file("/ruta/al/documento.pdf")

    Las fuentes se evalúan en orden de registro.
    La primera que responda True a can_handle() gana.
    """

    _DEFAULT_SOURCES: list[BaseSource] = [
        PdfSource(),
        TxtSource(),
    ]

    def __init__(self):
        self._sources: list[BaseSource] = list(self._DEFAULT_SOURCES)

    def register(self, source: BaseSource) -> None:
        """Registra una fuente adicional al inicio de la lista (mayor prioridad)."""
        self._sources.insert(0, source)

    def load(self, file_path: str) -> str:
        """
        Raises:
            FileNotFoundError: si el archivo no existe.
            UnsupportedFormatError: si ninguna fuente puede leerlo.
        """
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"Archivo no encontrado: {file_path}")

        for source in self._sources:
            if source.can_handle(file_path):
                return source.load(file_path)

        ext = os.path.splitext(file_path)[1].lower()
        raise UnsupportedFormatError(
            f"Formato '{ext}' no soportado. Formatos disponibles: .txt, .md, .pdf"
        )

    @classmethod
    def load_file(cls, file_path: str) -> str:
        """Shortcut: SourceFactory.load_file('documento.txt')"""
        return cls().load(file_path)
