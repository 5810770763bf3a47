# sources/txt_source.py
import os

from .base import BaseSource

_SUPPORTED_EXTENSIONS = {".txt", ".md"}


class TxtSource(BaseSource):
    """
    Texto ya extraído (normalmente la salida de un OCR) guardado en disco.
    Se entrega tal cual: el PageParser se encarga de los marcadores.
    """

    def can_handle(self, file_path: str) -> bool:
        _, ext = os.path.splitext(file_path)
        return ext.lower() in _SUPPORTED_EXTENSIONS

    def load(self, file_path: str) -> str:
        """Lee el archivo intentando UTF-8 primero, latin-1 como fallback."""
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError:
            with open(file_path, "r", encoding="latin-1") as f:
                return f.read()
