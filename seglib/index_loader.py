# seglib/index_loader.py
import logging
from pathlib import Path
from typing import Any

import yaml

from seglib.processor.models import ChapterIndexEntry, InvalidIndexError

logger = logging.getLogger(__name__)

_SUPPORTED_EXTENSIONS = {".yaml", ".yml", ".json"}


def load_chapter_index(index_path: str) -> list[ChapterIndexEntry]:
    """
    Lee el índice de capítulos desde YAML o JSON (JSON es YAML válido).

    Formatos aceptados:
        - lista de capítulos
        - mapa con la lista bajo `chapters`

    Raises:
        FileNotFoundError: si el archivo no existe.
        InvalidIndexError: si el contenido no es un índice válido.
    """
    path = Path(index_path)
    if not path.is_file():
        raise FileNotFoundError(f"Índice no encontrado: {index_path}")
    if path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise InvalidIndexError(
            f"Formato de índice no soportado: '{path.suffix}'. "
            f"Formatos disponibles: {', '.join(sorted(_SUPPORTED_EXTENSIONS))}"
        )

    with path.open(encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidIndexError(f"Índice ilegible en {index_path}: {e}") from e

    return parse_chapter_index(raw)


def parse_chapter_index(raw: Any) -> list[ChapterIndexEntry]:
    if isinstance(raw, dict):
        raw = raw.get("chapters")
    if not isinstance(raw, list):
        raise InvalidIndexError("El índice debe ser una lista de capítulos")

    entries = [ChapterIndexEntry.from_dict(item) for item in raw]
    logger.debug(
        "Índice cargado: %d capítulos, %d subcapítulos",
        len(entries), sum(len(e.subchapter_titles) for e in entries),
    )
    return entries
