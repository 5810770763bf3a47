# seglib/config_loader.py
import logging
import os
from dataclasses import fields
from pathlib import Path
from typing import Optional

import yaml

from seglib.processor.sections.models import ExtractorConfig

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path.home() / ".seglib" / "config.yaml"
_CONFIG_ENV_VAR      = "SEGLIB_CONFIG_PATH"


def load_extractor_config(config_path: Optional[str] = None) -> ExtractorConfig:
    """
    Carga la configuración del extractor desde YAML.

    Orden de resolución: argumento → $SEGLIB_CONFIG_PATH → ~/.seglib/config.yaml.
    Una ruta explícita (argumento o entorno) que no existe es un error;
    si falta el archivo por defecto se usan los valores por defecto.
    Las claves pueden ir en la raíz o bajo una sección `extractor:`.
    """
    explicit = config_path or os.environ.get(_CONFIG_ENV_VAR)
    path = Path(explicit) if explicit else _DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Config no encontrada en {path}")
        logger.debug("Sin config en %s — usando valores por defecto", path)
        return ExtractorConfig()

    with path.open(encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"La config en {path} debe ser un mapa YAML")

    section = raw.get("extractor", raw)
    if not isinstance(section, dict):
        raise ValueError(f"La sección 'extractor' en {path} debe ser un mapa YAML")
    return config_from_dict(section)


def config_from_dict(values: dict) -> ExtractorConfig:
    """Construye un ExtractorConfig ignorando (con warning) las claves desconocidas."""
    known = {f.name for f in fields(ExtractorConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        logger.warning("Claves de config desconocidas ignoradas: %s", ", ".join(unknown))
    return ExtractorConfig(**{k: v for k, v in values.items() if k in known})
