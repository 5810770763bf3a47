import re
from dataclasses import dataclass, fields

DEFAULT_PAGE_MARKER = r"===\s*PÁGINA\s*(\d+)\s*==="

_KNOWN_ESTIMATORS = {"words", "tiktoken"}


@dataclass(frozen=True)
class ExtractorConfig:
    """Configuración del extractor. Centralizada, explícita y de solo lectura."""

    # Paginación
    page_marker_pattern: str = DEFAULT_PAGE_MARKER
    page_separator:      str = "\n\n"
    strict_pages:        bool = False   # True → página duplicada es error de datos

    # Resolución de rangos
    global_subchapter_fallback: bool = True   # buscar en todo el documento si no aparece en su capítulo
    emit_bare_chapters:         bool = False  # capítulo sin subcapítulos → un único registro

    # Planificación de subdivisión
    tokens_per_section: int = 700
    min_sections:       int = 1
    max_sections:       int = 15

    # Conteo de tokens
    token_estimator: str = "words"
    tiktoken_model:  str = "gpt-4"

    def __post_init__(self):
        self._check_types()

        try:
            compiled = re.compile(self.page_marker_pattern, re.IGNORECASE)
        except re.error as e:
            raise ValueError(f"page_marker_pattern no es una regex válida: {e}") from e
        if compiled.groups < 1:
            raise ValueError("page_marker_pattern necesita un grupo con el número de página")

        if self.tokens_per_section <= 0:
            raise ValueError("tokens_per_section debe ser positivo")
        if self.min_sections < 1 or self.max_sections < self.min_sections:
            raise ValueError(
                f"Rango de secciones inválido: [{self.min_sections}, {self.max_sections}]"
            )
        if self.token_estimator not in _KNOWN_ESTIMATORS:
            raise ValueError(
                f"token_estimator desconocido: '{self.token_estimator}'. "
                f"Opciones: {', '.join(sorted(_KNOWN_ESTIMATORS))}"
            )

    def _check_types(self) -> None:
        """Los valores llegan de YAML: "700" o "no" no valen como int o bool."""
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type is bool:
                valid = isinstance(value, bool)
            elif f.type is int:
                valid = isinstance(value, int) and not isinstance(value, bool)
            else:
                valid = isinstance(value, f.type)
            if not valid:
                raise ValueError(
                    f"{f.name} debe ser de tipo {f.type.__name__}, "
                    f"no {type(value).__name__} ({value!r})"
                )
