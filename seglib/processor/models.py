# processor/models.py
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Optional


class InvalidIndexError(ValueError):
    """El índice de capítulos recibido no tiene la forma esperada."""
    pass


@dataclass(frozen=True)
class Page:
    """Una página del documento tal como la entrega el PageParser."""
    number: int
    text:   str


@dataclass(frozen=True)
class ChapterIndexEntry:
    """
    Entrada del índice externo: título del capítulo + títulos de subcapítulos
    en el orden declarado.
    """
    title:             str
    subchapter_titles: tuple[str, ...] = field(default_factory=tuple)

    _TITLE_KEYS      = ("title", "chapter", "chapterTitle", "chapter_title")
    _SUBCHAPTER_KEYS = ("subchapters", "subchapterTitles", "subchapter_titles")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChapterIndexEntry":
        """
        Construye una entrada validada a partir de datos sueltos (YAML/JSON).

        Raises:
            InvalidIndexError: si falta el título o los subcapítulos no son
            una lista de strings.
        """
        if not isinstance(data, Mapping):
            raise InvalidIndexError(
                f"Cada capítulo debe ser un objeto, no {type(data).__name__}"
            )

        title = _first_present(data, cls._TITLE_KEYS)
        if not isinstance(title, str) or not title.strip():
            raise InvalidIndexError(f"Capítulo sin título válido: {dict(data)!r}")

        raw_subs = _first_present(data, cls._SUBCHAPTER_KEYS)
        if raw_subs is None:
            raw_subs = []
        if not isinstance(raw_subs, (list, tuple)):
            raise InvalidIndexError(
                f"Los subcapítulos de '{title}' deben ser una lista"
            )

        subs: list[str] = []
        for sub in raw_subs:
            if not isinstance(sub, str):
                raise InvalidIndexError(
                    f"Subcapítulo no textual en '{title}': {sub!r}"
                )
            if sub.strip():
                subs.append(sub)

        return cls(title=title, subchapter_titles=tuple(subs))


@dataclass(frozen=True)
class LocatedTitle:
    """Resultado transitorio del TitleMatcher. offset=None → no encontrado."""
    title:  str
    offset: Optional[int]

    @property
    def found(self) -> bool:
        return self.offset is not None


@dataclass(frozen=True)
class Span:
    """Rango semiabierto [start, end) sobre el texto concatenado."""
    start: int
    end:   int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Span inválido: [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def overlaps(self, other: "Span") -> bool:
        return self.start < other.end and other.start < self.end

    def slice(self, text: str) -> str:
        return text[self.start:self.end]


@dataclass(frozen=True)
class SubChapterRecord:
    chapter_title:    str
    subchapter_title: str     # sin numeración
    text:             str     # ya limpio, con el encabezado del capítulo delante
    from_page:        int
    to_page:          int
    token_count:      int


@dataclass(frozen=True)
class SectionResult:
    """Unidad que se devuelve a los llamadores."""
    chapter_title: str
    from_page:     int
    to_page:       int
    subchapter:    SubChapterRecord

    def to_dict(self) -> dict:
        return asdict(self)


def _first_present(data: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None
