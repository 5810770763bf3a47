# sections/normalizer.py
"""
Transformaciones de texto que usan el matcher, el extractor y el slicer.
Todas son funciones puras: string in, string out.
"""
import re

_WHITESPACE_RE = re.compile(r"\s+")

# Orden de prioridad: solo se aplica el primero que haga match.
_NUMBERING_PATTERNS: list[re.Pattern] = [
    re.compile(r"^\s*\d+(?:\.\d+)*[.)]?\s*"),               # "12.", "3.2)", "1.1.3 "
    re.compile(r"^\s*[IVXLCDM]+\.\s*", re.IGNORECASE),       # "IV."
    re.compile(r"^\s*[A-Z]\.\s*"),                           # "A."
]

_COMPARE_DROP   = str.maketrans("", "", ".,:;\"'")
_COMPARE_SPACES = str.maketrans({"-": " ", "_": " ", "\t": " "})

_LINE_ENDINGS_RE = re.compile(r"\r\n|\r")
_BLANK_RUNS_RE   = re.compile(r"\n{3,}")
_TITLE_TRAILER   = " \t\r\n:"


def collapse_whitespace(text: str) -> str:
    """Cualquier secuencia de whitespace → un espacio. Con trim."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_leading_numbering(text: str) -> str:
    """
    Quita la numeración inicial de un título:
        "1. Introduction"  → "Introduction"
        "3.2) Métodos"     → "Métodos"
        "IV. History"      → "History"
        "A. Overview"      → "Overview"
    """
    if not text or not text.strip():
        return text or ""
    for pattern in _NUMBERING_PATTERNS:
        stripped, count = pattern.subn("", text, count=1)
        if count:
            return stripped.strip()
    return text.strip()


def normalize_for_compare(text: str) -> str:
    """Forma canónica para comparaciones de igualdad entre títulos y líneas."""
    if not text:
        return ""
    normalized = text.strip().translate(_COMPARE_DROP).translate(_COMPARE_SPACES)
    return collapse_whitespace(normalized)


def title_matches_line(line: str, title: str) -> bool:
    """
    Comparación flexible línea ↔ título:
    1. igualdad de formas normalizadas
    2. la línea contiene el título normalizado
    3. igualdad una vez quitada la numeración de ambos
    Todo sin distinguir mayúsculas.
    """
    if not line or not title:
        return False

    norm_line  = normalize_for_compare(line).casefold()
    norm_title = normalize_for_compare(title).casefold()
    if not norm_title:
        return False

    if norm_line == norm_title or norm_title in norm_line:
        return True

    bare_line  = strip_leading_numbering(normalize_for_compare(line)).casefold()
    bare_title = strip_leading_numbering(normalize_for_compare(title)).casefold()
    return bool(bare_title) and bare_line == bare_title


def clean_extracted_text(block: str, subchapter_title: str) -> str:
    """
    Limpieza final del texto de un subcapítulo:
    - si empieza por el título (sin numeración), se quita junto con
      los separadores que lo siguen
    - saltos de línea normalizados a \\n
    - como mucho una línea en blanco seguida
    """
    if not block or not block.strip():
        return ""

    result = block.strip()

    title = strip_leading_numbering(subchapter_title or "").strip()
    if title:
        match = re.match(re.escape(title), result, re.IGNORECASE)
        if match:
            result = result[match.end():].lstrip(_TITLE_TRAILER)

    result = _LINE_ENDINGS_RE.sub("\n", result)
    result = _BLANK_RUNS_RE.sub("\n\n", result)
    return result.strip()
