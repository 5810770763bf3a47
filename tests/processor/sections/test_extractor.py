import logging

import pytest

from seglib.processor.models import ChapterIndexEntry, SectionResult
from seglib.processor.sections.extractor import ChapterExtractor
from seglib.processor.sections.matcher import TitleMatcher
from seglib.processor.sections.models import ExtractorConfig

# ---------------------------------------------------------------------------
# Fixtures y helpers
# ---------------------------------------------------------------------------

SAMPLE_TEXT = (
    "=== PÁGINA 1 ===\nChapter One\nIntro text.\n"
    "=== PÁGINA 2 ===\nSub A\nBody A.\nSub B\nBody B."
)


@pytest.fixture
def extractor():
    return ChapterExtractor()


@pytest.fixture
def sample_index():
    return [ChapterIndexEntry("Chapter One", ("Sub A", "Sub B"))]


class _FailingMatcher(TitleMatcher):
    """Matcher que falla al buscar un título concreto dentro de su capítulo."""

    def __init__(self, failing_title: str):
        self._failing_title = failing_title

    def locate_in_range(self, haystack, title, start, end):
        if title == self._failing_title:
            raise RuntimeError("fallo simulado")
        return super().locate_in_range(haystack, title, start, end)


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


def test_ejemplo_completo_produce_dos_subcapitulos(extractor, sample_index):
    # Act
    results = extractor.extract(SAMPLE_TEXT, sample_index)

    # Assert
    assert len(results) == 2
    assert all(isinstance(r, SectionResult) for r in results)
    assert all(r.chapter_title == "Chapter One" for r in results)

    first, second = results
    assert first.subchapter.subchapter_title == "Sub A"
    assert "Body A." in first.subchapter.text
    assert "Body B." not in first.subchapter.text
    assert second.subchapter.subchapter_title == "Sub B"
    assert "Body B." in second.subchapter.text


def test_encabezado_del_capitulo_va_delante(extractor, sample_index):
    results = extractor.extract(SAMPLE_TEXT, sample_index)

    for result in results:
        assert result.subchapter.text.startswith("Chapter One\nIntro text.\n\n")


def test_rango_de_paginas(extractor, sample_index):
    results = extractor.extract(SAMPLE_TEXT, sample_index)

    assert [(r.from_page, r.to_page) for r in results] == [(2, 2), (2, 2)]
    assert results[0].subchapter.from_page == 2


def test_token_count_es_el_conteo_de_palabras(extractor, sample_index):
    results = extractor.extract(SAMPLE_TEXT, sample_index)

    for result in results:
        assert result.subchapter.token_count == len(result.subchapter.text.split())


def test_subcapitulo_que_cruza_paginas():
    text = (
        "=== PÁGINA 1 ===\nCapítulo\nSub A\nInicio\n"
        "=== PÁGINA 2 ===\nContinúa\n"
        "=== PÁGINA 3 ===\nSub B\nFinal"
    )
    index = [ChapterIndexEntry("Capítulo", ("Sub A", "Sub B"))]

    results = ChapterExtractor().extract(text, index)

    sub_a = next(r for r in results if r.subchapter.subchapter_title == "Sub A")
    assert (sub_a.from_page, sub_a.to_page) == (1, 2)
    assert "Continúa" in sub_a.subchapter.text
    assert "Final" not in sub_a.subchapter.text


def test_titulos_numerados_se_devuelven_sin_numeracion(extractor):
    text = "=== PÁGINA 1 ===\nCapítulo\n1. Sub A\nTexto"
    index = [ChapterIndexEntry("Capítulo", ("1. Sub A",))]

    results = extractor.extract(text, index)

    assert results[0].subchapter.subchapter_title == "Sub A"


def test_resultados_ordenados_por_pagina(extractor):
    text = (
        "=== PÁGINA 1 ===\nPrimero\nUno A\nTexto\n"
        "=== PÁGINA 2 ===\nSegundo\nDos A\nTexto"
    )
    index = [
        ChapterIndexEntry("Segundo", ("Dos A",)),
        ChapterIndexEntry("Primero", ("Uno A",)),
    ]

    results = extractor.extract(text, index)

    assert [r.chapter_title for r in results] == ["Primero", "Segundo"]
    assert [r.from_page for r in results] == [1, 2]


def test_to_dict_es_serializable(extractor, sample_index):
    data = extractor.extract(SAMPLE_TEXT, sample_index)[0].to_dict()

    assert data["chapter_title"] == "Chapter One"
    assert data["subchapter"]["subchapter_title"] == "Sub A"
    assert set(data["subchapter"]) == {
        "chapter_title", "subchapter_title", "text", "from_page", "to_page", "token_count",
    }


# ---------------------------------------------------------------------------
# Omisiones y fallos
# ---------------------------------------------------------------------------


def test_subcapitulo_ausente_se_omite(extractor, caplog):
    index = [ChapterIndexEntry("Chapter One", ("Sub A", "Sub Z"))]

    with caplog.at_level(logging.INFO):
        results = extractor.extract(SAMPLE_TEXT, index)

    assert [r.subchapter.subchapter_title for r in results] == ["Sub A"]
    assert "Sub Z" in caplog.text


def test_capitulo_ausente_se_omite(extractor, sample_index):
    index = sample_index + [ChapterIndexEntry("Chapter Nine", ("Sub X",))]

    results = extractor.extract(SAMPLE_TEXT, index)

    assert len(results) == 2


def test_entradas_vacias_devuelven_lista_vacia(extractor, sample_index):
    assert extractor.extract("", sample_index) == []
    assert extractor.extract("   ", sample_index) == []
    assert extractor.extract(SAMPLE_TEXT, []) == []


def test_capitulo_sin_subcapitulos_no_produce_registros(extractor):
    index = [ChapterIndexEntry("Chapter One")]

    assert extractor.extract(SAMPLE_TEXT, index) == []


def test_capitulo_sin_subcapitulos_como_registro_unico():
    extractor = ChapterExtractor(ExtractorConfig(emit_bare_chapters=True))
    text = "=== PÁGINA 1 ===\nPrefacio\nTexto del prefacio."

    results = extractor.extract(text, [ChapterIndexEntry("Prefacio")])

    assert len(results) == 1
    assert results[0].subchapter.subchapter_title == "Prefacio"
    assert results[0].subchapter.text == "Texto del prefacio."


def test_fallo_en_un_subcapitulo_no_afecta_a_los_demas(sample_index, caplog):
    extractor = ChapterExtractor(matcher=_FailingMatcher("Sub B"))

    with caplog.at_level(logging.ERROR):
        results = extractor.extract(SAMPLE_TEXT, sample_index)

    assert [r.subchapter.subchapter_title for r in results] == ["Sub A"]
    assert "Sub B" in caplog.text


def test_pagina_duplicada_en_modo_estricto_devuelve_vacio(sample_index):
    extractor = ChapterExtractor(ExtractorConfig(strict_pages=True))
    text = SAMPLE_TEXT + "\n=== PÁGINA 2 ===\nOtra vez"

    assert extractor.extract(text, sample_index) == []


def test_pagina_duplicada_sin_modo_estricto_gana_la_ultima(extractor, sample_index):
    text = SAMPLE_TEXT + "\n=== PÁGINA 2 ===\nSub A\nNuevo cuerpo."

    results = extractor.extract(text, sample_index)

    assert [r.subchapter.subchapter_title for r in results] == ["Sub A"]
    assert "Nuevo cuerpo." in results[0].subchapter.text


# ---------------------------------------------------------------------------
# Limpieza del texto
# ---------------------------------------------------------------------------


def test_saltos_de_linea_normalizados(extractor):
    text = "=== PÁGINA 1 ===\r\nCap\r\nSub A\r\nLinea 1\r\n\r\n\r\n\r\nLinea 2"
    index = [ChapterIndexEntry("Cap", ("Sub A",))]

    results = extractor.extract(text, index)

    body = results[0].subchapter.text
    assert "\r" not in body
    assert "\n\n\n" not in body
    assert body.endswith("Linea 1\n\nLinea 2")


def test_titulo_del_subcapitulo_sin_encabezado_se_quita(extractor):
    """Sin texto entre el capítulo y su primer subcapítulo, el título inicial se elimina."""
    text = "=== PÁGINA 1 ===\nSub A:\nCuerpo."
    index = [ChapterIndexEntry("Sub A", ("Sub A",))]

    results = extractor.extract(text, index)

    assert results[0].subchapter.text == "Cuerpo."


# ---------------------------------------------------------------------------
# locate
# ---------------------------------------------------------------------------


def test_locate_informa_capitulos_y_subcapitulos(extractor):
    index = [
        ChapterIndexEntry("Chapter One", ("Sub A", "Sub Z")),
        ChapterIndexEntry("Chapter Nine", ("Sub X",)),
    ]

    located = extractor.locate(SAMPLE_TEXT, index)

    assert [(item.title, item.found) for item in located] == [
        ("Chapter One",  True),
        ("Sub A",        True),
        ("Sub Z",        False),
        ("Chapter Nine", False),
        ("Sub X",        False),
    ]
    assert located[0].offset == 0


def test_build_document_concatena_las_paginas(extractor):
    document = extractor.build_document(SAMPLE_TEXT)

    assert document.pages == [1, 2]
    assert document.text.startswith("Chapter One\nIntro text.\n\nSub A")


def test_locate_capitulo_descartado_por_offset_repetido(extractor):
    # Arrange: los dos capítulos caen en el mismo offset; extract() solo usa el primero
    index = [
        ChapterIndexEntry("Chapter One", ("Sub A",)),
        ChapterIndexEntry("chapter one", ("Sub B",)),
    ]

    # Act
    located = extractor.locate(SAMPLE_TEXT, index)

    # Assert
    assert [(item.title, item.found) for item in located] == [
        ("Chapter One", True),
        ("Sub A",       True),
        ("chapter one", False),
        ("Sub B",       False),
    ]
