import pytest

from seglib.processor.sections.matcher import (
    TitleMatcher,
    map_collapsed_match,
    sample_for_mapping,
)


@pytest.fixture
def matcher():
    return TitleMatcher()


# ---------------------------------------------------------------------------
# find
# ---------------------------------------------------------------------------


def test_titulo_literal(matcher):
    haystack = "Prólogo\nCapítulo Uno\nTexto"

    assert matcher.find(haystack, "Capítulo Uno") == haystack.index("Capítulo Uno")


def test_sin_distinguir_mayusculas(matcher):
    haystack = "intro\nCAPÍTULO UNO\n"

    assert matcher.find(haystack, "capítulo uno") == 6


def test_titulo_que_aparece_una_vez_siempre_se_encuentra(matcher):
    haystack = "aaa bbb ccc Único título ddd"

    assert matcher.find(haystack, "Único título") == 12


def test_titulo_sin_numeracion(matcher):
    haystack = "Texto\nIntroduction\nMás"

    assert matcher.find(haystack, "1. Introduction") == 6


def test_titulo_con_whitespace_irregular(matcher):
    haystack = "xx El gran viaje yy"

    assert matcher.find(haystack, "El  gran\n viaje") == 3


def test_texto_colapsado_mapea_con_la_muestra(matcher):
    """El título cruza un salto de línea: se mapea por sus primeras palabras."""
    haystack = "Intro\nEl gran viaje\ncomienza hoy"

    assert matcher.find(haystack, "el gran viaje comienza") == 6


def test_mapeo_falla_si_la_muestra_no_aparece_literal(matcher):
    """La muestra 'El gran viaje' no existe tal cual en el original → no encontrado."""
    haystack = "Intro\nEl  gran\nviaje"

    assert matcher.find(haystack, "El gran viaje") is None


def test_titulo_ausente(matcher):
    assert matcher.find("Nada que ver", "Capítulo 9") is None


def test_entradas_vacias(matcher):
    assert matcher.find("", "Título") is None
    assert matcher.find("Texto", "") is None
    assert matcher.find("Texto", "   ") is None


def test_caracteres_especiales_del_titulo_son_literales(matcher):
    haystack = "Ver (a+b)*c ahora"

    assert matcher.find(haystack, "(a+b)*c") == 4


# ---------------------------------------------------------------------------
# find_in_range / locate
# ---------------------------------------------------------------------------


def test_find_in_range_devuelve_offset_absoluto(matcher):
    haystack = "Sub A ... Capítulo 2 ... Sub A"

    pos = matcher.find_in_range(haystack, "Sub A", 10, len(haystack))

    assert pos == haystack.rindex("Sub A")


def test_find_in_range_vacio_o_invertido(matcher):
    assert matcher.find_in_range("abc", "a", 2, 2) is None
    assert matcher.find_in_range("abc", "a", 3, 1) is None


def test_find_in_range_recorta_limites(matcher):
    assert matcher.find_in_range("abc", "a", -5, 100) == 0


def test_locate_prueba_sin_numeracion(matcher):
    haystack = "Antes\nMétodos\nDespués"

    assert matcher.locate(haystack, "3.2) Métodos") == 6
    assert matcher.locate_in_range(haystack, "3.2) Métodos", 0, len(haystack)) == 6


# ---------------------------------------------------------------------------
# Helpers de mapeo
# ---------------------------------------------------------------------------


def test_muestra_de_mapeo():
    assert sample_for_mapping("uno dos tres cuatro") == "uno dos tres"
    assert sample_for_mapping("palabramuylargaquesuperalostreintacaracteres x") == (
        "palabramuylargaquesuperalostre"
    )
    assert sample_for_mapping("") == ""


def test_map_collapsed_match_sin_coincidencia():
    assert map_collapsed_match("a b", "a b", "c d") is None
