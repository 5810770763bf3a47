from seglib.processor.pages.page_parser import PageParser
from seglib.processor.pages.renderer import DocumentPage, render_marked_text


def test_renderiza_marcadores_y_omite_lineas_vacias():
    # Arrange
    pages = [
        DocumentPage(2, ("Segunda", "")),
        DocumentPage(1, ("Título", "   ", "Primera")),
    ]

    # Act
    text = render_marked_text(pages)

    # Assert
    assert text == (
        "=== PÁGINA 1 ===\nTítulo\nPrimera\n\n"
        "=== PÁGINA 2 ===\nSegunda"
    )


def test_rango_de_paginas_inclusivo():
    pages = [DocumentPage(n, (f"línea {n}",)) for n in range(1, 6)]

    text = render_marked_text(pages, page_from=2, page_to=3)

    assert "PÁGINA 2" in text
    assert "PÁGINA 3" in text
    assert "PÁGINA 1 " not in text
    assert "PÁGINA 4" not in text


def test_salida_es_legible_por_el_page_parser():
    pages = [DocumentPage(1, ("Uno",)), DocumentPage(2, ("Dos", "Más"))]

    parsed = PageParser().parse(render_marked_text(pages))

    assert [(p.number, p.text) for p in parsed] == [(1, "Uno"), (2, "Dos\nMás")]


def test_sin_paginas_devuelve_vacio():
    assert render_marked_text([]) == ""
