# seglib/cli.py
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from seglib.factory import build_extractor, build_planner
from seglib.config_loader import load_extractor_config
from seglib.index_loader import load_chapter_index
from seglib.processor.models import InvalidIndexError
from seglib.processor.pages.page_parser import DuplicatePageError
from seglib.sources.factory import SourceFactory, UnsupportedFormatError
from seglib.subdivision.request import build_subdivision_request
from seglib.subdivision.slicer import restrict_to_pages


# Carga .env una sola vez, antes que cualquier otra cosa
load_dotenv()

_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


# ------------------------------------------------------------------
# Grupo raíz
# ------------------------------------------------------------------

@click.group()
@click.version_option(package_name="seglib")
@click.option("--verbose", "-v", is_flag=True, help="Muestra el log de depuración")
def main(verbose: bool):
    """
    seglib — segmentador de documentos en capítulos y subcapítulos.

    Recibe el texto paginado de un documento (salida de OCR o PDF con capa
    de texto) y su índice, y devuelve el texto limpio de cada subcapítulo
    con su rango de páginas.
    """
    logging.basicConfig(
        level  = logging.DEBUG if verbose else logging.WARNING,
        format = _LOG_FORMAT,
    )


# ------------------------------------------------------------------
# seglib extract
# ------------------------------------------------------------------

@main.command()
@click.option(
    "--text", "-t", "text_path",
    required = True,
    type     = click.Path(exists=False),   # validamos nosotros para mejor mensaje
    help     = "Documento paginado (.txt, .md, .pdf)",
)
@click.option(
    "--index", "-i", "index_path",
    required = True,
    type     = click.Path(exists=False),
    help     = "Índice de capítulos (.yaml, .yml, .json)",
)
@click.option(
    "--config", "-c", "config_path",
    default  = None,
    type     = click.Path(exists=False),
    help     = "Config YAML del extractor (por defecto ~/.seglib/config.yaml)",
)
@click.option(
    "--output", "-o", "output_path",
    default  = None,
    type     = click.Path(dir_okay=False),
    help     = "Archivo JSON de salida (por defecto stdout)",
)
def extract(text_path: str, index_path: str, config_path: Optional[str], output_path: Optional[str]):
    """Extrae el texto de cada subcapítulo del índice."""

    text  = _load_text(text_path)
    index = _load_index(index_path)

    try:
        extractor = build_extractor(config_path=config_path)
    except (FileNotFoundError, ValueError) as e:
        _abort(str(e))

    try:
        results = extractor.extract(text, index)
    except Exception as e:
        _error(f"Error inesperado: {type(e).__name__}: {e}")
        sys.exit(1)

    payload = json.dumps(
        [r.to_dict() for r in results], ensure_ascii=False, indent=2
    )

    if output_path:
        Path(output_path).write_text(payload + "\n", encoding="utf-8")
        click.echo(f"[seglib] ✓ {len(results)} subcapítulos → {output_path}")
    else:
        click.echo(payload)


# ------------------------------------------------------------------
# seglib locate
# ------------------------------------------------------------------

@main.command()
@click.option("--text", "-t", "text_path", required=True, help="Documento paginado (.txt, .md, .pdf)")
@click.option("--index", "-i", "index_path", required=True, help="Índice de capítulos (.yaml, .yml, .json)")
@click.option("--config", "-c", "config_path", default=None, help="Config YAML del extractor")
def locate(text_path: str, index_path: str, config_path: Optional[str]):
    """Muestra dónde aparece cada título del índice."""

    text  = _load_text(text_path)
    index = _load_index(index_path)

    try:
        extractor = build_extractor(config_path=config_path)
    except (FileNotFoundError, ValueError) as e:
        _abort(str(e))

    try:
        document = extractor.build_document(text)
        located  = extractor.locate(text, index)
    except DuplicatePageError as e:
        _abort(str(e))

    chapter_titles = {entry.title for entry in index}
    missing = 0

    for item in located:
        indent = "" if item.title in chapter_titles else "    "
        if item.found:
            page = document.page_for_offset(item.offset)
            click.echo(f"{indent}✓ {item.title}  (offset {item.offset}, página {page})")
        else:
            missing += 1
            click.echo(click.style(f"{indent}✗ {item.title}  (no encontrado)", fg="yellow"))

    click.echo("─" * 50)
    click.echo(f"[seglib] {len(located) - missing} de {len(located)} títulos encontrados")


# ------------------------------------------------------------------
# seglib plan
# ------------------------------------------------------------------

@main.command()
@click.option("--text", "-t", "text_path", required=True, help="Documento paginado (.txt, .md, .pdf)")
@click.option("--chapter", required=True, help="Título del capítulo a subdividir")
@click.option("--next", "next_chapter", default=None, help="Título del capítulo siguiente")
@click.option(
    "--tokens-per-section",
    default = None,
    type    = click.IntRange(min=1),
    help    = "Tokens por subcapítulo (por defecto el de la config, 700)",
)
@click.option("--from-page", "page_from", default=None, type=click.IntRange(min=1), help="Primera página del capítulo")
@click.option("--to-page", "page_to", default=None, type=click.IntRange(min=1), help="Última página del capítulo (inclusiva)")
@click.option("--config", "-c", "config_path", default=None, help="Config YAML del extractor")
@click.option("--prompt", "show_prompt", is_flag=True, help="Imprime también el prompt de subdivisión")
def plan(
    text_path:          str,
    chapter:            str,
    next_chapter:       Optional[str],
    tokens_per_section: Optional[int],
    page_from:          Optional[int],
    page_to:            Optional[int],
    config_path:        Optional[str],
    show_prompt:        bool,
):
    """Calcula en cuántos subcapítulos dividir un capítulo sin desglose."""

    text = _load_text(text_path)

    try:
        config  = load_extractor_config(config_path)
        planner = build_planner(config)
    except (FileNotFoundError, ValueError) as e:
        _abort(str(e))

    if page_from is not None or page_to is not None:
        try:
            text = restrict_to_pages(text, page_from, page_to, config.page_marker_pattern)
        except ValueError as e:
            _abort(str(e))

    request = build_subdivision_request(
        text,
        chapter_title      = chapter,
        next_chapter_title = next_chapter,
        planner            = planner,
        tokens_per_section = tokens_per_section,
    )
    if request is None:
        _abort(f"Capítulo no encontrado en el texto: '{chapter}'")

    click.echo(f"[seglib] Capítulo  : {request.chapter_title}")
    click.echo(f"[seglib] Tokens    : {request.total_tokens}")
    click.echo(f"[seglib] Secciones : {request.section_count}")

    if show_prompt:
        click.echo("")
        click.echo(request.prompt)


# ------------------------------------------------------------------
# Helpers de carga
# ------------------------------------------------------------------

def _load_text(path: str) -> str:
    try:
        return SourceFactory.load_file(path)
    except FileNotFoundError:
        _abort(f"Archivo no encontrado: {path}")
    except UnsupportedFormatError as e:
        _abort(str(e))
    except ImportError as e:
        _error(str(e))
        sys.exit(1)


def _load_index(path: str):
    try:
        return load_chapter_index(path)
    except FileNotFoundError:
        _abort(f"Índice no encontrado: {path}")
    except InvalidIndexError as e:
        _abort(f"Índice inválido: {e}")


def _abort(message: str) -> None:
    """Error de validación: culpa del usuario."""
    click.echo(click.style(f"[seglib] Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _error(message: str) -> None:
    """Error de sistema: no es culpa del usuario."""
    click.echo(click.style(f"[seglib] {message}", fg="red"), err=True)
