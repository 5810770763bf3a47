# subdivision/prompt_builder.py

_SUBDIVISION_TEMPLATE = """\
Divide este capítulo en exactamente {count} subcapítulos.

REGLAS SIMPLES:
1. Divide el texto en {count} partes iguales
2. Copia el texto EXACTAMENTE como aparece, palabra por palabra
3. Crea un título descriptivo para cada subcapítulo
4. NO resumas ni cambies el texto original
5. Cada subcapítulo debe tener aproximadamente {avg_chars} caracteres

TITULO DEL CAPITULO: {title}

CONTENIDO A DIVIDIR:
{content}

FORMATO JSON REQUERIDO:
{{
  "capitulo": {{
    "titulo": "{title}",
    "Total_Subcapitulos": {count},
    "subtemas": [
      {{
        "title": "Título descriptivo del subcapítulo 1",
        "texto": "Texto exacto del subcapítulo copiado palabra por palabra",
        "descripcion": "Breve descripción del contenido de este subcapítulo"
      }},
      {{
        "title": "Título descriptivo del subcapítulo 2",
        "texto": "Texto exacto del subcapítulo copiado palabra por palabra",
        "descripcion": "Breve descripción del contenido de este subcapítulo"
      }}
    ]
  }}
}}

IMPORTANTE:
- Responde SOLO con JSON válido
- NO uses ```json al inicio
- Divide en exactamente {count} subcapítulos
- Copia TODO el texto sin omitir nada
- Cada palabra del contenido original debe aparecer en algún subcapítulo"""


def build_subdivision_prompt(chapter_title: str, content: str, section_count: int) -> str:
    """
    Prompt para que un modelo parta un capítulo en section_count subcapítulos.
    Solo construye el texto: el envío queda fuera de esta librería.
    """
    if section_count < 1:
        raise ValueError("section_count debe ser al menos 1")

    return _SUBDIVISION_TEMPLATE.format(
        count     = section_count,
        avg_chars = len(content) // section_count,
        title     = chapter_title,
        content   = content,
    )
