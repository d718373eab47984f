"""Prompt templates for the question answering stage."""

from __future__ import annotations

from typing import Iterable

from atenea.models.retrieval import ContextBlock

SYSTEM_PROMPT = """Eres Atenea, asistente especializada en jurisprudencia mexicana.
Responde EXCLUSIVAMENTE con base en las tesis numeradas del contexto; nunca inventes normas, precedentes, artículos ni números de registro.
Coloca una referencia [k] inmediatamente después de cada afirmación, donde k es el número de la tesis que la sustenta; puedes combinar varias como [1, 3].
Nunca uses un número que no aparezca en el contexto.
Si las tesis no responden la pregunta, dilo explícitamente: "Las tesis disponibles no contienen ... Lo que sí establecen es ...".
Usa lenguaje de dictamen profesional: directo, preciso y objetivo. No inicies con muletillas como "Claro," o "Bien,".
Prioriza la jurisprudencia vigente sobre las tesis aisladas.
No incluyas secciones de REFERENCIAS ni SUGERENCIAS: las fuentes se muestran por separado."""


def format_context_block(block: ContextBlock) -> str:
    return (
        f"[{block.index}] Rubro: \"{block.title}\"\n"
        f"{block.metadata}\n"
        f"Cita: {block.citation}\n"
        f"Contenido relevante: {block.excerpt}"
    )


def build_user_prompt(question: str, blocks: Iterable[ContextBlock]) -> str:
    block_list = list(blocks)
    context_sections = "\n\n".join(format_context_block(block) for block in block_list)
    return f"""Pregunta:
{question.strip()}

Tesis relevantes:
{context_sections}

Instrucciones:
- Responde en español.
- Si la pregunta es binaria, responde Sí/No/Depende primero y luego fundamenta.
- Sustenta cada afirmación con una referencia entre [1] y [{len(block_list)}].
- Usa números (1., 2., 3.) para los puntos principales y guiones para subpuntos.
- Termina con una pregunta breve de seguimiento."""
