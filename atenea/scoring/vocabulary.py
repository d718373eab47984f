"""Controlled vocabularies used by the classifier and the pertinence score.

Structural legal terms weigh more than generic tokens: a term such as
"acto reclamado" appearing in both the case and the tesis is strong evidence
that they deal with the same procedural problem.
"""

from typing import Dict, List

STRUCTURAL_LEGAL_TERMS: Dict[str, List[str]] = {
    "amparo": [
        "improcedencia", "sobreseimiento", "acto reclamado", "interés jurídico",
        "interés legítimo", "quejoso", "tercero interesado", "autoridad responsable",
        "suspensión", "informe justificado", "demanda de amparo", "violación directa",
        "concepto de violación", "agravio", "litis constitucional", "efectos del amparo",
        "amparo directo", "amparo indirecto", "revisión", "queja",
    ],
    "laboral": [
        "despido injustificado", "rescisión", "relación de trabajo", "patrón",
        "trabajador", "carga de la prueba", "salarios caídos", "prima de antigüedad",
        "indemnización constitucional", "reinstalación", "contrato colectivo",
        "jornada de trabajo", "subordinación", "laudo", "junta de conciliación",
        "prescripción laboral", "prueba testimonial", "confesional",
    ],
    "civil": [
        "nulidad", "rescisión contractual", "daños y perjuicios", "cláusula penal",
        "incumplimiento", "obligaciones", "contrato", "arrendamiento", "compraventa",
        "posesión", "usucapión", "servidumbre", "copropiedad", "hipoteca",
        "fianza", "mandato", "sociedad conyugal", "divorcio", "alimentos",
        "patria potestad", "sucesión", "heredero",
    ],
    "administrativo": [
        "acto administrativo", "fundamentación", "motivación", "competencia",
        "legalidad", "recurso de revisión", "juicio de nulidad", "autoridad administrativa",
        "multa administrativa", "sanción", "procedimiento administrativo",
        "garantía de audiencia", "derechos adquiridos", "concesión", "permiso",
    ],
    "penal": [
        "delito", "tipicidad", "culpabilidad", "antijuridicidad", "punibilidad",
        "ministerio público", "auto de formal prisión", "sentencia condenatoria",
        "presunción de inocencia", "debido proceso", "prueba ilícita",
        "cadena de custodia", "defensa adecuada", "víctima", "ofendido",
    ],
    "fiscal": [
        "contribución", "impuesto", "crédito fiscal", "determinación presuntiva",
        "visita domiciliaria", "revisión de gabinete", "caducidad fiscal",
        "prescripción fiscal", "devolución", "compensación", "estímulo fiscal",
    ],
    "mercantil": [
        "título de crédito", "letra de cambio", "pagaré", "cheque", "endoso",
        "aval", "sociedad mercantil", "quiebra", "concurso mercantil",
        "acción cambiaria", "prescripción mercantil", "contrato mercantil",
    ],
    "constitucional": [
        "derechos humanos", "garantías individuales", "principio pro persona",
        "control de convencionalidad", "suspensión de garantías",
        "jerarquía normativa", "supremacía constitucional",
    ],
}

VIA_PROCESAL_TERMS: Dict[str, List[str]] = {
    "amparo directo": ["amparo directo", "contra sentencia", "tribunal colegiado"],
    "amparo indirecto": ["amparo indirecto", "juez de distrito", "acto de autoridad"],
    "juicio ordinario civil": ["juicio ordinario", "demanda civil", "juzgado civil"],
    "juicio laboral": ["demanda laboral", "junta de conciliación", "laudo"],
    "juicio de nulidad": ["juicio de nulidad", "tribunal fiscal", "sala regional"],
    "recurso de revisión": ["recurso de revisión", "revisión fiscal"],
}

# Patterns over normalized (accent-free) text, first match wins.
ACTO_RECLAMADO_PATTERNS = [
    (r"sentencia|resolucion|laudo", "resolución judicial"),
    (r"acto de autoridad|multa|sancion", "acto administrativo"),
    (r"\bley\b|decreto|reglamento", "norma general"),
    (r"orden de aprehension|prision", "privación de libertad"),
]

PROBLEMA_JURIDICO_TEMPLATES: Dict[str, str] = {
    "amparo": (
        "Análisis de la procedencia y fundabilidad del juicio de amparo{en_relacion}, "
        "conforme a los criterios jurisprudenciales aplicables."
    ),
    "laboral": (
        "Determinación de los derechos laborales{relacionados} y las prestaciones procedentes "
        "conforme a la Ley Federal del Trabajo y criterios jurisdiccionales."
    ),
    "civil": (
        "Análisis de las obligaciones y derechos civiles{derivados} conforme al código civil "
        "aplicable y la jurisprudencia vigente."
    ),
    "administrativo": (
        "Evaluación de la legalidad del acto administrativo{en_materia} y los medios de "
        "impugnación procedentes."
    ),
    "penal": (
        "Análisis del tipo penal y elementos del delito{en_relacion} conforme a la "
        "legislación penal aplicable."
    ),
    "fiscal": (
        "Determinación de la legalidad de los actos fiscales{relacionados} y los medios de "
        "defensa procedentes."
    ),
    "mercantil": (
        "Análisis de las obligaciones mercantiles{derivadas} conforme al Código de Comercio "
        "y legislación aplicable."
    ),
    "constitucional": (
        "Análisis de la posible violación a derechos humanos{en_relacion} y los remedios "
        "constitucionales procedentes."
    ),
    "general": (
        "Determinación de los efectos jurídicos de la situación planteada{en_materia} "
        "conforme a la legislación aplicable y los criterios jurisprudenciales vigentes."
    ),
}
