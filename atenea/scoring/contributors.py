"""Fixed (predicate, weight) tables folded into the authority score.

Each table is scanned in order and the first matching predicate contributes its
weight, so every table adds exactly one value per document.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from atenea.models.document import Document, DocumentType, Epoch, IssuingBody

Predicate = Callable[[Document, int], bool]
ContributorTable = List[Tuple[Predicate, int]]


def _is_type(doc_type: DocumentType) -> Predicate:
    return lambda document, _year: document.type is doc_type


def _is_body(body: IssuingBody) -> Predicate:
    return lambda document, _year: document.issuing_body is body


def _epoch_at_least(ordinal: int) -> Predicate:
    return lambda document, _year: document.epoch.ordinal >= ordinal


def _age(document: Document, reference_year: int) -> Optional[int]:
    if document.publication_year is None:
        return None
    return reference_year - document.publication_year


def _younger_than(years: int) -> Predicate:
    def predicate(document: Document, reference_year: int) -> bool:
        age = _age(document, reference_year)
        return age is not None and age < years

    return predicate


def _always(_document: Document, _year: int) -> bool:
    return True


TYPE_WEIGHTS: ContributorTable = [
    (_is_type(DocumentType.JURISPRUDENCIA), 40),
    (_is_type(DocumentType.TESIS_AISLADA), 15),
]

ISSUING_BODY_WEIGHTS: ContributorTable = [
    (_is_body(IssuingBody.PLENO), 30),
    (_is_body(IssuingBody.SCJN), 28),
    (_is_body(IssuingBody.SALA), 25),
    (_is_body(IssuingBody.OTHER_CHAMBER), 22),
    (_is_body(IssuingBody.TRIBUNAL_COLEGIADO), 18),
    (_is_body(IssuingBody.TRIBUNAL), 12),
    (_always, 8),
]

EPOCH_WEIGHTS: ContributorTable = [
    (_epoch_at_least(Epoch.UNDECIMA.ordinal), 20),
    (_epoch_at_least(Epoch.DECIMA.ordinal), 18),
    (_epoch_at_least(Epoch.NOVENA.ordinal), 12),
    (_epoch_at_least(Epoch.OCTAVA.ordinal), 8),
    (_always, 5),
]

RECENCY_WEIGHTS: ContributorTable = [
    (_younger_than(5), 10),
    (_younger_than(10), 8),
    (_younger_than(20), 5),
    (_younger_than(30), 3),
]

AUTHORITY_TABLES: List[ContributorTable] = [
    TYPE_WEIGHTS,
    ISSUING_BODY_WEIGHTS,
    EPOCH_WEIGHTS,
    RECENCY_WEIGHTS,
]


def first_match(table: ContributorTable, document: Document, reference_year: int) -> int:
    for predicate, weight in table:
        if predicate(document, reference_year):
            return weight
    return 0


def fold(tables: List[ContributorTable], document: Document, reference_year: int) -> int:
    return sum(first_match(table, document, reference_year) for table in tables)
