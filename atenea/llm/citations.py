"""Citation resolver: maps [k] markers in generated text to the numbered sources.

Resolution runs in two passes. The first tokenizes every bracketed marker
(``[2]``, ``[1, 3]`` and the legacy ``[ID: 12345]`` form); the second validates
each reference against the source list and rewrites the text. A marker that
points at nothing is removed together with the space before it (indentation is
kept when the marker opens a line) and recorded as an anomaly; it never reaches
the caller as an exception.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Sequence, Set, Union

from atenea.errors import CitationIntegrityError
from atenea.models.qa import SourceEntry

logger = logging.getLogger(__name__)

MARKER_PATTERN = re.compile(r"[ \t]*\[(?:\s*ID:\s*(?P<legacy>[^\]]+?)|(?P<indices>\s*\d+(?:\s*,\s*\d+)*))\s*\]")


@dataclass
class MarkerToken:
    start: int
    end: int
    leading: str
    references: List[Union[int, str]]
    raw: str


@dataclass
class ResolvedCitations:
    text: str
    sources: List[SourceEntry]
    cited: Set[int] = field(default_factory=set)
    anomalies: List[CitationIntegrityError] = field(default_factory=list)


def tokenize_markers(text: str) -> List[MarkerToken]:
    tokens: List[MarkerToken] = []
    for match in MARKER_PATTERN.finditer(text):
        raw = match.group(0)
        leading = raw[: len(raw) - len(raw.lstrip(" \t"))]
        if match.group("legacy") is not None:
            references: List[Union[int, str]] = [match.group("legacy").strip()]
        else:
            references = [int(part) for part in match.group("indices").split(",")]
        tokens.append(MarkerToken(match.start(), match.end(), leading, references, raw.strip()))
    return tokens


def _at_line_start(pieces: List[str]) -> bool:
    for piece in reversed(pieces):
        if piece:
            return piece.endswith("\n")
    return True


class CitationResolver:
    """Validates markers against the sources supplied to the model."""

    def resolve(self, text: str, sources: Sequence[SourceEntry]) -> ResolvedCitations:
        id_to_index = {source.id: position for position, source in enumerate(sources, start=1)}
        cited: Set[int] = set()
        anomalies: List[CitationIntegrityError] = []

        pieces: List[str] = []
        cursor = 0
        for token in tokenize_markers(text):
            pieces.append(text[cursor : token.start])
            cursor = token.end
            valid: List[int] = []
            for reference in token.references:
                if isinstance(reference, int):
                    if 1 <= reference <= len(sources):
                        valid.append(reference)
                    else:
                        anomalies.append(
                            CitationIntegrityError(token.raw, f"index {reference} outside 1..{len(sources)}")
                        )
                elif reference in id_to_index:
                    valid.append(id_to_index[reference])
                else:
                    anomalies.append(CitationIntegrityError(token.raw, f"unknown document id {reference}"))
            if valid:
                ordered = sorted(dict.fromkeys(valid))
                cited.update(ordered)
                pieces.append(f"{token.leading}[{', '.join(str(index) for index in ordered)}]")
            elif _at_line_start(pieces):
                # Keep the indentation and drop the gap the marker leaves behind.
                pieces.append(token.leading)
                while cursor < len(text) and text[cursor] in " \t":
                    cursor += 1
        pieces.append(text[cursor:])

        for anomaly in anomalies:
            logger.warning("Stripped citation marker %s: %s", anomaly.marker, anomaly.reason)

        resolved_text = "".join(pieces).strip()
        return ResolvedCitations(
            text=resolved_text,
            sources=list(sources),
            cited=cited,
            anomalies=anomalies,
        )
