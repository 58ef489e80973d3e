"""In-memory, insertion-ordered store of RxNorm concepts keyed by RxCUI."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

NO_VALUE = "--"


@dataclass
class Concept:
    rxcui: str
    name: str
    tty: str
    synonym: str = NO_VALUE


class ConceptStore:
    """Write-once collection; the first concept seen for an RxCUI wins."""

    def __init__(self) -> None:
        self._concepts: Dict[str, Concept] = {}

    def __len__(self) -> int:
        return len(self._concepts)

    def __contains__(self, rxcui: object) -> bool:
        return rxcui in self._concepts

    def has(self, rxcui: str) -> bool:
        return rxcui in self._concepts

    def add(self, concept: Concept) -> bool:
        if concept.rxcui in self._concepts:
            return False
        self._concepts[concept.rxcui] = concept
        return True

    def all(self) -> List[Concept]:
        return list(self._concepts.values())

    def eligible_for_lookup(self, excluded_term_types: Iterable[str]) -> List[Concept]:
        excluded = set(excluded_term_types)
        return [concept for concept in self._concepts.values() if concept.tty not in excluded]


__all__ = ["Concept", "ConceptStore", "NO_VALUE"]
