"""Resolve drug names and ATC class names into NDC records."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .concepts import NO_VALUE, Concept, ConceptStore
from .openfda import OpenFDAClient
from .records import NDCRecord, records_from_product
from .remote import RemoteLookupError
from .rxnav import ConceptGroup, RxNavClient

logger = logging.getLogger(__name__)

# Ingredient and multi-ingredient concepts have no NDCs of their own.
NON_DISPENSABLE_TERM_TYPES = frozenset({"IN", "MIN"})


def _add_groups(store: ConceptStore, groups: Sequence[ConceptGroup]) -> None:
    for group in groups:
        for related in group.concepts:
            store.add(
                Concept(
                    rxcui=related.rxcui,
                    name=related.name,
                    tty=group.tty,
                    synonym=related.synonym or NO_VALUE,
                )
            )


class _Resolver:
    def __init__(self, rxnav: Optional[RxNavClient] = None, openfda: Optional[OpenFDAClient] = None) -> None:
        self.rxnav = rxnav or RxNavClient()
        self.openfda = openfda or OpenFDAClient()

    def _rxnav_records(self, concepts: Sequence[Concept]) -> List[NDCRecord]:
        records: List[NDCRecord] = []
        total = len(concepts)
        for index, concept in enumerate(concepts, start=1):
            ndc_properties = self.rxnav.ndc_properties(concept.rxcui)
            detail = self.rxnav.term_detail(concept.rxcui)
            if ndc_properties is not None and detail is not None:
                records.extend(NDCRecord.from_rxnav(concept, prop, detail) for prop in ndc_properties)
            logger.info("Retrieved NDCs for %d/%d concepts (%.0f%%)", index, total, 100.0 * index / total)
        return records

    def _openfda_records(self, generic_name: str) -> List[NDCRecord]:
        try:
            products = self.openfda.products(generic_name)
        except RemoteLookupError as exc:
            logger.debug("openFDA lookup for %r returned nothing: %s", generic_name, exc)
            return []
        records: List[NDCRecord] = []
        for product in products:
            records.extend(records_from_product(product))
        return records


class DrugResolver(_Resolver):
    """Resolve a generic or brand drug name."""

    def resolve(self, drug_name: str) -> List[NDCRecord]:
        rxcuis = self.rxnav.rxcuis_by_name(drug_name)
        if not rxcuis:
            logger.info("No RxNorm concepts found for %r", drug_name)
            return []

        store = ConceptStore()
        for rxcui in rxcuis:
            _add_groups(store, self.rxnav.related_concepts(rxcui))

        if store:
            logger.info("Found %d related concepts for %r", len(store), drug_name)
            return self._rxnav_records(store.all())

        logger.info("No related concepts for %r, searching openFDA", drug_name)
        return self._openfda_records(drug_name)


class ClassResolver(_Resolver):
    """Resolve an ATC class name (levels 1 to 4) through its member drugs."""

    def resolve(self, atc_class_name: str) -> List[NDCRecord]:
        classes = self.rxnav.atc_classes(atc_class_name)
        if not classes:
            logger.info("No ATC classes found for %r", atc_class_name)
            return []

        store = ConceptStore()
        found_concepts = False
        for atc_class in classes:
            logger.info("Collecting members of %s (%s)", atc_class.class_name, atc_class.class_id)
            for member in self.rxnav.class_members(atc_class.class_id):
                if store.has(member.rxcui):
                    continue
                store.add(Concept(rxcui=member.rxcui, name=member.name, tty=member.tty))
                groups = self.rxnav.related_concepts(member.rxcui)
                if groups:
                    found_concepts = True
                _add_groups(store, groups)

        eligible = store.eligible_for_lookup(NON_DISPENSABLE_TERM_TYPES)
        if eligible and found_concepts:
            logger.info("Found %d dispensable concepts for %r", len(eligible), atc_class_name)
            return self._rxnav_records(eligible)

        logger.info("No dispensable concepts for %r, searching openFDA by class member", atc_class_name)
        records: List[NDCRecord] = []
        for atc_class in classes:
            for member in self.rxnav.class_members(atc_class.class_id):
                records.extend(self._openfda_records(member.name))
        return records


__all__ = ["ClassResolver", "DrugResolver", "NON_DISPENSABLE_TERM_TYPES"]
