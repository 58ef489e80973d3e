"""Thin wrapper around the public RxNav API (RxNorm, RxClass and RxTerms)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import DEFAULT_RXNAV_URL
from .remote import RemoteClient

RXCUI_BY_NAME = "/rxcui.json?name={name}&search=1"
RELATED_BY_TYPE = "/rxcui/{rxcui}/related.json?tty={tty}"
NDC_PROPERTIES = "/ndcproperties.json?id={rxcui}"
TERM_DETAIL = "/RxTerms/rxcui/{rxcui}/allinfo.json"
CLASS_BY_NAME = "/rxclass/class/byName.json?className={name}&classTypes={class_types}"
CLASS_MEMBERS = "/rxclass/classMembers.json?classId={class_id}&relaSource={source}"

# Clinical drug, branded drug, generic pack, branded pack.
DISPENSABLE_TERM_TYPES = ("SCD", "SBD", "GPCK", "BPCK")
ATC_CLASS_TYPES = "ATC1-4"
LABELER_PROPERTY = "LABELER"


@dataclass
class RelatedConcept:
    rxcui: str
    name: str
    synonym: str = ""


@dataclass
class ConceptGroup:
    tty: str
    concepts: List[RelatedConcept] = field(default_factory=list)


@dataclass
class NdcProperty:
    ndc11: str
    ndc9: str
    ndc10: str
    spl_set_id: str
    packaging: Optional[List[str]]
    properties: List[Dict[str, str]] = field(default_factory=list)

    def property_value(self, name: str) -> Optional[str]:
        for entry in self.properties:
            if entry.get("propName") == name:
                return entry.get("propValue", "")
        return None


@dataclass
class TermDetail:
    full_generic_name: str
    route: str
    strength: str


@dataclass
class AtcClass:
    class_id: str
    class_name: str


@dataclass
class ClassMember:
    rxcui: str
    name: str
    tty: str


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def parse_rxcuis(payload: Dict[str, Any]) -> List[str]:
    return [str(item) for item in _as_list((payload.get("idGroup") or {}).get("rxnormId"))]


def parse_concept_groups(payload: Dict[str, Any]) -> List[ConceptGroup]:
    """Return only the groups that actually carry concepts."""

    groups: List[ConceptGroup] = []
    for group in _as_list((payload.get("relatedGroup") or {}).get("conceptGroup")):
        properties = _as_list(group.get("conceptProperties"))
        if not properties:
            continue
        concepts = [
            RelatedConcept(
                rxcui=str(item.get("rxcui", "")),
                name=item.get("name", ""),
                synonym=item.get("synonym") or "",
            )
            for item in properties
        ]
        groups.append(ConceptGroup(tty=group.get("tty", ""), concepts=concepts))
    return groups


def parse_ndc_properties(payload: Dict[str, Any]) -> Optional[List[NdcProperty]]:
    """``None`` when the response has no ``ndcPropertyList``."""

    property_list = payload.get("ndcPropertyList")
    if not property_list:
        return None
    results: List[NdcProperty] = []
    for item in _as_list(property_list.get("ndcProperty")):
        packaging_list = item.get("packagingList")
        packaging = _as_list(packaging_list.get("packaging")) if packaging_list else None
        results.append(
            NdcProperty(
                ndc11=item.get("ndcItem", ""),
                ndc9=item.get("ndc9", ""),
                ndc10=item.get("ndc10", ""),
                spl_set_id=item.get("splSetIdItem", ""),
                packaging=packaging or None,
                properties=_as_list((item.get("propertyConceptList") or {}).get("propertyConcept")),
            )
        )
    return results


def parse_term_detail(payload: Dict[str, Any]) -> Optional[TermDetail]:
    properties = payload.get("rxtermsProperties")
    if not properties:
        return None
    return TermDetail(
        full_generic_name=properties.get("fullGenericName", ""),
        route=properties.get("route", ""),
        strength=properties.get("strength", ""),
    )


def parse_atc_classes(payload: Dict[str, Any]) -> List[AtcClass]:
    concepts = _as_list((payload.get("rxclassMinConceptList") or {}).get("rxclassMinConcept"))
    return [AtcClass(class_id=item.get("classId", ""), class_name=item.get("className", "")) for item in concepts]


def parse_class_members(payload: Dict[str, Any]) -> List[ClassMember]:
    members: List[ClassMember] = []
    for item in _as_list((payload.get("drugMemberGroup") or {}).get("drugMember")):
        concept = item.get("minConcept") or {}
        members.append(
            ClassMember(
                rxcui=str(concept.get("rxcui", "")),
                name=concept.get("name", ""),
                tty=concept.get("tty", ""),
            )
        )
    return members


class RxNavClient:
    """Query RxNav endpoints and decode their responses into dataclasses."""

    def __init__(self, remote: Optional[RemoteClient] = None, base_url: str = DEFAULT_RXNAV_URL) -> None:
        self.remote = remote or RemoteClient()
        self.base_url = base_url.rstrip("/")

    def _get(self, path: str, **params: Any) -> Dict[str, Any]:
        payload = self.remote.get(self.base_url + path, params)
        return payload if isinstance(payload, dict) else {}

    def rxcuis_by_name(self, name: str) -> List[str]:
        return parse_rxcuis(self._get(RXCUI_BY_NAME, name=name))

    def related_concepts(self, rxcui: str) -> List[ConceptGroup]:
        payload = self._get(RELATED_BY_TYPE, rxcui=rxcui, tty=" ".join(DISPENSABLE_TERM_TYPES))
        return parse_concept_groups(payload)

    def ndc_properties(self, rxcui: str) -> Optional[List[NdcProperty]]:
        return parse_ndc_properties(self._get(NDC_PROPERTIES, rxcui=rxcui))

    def term_detail(self, rxcui: str) -> Optional[TermDetail]:
        return parse_term_detail(self._get(TERM_DETAIL, rxcui=rxcui))

    def atc_classes(self, name: str) -> List[AtcClass]:
        return parse_atc_classes(self._get(CLASS_BY_NAME, name=name, class_types=ATC_CLASS_TYPES))

    def class_members(self, class_id: str) -> List[ClassMember]:
        return parse_class_members(self._get(CLASS_MEMBERS, class_id=class_id, source="ATC"))


__all__ = [
    "AtcClass",
    "ClassMember",
    "ConceptGroup",
    "NdcProperty",
    "RelatedConcept",
    "RxNavClient",
    "TermDetail",
    "DISPENSABLE_TERM_TYPES",
    "LABELER_PROPERTY",
]
