"""The single NDC record shape produced by both resolvers."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List

from .concepts import NO_VALUE, Concept
from .openfda import FdaPackage, FdaProduct
from .parsing import normalize_ndc
from .rxnav import LABELER_PROPERTY, NdcProperty, TermDetail

# Attribute name -> external column name.
CSV_COLUMNS: Dict[str, str] = {
    "concept_id": "conceptId",
    "term_type": "termType",
    "name": "name",
    "ndc": "ndc",
    "ndc9": "ndc9",
    "ndc10": "ndc10",
    "spl_id": "splId",
    "description": "description",
    "manufacturer": "manufacturer",
    "route": "route",
    "strength": "strength",
}


@dataclass
class NDCRecord:
    concept_id: str
    term_type: str
    name: str
    ndc: str
    ndc9: str
    ndc10: str
    spl_id: str
    description: str
    manufacturer: str
    route: str
    strength: str

    @classmethod
    def from_rxnav(cls, concept: Concept, ndc_property: NdcProperty, detail: TermDetail) -> "NDCRecord":
        packaging = ndc_property.packaging
        return cls(
            concept_id=concept.rxcui,
            term_type=concept.tty,
            name=detail.full_generic_name,
            ndc=ndc_property.ndc11,
            ndc9=ndc_property.ndc9,
            ndc10=ndc_property.ndc10,
            spl_id=ndc_property.spl_set_id,
            description="; ".join(packaging) if packaging else NO_VALUE,
            manufacturer=ndc_property.property_value(LABELER_PROPERTY) or "",
            route=detail.route,
            strength=detail.strength,
        )

    @classmethod
    def from_openfda(cls, product: FdaProduct, package: FdaPackage) -> "NDCRecord":
        return cls(
            concept_id=NO_VALUE,
            term_type=NO_VALUE,
            name=f"{product.generic_name} ({product.brand_name})",
            ndc=normalize_ndc(package.package_ndc),
            ndc9=product.product_ndc,
            ndc10=package.package_ndc,
            spl_id=product.spl_id,
            description=package.description or NO_VALUE,
            manufacturer=product.labeler_name,
            route=", ".join(product.routes).lower(),
            strength=", ".join(product.strengths),
        )

    def to_dict(self) -> Dict[str, str]:
        return {CSV_COLUMNS[key]: value for key, value in asdict(self).items()}


def records_from_product(product: FdaProduct) -> List[NDCRecord]:
    return [NDCRecord.from_openfda(product, package) for package in product.packages]


__all__ = ["NDCRecord", "CSV_COLUMNS", "records_from_product"]
