"""openFDA drug NDC directory lookups used when RxNav has nothing to offer."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import DEFAULT_FDA_LIMIT, DEFAULT_OPENFDA_URL
from .remote import RemoteClient

logger = logging.getLogger(__name__)

PRODUCT_SEARCH = '/drug/ndc.json?search={field}:"{value}"&limit={limit}'

GENERIC_NAME_FIELD = "generic_name"
PHARM_CLASS_FIELD = "pharm_class"


@dataclass
class FdaPackage:
    package_ndc: str
    description: str = ""


@dataclass
class FdaProduct:
    generic_name: str
    brand_name: str
    product_ndc: str
    labeler_name: str
    routes: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    spl_id: str = ""
    packages: List[FdaPackage] = field(default_factory=list)


def parse_products(payload: Dict[str, Any]) -> List[FdaProduct]:
    products: List[FdaProduct] = []
    for item in payload.get("results") or []:
        packages = [
            FdaPackage(package_ndc=pkg.get("package_ndc", ""), description=pkg.get("description", ""))
            for pkg in item.get("packaging") or []
        ]
        strengths = [
            ingredient.get("strength", "")
            for ingredient in item.get("active_ingredients") or []
            if ingredient.get("strength")
        ]
        products.append(
            FdaProduct(
                generic_name=item.get("generic_name", ""),
                brand_name=item.get("brand_name", ""),
                product_ndc=item.get("product_ndc", ""),
                labeler_name=item.get("labeler_name", ""),
                routes=list(item.get("route") or []),
                strengths=strengths,
                spl_id=item.get("spl_id", ""),
                packages=packages,
            )
        )
    return products


class OpenFDAClient:
    """Search the openFDA NDC directory by generic name or pharmacologic class."""

    def __init__(
        self,
        remote: Optional[RemoteClient] = None,
        base_url: str = DEFAULT_OPENFDA_URL,
        limit: int = DEFAULT_FDA_LIMIT,
    ) -> None:
        self.remote = remote or RemoteClient()
        self.base_url = base_url.rstrip("/")
        self.limit = limit

    def products(self, value: str, search_field: str = GENERIC_NAME_FIELD) -> List[FdaProduct]:
        # openFDA answers an unmatched search with HTTP 404, which surfaces as RemoteLookupError.
        payload = self.remote.get(
            self.base_url + PRODUCT_SEARCH,
            {"field": search_field, "value": value, "limit": self.limit},
        )
        if not isinstance(payload, dict):
            return []
        total = ((payload.get("meta") or {}).get("results") or {}).get("total")
        if isinstance(total, int) and total > self.limit:
            logger.debug("openFDA has %d products for %s=%r, keeping the first %d", total, search_field, value, self.limit)
        return parse_products(payload)


__all__ = ["FdaPackage", "FdaProduct", "OpenFDAClient", "GENERIC_NAME_FIELD", "PHARM_CLASS_FIELD"]
