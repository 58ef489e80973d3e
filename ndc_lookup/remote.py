"""Blocking JSON-over-HTTP access shared by the RxNav and openFDA clients."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote_plus

import requests

from .config import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class RemoteLookupError(RuntimeError):
    """A remote call failed in transport, returned an error status or sent invalid JSON."""

    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(f"Request to {url} failed: {cause}")
        self.url = url
        self.cause = cause


class RemoteClient:
    """Expand a URL template, GET it and decode the JSON body."""

    def __init__(self, timeout: int = DEFAULT_TIMEOUT, *, quiet: bool = False) -> None:
        self.timeout = timeout
        self.quiet = quiet

    @staticmethod
    def expand(url_template: str, params: Optional[Dict[str, Any]] = None) -> str:
        quoted = {key: quote_plus(str(value)) for key, value in (params or {}).items()}
        return url_template.format(**quoted)

    def get(self, url_template: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = self.expand(url_template, params)
        logger.log(logging.DEBUG if self.quiet else logging.INFO, "GET %s", url)
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            raise RemoteLookupError(url, exc) from exc


__all__ = ["RemoteClient", "RemoteLookupError"]
