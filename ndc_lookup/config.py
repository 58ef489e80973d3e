"""Runtime settings read from the environment (and an optional ``.env``)."""
from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_RXNAV_URL = "https://rxnav.nlm.nih.gov/REST"
DEFAULT_OPENFDA_URL = "https://api.fda.gov"
DEFAULT_TIMEOUT = 30
DEFAULT_FDA_LIMIT = 100


@dataclass(frozen=True)
class Settings:
    rxnav_url: str = DEFAULT_RXNAV_URL
    openfda_url: str = DEFAULT_OPENFDA_URL
    timeout: int = DEFAULT_TIMEOUT
    fda_limit: int = DEFAULT_FDA_LIMIT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``NDC_LOOKUP_*`` environment variables."""

        return cls(
            rxnav_url=os.getenv("NDC_LOOKUP_RXNAV_URL", DEFAULT_RXNAV_URL).rstrip("/"),
            openfda_url=os.getenv("NDC_LOOKUP_OPENFDA_URL", DEFAULT_OPENFDA_URL).rstrip("/"),
            timeout=int(os.getenv("NDC_LOOKUP_TIMEOUT", str(DEFAULT_TIMEOUT))),
            fda_limit=int(os.getenv("NDC_LOOKUP_FDA_LIMIT", str(DEFAULT_FDA_LIMIT))),
            log_level=os.getenv("NDC_LOOKUP_LOG_LEVEL", "INFO").upper(),
        )


__all__ = ["Settings"]
