"""Resolve drug names and ATC classes into National Drug Code records."""

from .concepts import Concept, ConceptStore
from .openfda import OpenFDAClient
from .parsing import normalize_ndc
from .records import NDCRecord
from .remote import RemoteClient, RemoteLookupError
from .resolvers import ClassResolver, DrugResolver
from .rxnav import RxNavClient

__all__ = [
    "Concept",
    "ConceptStore",
    "normalize_ndc",
    "NDCRecord",
    "ClassResolver",
    "DrugResolver",
    "OpenFDAClient",
    "RemoteClient",
    "RemoteLookupError",
    "RxNavClient",
]
