"""
Pytest configuration and shared fixtures for the NDC lookup tests.
"""

import pytest

from ndc_lookup.openfda import OpenFDAClient
from ndc_lookup.rxnav import RxNavClient


class FakeRemote:
    """Serve canned JSON per endpoint fragment and remember every call."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def get(self, url_template, params=None):
        params = dict(params or {})
        self.calls.append((url_template, params))
        for fragment, handler in self.routes.items():
            if fragment in url_template:
                result = handler(params) if callable(handler) else handler
                if isinstance(result, Exception):
                    raise result
                return result
        return {}

    def calls_to(self, fragment):
        return [params for template, params in self.calls if fragment in template]


@pytest.fixture
def make_clients():
    """Return a factory building RxNav/openFDA clients over one FakeRemote."""

    def factory(routes):
        remote = FakeRemote(routes)
        return remote, RxNavClient(remote), OpenFDAClient(remote)

    return factory
