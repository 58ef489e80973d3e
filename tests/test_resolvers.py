"""
Tests for the drug-name and ATC-class resolvers against canned RxNav/openFDA data.
"""

import pytest
import requests

from ndc_lookup.concepts import NO_VALUE
from ndc_lookup.remote import RemoteLookupError
from ndc_lookup.resolvers import ClassResolver, DrugResolver

from payloads import (
    classes_payload,
    fda_payload,
    members_payload,
    ndc_payload,
    related_payload,
    rxcui_payload,
    term_payload,
)

METOPROLOL_NDCS = {"866412": "00378001801", "866924": "00078045805"}


def _not_found(params):
    return RemoteLookupError("https://api.fda.gov/drug/ndc.json", requests.HTTPError("404 Client Error"))


def _metoprolol_routes():
    return {
        "/rxcui.json": rxcui_payload("6918"),
        "/related.json": related_payload(
            SCD=[("866412", "metoprolol tartrate 100 MG Oral Tablet")],
            SBD=[("866924", "metoprolol tartrate 100 MG Oral Tablet [Lopressor]")],
        ),
        "/ndcproperties.json": lambda params: ndc_payload(params["rxcui"], METOPROLOL_NDCS[params["rxcui"]]),
        "/allinfo.json": lambda params: term_payload(params["rxcui"], "Metoprolol Tartrate 100mg Tab"),
    }


def test_drug_resolver_metoprolol_end_to_end(make_clients):
    remote, rxnav, openfda = make_clients(_metoprolol_routes())

    records = DrugResolver(rxnav, openfda).resolve("metoprolol")

    assert len(records) == 2
    assert {record.concept_id for record in records} == {"866412", "866924"}
    assert all(record.concept_id != NO_VALUE for record in records)
    assert {record.term_type for record in records} == {"SCD", "SBD"}
    assert {record.ndc for record in records} == set(METOPROLOL_NDCS.values())
    assert remote.calls_to("/drug/ndc.json") == []


def test_drug_resolver_no_terminology_match(make_clients):
    remote, rxnav, openfda = make_clients({"/rxcui.json": rxcui_payload()})

    assert DrugResolver(rxnav, openfda).resolve("notadrug") == []
    assert remote.calls_to("/related.json") == []
    assert remote.calls_to("/drug/ndc.json") == []


def test_drug_resolver_falls_back_to_openfda(make_clients):
    remote, rxnav, openfda = make_clients(
        {
            "/rxcui.json": rxcui_payload("1234"),
            "/related.json": related_payload(),
            "/drug/ndc.json": fda_payload("Obscurine", "Obscura", "1234-123-1", "12345-1234-12"),
        }
    )

    records = DrugResolver(rxnav, openfda).resolve("obscurine")

    assert [record.ndc for record in records] == ["01234012301", "12345123412"]
    assert all(record.concept_id == NO_VALUE and record.term_type == NO_VALUE for record in records)
    assert records[0].name == "Obscurine (Obscura)"
    assert remote.calls_to("/drug/ndc.json") == [{"field": "generic_name", "value": "obscurine", "limit": 100}]
    assert remote.calls_to("/ndcproperties.json") == []
    assert remote.calls_to("/allinfo.json") == []


def test_drug_resolver_swallows_fallback_failure(make_clients):
    remote, rxnav, openfda = make_clients(
        {
            "/rxcui.json": rxcui_payload("1234"),
            "/related.json": related_payload(),
            "/drug/ndc.json": _not_found,
        }
    )

    assert DrugResolver(rxnav, openfda).resolve("obscurine") == []
    assert len(remote.calls_to("/drug/ndc.json")) == 1


def test_drug_resolver_does_not_mask_programming_errors(make_clients):
    _remote, rxnav, openfda = make_clients(
        {
            "/rxcui.json": rxcui_payload("1234"),
            "/related.json": related_payload(),
            "/drug/ndc.json": lambda params: KeyError("results"),
        }
    )

    with pytest.raises(KeyError):
        DrugResolver(rxnav, openfda).resolve("obscurine")


def test_drug_resolver_propagates_primary_failure(make_clients):
    _remote, rxnav, openfda = make_clients(
        {
            "/rxcui.json": rxcui_payload("6918"),
            "/related.json": lambda params: RemoteLookupError("related", requests.ConnectionError("boom")),
        }
    )

    with pytest.raises(RemoteLookupError):
        DrugResolver(rxnav, openfda).resolve("metoprolol")


def test_drug_resolver_deduplicates_concepts_across_identifiers(make_clients):
    routes = _metoprolol_routes()
    routes["/rxcui.json"] = rxcui_payload("6918", "41493")
    remote, rxnav, openfda = make_clients(routes)

    records = DrugResolver(rxnav, openfda).resolve("metoprolol")

    assert len(records) == 2
    assert sorted(params["rxcui"] for params in remote.calls_to("/ndcproperties.json")) == ["866412", "866924"]


def test_drug_resolver_skips_concepts_without_term_detail(make_clients):
    routes = _metoprolol_routes()
    routes["/allinfo.json"] = lambda params: (
        term_payload(params["rxcui"], "Metoprolol Tartrate 100mg Tab") if params["rxcui"] == "866412" else {}
    )
    _remote, rxnav, openfda = make_clients(routes)

    records = DrugResolver(rxnav, openfda).resolve("metoprolol")

    assert [record.concept_id for record in records] == ["866412"]


def test_class_resolver_no_classes(make_clients):
    remote, rxnav, openfda = make_clients({"/rxclass/class/byName.json": classes_payload()})

    assert ClassResolver(rxnav, openfda).resolve("Nonexistent class") == []
    assert remote.calls_to("/rxclass/classMembers.json") == []
    assert remote.calls_to("/drug/ndc.json") == []


def test_class_resolver_uses_dispensable_concepts(make_clients):
    members = {
        "C07AB": members_payload(("6918", "metoprolol", "IN"), ("1202", "atenolol", "IN")),
        "C07AG": members_payload(("6918", "metoprolol", "IN")),
    }
    related = {
        "6918": related_payload(SCD=[("866412", "metoprolol tartrate 100 MG Oral Tablet")]),
        "1202": related_payload(SBD=[("197381", "atenolol 50 MG Oral Tablet [Tenormin]")]),
    }
    ndcs = {"866412": "00378001801", "197381": "00310010510"}
    remote, rxnav, openfda = make_clients(
        {
            "/rxclass/class/byName.json": classes_payload(("C07AB", "Beta blocking agents, selective"), ("C07AG", "Alpha and beta blocking agents")),
            "/rxclass/classMembers.json": lambda params: members[params["class_id"]],
            "/related.json": lambda params: related[params["rxcui"]],
            "/ndcproperties.json": lambda params: ndc_payload(params["rxcui"], ndcs[params["rxcui"]]),
            "/allinfo.json": lambda params: term_payload(params["rxcui"], "Generic"),
        }
    )

    records = ClassResolver(rxnav, openfda).resolve("Beta blocking agents, selective")

    assert [record.concept_id for record in records] == ["866412", "197381"]
    assert [params["rxcui"] for params in remote.calls_to("/related.json")] == ["6918", "1202"]
    assert [params["rxcui"] for params in remote.calls_to("/ndcproperties.json")] == ["866412", "197381"]
    assert remote.calls_to("/drug/ndc.json") == []


def test_class_resolver_falls_back_for_every_class_member(make_clients):
    members = {
        "A01AA": members_payload(("1001", "sodium fluoride", "IN")),
        "A01AB": members_payload(("1002", "chlorhexidine", "IN"), ("1003", "tetracycline", "MIN")),
    }
    fda_results = {
        "sodium fluoride": fda_payload("Sodium Fluoride", "Fluoritab", "0000-001-01"),
        "chlorhexidine": _not_found(None),
        "tetracycline": fda_payload("Tetracycline", "Sumycin", "12345-6789-01"),
    }
    remote, rxnav, openfda = make_clients(
        {
            "/rxclass/class/byName.json": classes_payload(("A01AA", "Caries prophylactic agents"), ("A01AB", "Antiinfectives")),
            "/rxclass/classMembers.json": lambda params: members[params["class_id"]],
            "/related.json": related_payload(),
            "/drug/ndc.json": lambda params: fda_results[params["value"]],
        }
    )

    records = ClassResolver(rxnav, openfda).resolve("Stomatological preparations")

    assert [params["value"] for params in remote.calls_to("/drug/ndc.json")] == [
        "sodium fluoride",
        "chlorhexidine",
        "tetracycline",
    ]
    assert [record.ndc for record in records] == ["00000000101", "12345678901"]
    assert all(record.concept_id == NO_VALUE for record in records)
    assert remote.calls_to("/ndcproperties.json") == []


def test_class_resolver_falls_back_when_no_related_groups_found(make_clients):
    remote, rxnav, openfda = make_clients(
        {
            "/rxclass/class/byName.json": classes_payload(("C07AB", "Beta blocking agents, selective")),
            "/rxclass/classMembers.json": members_payload(("866412", "metoprolol tartrate", "SCD")),
            "/related.json": related_payload(),
            "/drug/ndc.json": fda_payload("Metoprolol Tartrate", "Lopressor", "1234-123-1"),
        }
    )

    records = ClassResolver(rxnav, openfda).resolve("Beta blocking agents, selective")

    assert [record.ndc for record in records] == ["01234012301"]
    assert all(record.concept_id == NO_VALUE for record in records)
    assert [params["value"] for params in remote.calls_to("/drug/ndc.json")] == ["metoprolol tartrate"]
    assert remote.calls_to("/ndcproperties.json") == []
    assert remote.calls_to("/allinfo.json") == []
