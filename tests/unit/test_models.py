import pytest

from service_broker_client.core.errors import ServiceBrokerResponseMalformed
from service_broker_client.models import (
    parse_binding_response,
    parse_catalog,
    parse_provision_response,
)

ENDPOINT = "http://broker.example.com/v2/catalog"


def test_parse_catalog_keeps_services_and_plans() -> None:
    payload = {
        "services": [
            {
                "id": "svc",
                "name": "redis",
                "description": "Redis",
                "bindable": True,
                "plans": [{"id": "p1", "name": "small"}, {"id": "p2", "name": "large"}],
            }
        ]
    }

    catalog = parse_catalog(ENDPOINT, payload)

    assert [plan.id for plan in catalog.services[0].plans] == ["p1", "p2"]
    assert catalog.services[0].model_dump()["bindable"] is True


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"services": "nope"},
        {"services": [{"id": "svc", "name": "redis"}]},
        {"services": [{"id": "svc", "name": "redis", "plans": [{"name": "small"}]}]},
    ],
)
def test_parse_catalog_rejects_wrong_shape(payload: dict) -> None:
    with pytest.raises(ServiceBrokerResponseMalformed) as excinfo:
        parse_catalog(ENDPOINT, payload)

    assert excinfo.value.endpoint == ENDPOINT
    assert excinfo.value.source["payload"] == payload


def test_provision_response_dashboard_url_is_optional() -> None:
    assert parse_provision_response(ENDPOINT, {}).dashboard_url is None
    assert parse_provision_response(ENDPOINT, {"dashboard_url": "u"}).dashboard_url == "u"


def test_binding_response_requires_mapping_credentials() -> None:
    parsed = parse_binding_response(ENDPOINT, {"credentials": {"user": "admin"}})
    assert parsed.credentials == {"user": "admin"}

    with pytest.raises(ServiceBrokerResponseMalformed):
        parse_binding_response(ENDPOINT, {"credentials": ["admin"]})
