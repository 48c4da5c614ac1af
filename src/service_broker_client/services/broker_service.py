from __future__ import annotations

from service_broker_client.clients import HttpClient, ServiceBrokerClient
from service_broker_client.core.config import Settings, get_settings
from service_broker_client.core.logging import configure_logging
from service_broker_client.models import (
    BindingResponse,
    Catalog,
    ProvisionResponse,
    parse_binding_response,
    parse_catalog,
    parse_provision_response,
)

logger = configure_logging(logger_name=__name__)


class ServiceBrokerService:
    """Typed access to a single service broker."""

    def __init__(
        self, client: ServiceBrokerClient | None = None, settings: Settings | None = None
    ) -> None:
        if client is not None:
            self._client = client
            return
        self._settings = settings or get_settings()
        if not self._settings.broker.is_configured():
            raise ValueError("Service broker url and auth token are not configured")
        self._client = HttpClient(self._settings.broker)

    @property
    def client(self) -> ServiceBrokerClient:
        return self._client

    def fetch_catalog(self) -> Catalog:
        payload = self._client.catalog()
        catalog = parse_catalog(self._client.endpoint("/v2/catalog"), payload)
        logger.info(
            "Fetched catalog with %d services and %d plans",
            len(catalog.services),
            sum(len(service.plans) for service in catalog.services),
        )
        return catalog

    def provision(
        self, instance_id: str, plan_id: str, org_guid: str, space_guid: str
    ) -> ProvisionResponse:
        payload = self._client.provision(instance_id, plan_id, org_guid, space_guid)
        logger.info("Provisioned service instance %s with plan %s", instance_id, plan_id)
        return parse_provision_response(
            self._client.endpoint(f"/v2/service_instances/{instance_id}"), payload
        )

    def bind(self, binding_id: str, instance_id: str) -> BindingResponse:
        payload = self._client.bind(binding_id, instance_id)
        logger.info("Bound %s to service instance %s", binding_id, instance_id)
        return parse_binding_response(
            self._client.endpoint(f"/v2/service_bindings/{binding_id}"), payload
        )

    def unbind(self, binding_id: str) -> None:
        self._client.unbind(binding_id)
        logger.info("Unbound %s", binding_id)

    def deprovision(self, instance_id: str) -> None:
        self._client.deprovision(instance_id)
        logger.info("Deprovisioned service instance %s", instance_id)
