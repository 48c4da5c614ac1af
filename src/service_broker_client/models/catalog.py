from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from service_broker_client.core.errors import ServiceBrokerResponseMalformed


class Plan(BaseModel):
    id: str
    name: str
    description: Optional[str] = None

    model_config = {"extra": "allow"}


class Service(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    plans: list[Plan] = Field(description="Plans offered for this service")

    model_config = {"extra": "allow"}


class Catalog(BaseModel):
    services: list[Service]

    model_config = {"extra": "allow"}


class ProvisionResponse(BaseModel):
    dashboard_url: Optional[str] = Field(
        default=None, description="Broker-hosted dashboard for the new instance."
    )

    model_config = {"extra": "allow"}


class BindingResponse(BaseModel):
    credentials: dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "allow"}


def _parse(model: type[BaseModel], endpoint: str, payload: Any) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ServiceBrokerResponseMalformed(
            endpoint, source={"payload": payload, "detail": exc.errors(include_url=False)}
        ) from exc


def parse_catalog(endpoint: str, payload: Any) -> Catalog:
    return _parse(Catalog, endpoint, payload)


def parse_provision_response(endpoint: str, payload: Any) -> ProvisionResponse:
    return _parse(ProvisionResponse, endpoint, payload)


def parse_binding_response(endpoint: str, payload: Any) -> BindingResponse:
    return _parse(BindingResponse, endpoint, payload)
