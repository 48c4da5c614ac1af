from __future__ import annotations

import json
from typing import Any, Optional

import typer
from pydantic import ValidationError

from service_broker_client.core.config import ServiceBrokerConfig, get_settings
from service_broker_client.core.errors import StructuredError
from service_broker_client.core.logging import configure_logging, set_level
from service_broker_client.core.request_id import request_id_context
from service_broker_client.services import ServiceBrokerService

app = typer.Typer(add_completion=False, no_args_is_help=True)
logger = configure_logging(logger_name=__name__)


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))


def _build_service(ctx: typer.Context) -> ServiceBrokerService:
    options: dict[str, Any] = ctx.obj or {}
    settings = get_settings()
    broker = settings.broker
    overrides = {k: v for k, v in options.items() if k in {"url", "auth_token"} and v}
    if overrides:
        try:
            broker = ServiceBrokerConfig(**{**broker.model_dump(), **overrides})
        except ValidationError as exc:
            typer.echo(f"Invalid broker configuration: {exc}", err=True)
            raise typer.Exit(code=2) from exc
    if not broker.is_configured():
        typer.echo(
            "Service broker is not configured; set SERVICE_BROKER_URL and "
            "SERVICE_BROKER_AUTH_TOKEN or pass --url/--auth-token.",
            err=True,
        )
        raise typer.Exit(code=2)
    return ServiceBrokerService(settings=settings.model_copy(update={"broker": broker}))


def _run(ctx: typer.Context, operation: str, *args: str) -> Any:
    service = _build_service(ctx)
    request_id = (ctx.obj or {}).get("request_id")
    with request_id_context(request_id) as active_id:
        logger.debug("Running %s with request id %s", operation, active_id)
        try:
            return getattr(service, operation)(*args)
        except StructuredError as exc:
            typer.echo(json.dumps(exc.to_structured_form(), indent=2), err=True)
            raise typer.Exit(code=1) from exc


@app.callback()
def main_options(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(None, help="Broker base url (overrides SERVICE_BROKER_URL)"),
    auth_token: Optional[str] = typer.Option(
        None, help="Broker auth token (overrides SERVICE_BROKER_AUTH_TOKEN)"
    ),
    request_id: Optional[str] = typer.Option(None, help="Correlation id sent as X-VCAP-Request-ID"),
    log_level: Optional[str] = typer.Option(None, help="Logging level (defaults to LOG_LEVEL)"),
) -> None:
    """Talk to a v2 service broker."""
    set_level(log_level or get_settings().log_level)
    ctx.obj = {"url": url, "auth_token": auth_token, "request_id": request_id}


@app.command()
def catalog(ctx: typer.Context) -> None:
    """Fetch the broker catalog."""
    result = _run(ctx, "fetch_catalog")
    _echo_json(result.model_dump(exclude_none=True))


@app.command()
def provision(
    ctx: typer.Context, instance_id: str, plan_id: str, org_guid: str, space_guid: str
) -> None:
    """Provision a service instance."""
    result = _run(ctx, "provision", instance_id, plan_id, org_guid, space_guid)
    _echo_json(result.model_dump(exclude_none=True))


@app.command()
def bind(ctx: typer.Context, binding_id: str, instance_id: str) -> None:
    """Bind a service instance and print the credentials."""
    result = _run(ctx, "bind", binding_id, instance_id)
    _echo_json(result.model_dump(exclude_none=True))


@app.command()
def unbind(ctx: typer.Context, binding_id: str) -> None:
    """Delete a service binding."""
    _run(ctx, "unbind", binding_id)
    typer.echo(f"Unbound {binding_id}")


@app.command()
def deprovision(ctx: typer.Context, instance_id: str) -> None:
    """Delete a service instance."""
    _run(ctx, "deprovision", instance_id)
    typer.echo(f"Deprovisioned {instance_id}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
