from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from service_broker_client.clients.base import ServiceBrokerClient
from service_broker_client.core.config import ServiceBrokerConfig
from service_broker_client.core.errors import (
    ServiceBrokerApiAuthenticationFailed,
    ServiceBrokerApiTimeout,
    ServiceBrokerApiUnreachable,
    ServiceBrokerBadResponse,
    ServiceBrokerConflict,
    ServiceBrokerResponseMalformed,
)
from service_broker_client.core.http import create_http_client, timeout_for
from service_broker_client.core.logging import configure_logging
from service_broker_client.core.request_id import REQUEST_ID_HEADER, RequestIdProvider, current_id

logger = configure_logging(logger_name=__name__)

BASIC_AUTH_USERNAME = "cc"

# Checked in order: a connect timeout is also a TimeoutException.
_UNREACHABLE_ERRORS: tuple[type[Exception], ...] = (httpx.ConnectError, httpx.ConnectTimeout)
_TIMEOUT_ERRORS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.RemoteProtocolError,
    httpx.ReadError,
    httpx.WriteError,
)


class HttpClient(ServiceBrokerClient):
    """
    Client for the v2 service broker API.

    Every call makes exactly one request. Transport failures, unexpected
    status codes and undecodable bodies are raised as the errors in
    `service_broker_client.core.errors`.
    """

    def __init__(
        self,
        config: ServiceBrokerConfig,
        client: httpx.Client | None = None,
        request_id_provider: RequestIdProvider | None = None,
    ) -> None:
        if not config.is_configured():
            raise ValueError("Service broker url and auth token are not configured")
        self._config = config
        self._client = client or create_http_client(
            timeout=timeout_for(connect=config.connect_timeout, receive=config.timeout)
        )
        self._request_id_provider = request_id_provider or current_id

    @classmethod
    def new(cls, url: str, auth_token: str, **kwargs: Any) -> "HttpClient":
        return cls(ServiceBrokerConfig(url=url, auth_token=auth_token), **kwargs)

    def catalog(self) -> dict[str, Any]:
        return self._execute("GET", "/v2/catalog")

    def provision(
        self, instance_id: str, plan_id: str, org_guid: str, space_guid: str
    ) -> dict[str, Any]:
        return self._execute(
            "PUT",
            f"/v2/service_instances/{instance_id}",
            body={
                "plan_id": plan_id,
                "organization_guid": org_guid,
                "space_guid": space_guid,
            },
            conflict_status=409,
        )

    def bind(self, binding_id: str, instance_id: str) -> dict[str, Any]:
        return self._execute(
            "PUT",
            f"/v2/service_bindings/{binding_id}",
            body={"service_instance_id": instance_id},
        )

    def unbind(self, binding_id: str) -> None:
        self._execute("DELETE", f"/v2/service_bindings/{binding_id}", expected_status=204)

    def deprovision(self, instance_id: str) -> None:
        self._execute("DELETE", f"/v2/service_instances/{instance_id}", expected_status=204)

    def endpoint(self, path: str) -> str:
        return f"{self._config.url}{path}"

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _authenticated_url(self, path: str) -> httpx.URL:
        return httpx.URL(self.endpoint(path)).copy_with(
            username=BASIC_AUTH_USERNAME, password=self._config.auth_token
        )

    def _build_request(
        self, method: str, path: str, body: Optional[dict[str, Any]]
    ) -> httpx.Request:
        headers = {REQUEST_ID_HEADER: self._request_id_provider()}
        content: bytes | None = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body).encode("utf-8")
        return self._client.build_request(
            method, self._authenticated_url(path), headers=headers, content=content
        )

    def _send(self, request: httpx.Request, endpoint: str) -> httpx.Response:
        try:
            return self._client.send(request)
        except _UNREACHABLE_ERRORS as exc:
            logger.warning("Service broker unreachable at %s: %s", endpoint, exc)
            raise ServiceBrokerApiUnreachable(endpoint, cause=exc) from exc
        except _TIMEOUT_ERRORS as exc:
            logger.warning("Service broker timed out at %s: %s", endpoint, exc)
            raise ServiceBrokerApiTimeout(endpoint, cause=exc) from exc
        except httpx.TransportError as exc:
            logger.warning("Service broker transport failure at %s: %s", endpoint, exc)
            raise ServiceBrokerApiUnreachable(endpoint, cause=exc) from exc

    def _execute(
        self,
        method: str,
        path: str,
        body: Optional[dict[str, Any]] = None,
        expected_status: Optional[int] = None,
        conflict_status: Optional[int] = None,
    ) -> dict[str, Any] | None:
        endpoint = self.endpoint(path)
        request = self._build_request(method, path, body)
        logger.debug(
            "Sending %s %s (request id %s)", method, endpoint, request.headers[REQUEST_ID_HEADER]
        )
        response = self._send(request, endpoint)
        return self._handle_response(response, endpoint, expected_status, conflict_status)

    def _handle_response(
        self,
        response: httpx.Response,
        endpoint: str,
        expected_status: Optional[int],
        conflict_status: Optional[int],
    ) -> dict[str, Any] | None:
        status = response.status_code
        reason = response.reason_phrase

        if conflict_status is not None and status == conflict_status:
            logger.warning("Service broker reported a conflict at %s", endpoint)
            raise ServiceBrokerConflict(endpoint, status, reason, _decode_or_empty(response))

        if status == 401:
            logger.warning("Service broker rejected credentials at %s", endpoint)
            raise ServiceBrokerApiAuthenticationFailed(endpoint, status, reason)

        if expected_status is not None:
            successful = status == expected_status
        else:
            successful = 200 <= status < 300
        if not successful:
            logger.warning("Service broker returned %s %s from %s", status, reason, endpoint)
            raise ServiceBrokerBadResponse(endpoint, status, reason, _decode_or_empty(response))

        if expected_status is not None:
            # Bodies of no-content responses are not read.
            return None

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Service broker returned an undecodable body from %s", endpoint)
            raise ServiceBrokerResponseMalformed(endpoint, status, reason, source=response.text) from exc
        if not isinstance(payload, dict):
            logger.warning("Service broker returned a non-object body from %s", endpoint)
            raise ServiceBrokerResponseMalformed(endpoint, status, reason, source=payload)
        return payload


def _decode_or_empty(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {}
