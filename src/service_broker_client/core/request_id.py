"""
Correlation ID for outbound broker calls.

The current ID lives in a context variable so concurrent callers (threads or
tasks) each see their own value.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Callable, Iterator

REQUEST_ID_HEADER = "X-VCAP-Request-ID"

RequestIdProvider = Callable[[], str]

_request_id_ctx_var: ContextVar[str | None] = ContextVar("service_broker_request_id", default=None)


def current_id() -> str:
    value = _request_id_ctx_var.get()
    if not value:
        value = str(uuid.uuid4())
        _request_id_ctx_var.set(value)
    return value


def set_current_id(value: str) -> Token:
    return _request_id_ctx_var.set(value)


def reset_current_id(token: Token) -> None:
    _request_id_ctx_var.reset(token)


@contextmanager
def request_id_context(value: str | None = None) -> Iterator[str]:
    request_id = value or str(uuid.uuid4())
    token = set_current_id(request_id)
    try:
        yield request_id
    finally:
        reset_current_id(token)
