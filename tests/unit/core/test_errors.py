import pytest

from service_broker_client.core.errors import (
    HttpError,
    ServiceBrokerApiAuthenticationFailed,
    ServiceBrokerApiTimeout,
    ServiceBrokerApiUnreachable,
    ServiceBrokerBadResponse,
    ServiceBrokerConflict,
    ServiceBrokerResponseMalformed,
    StructuredError,
)

ENDPOINT = "http://www.example.com/"


def test_bad_response_generates_structured_form() -> None:
    exc = ServiceBrokerBadResponse(ENDPOINT, 500, "Internal Server Error", {"foo": "bar"})
    exc.set_backtrace(["/foo:1", "/bar:2"])

    assert exc.to_structured_form() == {
        "description": (
            "The service broker API returned an error from http://www.example.com/: "
            "500 Internal Server Error"
        ),
        "error": {
            "types": ["ServiceBrokerBadResponse", "HttpError", "StructuredError", "Exception"],
            "backtrace": ["/foo:1", "/bar:2"],
            "error": {"foo": "bar"},
        },
    }


def test_unraised_error_has_empty_backtrace() -> None:
    exc = ServiceBrokerApiTimeout(ENDPOINT)
    assert exc.backtrace == []


def test_raised_error_records_backtrace() -> None:
    with pytest.raises(ServiceBrokerApiUnreachable) as excinfo:
        raise ServiceBrokerApiUnreachable(ENDPOINT)

    frames = excinfo.value.to_structured_form()["error"]["backtrace"]
    assert frames
    assert all(isinstance(frame, str) for frame in frames)


def test_conflict_types_extend_bad_response() -> None:
    exc = ServiceBrokerConflict(ENDPOINT, 409, "Conflict")

    assert isinstance(exc, ServiceBrokerBadResponse)
    assert exc.to_structured_form()["error"]["types"] == [
        "ServiceBrokerConflict",
        "ServiceBrokerBadResponse",
        "HttpError",
        "StructuredError",
        "Exception",
    ]
    assert exc.source == {}


@pytest.mark.parametrize(
    ("exc", "label"),
    [
        (ServiceBrokerApiUnreachable(ENDPOINT), "ServiceBrokerApiUnreachable"),
        (ServiceBrokerApiTimeout(ENDPOINT), "ServiceBrokerApiTimeout"),
        (ServiceBrokerApiAuthenticationFailed(ENDPOINT), "ServiceBrokerApiAuthenticationFailed"),
        (ServiceBrokerResponseMalformed(ENDPOINT), "ServiceBrokerResponseMalformed"),
    ],
)
def test_each_kind_declares_its_labels(exc: HttpError, label: str) -> None:
    types = exc.to_structured_form()["error"]["types"]

    assert types == [label, "HttpError", "StructuredError", "Exception"]
    assert isinstance(exc, StructuredError)
    assert exc.endpoint == ENDPOINT
    assert ENDPOINT in exc.to_structured_form()["description"]


def test_transport_errors_carry_no_upstream_payload() -> None:
    cause = OSError("connection refused")
    exc = ServiceBrokerApiUnreachable(ENDPOINT, cause=cause)

    assert exc.cause is cause
    assert exc.to_structured_form()["error"]["error"] is None
    assert exc.status is None


def test_raised_error_backtrace_has_one_line_per_frame() -> None:
    with pytest.raises(ServiceBrokerApiTimeout) as excinfo:
        raise ServiceBrokerApiTimeout(ENDPOINT)

    frames = excinfo.value.backtrace
    assert all("\n" not in frame for frame in frames)
    assert frames[-1].endswith(":in test_raised_error_backtrace_has_one_line_per_frame")
    assert frames[-1].split(":")[0].endswith("test_errors.py")


def test_bad_response_without_reason_has_no_trailing_space() -> None:
    exc = ServiceBrokerBadResponse(ENDPOINT, 599, "")

    assert str(exc) == "The service broker API returned an error from http://www.example.com/: 599"
