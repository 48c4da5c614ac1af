from .catalog import (
    BindingResponse,
    Catalog,
    Plan,
    ProvisionResponse,
    Service,
    parse_binding_response,
    parse_catalog,
    parse_provision_response,
)

__all__ = [
    "BindingResponse",
    "Catalog",
    "Plan",
    "ProvisionResponse",
    "Service",
    "parse_binding_response",
    "parse_catalog",
    "parse_provision_response",
]
