from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ServiceBrokerClient(ABC):
    """Abstract interface for service broker API clients."""

    @abstractmethod
    def catalog(self) -> dict[str, Any]:
        """Return the broker catalog as decoded JSON."""

    @abstractmethod
    def provision(
        self, instance_id: str, plan_id: str, org_guid: str, space_guid: str
    ) -> dict[str, Any]:
        """Create a service instance and return the broker's response body."""

    @abstractmethod
    def bind(self, binding_id: str, instance_id: str) -> dict[str, Any]:
        """Create a binding and return the broker's response body."""

    @abstractmethod
    def unbind(self, binding_id: str) -> None:
        """Delete a binding."""

    @abstractmethod
    def deprovision(self, instance_id: str) -> None:
        """Delete a service instance."""

    @abstractmethod
    def endpoint(self, path: str) -> str:
        """Credential-free url for `path`, as reported in errors."""
