from .broker_service import ServiceBrokerService

__all__ = ["ServiceBrokerService"]
