from .base import ServiceBrokerClient
from .v2 import HttpClient

__all__ = [
    "HttpClient",
    "ServiceBrokerClient",
]
