"""
Integrations package initialization.
Exports the connectivity client contract and the AvaTax REST implementation.
"""
from .base import ConnectivityClient
from .avatax import AvaTaxRestClient

__all__ = [
    "ConnectivityClient",
    "AvaTaxRestClient",
]
