"""Entra ID adapter - Microsoft Graph backed application directory."""

from .directory import EntraIdApplicationDirectory
from .graph_client import GraphClient, GraphClientConfig

__all__ = [
    "EntraIdApplicationDirectory",
    "GraphClient",
    "GraphClientConfig",
]
