"""Entra ID Secret Monitor - Prometheus exporter for app secret expiry."""

__version__ = "1.0.0"
