"""Shared utilities used across price sources and services."""

from .http_client import HTTPClient, HTTPClientError
from .number_normalizer import normalize_number, parse_number, rial_to_toman

__all__ = [
    "HTTPClient",
    "HTTPClientError",
    "normalize_number",
    "parse_number",
    "rial_to_toman",
]
