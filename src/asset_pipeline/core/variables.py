"""Colour palette consulted by ``var(--name)`` references.

The table is immutable and shared read-only by every build.
"""

from collections.abc import Mapping
from types import MappingProxyType

VARIABLES: Mapping[str, str] = MappingProxyType(
    {
        "blue": "#007bff",
        "green": "#28a745",
        "green-dark": "#155724",
        "green-light": "#d4edda",
        "grey": "#ced4da",
        "grey-dark": "#343a40",
        "grey-light": "#f8f9fa",
        "red": "#dc3545",
        "red-dark": "#721c24",
        "red-light": "#f8d7da",
        "yellow": "#ffc107",
        "yellow-light": "#fff3cd",
        "yellow-dark": "#856404",
    }
)
