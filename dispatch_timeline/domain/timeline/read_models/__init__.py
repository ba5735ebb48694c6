"""Read models derived from a computed timeline layout."""

from .row_decorations import (
    EcbtMarker,
    TravelConnector,
    build_ecbt_marker,
    build_travel_connectors,
    lunch_tooltip,
)

__all__ = [
    "EcbtMarker",
    "TravelConnector",
    "build_ecbt_marker",
    "build_travel_connectors",
    "lunch_tooltip",
]
