"""Services package for Hyper Friends Zone."""

from .relationship_service import relationship_service, RelationshipService

__all__ = [
    "relationship_service",
    "RelationshipService",
]
