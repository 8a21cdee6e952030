"""DTOs shared between use cases and adapters (no framework dependencies)."""

from gateway.application.dtos.object import (
    ObjectEntry,
    ResourceItem,
    ResourceListing,
    SignedUrl,
)

__all__ = ["ObjectEntry", "ResourceItem", "ResourceListing", "SignedUrl"]
