"""Object use cases: sign, proxy upload, list and delete behind derived keys."""

from gateway.application.use_cases.objects.object_operations import (
    ObjectAccessService,
    normalize_object_key,
)

__all__ = [
    "ObjectAccessService",
    "normalize_object_key",
]
