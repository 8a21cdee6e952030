"""Domain value objects (immutable, self-describing)."""

from gateway.domain.value_objects.identifiers import IdentifierSet

__all__ = ["IdentifierSet"]
