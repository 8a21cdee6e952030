"""Identifier set value object.

Raw tenancy/ownership/entity identifiers for one request. Built from path
and query parameters, validated by the key deriver, then discarded.
"""

from dataclasses import dataclass, replace


def _present(value: str | None) -> bool:
    """Return True if value carries a non-blank string."""
    return value is not None and value.strip() != ""


@dataclass(frozen=True)
class IdentifierSet:
    """Loosely typed identifiers from which an object key is derived.

    All fields are optional here; which ones are required is decided by the
    key deriver. Blank strings are treated as absent.
    """

    client_id: str | None = None
    container_type: str | None = None
    container_id: str | None = None
    table_name: str | None = None
    record_id: str | None = None
    column_name: str | None = None
    user_id: str | None = None
    role_id: str | None = None
    file_name: str | None = None

    def has(self, field_name: str) -> bool:
        """Return True if the named identifier is present (non-blank)."""
        return _present(getattr(self, field_name))

    def without_file_name(self) -> "IdentifierSet":
        """Return a copy without file name (listing prefix)."""
        return replace(self, file_name=None)

    def private_scope(self) -> tuple[str, str] | None:
        """Return (kind, id) of the private scope selector, user before role."""
        if self.has("user_id"):
            return ("user", self.user_id)  # type: ignore[return-value]
        if self.has("role_id"):
            return ("role", self.role_id)  # type: ignore[return-value]
        return None
