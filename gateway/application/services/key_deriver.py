"""Object key derivation: validate an identifier set and build a scoped storage key.

Keys are laid out as::

    {client}/{scope}/{container_type}[/{container_id}][/{table}/{record}][/{column}][/{file}]

where scope is ``user/{user_id}``, ``role/{role_id}`` or ``client``. Rules are
checked in a fixed order and the first broken rule is reported, so callers
always see the same message for the same input. Pure functions: no logging,
no I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from gateway.domain.enums import ContainerType
from gateway.domain.exceptions import MissingFileNameException, ValidationException
from gateway.domain.value_objects import IdentifierSet

PLACEHOLDER = "_"
SHARED_SCOPE = "client"

_PATH_SEGMENT_RE = re.compile(r"[^A-Za-z0-9-]")
_FILE_SEGMENT_RE = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_path_segment(value: str) -> str:
    """Replace every character outside letters, digits and hyphen with ``_``."""
    return _PATH_SEGMENT_RE.sub(PLACEHOLDER, value)


def sanitize_file_segment(value: str) -> str:
    """Replace every character outside letters, digits, dot, underscore and hyphen with ``_``."""
    return _FILE_SEGMENT_RE.sub(PLACEHOLDER, value)


@dataclass(frozen=True)
class KeyDerivationRules:
    """Which optional rules a deployment enables.

    Attributes:
        private_scope: Honour user_id/role_id as a private scope segment.
        attachment_exception: Attachments may omit container_id but must be
            pinned to a table row. When False, attachments follow the same
            rules as every other container type.
    """

    private_scope: bool = True
    attachment_exception: bool = True


class KeyDeriver:
    """Validates identifier sets and derives storage keys and listing prefixes."""

    def __init__(self, rules: KeyDerivationRules | None = None) -> None:
        self.rules = rules or KeyDerivationRules()

    def _validate(self, ids: IdentifierSet) -> ContainerType:
        """Check identifier rules in reporting order. Returns the parsed container type."""
        if not ids.has("client_id"):
            raise ValidationException("Client ID is Mandatory", field="client_id")
        if not ids.has("container_type"):
            raise ValidationException(
                "Container Type is Mandatory", field="container_type"
            )
        has_table = ids.has("table_name")
        has_record = ids.has("record_id")
        if has_record and not has_table:
            raise ValidationException("Table Name is Mandatory", field="table_name")
        if has_table and not has_record:
            raise ValidationException("Record ID is Mandatory", field="record_id")
        if ids.has("column_name") and not has_table:
            raise ValidationException("Table Name is Mandatory", field="table_name")

        container_type = ContainerType.parse(ids.container_type)  # type: ignore[arg-type]
        is_attachment = (
            self.rules.attachment_exception
            and container_type is ContainerType.ATTACHMENT
        )
        if not ids.has("container_id") and not is_attachment:
            raise ValidationException(
                "Container ID is Mandatory", field="container_id"
            )
        if is_attachment and not (has_table and has_record):
            raise ValidationException(
                "Invalid Container Type (Mandatory Record ID and Table Name)",
                field="container_type",
            )
        return container_type

    def derive_scope_prefix(
        self, ids: IdentifierSet, include_scope: bool = True
    ) -> str:
        """Validate ids and return the lowercased key prefix (no file segment).

        Args:
            ids: Identifier set for the request; file_name is ignored.
            include_scope: Use the user/role scope when one is supplied;
                otherwise the shared client scope is used.

        Returns:
            Slash-separated prefix without a trailing slash.

        Raises:
            ValidationException: First broken identifier rule.
        """
        container_type = self._validate(ids)

        segments = [sanitize_path_segment(ids.client_id)]  # type: ignore[arg-type]
        scope = ids.private_scope() if include_scope and self.rules.private_scope else None
        if scope is not None:
            kind, scope_id = scope
            segments += [kind, sanitize_path_segment(scope_id)]
        else:
            segments.append(SHARED_SCOPE)

        segments.append(sanitize_path_segment(container_type.value))
        if ids.has("container_id"):
            segments.append(sanitize_path_segment(ids.container_id))  # type: ignore[arg-type]
        if ids.has("table_name"):
            segments += [
                sanitize_path_segment(ids.table_name),  # type: ignore[arg-type]
                sanitize_path_segment(ids.record_id),  # type: ignore[arg-type]
            ]
        if ids.has("column_name"):
            segments.append(sanitize_path_segment(ids.column_name))  # type: ignore[arg-type]
        return "/".join(segments).lower()

    def derive_object_key(self, ids: IdentifierSet) -> str:
        """Validate ids and return the full lowercased object key.

        Raises:
            MissingFileNameException: file_name is absent (checked first).
            ValidationException: First broken prefix rule, message unchanged.
        """
        if not ids.has("file_name"):
            raise MissingFileNameException()
        prefix = self.derive_scope_prefix(ids, include_scope=True)
        return f"{prefix}/{sanitize_file_segment(ids.file_name)}".lower()  # type: ignore[arg-type]


_default_deriver = KeyDeriver()


def derive_scope_prefix(ids: IdentifierSet, include_scope: bool = True) -> str:
    """Derive a listing prefix with the default rules."""
    return _default_deriver.derive_scope_prefix(ids, include_scope=include_scope)


def derive_object_key(ids: IdentifierSet) -> str:
    """Derive an object key with the default rules."""
    return _default_deriver.derive_object_key(ids)
