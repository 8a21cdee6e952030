"""Domain enumerations for the object gateway.

Enums represent fixed sets of domain values (container kinds, signing methods).
"""

from enum import Enum

from gateway.domain.exceptions import ValidationException


class ContainerType(str, Enum):
    """Entity kinds that may own stored objects.

    The value is the key segment written under the tenant/scope prefix.
    Attachments are pinned to a table row instead of a container id.
    """

    WINDOW = "window"
    PROCESS = "process"
    REPORT = "report"
    BROWSER = "browser"
    FORM = "form"
    APPLICATION = "application"
    RESOURCE = "resource"
    ATTACHMENT = "attachment"

    @classmethod
    def values(cls) -> list[str]:
        """Return all recognised container type values as strings."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, raw: str) -> "ContainerType":
        """Parse a raw container type (case-insensitive).

        Args:
            raw: Value as received from the request.

        Returns:
            The matching ContainerType.

        Raises:
            ValidationException: If raw is not a recognised container type.
        """
        try:
            return cls(raw.strip().lower())
        except ValueError as e:
            raise ValidationException(
                "Invalid Container Type", field="container_type"
            ) from e


class SignMethod(str, Enum):
    """HTTP method a presigned URL is valid for."""

    GET = "GET"
    PUT = "PUT"

    @property
    def client_method(self) -> str:
        """Return the S3 client operation name used for signing."""
        return "get_object" if self is SignMethod.GET else "put_object"
