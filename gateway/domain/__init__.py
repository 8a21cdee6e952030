"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from gateway.domain.enums import ContainerType, SignMethod
from gateway.domain.exceptions import (
    GatewayException,
    MissingFileNameException,
    ValidationException,
)
from gateway.domain.value_objects import IdentifierSet

__all__ = [
    # Enums
    "ContainerType",
    "SignMethod",
    # Exceptions
    "GatewayException",
    "MissingFileNameException",
    "ValidationException",
    # Value objects
    "IdentifierSet",
]
