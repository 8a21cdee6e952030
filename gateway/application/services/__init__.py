"""Application services (pure, no I/O)."""

from gateway.application.services.key_deriver import (
    KeyDerivationRules,
    KeyDeriver,
    derive_object_key,
    derive_scope_prefix,
    sanitize_file_segment,
    sanitize_path_segment,
)

__all__ = [
    "KeyDerivationRules",
    "KeyDeriver",
    "derive_object_key",
    "derive_scope_prefix",
    "sanitize_file_segment",
    "sanitize_path_segment",
]
