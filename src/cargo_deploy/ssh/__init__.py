"""SSH provisioning helpers."""

from .provisioner import (
    KeyPath,
    check_key_authorized,
    ensure_key,
    identity_args,
    key_path_for,
    sanitize_component,
)

__all__ = [
    "KeyPath",
    "ensure_key",
    "key_path_for",
    "identity_args",
    "check_key_authorized",
    "sanitize_component",
]
