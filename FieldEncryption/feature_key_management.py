"""
FEATURE: KEY MANAGEMENT
"""

# FLOW:
# - Re-export key resolvers and passphrase provisioning.
# WHY:
# - Ensures key utilities are discoverable.
# HOW:
# - Re-exports resolver classes and ensure_passphrase.

from FieldEncryption.key_management import (
    ChainedKeyResolver,
    EnvironmentKeyResolver,
    KeyResolver,
    MappingKeyResolver,
    ensure_passphrase,
    env_var_name,
)

__all__ = [
    "ChainedKeyResolver",
    "EnvironmentKeyResolver",
    "KeyResolver",
    "MappingKeyResolver",
    "ensure_passphrase",
    "env_var_name",
]
