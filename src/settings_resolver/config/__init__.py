"""Schema-aware resolution of flat string properties.

Reads scalar and multi-valued properties from an assembled key/value store,
falls back to declared defaults, decrypts secret values, and warns without
failing when a property is read with the wrong shape.
"""

from ._configuration import Configuration
from ._csv import format_multi_values, parse_multi_values
from ._definitions import PropertyDefinition, PropertyDefinitions
from ._encryption import Encryption, SecretCodec
from ._types import (
    AnalysisMode,
    ConfigError,
    DuplicatePropertyError,
    InvalidValueError,
    MalformedMultiValueError,
    Secret,
    SecretDecodeError,
)

__all__ = [
    # Core
    "Configuration",
    "AnalysisMode",
    # Declarations
    "PropertyDefinition",
    "PropertyDefinitions",
    # Secrets
    "Encryption",
    "SecretCodec",
    "Secret",
    # Multi-valued properties
    "parse_multi_values",
    "format_multi_values",
    # Errors
    "ConfigError",
    "DuplicatePropertyError",
    "InvalidValueError",
    "MalformedMultiValueError",
    "SecretDecodeError",
]
