"""
Input preparation: build configurations from caller payloads and validate them.
"""

from .builder import build_config
from .validators import ConfigIssue, ValidationResult, ensure_valid, validate_config

__all__ = [
    "build_config",
    "ConfigIssue",
    "ValidationResult",
    "ensure_valid",
    "validate_config",
]
