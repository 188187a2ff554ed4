"""Capabilities package.

Exports the capability enumeration and detection helpers.
"""

from .core import ModelCapability, coerce_capability, detect_capabilities

__all__ = ["ModelCapability", "coerce_capability", "detect_capabilities"]
