from .base import ConnectionConfig, ImageReference, RegistryClient, RegistryHit
from .references import ReferenceParserMixin, parse_image_name

__all__ = [
    "ConnectionConfig",
    "ImageReference",
    "ReferenceParserMixin",
    "RegistryClient",
    "RegistryHit",
    "parse_image_name",
]
