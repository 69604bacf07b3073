"""Configuration schema."""
from .settings import AtlasSettings

__all__ = [
    "AtlasSettings",
]
