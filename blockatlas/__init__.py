"""
BlockAtlas - Pre-rendered isometric block images for map renderers

Builds a single atlas bitmap holding one isometric cube image per block
appearance, drawn from a 16x16 terrain tile sheet at any integer scale, and
keeps it cached on disk between runs.
"""

from blockatlas.assembler import construct
from blockatlas.cache import AtlasStore, create
from blockatlas.images import BlockImages
from blockatlas.layout import NUM_IMAGES, AtlasLayout, default_layout

__version__ = "0.0.1"
__all__ = [
    "AtlasLayout",
    "AtlasStore",
    "BlockImages",
    "NUM_IMAGES",
    "construct",
    "create",
    "default_layout",
]
