"""
Cached atlas controller.

The atlas for scale B is kept in <imgpath>/blocks-<B>.png next to a version
marker, blocks-<B>.version, holding the number of slots the file contains.
create() reuses the file when it is complete, rebuilds it from the source
sheet otherwise, and when the file is merely out of date (fewer slots than
the current layout) copies the slots it already has over the rebuilt ones,
so hand edits to shipped images survive an upgrade.
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image

from blockatlas.assembler import MIN_SCALE, construct
from blockatlas.exceptions import InvalidScaleError, SourceAtlasMissingError
from blockatlas.images import BlockImages
from blockatlas.layout import AtlasLayout, atlas_size, default_layout, slot_rect
from blockatlas.raster.bitmap import blit, from_image, to_image
from blockatlas.schema.settings import AtlasSettings

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


class AtlasStore:
    """File access for one image directory."""

    def __init__(self, settings: AtlasSettings):
        self.settings = settings

    @classmethod
    def for_path(cls, imgpath: Union[str, Path]) -> "AtlasStore":
        return cls(AtlasSettings.for_path(imgpath))

    def read_version(self, scale: int) -> int:
        """
        Read the version marker for scale B.

        A missing marker means the atlas predates version markers: the
        legacy version is assumed and written out. Unparseable or
        out-of-range markers read as 0, which forces a full rebuild.
        """
        path = self.settings.version_path(scale)
        try:
            text = path.read_text()
        except FileNotFoundError:
            version = self.settings.legacy_version
            logger.info(f"{path} not found; assuming version {version}")
            try:
                self.write_version(scale, version)
            except OSError as e:
                logger.warning(f"Could not write {path}: {e}")
            return version
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            return 0

        match = _LEADING_INT.match(text)
        version = int(match.group(1)) if match else 0
        if version < 0 or version > self.settings.max_version:
            version = 0
        return version

    def write_version(self, scale: int, version: int) -> None:
        self.settings.version_path(scale).write_text(str(version))

    def read_atlas(self, scale: int) -> Optional[np.ndarray]:
        """Decode the cached atlas, or None if it is missing or unreadable."""
        path = self.settings.atlas_path(scale)
        if not path.exists():
            logger.warning(f"{path} not found; will build from {self.settings.source_name}")
            return None
        try:
            with Image.open(path) as img:
                return from_image(img)
        except OSError as e:
            logger.warning(f"{path} failed to read ({e}); will build from {self.settings.source_name}")
            return None

    def write_atlas(self, scale: int, image: np.ndarray) -> Path:
        path = self.settings.atlas_path(scale)
        to_image(image).save(path)
        logger.info(f"Wrote {path}")
        return path

    def read_source(self) -> Image.Image:
        """
        Decode the source tile sheet.

        Raises:
            SourceAtlasMissingError: The file is missing or not an image
        """
        path = self.settings.source_path
        if not path.exists():
            raise SourceAtlasMissingError(f"Source tile sheet not found: {path}")
        try:
            with Image.open(path) as img:
                return img.convert('RGBA')
        except OSError as e:
            raise SourceAtlasMissingError(f"Could not read source tile sheet {path}: {e}") from e


def create(
    scale: int,
    imgpath: Union[str, Path] = ".",
    layout: Optional[AtlasLayout] = None,
    store: Optional[AtlasStore] = None,
) -> BlockImages:
    """
    Load the cached atlas for scale B, rebuilding it if needed.

    Args:
        scale: B
        imgpath: Directory with the source sheet and cached atlases
        layout: Slot layout (default layout if None)
        store: File access (built from imgpath if None)

    Returns:
        BlockImages with opacity/transparency flags filled in

    Raises:
        AtlasBuildError: The atlas had to be rebuilt and could not be
    """
    if scale < MIN_SCALE:
        raise InvalidScaleError(f"Scale must be at least {MIN_SCALE}, got {scale}")
    layout = layout or default_layout()
    store = store or AtlasStore.for_path(imgpath)
    atlas_path = store.settings.atlas_path(scale)

    version = store.read_version(scale)
    old = store.read_atlas(scale)
    preserve = 0
    if old is not None:
        width, height = layout.atlas_size(scale)
        old_height, old_width = old.shape[:2]
        if (old_width, old_height) == (width, height) and version == layout.num_images:
            logger.info(f"Using cached {atlas_path} (version {version})")
            return BlockImages.from_bitmap(old, scale, layout)
        if (version < layout.num_images and old_width == width
                and old_height == atlas_size(scale, version)[1]):
            preserve = version
            logger.warning(f"{atlas_path} is missing some blocks; will fill them in from {store.settings.source_name}")
        else:
            logger.warning(
                f"{atlas_path} has incorrect size (expected {width}x{height}, "
                f"got {old_width}x{old_height} at version {version}); rebuilding"
            )

    logger.info(f"Building {layout.num_images} block images at B={scale}")
    image = construct(scale, store.read_source(), layout)

    for slot in range(preserve):
        rect = slot_rect(slot, scale)
        blit(old, rect, image, rect.x, rect.y)
    if preserve:
        logger.info(f"Kept {preserve} slots from the previous atlas")

    store.write_atlas(scale, image)
    store.write_version(scale, layout.num_images)
    return BlockImages.from_bitmap(image, scale, layout)
