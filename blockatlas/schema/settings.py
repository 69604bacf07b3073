"""
Atlas settings

Where the cached atlas lives and how its files are named:

    <imgpath>/terrain.png           source tile sheet (16x16 tiles)
    <imgpath>/blocks-<B>.png        cached atlas for scale B
    <imgpath>/blocks-<B>.version    number of slots the cached atlas holds
"""

from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AtlasSettings(BaseModel):
    """Locations and version policy for a cached block atlas."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    imgpath: Path = Field(default=Path("."), description="Directory holding the source sheet and cached atlases.")
    source_name: str = Field(default="terrain.png", description="File name of the 256x256 source tile sheet.")
    image_format: str = Field(default="png", description="Extension/format of the cached atlas file.")
    legacy_version: int = Field(default=157, ge=0, description="Version assumed when no version marker exists.")
    max_version: int = Field(default=1000, ge=0, description="Version markers above this are treated as garbage.")

    @field_validator('image_format')
    @classmethod
    def _normalize_format(cls, v: str) -> str:
        v = v.lower().lstrip('.')
        if not v:
            raise ValueError("image_format must not be empty")
        return v

    @classmethod
    def for_path(cls, imgpath: Union[str, Path], **kwargs) -> "AtlasSettings":
        return cls(imgpath=Path(imgpath), **kwargs)

    @property
    def source_path(self) -> Path:
        return self.imgpath / self.source_name

    def atlas_path(self, scale: int) -> Path:
        return self.imgpath / f"blocks-{scale}.{self.image_format}"

    def version_path(self, scale: int) -> Path:
        return self.imgpath / f"blocks-{scale}.version"
