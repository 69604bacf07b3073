"""Custom exceptions for atlas building"""


class AtlasError(Exception):
    """Base exception for block atlas errors"""
    pass


class AtlasBuildError(AtlasError):
    """The atlas could not be built; nothing was written"""
    pass


class SourceAtlasMissingError(AtlasBuildError):
    """Source tile sheet is missing or could not be decoded"""
    pass


class SourceAtlasSizeError(AtlasBuildError):
    """Source tile sheet is not 256x256"""
    pass


class InvalidScaleError(AtlasBuildError):
    """Scale parameter B is below 2"""
    pass
