"""Enums used by file services."""
from enum import Enum


class ThumbSize(Enum):
    """Thumbnail bounding boxes."""
    XS = 'xs'   # 32x32
    S = 's'     # 64x64
    M = 'm'     # 128x128
    L = 'l'     # 640x480
    XL = 'xl'   # 1024x768


class ThumbFormat(Enum):
    """Thumbnail image formats."""
    JPEG = 'jpeg'
    PNG = 'png'
