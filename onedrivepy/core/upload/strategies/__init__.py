"""Upload strategies module."""
from .ranges import ServerRangeStrategy, parse_range, content_range

__all__ = [
    'ServerRangeStrategy',
    'parse_range',
    'content_range',
]
