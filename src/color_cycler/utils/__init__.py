"""
Utility functions for the color cycler
"""

from .colors import (
    coerce_number,
    clamp,
    clamp_int,
    wrap_hue,
    normalize,
)

__all__ = [
    'coerce_number',
    'clamp',
    'clamp_int',
    'wrap_hue',
    'normalize',
]
