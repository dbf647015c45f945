"""
Color cycler

Cycles an accent color (HSL) through increment / random / preset behaviors,
manually or on a timer, with separate settings per theme mode.
"""

from color_cycler.app import ColorCyclerApp

__version__ = "1.0.0"

__all__ = ["ColorCyclerApp", "__version__"]
