"""Frame layout and viewport scrolling."""

from .render import Cell, Frame, render
from .viewport import Viewport

__all__ = ["Cell", "Frame", "Viewport", "render"]
