from .content_source import ContentSource
from .renderer import Renderer
from .space_source import SpaceSource

__all__ = [
    "ContentSource",
    "Renderer",
    "SpaceSource",
]
