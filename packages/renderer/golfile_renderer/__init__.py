"""Renderer package for board previews."""

from .preview import apply_image, render_preview, squares_from_image

__all__ = [
    "apply_image",
    "render_preview",
    "squares_from_image",
]
