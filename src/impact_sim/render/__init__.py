"""Rendering helpers for the impact simulator."""

from .camera import OrbitCamera
from .assets import TextCache, fit_text, get_text_surface, load_font
from .draw import (
    SceneCanvas,
    cube_corners,
    draw_edges,
    draw_polyline,
    euler_matrix,
    sphere_wireframe,
)
from .ui import (
    Button,
    ButtonVisualStyle,
    Slider,
    build_text_panel,
)

__all__ = [
    "Button",
    "ButtonVisualStyle",
    "OrbitCamera",
    "SceneCanvas",
    "TextCache",
    "Slider",
    "build_text_panel",
    "cube_corners",
    "draw_edges",
    "draw_polyline",
    "euler_matrix",
    "fit_text",
    "get_text_surface",
    "load_font",
    "sphere_wireframe",
]
