from __future__ import annotations

from collections import OrderedDict
from typing import Iterable

import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]

ELLIPSIS = "..."


class TextCache:
    """Bounded LRU of rendered labels keyed by font, text and color."""

    def __init__(self, max_size: int = 128) -> None:
        if max_size < 1:
            raise ValueError("max_size must be positive")
        self._max_size = max_size
        self._surfaces: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()

    def __len__(self) -> int:
        return len(self._surfaces)

    def render(self, font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
        key = (id(font), text, color)
        surface = self._surfaces.get(key)
        if surface is None:
            surface = font.render(text, True, color)
            self._surfaces[key] = surface
            while len(self._surfaces) > self._max_size:
                self._surfaces.popitem(last=False)
        else:
            self._surfaces.move_to_end(key)
        return surface

    def clear(self) -> None:
        self._surfaces.clear()


TEXT_CACHE = TextCache()


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    return TEXT_CACHE.render(font, text, color)


def fit_text(font: pygame.font.Font, text: str, max_width: int) -> str:
    """Shorten ``text`` with an ellipsis until it renders within ``max_width`` pixels."""

    if font.size(text)[0] <= max_width:
        return text
    cut = len(text)
    while cut > 0 and font.size(text[:cut] + ELLIPSIS)[0] > max_width:
        cut -= 1
    return text[:cut].rstrip() + ELLIPSIS


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    """First installed font from ``preferred_names``, else pygame's default."""

    if not pygame.font.get_init():
        pygame.font.init()
    names = list(preferred_names)
    for name in names:
        path = pygame.font.match_font(name, bold=bold)
        if path:
            return pygame.font.Font(path, size)
    return pygame.font.Font(None, size)


__all__ = ["Color", "TEXT_CACHE", "TextCache", "fit_text", "get_text_surface", "load_font"]
