from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import pygame

from .assets import Color, get_text_surface


@dataclass(frozen=True)
class ButtonVisualStyle:
    base_color: Color
    hover_color: Color
    text_color: tuple[int, int, int]
    hover_text_color: tuple[int, int, int]
    border_color: Color
    border_width: int = 2


class Button:
    """Rectangular button that inverts its colors on hover."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        callback: Callable[[], None],
        *,
        style: ButtonVisualStyle,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self._callback = callback
        self._style = style

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, mouse_pos: tuple[int, int] | None = None) -> None:
        if mouse_pos is None:
            mouse_pos = pygame.mouse.get_pos()
        style = self._style
        hovered = self.rect.collidepoint(mouse_pos)
        pygame.draw.rect(surface, style.hover_color if hovered else style.base_color, self.rect)
        pygame.draw.rect(surface, style.border_color, self.rect, style.border_width)
        text_color = style.hover_text_color if hovered else style.text_color
        text_surf = get_text_surface(font, self.text, text_color)
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self._callback()


class Slider:
    """Horizontal integer slider reporting changes through ``on_change``."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        label: Callable[[int], str],
        value_range: tuple[int, int],
        value: int,
        on_change: Callable[[int], None],
        *,
        track_color: tuple[int, int, int],
        knob_color: tuple[int, int, int],
    ) -> None:
        if value_range[1] <= value_range[0]:
            raise ValueError("value_range must be increasing")
        self.rect = pygame.Rect(rect)
        self._label = label
        self._range = value_range
        self.value = int(value)
        self._on_change = on_change
        self._track_color = track_color
        self._knob_color = knob_color
        self._active = False

    def set_value(self, value: int) -> None:
        lo, hi = self._range
        self.value = int(max(lo, min(hi, value)))

    def _value_at(self, x: int) -> int:
        lo, hi = self._range
        fraction = (x - self.rect.left) / max(1, self.rect.width)
        fraction = max(0.0, min(1.0, fraction))
        return int(round(lo + fraction * (hi - lo)))

    def _update_from(self, x: int) -> None:
        value = self._value_at(x)
        if value != self.value:
            self.value = value
            self._on_change(value)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Return ``True`` when the event was consumed by the slider."""

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.inflate(0, 16).collidepoint(event.pos):
                self._active = True
                self._update_from(event.pos[0])
                return True
        elif event.type == pygame.MOUSEMOTION and self._active:
            self._update_from(event.pos[0])
            return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self._active:
            self._active = False
            return True
        return False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, text_color: tuple[int, int, int]) -> None:
        label_surf = get_text_surface(font, self._label(self.value), text_color)
        surface.blit(label_surf, (self.rect.left, self.rect.top - label_surf.get_height() - 6))
        pygame.draw.rect(surface, self._track_color, self.rect)
        pygame.draw.rect(surface, self._knob_color, self.rect, 1)
        lo, hi = self._range
        knob_x = self.rect.left + (self.value - lo) / (hi - lo) * self.rect.width
        knob = pygame.Rect(0, 0, 8, self.rect.height + 10)
        knob.center = (int(knob_x), self.rect.centery)
        pygame.draw.rect(surface, self._knob_color, knob)


def build_text_panel(
    font: pygame.font.Font,
    lines: Sequence[tuple[str, tuple[int, int, int]]],
    *,
    width: int,
    background_color: Color,
    border_color: Color,
    padding: tuple[int, int] = (15, 15),
) -> pygame.Surface:
    if not lines:
        raise ValueError("lines must not be empty")
    padding_x, padding_y = padding
    line_height = font.get_linesize()
    height = line_height * len(lines) + padding_y * 2
    panel_surface = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.rect(panel_surface, background_color, panel_surface.get_rect())
    pygame.draw.rect(panel_surface, border_color, panel_surface.get_rect(), 1)
    for idx, (text, color) in enumerate(lines):
        if not text:
            continue
        panel_surface.blit(get_text_surface(font, text, color), (padding_x, padding_y + idx * line_height))
    return panel_surface
