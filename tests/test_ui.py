import pygame
import pytest

from impact_sim.render.ui import Button, ButtonVisualStyle, Slider

STYLE = ButtonVisualStyle(
    base_color=(0, 0, 0),
    hover_color=(255, 255, 255),
    text_color=(255, 255, 255),
    hover_text_color=(0, 0, 0),
    border_color=(255, 255, 255),
)


def click(pos, event_type=pygame.MOUSEBUTTONDOWN, button=1):
    return pygame.event.Event(event_type, button=button, pos=pos)


class TestButton:
    def test_click_inside_runs_callback(self):
        calls = []
        button = Button((10, 10, 100, 40), "RUN SIMULATION", lambda: calls.append("run"), style=STYLE)
        button.handle_event(click((50, 30)))
        assert calls == ["run"]

    def test_click_outside_or_other_button_ignored(self):
        calls = []
        button = Button((10, 10, 100, 40), "RUN SIMULATION", lambda: calls.append("run"), style=STYLE)
        button.handle_event(click((500, 30)))
        button.handle_event(click((50, 30), button=3))
        assert calls == []

    def test_no_enable_hook(self):
        with pytest.raises(TypeError):
            Button((0, 0, 10, 10), "X", lambda: None, style=STYLE, enabled=lambda: False)


class TestSlider:
    def test_press_maps_position_to_value(self):
        values = []
        slider = Slider(
            (0, 100, 100, 6), lambda v: f"SIZE: {v}M", (10, 500), 100, values.append,
            track_color=(51, 51, 51), knob_color=(255, 255, 255),
        )
        assert slider.handle_event(click((50, 103)))
        assert values == [255]
        assert slider.handle_event(click((50, 103), pygame.MOUSEBUTTONUP))
        assert not slider.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(90, 103)))
