# src/impact_sim/app.py
"""
Asteroid Impact Simulator
=========================

Pygame front-end for the impact simulation engine: sliders feed the
session parameters, the run button triggers a prediction run and the
canvas shows the animated orbit.
"""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from typing import Callable

import pygame

from impact_sim.backend import PredictionClient
from impact_sim.control import AnimationScheduler, RunController, display_state
from impact_sim.core.config import PARAMETER_CFG, RENDER_CFG, BackendCfg
from impact_sim.core.logging_utils import setup_logging
from impact_sim.core.model import SimulationSession
from impact_sim.data.presets import METEOR_TYPES, PRESET_DISPLAY_ORDER, PRESETS
from impact_sim.render import (
    Button,
    ButtonVisualStyle,
    OrbitCamera,
    SceneCanvas,
    Slider,
    build_text_panel,
    fit_text,
    get_text_surface,
    load_font,
)

logger = logging.getLogger(__name__)

EventHandler = Callable[[pygame.event.Event], bool]

PRESET_KEYS = (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4)
PANEL_TEXT_WIDTH = 380


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive asteroid impact simulator.")
    parser.add_argument("--backend-url", help="Base URL of the prediction service (env: IMPACT_BACKEND_URL).")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds; default is no timeout.")
    parser.add_argument("--retries", type=int, help="Retries on network failure; default is none.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...).")
    parser.add_argument("--log-file", help="Optional file that receives a copy of the log.")
    return parser.parse_args(argv)


def backend_cfg_from_args(args: argparse.Namespace) -> BackendCfg:
    cfg = BackendCfg.from_env()
    overrides = {}
    if args.backend_url:
        overrides["base_url"] = args.backend_url
    if args.timeout is not None:
        overrides["timeout"] = args.timeout if args.timeout > 0 else None
    if args.retries is not None:
        overrides["retries"] = max(0, args.retries)
    return dataclasses.replace(cfg, **overrides)


async def run_app(args: argparse.Namespace) -> None:
    cfg = RENDER_CFG
    session = SimulationSession()
    client = PredictionClient(backend_cfg_from_args(args))
    controller = RunController(session, client)
    logger.info("Prediction service: %s", client.cfg.base_url)

    canvas_slot: list[SceneCanvas] = []
    scheduler = AnimationScheduler(session, lambda: canvas_slot[0] if canvas_slot else None)
    scheduler.start()

    pygame.init()
    try:
        screen = pygame.display.set_mode(cfg.window_size)
        pygame.display.set_caption("Asteroid Impact Simulator")
        title_font = load_font(cfg.font_names, cfg.title_font_size)
        body_font = load_font(cfg.font_names, cfg.body_font_size)
        small_font = load_font(cfg.font_names, cfg.small_font_size)

        canvas_rect = pygame.Rect(cfg.canvas_rect)
        camera = OrbitCamera(
            canvas_rect.size,
            cfg.camera_distance,
            min_distance=cfg.camera_min_distance,
            max_distance=cfg.camera_max_distance,
            fov_deg=cfg.fov_deg,
            near=cfg.near_plane,
            sensitivity=cfg.drag_sensitivity,
        )
        canvas_slot.append(SceneCanvas(cfg.canvas_rect, camera, cfg))
        canvas = canvas_slot[0]

        def set_parameter(name: str) -> Callable[[int], None]:
            def apply(value: int) -> None:
                session.update_parameters(**{name: value})

            return apply

        params = session.parameters
        slider_specs = (
            ("diameter_m", lambda v: f"SIZE: {v}M", PARAMETER_CFG.diameter_range, params.diameter_m),
            ("speed_km_s", lambda v: f"SPEED: {v}KM/S", PARAMETER_CFG.speed_range, params.speed_km_s),
            ("inclination_deg", lambda v: f"INCLINATION: {v}°", PARAMETER_CFG.inclination_range, params.inclination_deg),
            ("impact_year", lambda v: f"YEAR: {v}", PARAMETER_CFG.year_range, params.impact_year),
        )
        sliders: dict[str, Slider] = {}
        for idx, (name, label, value_range, value) in enumerate(slider_specs):
            sliders[name] = Slider(
                (30, 115 + idx * 55, 410, 6),
                label,
                (int(value_range[0]), int(value_range[1])),
                int(value),
                set_parameter(name),
                track_color=cfg.track_color,
                knob_color=cfg.wire_color,
            )

        def sync_sliders() -> None:
            for name, slider in sliders.items():
                slider.set_value(int(getattr(session.parameters, name)))

        def run_simulation() -> None:
            controller.trigger()

        run_button = Button(
            (30, 330, 410, 44),
            "RUN SIMULATION",
            run_simulation,
            style=ButtonVisualStyle(
                base_color=cfg.button_color,
                hover_color=cfg.button_hover_color,
                text_color=cfg.button_text_color,
                hover_text_color=cfg.button_hover_text_color,
                border_color=cfg.wire_color,
            ),
        )

        def handle_widgets(event: pygame.event.Event) -> bool:
            for slider in sliders.values():
                if slider.handle_event(event):
                    return True
            run_button.handle_event(event)
            return False

        def handle_camera(event: pygame.event.Event) -> bool:
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and canvas.rect.collidepoint(event.pos):
                camera.begin_drag(event.pos)
                return True
            if event.type == pygame.MOUSEMOTION and camera.dragging:
                camera.drag(event.pos)
                return True
            if event.type == pygame.MOUSEBUTTONUP and event.button == 1 and camera.dragging:
                camera.end_drag()
                return True
            if event.type == pygame.MOUSEWHEEL and canvas.rect.collidepoint(pygame.mouse.get_pos()):
                camera.zoom_by(-event.y * cfg.zoom_step)
                return True
            return False

        def handle_keys(event: pygame.event.Event) -> bool:
            if event.type != pygame.KEYDOWN:
                return False
            if event.key in PRESET_KEYS:
                preset = PRESETS[PRESET_DISPLAY_ORDER[PRESET_KEYS.index(event.key)]]
                session.parameters = preset.parameters
                sync_sliders()
                logger.info("Preset selected: %s", preset.name)
                return True
            if event.key == pygame.K_t:
                current = session.parameters.meteor_type
                index = (METEOR_TYPES.index(current) + 1) % len(METEOR_TYPES) if current in METEOR_TYPES else 0
                session.update_parameters(meteor_type=METEOR_TYPES[index])
                return True
            if event.key == pygame.K_r:
                scheduler.clock.reset()
                return True
            if event.key in (pygame.K_RETURN, pygame.K_SPACE):
                run_simulation()
                return True
            return False

        handlers: list[EventHandler] = [handle_keys, handle_camera, handle_widgets]

        def release_camera() -> None:
            camera.end_drag()
            if handle_camera in handlers:
                handlers.remove(handle_camera)

        scheduler.add_teardown(release_camera)

        def draw_results() -> None:
            view = display_state(session)
            lines = [
                ("IMPACT:", cfg.wire_color),
                (view.coordinate_text, cfg.asteroid_color),
                ("ENERGY:", cfg.wire_color),
                (f"{view.energy_text} TNT", cfg.asteroid_color),
            ]
            if view.loading:
                lines.append(("CONTACTING PREDICTION SERVER...", cfg.muted_text_color))
            if view.error:
                lines.append((fit_text(body_font, view.error.upper(), PANEL_TEXT_WIDTH), cfg.asteroid_color))
            for detail in view.detail_lines():
                lines.append((fit_text(body_font, detail.upper(), PANEL_TEXT_WIDTH), cfg.muted_text_color))
            panel = build_text_panel(
                body_font,
                lines,
                width=410,
                background_color=cfg.panel_color,
                border_color=cfg.wire_color,
            )
            screen.blit(panel, (30, 390))

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                    running = False
                    break
                for handler in list(handlers):
                    if handler(event):
                        break

            camera.update(cfg.camera_smoothing)
            screen.fill(cfg.background_color)

            title = get_text_surface(title_font, "ASTEROID IMPACT SIMULATOR", cfg.wire_color)
            screen.blit(title, title.get_rect(midtop=(cfg.window_size[0] // 2, 18)))
            for slider in sliders.values():
                slider.draw(screen, body_font, cfg.wire_color)
            meteor = get_text_surface(small_font, f"TYPE: {session.parameters.meteor_type.upper()}  [T]", cfg.muted_text_color)
            screen.blit(meteor, (30, 300))
            run_button.draw(screen, body_font)
            draw_results()

            canvas.draw(screen)
            hint = get_text_surface(small_font, "DRAG TO ROTATE • SCROLL TO ZOOM • 1-4 PRESETS", cfg.muted_text_color)
            screen.blit(hint, hint.get_rect(midtop=(canvas.rect.centerx, canvas.rect.bottom + 10)))
            footer = get_text_surface(small_font, "INTERACTIVE 3D ORBITAL SIMULATION", cfg.footer_text_color)
            screen.blit(footer, footer.get_rect(midbottom=(cfg.window_size[0] // 2, cfg.window_size[1] - 8)))

            pygame.display.flip()
            await asyncio.sleep(1.0 / cfg.target_fps)
    finally:
        await scheduler.aclose()
        await controller.aclose()
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    asyncio.run(run_app(args))
    return 0


if __name__ == "__main__":
    sys.exit(main())
