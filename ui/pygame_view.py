#!/usr/bin/env python3
"""
Pygame window for a road world: the renderer mixins plus the event loop.

Module layout
─────────────
    ui/
    ├── types.py           – Camera, ColorRGB, ColorRGBA
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – ViewHelpers mixin  (static utilities)
    ├── draw_road.py       – RoadRenderer mixin (road surface, lane lines)
    ├── draw_vehicles.py   – VehicleRenderer mixin (hulls, sensor rays)
    ├── hud.py             – HudRenderer mixin  (HUD, legend, splash)
    └── pygame_view.py     – PygameRoadView (this file – main loop)

The view never mutates simulation state directly: key events go through an
:class:`~sim.controls.InputQueue` that is drained between ticks, and every
drawn value comes from ``World.as_dict()``.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

import pygame

import config
from sim.controls import Direction, InputQueue, ManualControls
from sim.world import World

from .constants import ViewConstants
from .draw_road import RoadRenderer
from .draw_vehicles import VehicleRenderer
from .helpers import ViewHelpers
from .hud import HudRenderer
from .types import Camera

log = logging.getLogger("ui")

_KEY_DIRECTIONS: Dict[int, Direction] = {
    pygame.K_UP: Direction.FORWARD,
    pygame.K_DOWN: Direction.REVERSE,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


class PygameRoadView(
    ViewConstants,
    ViewHelpers,
    RoadRenderer,
    VehicleRenderer,
    HudRenderer,
):
    """Road-simulation visualiser powered by Pygame.

    Follows the leading car, forwards arrow keys to the manual car and
    redraws the world from its ``as_dict()`` snapshot every frame.
    """

    def __init__(
        self,
        world: World,
        mode: str = config.DEFAULT_MODE,
        road_width: int = config.WINDOW_WIDTH,
        hud_width: int = config.HUD_WIDTH,
        height: int = config.WINDOW_HEIGHT,
        fps: int = config.TARGET_FPS,
    ) -> None:
        self.world = world
        self.mode = mode
        self.road_width = road_width
        self.hud_width = hud_width
        self.width = road_width + hud_width
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.camera = Camera(road_width, height, anchor=config.CAMERA_ANCHOR)
        self.inputs = InputQueue()

        # UI state
        self.paused = False
        self.show_sensors = True
        self.show_legend = True
        self.show_splash = True
        self._screenshot_flash_until = 0.0
        self.time_seconds = 0.0

    # ------------------------------------------------------------------ #
    #  Input                                                               #
    # ------------------------------------------------------------------ #
    def _manual_controls(self) -> Optional[ManualControls]:
        for car in self.world.cars:
            if isinstance(car.controls, ManualControls):
                return car.controls
        return None

    def _handle_key(self, key: int, pressed: bool) -> None:
        direction = _KEY_DIRECTIONS.get(key)
        if direction is not None:
            self.inputs.push(direction, pressed)

    def _reset(self) -> None:
        self.inputs.clear()
        self.world.reset()
        self.paused = False

    # ------------------------------------------------------------------ #
    #  Screenshot                                                          #
    # ------------------------------------------------------------------ #
    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"lanesim_{stamp}.png")
        pygame.image.save(self.screen, path)
        self._screenshot_flash_until = self.time_seconds + 0.35
        log.info("screenshot saved to %s", path)

    # ------------------------------------------------------------------ #
    #  Tick                                                                #
    # ------------------------------------------------------------------ #
    def _step(self) -> None:
        controls = self._manual_controls()
        if controls is not None:
            self.inputs.drain_into(controls)
        else:
            self.inputs.clear()
        self.world.tick()

    # ------------------------------------------------------------------ #
    #  Render                                                              #
    # ------------------------------------------------------------------ #
    def _render(self, state: Mapping[str, Any]) -> None:
        leader: Optional[Mapping[str, Any]] = None
        for car in state["cars"]:
            if car["id"] == state["leader_id"]:
                leader = car
        if leader is not None:
            self.camera.follow(leader["y"])

        self.screen.fill(self.BG_COLOR)
        road_surf = self.screen.subsurface(pygame.Rect(0, 0, self.road_width, self.height))
        self.draw_road(road_surf, state["road"])
        self.draw_lane_markings(road_surf, state["road"])

        for vehicle in state["traffic"]:
            self.draw_vehicle(road_surf, vehicle)
        for vehicle in state["cars"]:
            if vehicle is not leader:
                self.draw_vehicle(road_surf, vehicle, alpha=self.FOLLOWER_ALPHA)
        if leader is not None:
            self.draw_vehicle(road_surf, leader, outline=len(state["cars"]) > 1)
            if self.show_sensors:
                self.draw_sensors(road_surf, leader)

        self.draw_hud(self.screen, state, leader)
        if self.show_legend:
            self._draw_legend(self.screen)
        if self.paused:
            self._draw_pause_banner(self.screen)
        if self.time_seconds < self._screenshot_flash_until:
            flash = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
            flash.fill((255, 255, 255, 40))
            self.screen.blit(flash, (0, 0))

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption("LANE SIM")
        self.screen = pygame.display.set_mode((self.width, self.height))
        self.clock = pygame.time.Clock()
        self.font_small = self._load_font(13, bold=False)
        self.font_tiny = self._load_font(11, bold=False)
        self.font_title = self._load_font(28, bold=True)
        log.info("view started %dx%d @ %d fps", self.width, self.height, self.fps)

        running = True
        while running:
            self.time_seconds += self.clock.tick(self.fps) / 1000.0

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if self.show_splash:
                        self.show_splash = False
                        continue
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        self.paused = not self.paused
                    elif event.key == pygame.K_r:
                        self._reset()
                    elif event.key == pygame.K_s:
                        self.show_sensors = not self.show_sensors
                    elif event.key == pygame.K_l:
                        self.show_legend = not self.show_legend
                    elif event.key == pygame.K_F12:
                        self._take_screenshot()
                    else:
                        self._handle_key(event.key, True)
                elif event.type == pygame.KEYUP:
                    self._handle_key(event.key, False)

            # ---- splash ------------------------------------------------- #
            if self.show_splash:
                self.screen.fill(self.BG_COLOR)
                self._draw_splash(self.screen)
                pygame.display.flip()
                continue

            # ---- simulation tick ---------------------------------------- #
            if not self.paused:
                try:
                    self._step()
                except Exception:
                    log.exception("simulation tick error")
                    self.paused = True

            self._render(self.world.as_dict())
            pygame.display.flip()

        pygame.quit()
        log.info("view closed after %d ticks", self.world.tick_count)


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(world: World, mode: str = config.DEFAULT_MODE,
                    fps: int = config.TARGET_FPS) -> None:
    view = PygameRoadView(world=world, mode=mode, fps=fps)
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a world. Run `python main.py` "
        "or call run_pygame_view(your_world)."
    )
