#!/usr/bin/env python3
"""
Main view class — combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – ColorRGB, SignalHead
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – Bézier sampling, heading, alpha and text helpers
    ├── draw_road.py       – RoadRenderer mixin (roads, lanes, stop lines, signals)
    ├── draw_vehicles.py   – VehicleRenderer mixin (sprites, maneuver curves)
    ├── hud.py             – HudRenderer mixin  (side panel, legend, pause)
    └── pygame_view.py     – PygameJunctionView (this file – main loop)

The view never touches the world directly: each frame it draws the latest
:class:`~sim.snapshot.SimulationSnapshot` published by the bridge.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

import pygame

from sim.topology import SOURCE_LANES

from .constants import ViewConstants
from .draw_road import RoadRenderer
from .draw_vehicles import VehicleRenderer
from .hud import HudRenderer

log = logging.getLogger("ui")

# Number keys 1..8 inject an arrival on the n-th spawn lane.
_ARRIVAL_KEYS: Dict[int, int] = {
    getattr(pygame, f"K_{i + 1}"): lane for i, lane in enumerate(SOURCE_LANES)
}


class PygameJunctionView(
    ViewConstants,
    RoadRenderer,
    VehicleRenderer,
    HudRenderer,
):
    """Junction visualiser powered by Pygame.

    Inherits drawing logic from focused mixin modules so each file
    stays small and single-purpose.

    Parameters
    ----------
    bridge : SimBridge-like
        Needs ``get_snapshot()``; ``set_paused``, ``reset`` and
        ``enqueue_arrival`` are used when present.
    """

    def __init__(self, bridge: Any, width: Optional[int] = None, height: int = 800, fps: int = 60):
        self.bridge = bridge
        self.width = width or self.WORLD_SIZE_PX + self.PANEL_WIDTH
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.time_seconds = 0.0
        self.paused = False
        self.show_paths = True
        self.show_legend = True
        self._screenshot_flash_until = 0.0

    # ------------------------------------------------------------------ #
    #  Screenshot                                                          #
    # ------------------------------------------------------------------ #
    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"junction_{stamp}.png")
        pygame.image.save(self.screen, path)
        self._screenshot_flash_until = self.time_seconds + 0.35
        log.info("screenshot saved to %s", path)

    # ------------------------------------------------------------------ #
    #  Input                                                               #
    # ------------------------------------------------------------------ #
    def _handle_key(self, key: int) -> None:
        if key == pygame.K_SPACE:
            self.paused = not self.paused
            if hasattr(self.bridge, "set_paused"):
                self.bridge.set_paused(self.paused)
        elif key == pygame.K_r:
            self.paused = False
            if hasattr(self.bridge, "reset"):
                self.bridge.reset()
            if hasattr(self.bridge, "set_paused"):
                self.bridge.set_paused(False)
        elif key == pygame.K_p:
            self.show_paths = not self.show_paths
        elif key == pygame.K_l:
            self.show_legend = not self.show_legend
        elif key == pygame.K_F12:
            self._take_screenshot()
        elif key in _ARRIVAL_KEYS and hasattr(self.bridge, "enqueue_arrival"):
            self.bridge.enqueue_arrival(_ARRIVAL_KEYS[key])

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption("JUNCTION SIMULATOR")
        self.screen = pygame.display.set_mode((self.width, self.height))
        self.clock = pygame.time.Clock()
        self.font_small = pygame.font.SysFont("dejavusansmono", 15, bold=True)
        self.font_tiny = pygame.font.SysFont("dejavusansmono", 12)
        self.font_title = pygame.font.SysFont("dejavusans", 28, bold=True)

        running = True
        while running:
            delta_time = self.clock.tick(self.fps) / 1000.0
            self.time_seconds += delta_time

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        self._handle_key(event.key)

            snapshot = self.bridge.get_snapshot()

            # ---- render ------------------------------------------------- #
            self.screen.fill(self.HUD_BG_COLOR)
            self.draw_road(self.screen)
            self.draw_lane_markings(self.screen)
            self.draw_stop_lines(self.screen)
            self.draw_road_labels(self.screen)

            if self.show_paths:
                for vehicle in snapshot.vehicles:
                    self.draw_maneuver_path(self.screen, vehicle)
            for vehicle in snapshot.vehicles:
                self.draw_vehicle(self.screen, vehicle)

            self.draw_signals(self.screen, snapshot.green_road)
            self.draw_hud(self.screen, snapshot)
            if self.show_legend:
                self._draw_legend(self.screen)
            if self.paused:
                self._draw_pause_banner(self.screen)
            if self.time_seconds < self._screenshot_flash_until:
                flash = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
                flash.fill((255, 255, 255, 40))
                self.screen.blit(flash, (0, 0))

            pygame.display.flip()

        pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(bridge: Any, height: int = 800, fps: int = 60) -> None:
    view = PygameJunctionView(bridge=bridge, height=height, fps=fps)
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a bridge object. Run `python main.py` "
        "or call run_pygame_view(your_bridge)."
    )
