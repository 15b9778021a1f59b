#!/usr/bin/env python3
"""Side HUD panel, legend, help lines and pause banner (mixin)."""

from __future__ import annotations

from typing import Mapping

import pygame

from sim.snapshot import SimulationSnapshot

from .helpers import render_text


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Main HUD panel                                                      #
    # ------------------------------------------------------------------ #

    def draw_hud(self, surface: pygame.Surface, snapshot: SimulationSnapshot) -> None:
        if self.font_small is None or self.font_tiny is None:
            return

        panel_rect = pygame.Rect(self.WORLD_SIZE_PX, 0, self.PANEL_WIDTH, self.height)
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel_rect)
        pygame.draw.line(
            surface, self.HUD_BORDER_COLOR, panel_rect.topleft, panel_rect.bottomleft, 2
        )

        x = panel_rect.x + 16
        y = 16
        render_text(surface, self.font_small, "JUNCTION", (x, y), self.HUD_TEXT_COLOR)
        y += 24
        render_text(
            surface, self.font_tiny,
            f"TICK {snapshot.tick}   T {snapshot.now_ms / 1000.0:6.1f}s",
            (x, y), self.HUD_DIM_COLOR,
        )
        y += 28

        # Signal
        if snapshot.clearing:
            signal_text = f"ALL STOPPED  -> {snapshot.target_phase}"
            signal_color = self.STOP_COLOR
        else:
            signal_text = f"GREEN  ROAD {snapshot.signal}"
            signal_color = self.GO_COLOR
        render_text(surface, self.font_small, signal_text, (x, y), signal_color)
        y += 22
        if snapshot.priority_road:
            render_text(
                surface, self.font_tiny, f"PRIORITY ROAD {snapshot.priority_road}",
                (x, y), self.PRIORITY_COLOR,
            )
        y += 26

        # Queues
        render_text(surface, self.font_tiny, "QUEUED PER ROAD", (x, y), self.HUD_DIM_COLOR)
        y += 18
        y = self._draw_queue_bars(surface, snapshot, x, y)
        y += 12

        # Vehicles / feed
        maneuvering = sum(1 for v in snapshot.vehicles if v.maneuvering)
        render_text(
            surface, self.font_tiny,
            f"VEHICLES {len(snapshot.vehicles)}   TURNING {maneuvering}",
            (x, y), self.HUD_TEXT_COLOR,
        )
        y += 18
        render_text(
            surface, self.font_tiny,
            f"PENDING {snapshot.pending_arrivals}"
            + (f"   HELD L{snapshot.deferred_lane}" if snapshot.deferred_lane else ""),
            (x, y), self.HUD_TEXT_COLOR,
        )
        y += 26
        y = self._draw_metrics(surface, snapshot.feed_metrics, x, y)

        y += 16
        for line in self.HELP_LINES:
            render_text(surface, self.font_tiny, line, (x, y), self.HUD_DIM_COLOR)
            y += 16

    def _draw_queue_bars(
        self, surface: pygame.Surface, snapshot: SimulationSnapshot, x: int, y: int
    ) -> int:
        bar_w, bar_h = 150, 8
        full = 10
        for road, depth in sorted(snapshot.queue_depths.items()):
            render_text(surface, self.font_tiny, f"{road}  {depth:>2}", (x, y), self.HUD_TEXT_COLOR)
            bx = x + 50
            pygame.draw.rect(surface, (40, 40, 40), (bx, y + 3, bar_w, bar_h), border_radius=2)
            fill = int(bar_w * min(depth, full) / full)
            if fill > 0:
                color = self.PRIORITY_COLOR if road == snapshot.priority_road else self.GO_COLOR
                pygame.draw.rect(surface, color, (bx, y + 3, fill, bar_h), border_radius=2)
            y += 18
        return y

    def _draw_metrics(
        self, surface: pygame.Surface, metrics: Mapping[str, int], x: int, y: int
    ) -> int:
        render_text(surface, self.font_tiny, "FEED", (x, y), self.HUD_DIM_COLOR)
        y += 18
        for key, value in metrics.items():
            render_text(surface, self.font_tiny, f"{key.upper():<12}{value}", (x, y), self.HUD_TEXT_COLOR)
            y += 15
        return y

    # ------------------------------------------------------------------ #
    #  Legend                                                               #
    # ------------------------------------------------------------------ #

    def _draw_legend(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        x = 16
        y = self.height - 16 - len(self.LEGEND_ITEMS) * 18 - 8
        box_w, box_h = 112, len(self.LEGEND_ITEMS) * 18 + 10
        pygame.draw.rect(
            surface, self.HUD_BG_COLOR, (x - 6, y - 4, box_w, box_h), border_radius=4
        )
        pygame.draw.rect(
            surface, self.HUD_BORDER_COLOR, (x - 6, y - 4, box_w, box_h), width=1, border_radius=4
        )
        for label, color in self.LEGEND_ITEMS:
            pygame.draw.circle(surface, color, (x + 4, y + 6), 4)
            text = self.font_tiny.render(label, True, (200, 200, 200))
            surface.blit(text, (x + 14, y))
            y += 18

    # ------------------------------------------------------------------ #
    #  Pause banner                                                        #
    # ------------------------------------------------------------------ #

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((self.WORLD_SIZE_PX, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        if self.font_title:
            text = self.font_title.render("PAUSED", True, (220, 220, 220))
            surface.blit(text, text.get_rect(center=(self.WORLD_SIZE_PX // 2, self.height // 2)))
