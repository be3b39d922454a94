"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate keys, mouse drags and touch swipes into queued Directions.
  - Drive the TickScheduler and feed one queued Direction to the engine
    before each tick.
  - Re-arm the scheduler whenever a tick reports a speed change.
  - Pause/resume by stopping/starting the scheduler; the engine is never
    touched while paused.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Model's job).

The controller is the only layer that reads pygame events.
"""

import logging
import sys
from collections import deque
from typing import Optional

import pygame

from .config import (
    WIDTH, HEIGHT, FPS, INPUT_QUEUE_SIZE,
    STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from .input import SwipeTracker, key_direction
from .model import Direction, GameEngine, NoSpaceAvailable, TickReport
from .scheduler import TickScheduler
from .view import GameView

log = logging.getLogger(__name__)


class GameController:
    """
    Owns the main loop.
    Glues Engine <-> View without them knowing about each other.
    """

    def __init__(self, engine: Optional[GameEngine] = None, store=None):
        pygame.init()
        self.screen    = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Snake")
        self.clock     = pygame.time.Clock()
        self.engine    = engine or GameEngine(store=store)
        self.view      = GameView(self.screen)
        self.scheduler = TickScheduler(self.engine.speed)
        self.swipe     = SwipeTracker()
        self.pending: deque[Direction] = deque(maxlen=INPUT_QUEUE_SIZE)
        self.state: str = STATE_OVER if self.engine.is_over() else STATE_PLAYING
        if self.state == STATE_PLAYING:
            self.scheduler.start()

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        while True:
            dt = self.clock.tick(FPS)
            self._handle_events()
            self.update(dt)
            self.view.render(self.engine, self.state)
            pygame.display.flip()

    def update(self, dt_ms: float) -> None:
        """Run every engine tick that became due during ``dt_ms``."""
        for _ in range(self.scheduler.advance(dt_ms)):
            self._step()
            if self.state != STATE_PLAYING:
                break

    # ── Commands ─────────────────────────────────────────────────
    def queue_direction(self, direction: Direction) -> None:
        if self.state == STATE_PLAYING:
            self.pending.append(direction)

    def toggle_pause(self) -> None:
        if self.state == STATE_PLAYING:
            self.state = STATE_PAUSED
            self.scheduler.stop()
            log.info("paused at score %d", self.engine.score)
        elif self.state == STATE_PAUSED:
            self.state = STATE_PLAYING
            self.scheduler.start()
            log.info("resumed")

    def restart(self) -> None:
        self.engine.reset()
        self.pending.clear()
        self.swipe.cancel()
        self.scheduler.stop()
        self.scheduler.set_interval(self.engine.speed)
        self.scheduler.start()
        self.state = STATE_PLAYING
        log.info("new game (best %d)", self.engine.high_score)

    # ── Tick ─────────────────────────────────────────────────────
    def _step(self) -> Optional[TickReport]:
        if self.pending:
            self.engine.set_direction(self.pending.popleft())
        try:
            report = self.engine.tick()
        except NoSpaceAvailable as exc:
            # the snake filled the board; nothing changed, the round just ends
            log.info("board full at score %d: %s", self.engine.score, exc)
            self._end_round()
            return None
        if not report.alive:
            self._end_round()
        elif report.speed_changed:
            self.scheduler.set_interval(report.speed)
        return report

    def _end_round(self) -> None:
        self.state = STATE_OVER
        self.scheduler.stop()
        self.pending.clear()

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._quit()
        elif event.type == pygame.KEYDOWN:
            self._handle_keydown(event.key)
        elif self._is_mouse(event, pygame.MOUSEBUTTONDOWN):
            self.swipe.press(event.pos)
        elif self._is_mouse(event, pygame.MOUSEBUTTONUP):
            self._handle_swipe_end(event.pos)
        elif event.type == pygame.FINGERDOWN:
            self.swipe.press(self._finger_pos(event))
        elif event.type == pygame.FINGERUP:
            self._handle_swipe_end(self._finger_pos(event))

    def _handle_keydown(self, key: int) -> None:
        # Q quits from any state
        if key == pygame.K_q:
            self._quit()

        if self.state == STATE_PLAYING:
            self._handle_playing_keys(key)
        elif self.state == STATE_PAUSED:
            self._handle_paused_keys(key)
        elif self.state == STATE_OVER:
            self._handle_over_keys(key)

    # ── Per-state key handlers ────────────────────────────────────
    def _handle_playing_keys(self, key: int) -> None:
        direction = key_direction(key)
        if direction is not None:
            self.queue_direction(direction)
        elif key in (pygame.K_p, pygame.K_SPACE):
            self.toggle_pause()
        elif key == pygame.K_r:
            self.restart()

    def _handle_paused_keys(self, key: int) -> None:
        if key in (pygame.K_p, pygame.K_SPACE):
            self.toggle_pause()
        elif key == pygame.K_r:
            self.restart()

    def _handle_over_keys(self, key: int) -> None:
        if key in (pygame.K_r, pygame.K_SPACE, pygame.K_RETURN):
            self.restart()

    def _handle_swipe_end(self, pos) -> None:
        direction = self.swipe.release(pos)
        if direction is not None:
            self.queue_direction(direction)

    # ── Utilities ─────────────────────────────────────────────────
    @staticmethod
    def _is_mouse(event: pygame.event.Event, kind: int) -> bool:
        # pygame mirrors touches as mouse events; those also arrive as FINGER*
        return (event.type == kind and event.button == 1
                and not getattr(event, "touch", False))

    def _finger_pos(self, event: pygame.event.Event) -> tuple[float, float]:
        # finger coordinates are normalised to [0, 1]
        width, height = self.screen.get_size()
        return event.x * width, event.y * height

    @staticmethod
    def _quit() -> None:
        pygame.quit()
        sys.exit()
