"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling,
no timer: the engine advances exactly one step per tick() call and the
caller decides when that happens.

Classes:
    Direction     — immutable (x, y) unit delta
    Snake         — body, active direction, buffered direction
    EngineConfig  — per-session settings (grid, speed curve, scoring)
    TickReport    — outcome of a single tick
    GameEngine    — top-level model; owns the snake, food, power-up,
                    obstacles, score and speed
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from .config import (
    GRID_SIZE, OBSTACLE_COUNT, MAX_PLACEMENT_TRIES,
    BASE_SPEED, SPEED_STEP, MIN_SPEED, SPEED_UP_EVERY,
    FOOD_POINTS, POWER_UP_POINTS, POWER_UP_CHANCE,
    HIGH_SCORE_KEY,
)
from .storage import MemoryStore

log = logging.getLogger(__name__)

Cell = tuple[int, int]


# ─────────────────────────── Errors ──────────────────────────────
class GameError(Exception):
    """Base class for engine failures."""


class InvalidInput(GameError, ValueError):
    """A direction value that is not one of the four cardinal directions."""


class AlreadyOver(GameError):
    """The session has ended; reset() must be called first."""


class NoSpaceAvailable(GameError):
    """Random placement ran out of retries without finding a free cell."""


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction. Screen coordinates: y grows downwards."""
    LEFT  = None  # filled below after class definition
    RIGHT = None
    UP    = None
    DOWN  = None

    __slots__ = ("x", "y", "name")

    def __init__(self, x: int, y: int, name: str):
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "name", name)

    def __setattr__(self, key, value):
        raise AttributeError("Direction is immutable")

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        """Return the Direction for ``value`` (a Direction or a name like "up")."""
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            found = _BY_NAME.get(value.strip().upper())
            if found is not None:
                return found
        raise InvalidInput(f"not a direction: {value!r}")

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    def step(self, cell: Cell) -> Cell:
        return cell[0] + self.x, cell[1] + self.y

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction.{self.name}"


Direction.LEFT  = Direction(-1,  0, "LEFT")
Direction.RIGHT = Direction( 1,  0, "RIGHT")
Direction.UP    = Direction( 0, -1, "UP")
Direction.DOWN  = Direction( 0,  1, "DOWN")
ALL_DIRS = [Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP]
_BY_NAME = {d.name: d for d in ALL_DIRS}


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Body cells (head first) plus the active and buffered directions.
    Collision and scoring rules live in GameEngine.
    """

    def __init__(self, body: Iterable[Cell], direction: Direction = Direction.RIGHT):
        self.body: deque[Cell] = deque(tuple(c) for c in body)
        if not self.body:
            raise ValueError("a snake needs at least 1 segment")
        self.dir: Direction = direction
        self._next_dir: Direction = direction

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def next_dir(self) -> Direction:
        return self._next_dir

    def __len__(self) -> int:
        return len(self.body)

    # ── Commands ─────────────────────────────────────────────────
    def request_direction(self, new_dir: Direction) -> bool:
        """Queue a direction change. Returns False if it would reverse the snake."""
        if new_dir.is_opposite(self.dir):
            return False
        self._next_dir = new_dir
        return True

    def upcoming_dir(self) -> Direction:
        """The direction the next turn() will make active."""
        if self._next_dir.is_opposite(self.dir):
            return self.dir
        return self._next_dir

    def turn(self) -> Direction:
        """Make the buffered direction the active one."""
        self.dir = self.upcoming_dir()
        return self.dir

    def advance(self, new_head: Cell, grow: bool) -> None:
        self.body.appendleft(new_head)
        if not grow:
            self.body.pop()

    # ── Queries ──────────────────────────────────────────────────
    def occupies(self, cell: Cell) -> bool:
        return cell in self.body

    def hits_itself(self) -> bool:
        head = self.body[0]
        return any(segment == head for segment in list(self.body)[1:])


# ───────────────────────── EngineConfig ──────────────────────────
@dataclass(frozen=True)
class EngineConfig:
    """Settings for one session. Defaults reproduce the classic game."""

    grid_size: int = GRID_SIZE
    obstacle_count: int = OBSTACLE_COUNT
    start: Optional[Cell] = None          # None = centre of the grid
    base_speed: int = BASE_SPEED
    speed_step: int = SPEED_STEP
    min_speed: int = MIN_SPEED
    speed_up_every: int = SPEED_UP_EVERY
    food_points: int = FOOD_POINTS
    power_up_points: int = POWER_UP_POINTS
    power_up_chance: float = POWER_UP_CHANCE
    power_up_lifetime: Optional[int] = None  # ticks; None = never expires
    max_placement_tries: int = MAX_PLACEMENT_TRIES
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}")
        if self.obstacle_count < 0:
            raise ValueError("obstacle_count must be >= 0")
        if not 0 < self.min_speed <= self.base_speed:
            raise ValueError("need 0 < min_speed <= base_speed")
        if self.speed_step < 0 or self.speed_up_every < 1:
            raise ValueError("speed_step must be >= 0 and speed_up_every >= 1")
        if not 0.0 <= self.power_up_chance <= 1.0:
            raise ValueError("power_up_chance must be within [0, 1]")
        if self.power_up_lifetime is not None and self.power_up_lifetime < 1:
            raise ValueError("power_up_lifetime must be >= 1 or None")
        if self.max_placement_tries < 1:
            raise ValueError("max_placement_tries must be >= 1")
        x, y = self.start_cell
        if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
            raise ValueError(f"start cell {self.start_cell} is outside the grid")

    @property
    def start_cell(self) -> Cell:
        if self.start is None:
            return self.grid_size // 2, self.grid_size // 2
        return tuple(self.start)


# ────────────────────────── TickReport ───────────────────────────
@dataclass(frozen=True)
class TickReport:
    """What happened during one tick."""

    alive: bool
    score_delta: int
    score: int
    speed_changed: bool
    speed: int


# ─────────────────────────── GameEngine ──────────────────────────
class GameEngine:
    """
    Top-level model.  Owns all per-session state.
    The caller invokes tick() once per scheduler interval and re-arms its
    timer whenever a report says the speed changed.
    """

    def __init__(self, config: Optional[EngineConfig] = None, store=None,
                 rng: Optional[random.Random] = None):
        self.config: EngineConfig = config or EngineConfig()
        self._store = store if store is not None else MemoryStore()
        self._rng = rng or random.Random()
        self.high_score: int = self._load_high_score()

        self.snake: Snake = None
        self.food: Cell = None
        self.power_up: Optional[Cell] = None
        self.power_up_ttl: Optional[int] = None
        self.obstacles: frozenset[Cell] = frozenset()
        self.score: int = 0
        self.speed: int = self.config.base_speed
        self.ticks: int = 0
        self._over: bool = False
        self.new_high_score: bool = False
        self.reset()

    # ── Public API ───────────────────────────────────────────────
    def reset(self, config: Optional[EngineConfig] = None) -> None:
        """Start a fresh session, optionally with a new configuration."""
        if config is not None:
            self.config = config
        cfg = self.config
        if cfg.seed is not None:
            self._rng.seed(cfg.seed)

        self.snake = Snake([cfg.start_cell], Direction.RIGHT)
        self.score = 0
        self.speed = cfg.base_speed
        self.ticks = 0
        self.power_up = None
        self.power_up_ttl = None
        self._over = False
        self.new_high_score = False

        self.obstacles = frozenset()
        obstacles: set[Cell] = set()
        for _ in range(cfg.obstacle_count):
            obstacles.add(self._random_empty_cell(extra=obstacles))
        self.obstacles = frozenset(obstacles)
        self.food = self._random_empty_cell()
        log.debug("session reset: start=%s obstacles=%s food=%s",
                  cfg.start_cell, sorted(self.obstacles), self.food)

    def set_direction(self, direction: Union[Direction, str]) -> None:
        """Buffer a turn for the next tick. Reversals are ignored."""
        new_dir = Direction.parse(direction)
        if self._over:
            raise AlreadyOver("game is over; call reset() first")
        self.snake.request_direction(new_dir)

    def tick(self) -> TickReport:
        """Advance the simulation by exactly one grid step.

        New food (and any power-up) is placed before anything is mutated,
        so a NoSpaceAvailable leaves the session exactly as it was.
        """
        if self._over:
            raise AlreadyOver("game is over; call reset() first")
        cfg = self.config

        direction = self.snake.upcoming_dir()
        new_head = direction.step(self.snake.head)

        ate_food = new_head == self.food
        ate_power_up = not ate_food and self.power_up is not None and new_head == self.power_up

        new_food = new_power_up = None
        if ate_food:
            # the snake grows onto new_head, so its whole old body stays occupied
            busy = (new_head,) if self.power_up is None else (new_head, self.power_up)
            new_food = self._random_empty_cell(extra=busy)
            if self.power_up is None and self._rng.random() < cfg.power_up_chance:
                new_power_up = self._place_power_up(extra=(new_head, new_food))

        self.ticks += 1
        self.snake.turn()
        self.snake.advance(new_head, grow=ate_food or ate_power_up)

        score_delta = 0
        speed_changed = False
        if ate_power_up:
            score_delta = cfg.power_up_points
            self.score += score_delta
            self._clear_power_up()
        else:
            self._age_power_up()

        if ate_food:
            score_delta = cfg.food_points
            self.score += score_delta
            self.food = new_food
            if self.score > 0 and self.score % cfg.speed_up_every == 0:
                speed_changed = self._speed_up()
            if new_power_up is not None:
                self.power_up = new_power_up
                self.power_up_ttl = cfg.power_up_lifetime

        alive = not self._collides(new_head)
        if not alive:
            self._game_over()

        return TickReport(
            alive=alive,
            score_delta=score_delta,
            score=self.score,
            speed_changed=speed_changed,
            speed=self.speed,
        )

    def is_over(self) -> bool:
        return self._over

    # ── Read-only snapshots for renderers ────────────────────────
    @property
    def grid_size(self) -> int:
        return self.config.grid_size

    @property
    def snake_cells(self) -> tuple[Cell, ...]:
        return tuple(self.snake.body)

    @property
    def direction(self) -> Direction:
        return self.snake.dir

    # ── Private helpers ──────────────────────────────────────────
    def _in_bounds(self, cell: Cell) -> bool:
        n = self.config.grid_size
        return 0 <= cell[0] < n and 0 <= cell[1] < n

    def _collides(self, head: Cell) -> bool:
        return (
            not self._in_bounds(head)
            or self.snake.hits_itself()
            or head in self.obstacles
        )

    def _random_empty_cell(self, extra: Iterable[Cell] = ()) -> Cell:
        """Rejection-sample a cell clear of the snake, obstacles and ``extra``."""
        n = self.config.grid_size
        occupied = set(self.snake.body) | self.obstacles | set(extra)
        for _ in range(self.config.max_placement_tries):
            pos = (self._rng.randrange(n), self._rng.randrange(n))
            if pos not in occupied:
                return pos
        raise NoSpaceAvailable(
            f"no free cell found after {self.config.max_placement_tries} tries "
            f"({len(occupied)} of {n * n} cells occupied)"
        )

    def _speed_up(self) -> bool:
        new_speed = max(self.config.min_speed, self.speed - self.config.speed_step)
        changed = new_speed != self.speed
        self.speed = new_speed
        return changed

    def _place_power_up(self, extra: Iterable[Cell]) -> Optional[Cell]:
        """Pick a power-up cell, or None when the board has no room for a bonus."""
        try:
            return self._random_empty_cell(extra=extra)
        except NoSpaceAvailable:
            log.debug("no room for a power-up; skipping it")
            return None

    def _clear_power_up(self) -> None:
        self.power_up = None
        self.power_up_ttl = None

    def _age_power_up(self) -> None:
        if self.power_up is None or self.power_up_ttl is None:
            return
        self.power_up_ttl -= 1
        if self.power_up_ttl <= 0:
            self._clear_power_up()

    def _game_over(self) -> None:
        self._over = True
        log.info("game over: score=%d ticks=%d", self.score, self.ticks)
        if self.score > self.high_score:
            self.high_score = self.score
            self.new_high_score = True
            self._save_high_score()

    def _load_high_score(self) -> int:
        try:
            raw = self._store.get(HIGH_SCORE_KEY)
        except OSError as exc:
            log.warning("could not read high score: %s", exc)
            return 0
        if raw is None:
            return 0
        try:
            return max(0, int(raw))
        except (TypeError, ValueError):
            log.warning("ignoring unparseable high score %r", raw)
            return 0

    def _save_high_score(self) -> None:
        try:
            self._store.set(HIGH_SCORE_KEY, str(self.high_score))
        except OSError as exc:
            log.warning("could not persist high score %d: %s", self.high_score, exc)
