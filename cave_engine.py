from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence

# Cave automaton engine:
# - seeded SplitMix64 RNG or any object with random()
# - flat row-major binary grid with a boundary-clamped Moore neighbor query
# - one-step transition with the wall/open threshold asymmetry
# - generate(): initialize + N steps over two swapped buffers

logger = logging.getLogger("cavegen.engine")

OPEN = 0
WALL = 1

# Moore neighborhood, center excluded
NEIGHBOR_OFFSETS = [
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
]


class ConfigError(ValueError):
    """Invalid generation parameters."""


# ------------------------------------------------------------
# Deterministic RNG: SplitMix64
# ------------------------------------------------------------

class RandomSource(Protocol):
    def random(self) -> float: ...


class SplitMix64:
    def __init__(self, seed: int):
        self.state = seed & 0xFFFFFFFFFFFFFFFF

    def next(self) -> int:
        self.state = (self.state + 0x9E3779B97F4A7C15) & 0xFFFFFFFFFFFFFFFF
        z = self.state
        z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & 0xFFFFFFFFFFFFFFFF
        z = (z ^ (z >> 27)) * 0x94D049BB133111EB & 0xFFFFFFFFFFFFFFFF
        z = z ^ (z >> 31)
        return z & 0xFFFFFFFFFFFFFFFF

    def random(self) -> float:
        # top 53 bits -> [0, 1)
        return (self.next() >> 11) * (1.0 / (1 << 53))


def make_rng(seed: Optional[int] = None) -> RandomSource:
    if seed is None:
        return random.Random()
    return SplitMix64(seed)


# ------------------------------------------------------------
# Grid
# ------------------------------------------------------------

class CaveGrid:
    """Binary cell grid stored row-major: cell (x, y) lives at y * width + x."""

    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int, cells: Optional[Iterable[int]] = None):
        if width <= 0 or height <= 0:
            raise ConfigError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        if cells is None:
            self.cells = bytearray(width * height)
            return
        buf = bytearray(cells)
        if len(buf) != width * height:
            raise ConfigError(f"expected {width * height} cells, got {len(buf)}")
        if any(c > WALL for c in buf):
            raise ConfigError("cells must be 0 (open) or 1 (wall)")
        self.cells = buf

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> CaveGrid:
        if not rows or not rows[0]:
            raise ConfigError("rows must be non-empty")
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise ConfigError("all rows must have the same length")
        return cls(width, len(rows), (c for r in rows for c in r))

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def get(self, x: int, y: int) -> int:
        return self.cells[self._index(x, y)]

    def set(self, x: int, y: int, value: int) -> None:
        self.cells[self._index(x, y)] = WALL if value else OPEN

    def rows(self) -> List[List[int]]:
        w = self.width
        return [list(self.cells[y * w:(y + 1) * w]) for y in range(self.height)]

    def count_neighbors(self, x: int, y: int) -> int:
        return count_neighbors(self, x, y)

    def wall_count(self) -> int:
        return sum(self.cells)

    def copy(self) -> CaveGrid:
        return CaveGrid(self.width, self.height, self.cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CaveGrid):
            return NotImplemented
        return (self.width, self.height, self.cells) == (other.width, other.height, other.cells)

    def __repr__(self) -> str:
        return f"CaveGrid({self.width}x{self.height}, walls={self.wall_count()})"


# ------------------------------------------------------------
# Parameters
# ------------------------------------------------------------

def _is_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


@dataclass(frozen=True)
class GenerationConfig:
    width: int
    height: int
    wall_density: float = 45        # percent chance a cell starts as wall
    neighbor_threshold: int = 5     # walls persist at threshold-1, form at threshold
    iterations: int = 4
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ("width", "height"):
            v = getattr(self, name)
            if not _is_int(v) or v <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {v!r}")
        d = self.wall_density
        if isinstance(d, bool) or not isinstance(d, (int, float)) or not 0 <= d <= 100:
            raise ConfigError(f"wall_density must be within [0, 100], got {d!r}")
        if not _is_int(self.neighbor_threshold):
            raise ConfigError(f"neighbor_threshold must be an integer, got {self.neighbor_threshold!r}")
        if not _is_int(self.iterations) or self.iterations < 0:
            raise ConfigError(f"iterations must be a non-negative integer, got {self.iterations!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise ConfigError(f"seed must be an integer or None, got {self.seed!r}")


DEFAULT_CONFIG = GenerationConfig(width=50, height=50)


# ------------------------------------------------------------
# Automaton
# ------------------------------------------------------------

def initialize(config: GenerationConfig, rng: Optional[RandomSource] = None) -> CaveGrid:
    if rng is None:
        rng = make_rng(config.seed)
    p = config.wall_density / 100
    grid = CaveGrid(config.width, config.height)
    cells = grid.cells
    for i in range(len(cells)):
        if rng.random() < p:
            cells[i] = WALL
    return grid


def count_neighbors(grid: CaveGrid, x: int, y: int) -> int:
    w, h = grid.width, grid.height
    if not (0 <= x < w and 0 <= y < h):
        raise IndexError(f"cell ({x}, {y}) outside {w}x{h} grid")
    cells = grid.cells
    count = 0
    for dx, dy in NEIGHBOR_OFFSETS:
        nx, ny = x + dx, y + dy
        if 0 <= nx < w and 0 <= ny < h:
            count += cells[ny * w + nx]
    return count


def step_into(src: CaveGrid, dst: CaveGrid, neighbor_threshold: int) -> None:
    # reads only src; dst is overwritten cell by cell
    w, h = src.width, src.height
    if (dst.width, dst.height) != (w, h):
        raise ValueError("src and dst grids must have the same dimensions")
    if dst is src or dst.cells is src.cells:
        raise ValueError("dst must not share a buffer with src")
    cur = src.cells
    out = dst.cells
    for y in range(h):
        for x in range(w):
            i = y * w + x
            n = count_neighbors(src, x, y)
            t = neighbor_threshold - 1 if cur[i] == WALL else neighbor_threshold
            out[i] = WALL if n >= t else OPEN


def step(grid: CaveGrid, neighbor_threshold: int) -> CaveGrid:
    nxt = CaveGrid(grid.width, grid.height)
    step_into(grid, nxt, neighbor_threshold)
    return nxt


def generate(config: GenerationConfig, rng: Optional[RandomSource] = None) -> CaveGrid:
    logger.debug(
        "generating %dx%d cave: density=%s threshold=%d iterations=%d",
        config.width, config.height, config.wall_density,
        config.neighbor_threshold, config.iterations,
    )
    grid = initialize(config, rng)
    if config.iterations > 0:
        back = CaveGrid(config.width, config.height)
        for _ in range(config.iterations):
            step_into(grid, back, config.neighbor_threshold)
            grid, back = back, grid

    logger.debug("cave done: %d/%d walls", grid.wall_count(), len(grid.cells))
    return grid


def generate_cave(
    width: int,
    height: int,
    wall_density: float,
    neighbor_threshold: int,
    iterations: int,
    seed: Optional[int] = None,
    rng: Optional[RandomSource] = None,
) -> CaveGrid:
    config = GenerationConfig(width, height, wall_density, neighbor_threshold, iterations, seed)
    return generate(config, rng)


# ------------------------------------------------------------
# Stateful wrapper
# ------------------------------------------------------------

class CaveGenerator:
    """
    Holds the current grid and advances it one automaton step per call.

    Same results as generate() given the same config and rng; useful when a
    caller wants to inspect intermediate generations.
    """

    def __init__(self, config: GenerationConfig, rng: Optional[RandomSource] = None):
        self.config = config
        self.rng = rng if rng is not None else make_rng(config.seed)
        self.reset()

    def reset(self) -> None:
        self.grid = initialize(self.config, self.rng)
        self.generation = 0

    def step(self) -> CaveGrid:
        # fresh grid each step; earlier results stay with their callers
        self.grid = step(self.grid, self.config.neighbor_threshold)
        self.generation += 1
        return self.grid

    def run(self, n: Optional[int] = None) -> CaveGrid:
        if n is None:
            n = self.config.iterations
        if n < 0:
            raise ConfigError(f"step count must be non-negative, got {n}")
        for _ in range(n):
            self.step()
        return self.grid

    def count_neighbors(self, x: int, y: int) -> int:
        return count_neighbors(self.grid, x, y)
