# MIT License (see LICENSE)
"""
Renderer adapters for board visualization.

The engine has no rendering dependency. A renderer only reads: bins first
(so particles draw on top), then every live particle. Concrete backends
(three.js bridge, matplotlib, pygame...) subclass RendererAdapter.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

from ..types import Bin, Particle

if TYPE_CHECKING:
    from ..engine import SimulationEngine


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Usage:
        renderer.begin_frame(engine.time)
        for b in engine.bins:
            renderer.draw_bin(b)
        for p in engine.particles:
            renderer.draw_particle(p)
        renderer.end_frame()

    Or simply renderer.render_engine(engine).
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        ...

    @abstractmethod
    def draw_bin(self, b: Bin) -> None:
        ...

    @abstractmethod
    def draw_particle(self, particle: Particle) -> None:
        ...

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def render_engine(self, engine: "SimulationEngine") -> None:
        """Draw a full frame of the engine's current state."""
        self.begin_frame(engine.time)
        for b in engine.bins:
            self.draw_bin(b)
        for p in engine.particles:
            self.draw_particle(p)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Text renderer: a sideways histogram of the bins plus a particle tally.

    Output:
        === Frame t=2.5000 (falling 3, settled 12) ===
          0 |
          1 |##
          2 |#####
        ...
    With verbose=True every falling particle is listed as well.
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = False, bar_width: int = 40):
        self.output = output or sys.stdout
        self.verbose = verbose
        self.bar_width = bar_width
        self._time = 0.0
        self._bins: list[Bin] = []
        self._falling: list[Particle] = []
        self._settled = 0

    def begin_frame(self, time: float) -> None:
        self._time = time
        self._bins = []
        self._falling = []
        self._settled = 0

    def draw_bin(self, b: Bin) -> None:
        self._bins.append(b)

    def draw_particle(self, particle: Particle) -> None:
        if particle.settled:
            self._settled += 1
        else:
            self._falling.append(particle)

    def end_frame(self) -> None:
        out = self.output
        out.write(
            f"=== Frame t={self._time:.4f} "
            f"(falling {len(self._falling)}, settled {self._settled}) ===\n"
        )
        peak = max((b.count for b in self._bins), default=0)
        scale = self.bar_width / peak if peak > self.bar_width else 1.0
        for b in self._bins:
            out.write(f"{b.index:3d} |{'#' * int(round(b.count * scale))}\n")
        if self.verbose:
            for p in self._falling:
                out.write(
                    f"  [{p.id}] @ ({p.position[0]:.2f}, {p.position[1]:.2f}) "
                    f"v=({p.velocity[0]:.2f}, {p.velocity[1]:.2f})\n"
                )
        out.write("\n")
        out.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for benchmarks."""

    def begin_frame(self, time: float) -> None:
        pass

    def draw_bin(self, b: Bin) -> None:
        pass

    def draw_particle(self, particle: Particle) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Records every frame as plain data for playback or export.

    Example:
        renderer = BufferedRenderer()
        run(engine, duration=3.0, renderer=renderer)
        last = renderer.frames[-1]
        print(last["bins"], len(last["particles"]))
    """

    def __init__(self) -> None:
        self.frames: list[dict] = []
        self._current: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current = {"time": time, "bins": [], "particles": []}

    def draw_bin(self, b: Bin) -> None:
        if self._current is not None:
            self._current["bins"].append(b.count)

    def draw_particle(self, particle: Particle) -> None:
        if self._current is None:
            return
        self._current["particles"].append({
            "id": particle.id,
            "position": particle.position3,
            "settled": particle.settled,
        })

    def end_frame(self) -> None:
        if self._current is not None:
            self.frames.append(self._current)
            self._current = None

    def clear(self) -> None:
        self.frames.clear()
