# MIT License (see LICENSE)
"""
Rendering adapters for visualization.

    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text histogram for the console.
    - NullRenderer: No-op renderer for performance testing.
    - BufferedRenderer: Records frames for playback or export.

Typical usage:
    from galton_sim.renderer import DebugRenderer

    DebugRenderer().render_engine(engine)
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
