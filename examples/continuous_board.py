# examples/continuous_board.py
"""
Run a board for a minute of simulated time with a small population cap, so
eviction keeps recycling particles, and print the histogram every 10 s.
"""
import logging

from galton_sim import BoardConfig, SimulationEngine, SpawnTicker, run, setup_logging
from galton_sim.renderer import DebugRenderer

setup_logging(logging.INFO)

cfg = BoardConfig(rows=12, bin_count=13, max_live=300, max_settled=250)
engine = SimulationEngine(cfg)
ticker = SpawnTicker(interval=0.05, total=10_000)
ticker.start(engine)
renderer = DebugRenderer()

for _ in range(6):
    run(engine, duration=10.0, ticker=ticker)
    renderer.render_engine(engine)
