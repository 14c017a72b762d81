# examples/trapezoid_from_json.py
"""
Load a trapezoidal board from JSON, flip gravity half way (as an
orientation sensor would), and save the final snapshot.
"""
import json
import os
import tempfile

from galton_sim import SimulationEngine, SpawnTicker, run
from galton_sim.io import load_config, save_snapshot

doc = {"layout": "trapezoid", "rows": 14, "top_width_ratio": 0.4, "restitution": 0.45}
tmp = tempfile.mkdtemp()
path = os.path.join(tmp, "board.json")
with open(path, "w", encoding="utf-8") as f:
    json.dump(doc, f)

engine = SimulationEngine(load_config(path))
ticker = SpawnTicker(interval=0.1, total=100)
ticker.start(engine)

run(engine, duration=8.0, ticker=ticker)
engine.set_gravity_inverted(True)
run(engine, duration=1.0)
engine.set_gravity_inverted(False)
run(engine, duration=8.0, ticker=ticker)

out = os.path.join(tmp, "snapshot.json")
save_snapshot(engine, out, indent=2)
print("bins:", engine.bin_counts())
print("snapshot:", out)
