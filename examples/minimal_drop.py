# examples/minimal_drop.py
import numpy as np

from galton_sim import BoardConfig, SimulationEngine

engine = SimulationEngine(BoardConfig(rows=8, bin_count=9, pin_spacing=0.7))
engine.spawn_particle(x=0.0)
ball = engine.particles[0]

frames = 0
while not ball.settled and frames < 3000:
    engine.step(1 / 60)
    frames += 1

print("frames:", frames)
print("bin:", ball.bin_index)
print("pos:", ball.position)
print("vel:", ball.velocity, np.allclose(ball.velocity, 0.0))
