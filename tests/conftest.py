import numpy as np
import pytest

from galton_sim.config import BoardConfig
from galton_sim.engine import SimulationEngine


def _particle(engine, pid):
    for p in engine.particles:
        if p.id == pid:
            return p
    raise KeyError(pid)


@pytest.fixture
def small_config():
    """4 rows, 5 bins, roomy caps."""
    return BoardConfig(rows=4, bin_count=5, pin_spacing=0.5, max_live=100, max_settled=100)


@pytest.fixture
def make_engine():
    def _make(config, seed=1234):
        return SimulationEngine(config, rng=np.random.default_rng(seed))
    return _make


@pytest.fixture
def settle_in():
    """
    Drop a particle straight into a bin: spawn above the bin, move it just
    under the collection line and take one tiny step.
    """
    def _settle(engine, bin_index):
        cfg = engine.config
        pid = engine.spawn_particle(x=engine.bins[bin_index].x)
        p = _particle(engine, pid)
        p.position[1] = cfg.collection_y - 1e-3
        p.velocity[:] = 0.0
        engine.step(1e-3)
        assert p.settled and p.bin_index == bin_index
        return p
    return _settle


@pytest.fixture
def find_particle():
    return _particle
