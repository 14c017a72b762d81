import json

import pytest

from galton_sim.config import BoardConfig
from galton_sim.io import (
    config_from_json, config_to_json, load_config, save_config, save_snapshot,
)


def test_config_round_trip(tmp_path):
    cfg = BoardConfig(rows=12, bin_count=13, pin_spacing=0.6, top_width_ratio=0.4,
                      restitution=0.3, max_live=250, ball_radius=0.07)
    path = tmp_path / "board.json"
    save_config(cfg, str(path))
    assert load_config(str(path)) == cfg


def test_defaults_are_omitted():
    d = config_to_json(BoardConfig())
    assert d == {"layout": "triangular", "rows": 20, "bin_count": 21, "pin_spacing": 0.5}


def test_rows_imply_bin_count():
    assert config_from_json({"rows": 8}).bin_count == 9
    assert config_from_json({"rows": 8, "bin_count": 5}).bin_count == 5


def test_layout_names():
    assert config_from_json({"layout": "trapezoid"}).top_width_ratio == 0.5
    assert config_from_json({"layout": "trapezoid", "top_width_ratio": 0.25}).top_width_ratio == 0.25
    assert config_from_json({"layout": "triangular", "top_width_ratio": 0.25}).top_width_ratio is None


def test_unknown_keys_ignored():
    cfg = config_from_json({"rows": 5, "ballColor": "0xffffff"})
    assert cfg.rows == 5


@pytest.mark.parametrize("doc", [
    {"rows": "ten"},
    {"rows": 7.5},
    {"gravity": True},
    {"layout": "hexagon"},
    [1, 2, 3],
])
def test_malformed_configs_raise(doc):
    with pytest.raises(ValueError):
        config_from_json(doc)


def test_snapshot_is_json(tmp_path, small_config, make_engine, settle_in):
    engine = make_engine(small_config)
    settle_in(engine, 2)
    engine.spawn_particle()
    snap = engine.snapshot()
    assert [b["count"] for b in snap["bins"]] == [0, 0, 1, 0, 0]
    assert [p["settled"] for p in snap["particles"]] == [True, False]
    assert snap["particles"][0]["bin"] == 2

    path = tmp_path / "snap.json"
    save_snapshot(engine, str(path))
    with open(path, encoding="utf-8") as f:
        assert json.load(f) == json.loads(json.dumps(snap))
