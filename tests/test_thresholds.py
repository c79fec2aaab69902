import json

import pytest

from insightai.engine.thresholds import DEFAULT_THRESHOLDS, Thresholds, load_thresholds


def test_defaults():
    t = DEFAULT_THRESHOLDS
    assert t.unified_usable_fraction == 0.80
    assert (t.unified_best, t.unified_good, t.unified_min) == (1.6, 1.2, 1.0)
    assert (t.discrete_best_desktop, t.discrete_best_laptop, t.discrete_good, t.discrete_min) == (1.4, 1.6, 1.15, 1.0)
    assert t.offload_ram_margin_gb == 8
    assert t.cpu_only_max_vram_gb == 8
    assert t.discrete_best_laptop > t.discrete_best_desktop
    assert (t.max_best, t.max_good, t.max_bad) == (6, 6, 5)


def test_thresholds_are_frozen():
    with pytest.raises(Exception):
        DEFAULT_THRESHOLDS.unified_best = 2.0


def test_load_overrides_keep_other_defaults(tmp_path):
    path = tmp_path / "thresholds.json"
    path.write_text(json.dumps({"discrete_best_laptop": 1.8, "max_bad": 3}))
    thresholds = load_thresholds(path)
    assert thresholds.discrete_best_laptop == 1.8
    assert thresholds.max_bad == 3
    assert thresholds.discrete_best_desktop == 1.4


@pytest.mark.parametrize("content", ['{"no_such_threshold": 1}', "[1, 2]", "not json"])
def test_invalid_overrides(tmp_path, content):
    path = tmp_path / "thresholds.json"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_thresholds(path)


def test_usable_fraction_bounds():
    with pytest.raises(ValueError):
        Thresholds(unified_usable_fraction=1.5)
