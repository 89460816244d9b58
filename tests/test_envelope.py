import numpy as np
import pytest

from voicezone.system.config import DetectorConfig, EnvelopeStrategy
from voicezone.system.envelope import EnvelopeShaper


def make_shaper(**overrides):
    config = DetectorConfig(smoothing_window_size=1, rise_speed=10.0, fall_speed=5.0)
    for key, value in overrides.items():
        setattr(config, key, value)
    return EnvelopeShaper(), config


def test_rise_is_rate_limited():
    shaper, cfg = make_shaper()
    assert shaper.update(1.0, 0.01, cfg) == pytest.approx(0.1)
    assert shaper.update(1.0, 0.01, cfg) == pytest.approx(0.2)


def test_fall_uses_fall_speed():
    shaper, cfg = make_shaper()
    shaper.update(1.0, 1.0, cfg)
    assert shaper.level == 1.0
    assert shaper.update(0.0, 0.01, cfg) == pytest.approx(0.95)


def test_follower_never_overshoots_target():
    shaper, cfg = make_shaper()
    assert shaper.update(0.05, 0.01, cfg) == pytest.approx(0.05)
    assert shaper.update(0.05, 0.01, cfg) == pytest.approx(0.05)


def test_zero_delta_time_holds_level():
    shaper, cfg = make_shaper()
    shaper.update(0.4, 1.0, cfg)
    assert shaper.update(1.0, 0.0, cfg) == pytest.approx(0.4)


def test_rolling_mean_counts_unwritten_slots_as_zero():
    shaper, cfg = make_shaper(smoothing_window_size=3)
    assert shaper.update(0.3, 1.0, cfg) == pytest.approx(0.1)
    assert shaper.update(0.6, 1.0, cfg) == pytest.approx(0.3)
    assert shaper.update(0.9, 1.0, cfg) == pytest.approx(0.6)
    assert shaper.update(0.9, 1.0, cfg) == pytest.approx(0.8)


def test_rolling_mean_wraps_around_ring():
    shaper, cfg = make_shaper(smoothing_window_size=30)
    for _ in range(35):
        level = shaper.update(1.0, 1.0, cfg)
    assert level == pytest.approx(1.0)
    assert shaper.state.cursor == 35


def test_window_size_change_applies_next_tick():
    shaper, cfg = make_shaper(smoothing_window_size=4)
    for value in (0.0, 0.0, 0.0, 0.8):
        shaper.update(value, 1.0, cfg)
    assert shaper.level == pytest.approx(0.2)
    cfg.smoothing_window_size = 1
    assert shaper.update(0.8, 1.0, cfg) == pytest.approx(0.8)


def test_exponential_strategy_blends_toward_target():
    shaper, cfg = make_shaper(envelope_strategy=EnvelopeStrategy.EXPONENTIAL, smoothing_factor=0.5)
    assert shaper.update(1.0, 0.016, cfg) == pytest.approx(0.5)
    assert shaper.update(1.0, 0.5, cfg) == pytest.approx(0.75)


def test_level_stays_in_unit_range():
    rng = np.random.default_rng(7)
    shaper, cfg = make_shaper(smoothing_window_size=5)
    for target, dt in zip(rng.uniform(-0.5, 1.5, 500), rng.uniform(0.0, 0.2, 500)):
        level = shaper.update(float(target), float(dt), cfg)
        assert 0.0 <= level <= 1.0


def test_reset_clears_state():
    shaper, cfg = make_shaper()
    shaper.update(1.0, 1.0, cfg)
    shaper.reset()
    assert shaper.level == 0.0
    assert shaper.state.cursor == 0
    assert not shaper.state.ring.any()
