import pytest

from voicezone.system.zones import GREEN, RED, YELLOW, ZoneClassifier, classify_zone

YELLOW_T = 0.33
RED_T = 0.66


@pytest.mark.parametrize(
    "level, zone",
    [
        (0.0, GREEN),
        (YELLOW_T - 1e-9, GREEN),
        (YELLOW_T, YELLOW),
        (0.5, YELLOW),
        (RED_T - 1e-9, YELLOW),
        (RED_T, RED),
        (1.0, RED),
    ],
)
def test_classify_zone_boundaries(level, zone):
    assert classify_zone(level, YELLOW_T, RED_T) == zone


def test_no_hysteresis_flickers_at_threshold():
    classifier = ZoneClassifier()
    zones = [classifier.classify(level, YELLOW_T, RED_T) for level in (YELLOW_T, YELLOW_T - 1e-6) * 3]
    assert zones == [1, 0, 1, 0, 1, 0]


def test_hysteresis_holds_zone_near_boundary():
    classifier = ZoneClassifier(hysteresis=0.05)
    assert classifier.classify(0.2, YELLOW_T, RED_T) == GREEN
    assert classifier.classify(0.34, YELLOW_T, RED_T) == GREEN
    assert classifier.classify(0.39, YELLOW_T, RED_T) == YELLOW
    assert classifier.classify(0.31, YELLOW_T, RED_T) == YELLOW
    assert classifier.classify(0.27, YELLOW_T, RED_T) == GREEN


def test_hysteresis_allows_large_jumps():
    classifier = ZoneClassifier(hysteresis=0.05)
    assert classifier.classify(0.0, YELLOW_T, RED_T) == GREEN
    assert classifier.classify(0.95, YELLOW_T, RED_T) == RED
    assert classifier.classify(0.0, YELLOW_T, RED_T) == GREEN
