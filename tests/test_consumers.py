import pytest

from voicezone.system.consumers import ZoneChangeWatcher, ZoneSequence
from voicezone.system.engine import ClassificationResult


def test_watcher_fires_only_on_change():
    seen = []
    watcher = ZoneChangeWatcher(seen.append)
    for zone in (0, 0, 1, 1, 2, 0, 0):
        watcher.update(ClassificationResult(zone=zone))
    assert seen == [0, 1, 2, 0]


def test_sequence_requires_holding_each_zone():
    seq = ZoneSequence([0, 1, 2], confirm_duration=0.5)
    assert not seq.update(0, 0.25)
    assert seq.progress == pytest.approx(0.5)
    assert seq.update(0, 0.25)
    assert seq.target_zone == 1

    seq.update(1, 0.25)
    seq.update(2, 0.25)  # wrong zone resets the hold timer
    assert not seq.update(1, 0.25)
    assert seq.update(1, 0.25)
    assert seq.update(2, 0.5)
    assert seq.complete
    assert seq.confirmed == [0, 1, 2]
    assert seq.target_zone is None
    assert not seq.update(2, 1.0)


def test_sequence_reset():
    seq = ZoneSequence([2], confirm_duration=0.25)
    seq.update(2, 0.25)
    assert seq.complete
    seq.reset()
    assert not seq.complete
    assert seq.current_step == 0


def test_sequence_validation():
    with pytest.raises(ValueError):
        ZoneSequence([])
    with pytest.raises(ValueError):
        ZoneSequence([0, 3])
