import numpy as np
import pytest

from voicezone import get_version
from voicezone.simulation.event_player import EventPlayer, Scenario, ToneEvent
from voicezone.simulation.scenarios import hum, shout, silence
from voicezone.simulation.zone_tester import ZoneTester
from voicezone.system.config import DetectorConfig, DetectorMode
from voicezone.utils.helpers import load_audio, sine_wave


def test_event_player_places_tones():
    scenario = Scenario("t", length_s=1.0, noise_level=0.0, events=[ToneEvent(0.5, 0.25, 441.0, 0.5)])
    player = EventPlayer(scenario, sample_rate=44100)
    timeline = player.timeline
    assert len(timeline) == 44100
    assert not timeline[:22050].any()
    assert np.abs(timeline[22050:33075]).max() > 0.4
    assert player.expected_events(0.6) == scenario.events
    assert player.expected_events(0.9) == []


def test_silence_stays_green():
    run = ZoneTester(silence()).run()
    assert run.summary()[0] == 1.0
    assert run.zone_changes() == 0


def test_shout_scenario_zones():
    run = ZoneTester(shout()).run()
    assert run.zone_at(0.3) == 0
    assert run.zone_at(1.4) == 1
    assert run.zone_at(2.9) == 2
    assert run.zone_at(3.9) == 0


def test_hum_scenario_zones_in_pitch_mode():
    run = ZoneTester(hum(), config=DetectorConfig(mode=DetectorMode.PITCH)).run()
    assert run.zone_at(1.4) == 0
    assert run.zone_at(2.9) == 1
    assert run.zone_at(4.4) == 2
    assert run.results[-1].pitch_hz == 0.0


def test_get_version():
    assert isinstance(get_version(), str)


def write_tone(path, sample_rate, seconds=1.0, freq=300.0, amplitude=0.05):
    sf = pytest.importorskip("soundfile")
    tone = sine_wave(freq, int(seconds * sample_rate), sample_rate, amplitude)
    sf.write(str(path), tone, sample_rate)
    return path


def test_wav_replay_reaches_red_zone(tmp_path):
    path = write_tone(tmp_path / "tone.wav", 44100)
    run = ZoneTester().run_wav(path)
    assert run.times[-1] >= 1.0
    assert run.zone_at(0.2) == 2
    assert run.zone_at(0.9) == 2


def test_wav_is_resampled_to_engine_rate(tmp_path):
    pytest.importorskip("librosa")
    path = write_tone(tmp_path / "tone_22k.wav", 22050, freq=441.0, amplitude=0.4)
    data, sr = load_audio(path, 44100)
    assert sr == 44100
    assert abs(len(data) - 44100) <= 2
    run = ZoneTester(config=DetectorConfig(mode=DetectorMode.PITCH)).run_wav(path)
    assert run.zone_at(0.5) == 1


def test_run_without_scenario_is_rejected():
    with pytest.raises(ValueError):
        ZoneTester().run()
