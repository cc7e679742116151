"""Tests for cue factories and audio sinks."""

import io
import logging

from neon_swarm import audio
from neon_swarm.audio import (
    BellAudio, LogAudio, RecordingAudio, Waveform, fire_cue, level_up_cue,
)


class TestCues:

    def test_fire_range(self):
        for _ in range(50):
            cue = fire_cue()
            assert 500 <= cue.frequency <= 700
            assert cue.waveform == Waveform.SINE

    def test_randomized_ranges(self):
        for _ in range(50):
            assert 200 <= audio.enemy_death_cue().frequency <= 300
            assert 1200 <= audio.elite_kill_cue().frequency <= 1500
            assert 1000 <= audio.xp_pickup_cue().frequency <= 1500

    def test_fixed_cues(self):
        assert audio.player_hit_cue().frequency == 80
        assert audio.nova_cue().duration == 0.8
        assert level_up_cue().waveform == Waveform.SINE


class TestSinks:

    def test_bell_only_for_loud_cues(self):
        stream = io.StringIO()
        bell = BellAudio(stream)
        bell.play(fire_cue())
        assert stream.getvalue() == ''
        bell.play(level_up_cue())
        assert stream.getvalue() == '\a'

    def test_recording(self):
        sink = RecordingAudio()
        sink.play(fire_cue())
        sink.play(level_up_cue())
        assert sink.names() == ['fire', 'level_up']

    def test_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='neon_swarm.audio'):
            LogAudio().play(level_up_cue())
        assert 'level_up' in caplog.text
