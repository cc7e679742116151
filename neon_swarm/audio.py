"""
Audio Cues
===========
Tone requests emitted by the simulation.

The core never synthesizes sound. It hands a `ToneCue` to whichever
`AudioOut` sink the front-end installed and forgets about it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List
import logging
import random
import sys

log = logging.getLogger(__name__)


class Waveform(Enum):
    SINE = 'sine'
    SQUARE = 'square'
    SAWTOOTH = 'sawtooth'
    TRIANGLE = 'triangle'


@dataclass(frozen=True)
class ToneCue:
    """A single fire-and-forget tone request."""
    frequency: float
    waveform: Waveform
    duration: float
    volume: float = 0.1
    name: str = ''


# =============================================================================
# CUE FACTORIES
# =============================================================================

def fire_cue() -> ToneCue:
    return ToneCue(500 + random.random() * 200, Waveform.SINE, 0.05, 0.05, 'fire')


def player_hit_cue() -> ToneCue:
    return ToneCue(80, Waveform.SQUARE, 0.1, 0.2, 'player_hit')


def enemy_death_cue() -> ToneCue:
    return ToneCue(300 - random.random() * 100, Waveform.SAWTOOTH, 0.2, 0.15, 'enemy_death')


def elite_kill_cue() -> ToneCue:
    return ToneCue(1200 + random.random() * 300, Waveform.SINE, 0.1, 0.1, 'elite_kill')


def xp_pickup_cue() -> ToneCue:
    return ToneCue(1000 + random.random() * 500, Waveform.TRIANGLE, 0.1, 0.1, 'xp_pickup')


def level_up_cue() -> ToneCue:
    return ToneCue(600, Waveform.SINE, 0.3, 0.3, 'level_up')


def game_start_cue() -> ToneCue:
    return ToneCue(600, Waveform.SINE, 0.3, 0.3, 'game_start')


def nova_cue() -> ToneCue:
    return ToneCue(200, Waveform.SAWTOOTH, 0.8, 0.4, 'nova')


# =============================================================================
# SINKS
# =============================================================================

class AudioOut:
    """Base sink. Subclasses override `play`; the default drops the cue."""

    def play(self, cue: ToneCue) -> None:
        pass


class LogAudio(AudioOut):
    """Writes every cue to the debug log."""

    def play(self, cue: ToneCue) -> None:
        log.debug('cue %s %.0fHz %s %.2fs vol=%.2f', cue.name,
                  cue.frequency, cue.waveform.value, cue.duration, cue.volume)


class BellAudio(AudioOut):
    """
    Rings the terminal bell for loud cues.

    Terminals can't play tones, so only the big moments (level-up,
    game start, nova) get a bell.
    """

    def __init__(self, stream=None, min_volume: float = 0.3):
        self.stream = stream if stream is not None else sys.stdout
        self.min_volume = min_volume

    def play(self, cue: ToneCue) -> None:
        if cue.volume >= self.min_volume:
            self.stream.write('\a')
            self.stream.flush()


class RecordingAudio(AudioOut):
    """Keeps every cue it receives. Used by tests and replays."""

    def __init__(self):
        self.cues: List[ToneCue] = []

    def play(self, cue: ToneCue) -> None:
        self.cues.append(cue)

    def names(self) -> List[str]:
        return [cue.name for cue in self.cues]
