"""Two-voice melodies for the square-wave synthesizer."""

from dataclasses import dataclass
from enum import IntEnum

SAMPLE_RATE = 44100
BPM = 120
BPS = BPM // 60
BREATH = 10
MAX_AMPLITUDE = 0xF

FOURTH = 1000 // BPS
HALF = FOURTH * 2
WHOLE = HALF * 2
EIGHTH = FOURTH // 2
SIXTEENTH = EIGHTH // 2
THIRTYSECOND = SIXTEENTH // 2
TRIPLET = 3


class Pitch(IntEnum):
    """Note frequencies in hertz; PAUSE is silence."""

    PAUSE = 0

    C1 = 32
    Db1 = 34
    D1 = 36
    Eb1 = 38
    E1 = 41
    F1 = 43
    Gb1 = 46
    G1 = 49
    Ab1 = 51
    A1 = 55
    Bb1 = 58
    B1 = 61

    C2 = 65
    Db2 = 69
    D2 = 73
    Eb2 = 77
    E2 = 82
    F2 = 87
    Gb2 = 92
    G2 = 98
    Ab2 = 103
    A2 = 110
    Bb2 = 116
    B2 = 123

    C3 = 130
    Db3 = 138
    D3 = 146
    Eb3 = 155
    E3 = 164
    F3 = 174
    Gb3 = 185
    G3 = 196
    Ab3 = 207
    A3 = 220
    Bb3 = 233
    B3 = 246

    C4 = 261
    Db4 = 277
    D4 = 293
    Eb4 = 311
    E4 = 329
    F4 = 349
    Gb4 = 369
    G4 = 392
    Ab4 = 415
    A4 = 440
    Bb4 = 466
    B4 = 493

    C5 = 523
    Db5 = 554
    D5 = 587
    Eb5 = 622
    E5 = 659
    F5 = 698
    Gb5 = 739
    G5 = 783
    Ab5 = 830
    A5 = 880
    Bb5 = 932
    B5 = 987


@dataclass(frozen=True)
class Note:
    """A frequency held for a number of milliseconds."""

    frequency: int
    length: int


@dataclass(frozen=True)
class Melody:
    """Treble and bass voices played side by side, note for note."""

    name: str
    treble: tuple[Note, ...]
    bass: tuple[Note, ...]

    def __post_init__(self):
        object.__setattr__(self, "treble", tuple(self.treble))
        object.__setattr__(self, "bass", tuple(self.bass))
        if len(self.treble) != len(self.bass):
            raise ValueError(
                f"melody {self.name!r} has {len(self.treble)} treble notes "
                f"but {len(self.bass)} bass notes")

    def __len__(self) -> int:
        return len(self.treble)


def _melody(name: str, rows) -> Melody:
    rows = list(rows)
    return Melody(name,
                  tuple(Note(treble, length) for treble, _, length in rows),
                  tuple(Note(bass, length) for _, bass, length in rows))


P = Pitch

EMPTY_MELODY = Melody("empty", (), ())

WINDOWS_XP_STARTUP = _melody("windows_xp_startup", [
    (P.Eb5, P.Eb4, EIGHTH),
    (P.Eb4, P.Eb3, SIXTEENTH),
    (P.Bb4, P.Bb3, SIXTEENTH),
    (P.PAUSE, P.PAUSE, SIXTEENTH),
    (P.Ab4, P.Ab3, EIGHTH + SIXTEENTH),
    (P.Eb5, P.Eb4, EIGHTH),
    (P.Bb4, P.Bb3, FOURTH + EIGHTH),
])

MARIO_GAME_OVER = _melody("mario_game_over", [
    (P.C4, P.E3, FOURTH),
    (P.PAUSE, P.PAUSE, EIGHTH),
    (P.G3, P.C3, EIGHTH),
    (P.PAUSE, P.PAUSE, FOURTH),
    (P.E3, P.PAUSE, FOURTH),

    (P.A3, P.F2, HALF // TRIPLET),
    (P.B3, P.F2, HALF // TRIPLET),
    (P.A3, P.F2, HALF // TRIPLET),
    (P.Ab3, P.Db2, HALF // TRIPLET),
    (P.Bb3, P.Db2, HALF // TRIPLET),
    (P.Ab3, P.Db2, HALF // TRIPLET),

    (P.G3, P.C2, SIXTEENTH),
    (P.D3, P.C2, SIXTEENTH),
    (P.E3, P.C2, EIGHTH),
    (P.E3, P.C2, HALF),
])

MARIO_1UP = _melody("mario_1up", [
    (pitch, pitch, SIXTEENTH)
    for pitch in (P.E4, P.G4, P.E5, P.C5, P.D5, P.G5)
])

MARIO_POWER_UP = _melody("mario_power_up", [
    (P.PAUSE, P.G3, SIXTEENTH),
    (P.PAUSE, P.B3, SIXTEENTH),
    (P.D4, P.PAUSE, SIXTEENTH),
    (P.G4, P.PAUSE, SIXTEENTH),
    (P.B4, P.PAUSE, SIXTEENTH),

    (P.PAUSE, P.Ab3, SIXTEENTH),
    (P.PAUSE, P.C4, SIXTEENTH),
    (P.Eb4, P.PAUSE, SIXTEENTH),
    (P.Ab4, P.PAUSE, SIXTEENTH),
    (P.C5, P.PAUSE, SIXTEENTH),

    (P.PAUSE, P.Bb3, SIXTEENTH),
    (P.PAUSE, P.D4, SIXTEENTH),
    (P.F4, P.PAUSE, SIXTEENTH),
    (P.Bb4, P.PAUSE, SIXTEENTH),
    (P.D5, P.PAUSE, SIXTEENTH),
])

_SWEEP = ("C", "Db", "D", "Eb", "E", "Eb", "D", "Db", "C")

LASER_SHOT = _melody("laser_shot", [
    (Pitch[f"{name}5"], Pitch[f"{name}4"], 10) for name in _SWEEP
])

EXPLOSION = _melody("explosion", [
    (Pitch[f"{name}2"], Pitch[f"{name}1"], 10) for name in _SWEEP * 2
])

del P


def all_melodies() -> tuple[Melody, ...]:
    """The playable melodies, in the order of the buttons that start them."""
    return (
        WINDOWS_XP_STARTUP,
        MARIO_GAME_OVER,
        MARIO_1UP,
        MARIO_POWER_UP,
        LASER_SHOT,
        EXPLOSION,
    )