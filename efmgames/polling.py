"""A one-voice square-wave synthesizer driven by polling the timer overflow."""

from dataclasses import dataclass
from typing import Optional

from efmgames.melodies import (
    EIGHTH,
    FOURTH,
    HALF,
    SAMPLE_RATE,
    SIXTEENTH,
    TRIPLET,
    WHOLE,
    Pitch as P,
)

TICKS_PER_CENTISECOND = SAMPLE_RATE // 100
MSEC_PER_STEP = 10
LED_MASK = 0xFFFF
_COUNTER_MASK = 0xFFFF

LISA_NOTES = (
    P.C4, P.D4, P.E4, P.F4,
    P.G4, P.G4,
    P.A4, P.A4, P.A4, P.A4,
    P.G4,
    P.F4, P.F4, P.F4, P.F4,
    P.E4, P.E4,
    P.D4, P.D4, P.D4, P.D4,
    P.C4,
)
LISA_LENGTHS = (
    FOURTH, FOURTH, FOURTH, FOURTH,
    HALF, HALF,
    FOURTH, FOURTH, FOURTH, FOURTH,
    WHOLE,
    FOURTH, FOURTH, FOURTH, FOURTH,
    HALF, HALF,
    FOURTH, FOURTH, FOURTH, FOURTH,
    WHOLE,
)

WINDOWS_XP_STARTUP_NOTES = (P.Eb5, P.Eb4, P.Bb4, P.PAUSE, P.Ab4, P.Eb5, P.Bb4)
WINDOWS_XP_STARTUP_LENGTHS = (
    EIGHTH, SIXTEENTH, SIXTEENTH, SIXTEENTH,
    EIGHTH + SIXTEENTH, EIGHTH, FOURTH + EIGHTH,
)

MARIO_GAME_OVER_NOTES = (
    P.C4, P.PAUSE, P.G3, P.PAUSE, P.E3,
    P.A3, P.B3, P.A3, P.Ab3, P.Bb3, P.Ab3,
    P.G3, P.D3, P.E3, P.E3,
)
MARIO_GAME_OVER_LENGTHS = (
    FOURTH, EIGHTH, EIGHTH, FOURTH, FOURTH,
    *(HALF // TRIPLET,) * 6,
    SIXTEENTH, SIXTEENTH, EIGHTH, HALF,
)

MARIO_1UP_NOTES = (P.E4, P.G4, P.E5, P.C5, P.D5, P.G5)
MARIO_1UP_LENGTHS = (SIXTEENTH,) * 6

LASER_SHOT_NOTES = (P.C5, P.Db5, P.D5, P.Eb5, P.E5, P.Eb5, P.D5, P.Db5, P.C5)
LASER_SHOT_LENGTHS = (10,) * 9

EXPLOSION_NOTES = (P.C2, P.Db2, P.D2, P.Eb2, P.E2, P.Eb2, P.D2, P.Db2, P.C2) * 2
EXPLOSION_LENGTHS = (10,) * 18

_BUTTON_SONGS = {
    0xFE: (LISA_NOTES, LISA_LENGTHS),
    0xFD: (WINDOWS_XP_STARTUP_NOTES, WINDOWS_XP_STARTUP_LENGTHS),
    0xFB: (MARIO_GAME_OVER_NOTES, MARIO_GAME_OVER_LENGTHS),
    0xF7: (MARIO_1UP_NOTES, MARIO_1UP_LENGTHS),
    0xDF: (LASER_SHOT_NOTES, LASER_SHOT_LENGTHS),
    0xBF: (EXPLOSION_NOTES, EXPLOSION_LENGTHS),
}


@dataclass
class SequenceMelody:
    """A sequence of frequencies with their lengths, and the playing position."""

    notes: tuple[int, ...]
    note_lengths: tuple[int, ...]
    current_note_idx: int = 0
    current_note_length_idx: int = 0
    msec_left: int = 0

    @property
    def length(self) -> int:
        return len(self.notes)


def create_melody(notes, lengths) -> SequenceMelody:
    """Make a melody positioned at its first note."""
    notes = tuple(notes)
    lengths = tuple(lengths)
    if len(notes) != len(lengths):
        raise ValueError(f"{len(notes)} notes but {len(lengths)} lengths")
    if not notes:
        raise ValueError("a melody needs at least one note")
    return SequenceMelody(notes, lengths, msec_left=lengths[0])


def _half_period_elapsed(counter: int, frequency: int) -> bool:
    half = SAMPLE_RATE // frequency // 2 if frequency else 0
    # Integer division by zero yields zero on the target, so x % 0 leaves x.
    if not half:
        return counter == 0
    return counter % half == 0


class PollingSynthesizer:
    """Plays melodies on one DAC channel, stepping whenever the timer overflows."""

    def __init__(self):
        self.max_amplitude = 0xF
        self.square_high_treble = False
        self.tick_counter = 0
        self.button_press = False
        self.buttons_pressed = 0
        self.leds = 0
        self.dac = 0
        self.current_melody: Optional[SequenceMelody] = create_melody(
            WINDOWS_XP_STARTUP_NOTES, WINDOWS_XP_STARTUP_LENGTHS)

    def on_gpio(self, buttons: int) -> None:
        """Remember a button press for the next tick to act on."""
        self.button_press = True
        self.buttons_pressed = buttons

    def tick(self, overflow: bool) -> None:
        """Do one step of work if the timer has overflowed since the last poll."""
        if not overflow:
            return
        self.tick_counter = (self.tick_counter + 1) & _COUNTER_MASK

        # Blink the LEDs once a second as a sign of life.
        if self.tick_counter == SAMPLE_RATE:
            self.tick_counter = 0
            self.leds ^= LED_MASK

        if self.button_press:
            self.button_press = False
            song = _BUTTON_SONGS.get(self.buttons_pressed)
            if song is not None:
                self.current_melody = create_melody(*song)

        melody = self.current_melody
        if melody is None:
            return

        if self.tick_counter % TICKS_PER_CENTISECOND == 0 and melody.msec_left > 0:
            if melody.msec_left - MSEC_PER_STEP <= 0:
                if melody.current_note_idx + 1 < melody.length:
                    melody.current_note_idx += 1
                    melody.current_note_length_idx += 1
                    melody.msec_left = melody.note_lengths[melody.current_note_length_idx]
                else:
                    self.current_melody = None
                    return
            else:
                melody.msec_left -= MSEC_PER_STEP

        frequency = melody.notes[melody.current_note_idx]
        if _half_period_elapsed(self.tick_counter, frequency):
            self.square_high_treble = not self.square_high_treble
        self.dac = self.max_amplitude if self.square_high_treble else 0