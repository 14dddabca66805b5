"""A two-voice square-wave synthesizer driven by timer and button interrupts."""

from efmgames.melodies import (
    EMPTY_MELODY,
    MAX_AMPLITUDE,
    SAMPLE_RATE,
    WINDOWS_XP_STARTUP,
    Melody,
    all_melodies,
)

# Button values as read from the input port: active low, one bit per switch.
SW1 = 0xFE
SW2 = 0xFD
SW3 = 0xFB
SW4 = 0xF7
SW5 = 0xEF
SW6 = 0xDF
SW7 = 0xBF
SW8 = 0x7F

CLOCK_HZ = 14_000_000
TIMER_TOP = CLOCK_HZ // SAMPLE_RATE
TICKS_PER_CENTISECOND = SAMPLE_RATE // 100
MSEC_PER_STEP = 10

SCR_SLEEP = 0x2
SCR_DEEP_SLEEP = 0x6

_COUNTER_MASK = 0xFFFF

_BUTTON_MELODIES = dict(zip((SW1, SW2, SW3, SW4, SW5, SW6), all_melodies()))
_STOP_BUTTONS = frozenset({SW7, SW8})


def _half_period_elapsed(counter: int, frequency: int) -> bool:
    half = SAMPLE_RATE // frequency // 2 if frequency else 0
    # Integer division by zero yields zero on the target, so x % 0 leaves x.
    if not half:
        return counter == 0
    return counter % half == 0


class Synthesizer:
    """Plays a melody sample by sample; buttons pick the melody."""

    def __init__(self, melody: Melody = WINDOWS_XP_STARTUP):
        self.melody = EMPTY_MELODY
        self.current_note = 0
        self.msec_left = 0
        self.square_high_treble = False
        self.square_high_bass = False
        self.tick_counter = 0
        self.skip_next_gpio = True
        self.timer_enabled = True
        self.dac_enabled = True
        self.scr = 0
        self.dac = (0, 0)
        self.set_melody(melody)

    @property
    def playing(self) -> bool:
        """Whether a melody with notes is loaded."""
        return len(self.melody) > 0

    def set_melody(self, melody: Melody) -> None:
        """Start playing a melody from its first note."""
        self.melody = melody
        self.current_note = 0
        self.msec_left = melody.treble[0].length if len(melody) else 0

    def turn_off_peripherals(self) -> None:
        """Stop the timer and the DAC and let the processor sleep deeply."""
        self.scr = SCR_DEEP_SLEEP
        self.timer_enabled = False
        self.dac_enabled = False

    def turn_on_peripherals(self) -> None:
        """Start the timer and the DAC again."""
        self.scr = SCR_SLEEP
        self.timer_enabled = True
        self.dac_enabled = True

    def handle_buttons(self, buttons: int) -> None:
        """React to a button interrupt with the raw input port value."""
        # The first interrupt after start-up is spurious.
        if self.skip_next_gpio:
            self.skip_next_gpio = False
            return

        if buttons in _STOP_BUTTONS:
            self.turn_off_peripherals()
            self.set_melody(EMPTY_MELODY)
            return

        melody = _BUTTON_MELODIES.get(buttons)
        if melody is not None:
            self.set_melody(melody)
        self.turn_on_peripherals()

    def on_timer(self) -> None:
        """Produce one sample: advance the melody and write both DAC channels."""
        if not self.timer_enabled:
            return

        self.tick_counter = (self.tick_counter + 1) & _COUNTER_MASK
        if not self.playing:
            return

        if self.tick_counter % TICKS_PER_CENTISECOND == 0:
            if self.msec_left - MSEC_PER_STEP <= 0:
                self.current_note += 1
                if self.current_note < len(self.melody):
                    self.msec_left = self.melody.treble[self.current_note].length
                else:
                    self.set_melody(EMPTY_MELODY)
                    self.turn_off_peripherals()
                    return
            else:
                self.msec_left -= MSEC_PER_STEP

        treble = self.melody.treble[self.current_note].frequency
        bass = self.melody.bass[self.current_note].frequency
        if _half_period_elapsed(self.tick_counter, treble):
            self.square_high_treble = not self.square_high_treble
        if _half_period_elapsed(self.tick_counter, bass):
            self.square_high_bass = not self.square_high_bass

        self.dac = (
            MAX_AMPLITUDE if self.square_high_treble else 0,
            MAX_AMPLITUDE if self.square_high_bass else 0,
        )