import pytest

from efmgames.melodies import (
    EMPTY_MELODY,
    LASER_SHOT,
    MARIO_GAME_OVER,
    MAX_AMPLITUDE,
    SAMPLE_RATE,
    WINDOWS_XP_STARTUP,
    Melody,
    Note,
    all_melodies,
)
from efmgames.synth import (
    SCR_DEEP_SLEEP,
    SCR_SLEEP,
    SW1,
    SW2,
    SW5,
    SW6,
    SW7,
    SW8,
    Synthesizer,
)


@pytest.fixture
def ready():
    synth = Synthesizer()
    synth.handle_buttons(0xFF)  # the spurious first interrupt
    return synth


def test_starts_with_startup_melody():
    synth = Synthesizer()
    assert synth.melody == WINDOWS_XP_STARTUP
    assert synth.current_note == 0
    assert synth.msec_left == WINDOWS_XP_STARTUP.treble[0].length


def test_first_button_interrupt_is_ignored():
    synth = Synthesizer()
    synth.handle_buttons(SW2)
    assert synth.melody == WINDOWS_XP_STARTUP
    synth.handle_buttons(SW2)
    assert synth.melody == MARIO_GAME_OVER


@pytest.mark.parametrize("button, index", [(SW1, 0), (SW2, 1), (SW5, 4), (SW6, 5)])
def test_buttons_select_melodies(ready, button, index):
    ready.handle_buttons(button)
    assert ready.melody == all_melodies()[index]
    assert ready.current_note == 0
    assert ready.timer_enabled and ready.dac_enabled
    assert ready.scr == SCR_SLEEP


@pytest.mark.parametrize("button", [SW7, SW8])
def test_stop_buttons_silence(ready, button):
    ready.handle_buttons(button)
    assert ready.melody == EMPTY_MELODY
    assert not ready.playing
    assert not ready.timer_enabled
    assert not ready.dac_enabled
    assert ready.scr == SCR_DEEP_SLEEP


def test_unknown_button_keeps_melody_and_wakes(ready):
    ready.turn_off_peripherals()
    ready.handle_buttons(0xFF)
    assert ready.melody == WINDOWS_XP_STARTUP
    assert ready.timer_enabled


def test_timer_counts_without_melody():
    synth = Synthesizer(EMPTY_MELODY)
    for _ in range(3):
        synth.on_timer()
    assert synth.tick_counter == 3
    assert synth.dac == (0, 0)


def test_disabled_timer_does_nothing(ready):
    ready.turn_off_peripherals()
    ready.on_timer()
    assert ready.tick_counter == 0


def test_melody_plays_to_the_end():
    synth = Synthesizer(LASER_SHOT)
    ticks = 0
    while synth.playing and ticks < 100_000:
        synth.on_timer()
        ticks += 1
    assert ticks == len(LASER_SHOT) * (SAMPLE_RATE // 100)
    assert synth.melody == EMPTY_MELODY
    assert not synth.timer_enabled
    assert synth.scr == SCR_DEEP_SLEEP


def test_notes_advance_in_order():
    synth = Synthesizer(LASER_SHOT)
    for _ in range(SAMPLE_RATE // 100):
        synth.on_timer()
    assert synth.current_note == 1
    assert synth.msec_left == LASER_SHOT.treble[1].length


def test_square_waves_on_both_channels():
    melody = Melody("test", (Note(4410, 1000),), (Note(2205, 1000),))
    synth = Synthesizer(melody)
    for _ in range(5):
        synth.on_timer()
    assert synth.dac == (MAX_AMPLITUDE, 0)
    for _ in range(5):
        synth.on_timer()
    assert synth.dac == (0, MAX_AMPLITUDE)


def test_pause_stays_silent():
    melody = Melody("rest", (Note(0, 1000),), (Note(0, 1000),))
    synth = Synthesizer(melody)
    for _ in range(200):
        synth.on_timer()
    assert synth.dac == (0, 0)