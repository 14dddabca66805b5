from unittest import mock

import pytest

from efmgames import util


def test_white_converts_to_white_constant():
    assert util.rgb888_to_rgb565(255, 255, 255) == util.WHITE


def test_black_converts_to_zero():
    assert util.rgb888_to_rgb565(0, 0, 0) == util.BLACK


def test_blue_channel_passes_through():
    assert util.rgb888_to_rgb565(0, 0, 200) == 200


@pytest.mark.parametrize("rgb", [(0, 255, 255), (255, 172, 0), (154, 0, 255), (1, 2, 3)])
def test_result_fits_sixteen_bits(rgb):
    value = util.rgb888_to_rgb565(*rgb)
    assert 0 <= value <= 0xFFFF


@pytest.mark.parametrize("rgb", [(256, 0, 0), (0, -1, 0), (0, 0, 300)])
def test_channel_out_of_range_raises(rgb):
    with pytest.raises(ValueError):
        util.rgb888_to_rgb565(*rgb)


def test_zero_has_single_digit():
    assert util.number_to_digits(0) == (0,)


def test_digits_in_reading_order():
    assert util.number_to_digits(1200) == (1, 2, 0, 0)


@pytest.mark.parametrize("number", [7, 40, 305, 999999, 123456])
def test_digits_round_trip(number):
    digits = util.number_to_digits(number)
    assert int("".join(str(d) for d in digits)) == number
    assert all(0 <= d <= 9 for d in digits)


def test_negative_number_raises():
    with pytest.raises(ValueError):
        util.number_to_digits(-1)


def test_too_many_digits_raises():
    with pytest.raises(ValueError):
        util.number_to_digits(1000000)


def test_sleep_ms_sleeps_fraction_of_second():
    with mock.patch("time.sleep") as sleeper:
        result = util.sleep_ms(1500)
    assert result is None
    assert sleeper.call_args_list == [mock.call(1.5)]


def test_sleep_seconds_sleeps_given_seconds():
    with mock.patch("time.sleep") as sleeper:
        result = util.sleep_seconds(2)
    assert result is None
    assert sleeper.call_args_list == [mock.call(2)]


def test_negative_sleep_raises():
    with mock.patch("time.sleep") as sleeper:
        with pytest.raises(ValueError):
            util.sleep_ms(-10)
    assert sleeper.call_count == 0