import pytest

from spnlab.cipher.key_schedule import (
    key_from_symbols,
    ks_sliding_window,
    ks_wide_shift,
    required_key_bits,
)
from spnlab.errors import ConfigurationError

DEFAULT_KEY = key_from_symbols([3, 10, 9, 4, 13, 6, 3, 15])


def test_key_from_symbols():
    assert DEFAULT_KEY == "00111010100101001101011000111111"


def test_sliding_window_schedule():
    keys = ks_sliding_window(DEFAULT_KEY, rounds=4, n=4, m=4)
    assert keys == [0x3A94, 0xA94D, 0x94D6, 0x4D63, 0xD63F]


def test_wide_shift_schedule():
    keys = ks_wide_shift(DEFAULT_KEY, rounds=4, n=4, m=4)
    assert keys == [0xD63F, 0x4D63, 0x94D6, 0xA94D, 0x3A94]


def test_schedules_are_deterministic():
    for ks in (ks_sliding_window, ks_wide_shift):
        assert ks(DEFAULT_KEY, rounds=4, n=4, m=4) == ks(DEFAULT_KEY, rounds=4, n=4, m=4)


def test_round_key_count_follows_rounds():
    key = "1" * required_key_bits(rounds=7, n=4, m=4)
    assert len(ks_sliding_window(key, rounds=7, n=4, m=4)) == 8


@pytest.mark.parametrize("ks", [ks_sliding_window, ks_wide_shift])
def test_short_key_rejected(ks):
    with pytest.raises(ConfigurationError):
        ks(DEFAULT_KEY[:-4], rounds=4, n=4, m=4)
