import pytest

from omapsoc.mmio import MmioError
from omapsoc.os_timer import OS_TIMER_CTRL, OS_TIMER_TICK_VAL, OmapOsTimer


def make():
    timer = OmapOsTimer()
    timer.reset()
    return timer


def test_reset_values():
    timer = make()
    assert timer.read(OS_TIMER_TICK_VAL, 4) == 0x00FFFFFF
    assert timer.read(OS_TIMER_CTRL, 4) == 0x00000008
    assert timer.tick_cntr == 0x00FFFFFF


def test_tick_val_round_trip():
    timer = make()
    timer.write(OS_TIMER_TICK_VAL, 4, 0x1234)
    assert timer.read(OS_TIMER_TICK_VAL, 4) == 0x1234


def test_ctrl_read_hides_bit_one():
    timer = make()
    timer.write(OS_TIMER_CTRL, 4, 0x0A)
    assert timer.read(OS_TIMER_CTRL, 4) == 0x08
    assert timer.ctrl == 0x0A


def test_ctrl_write_returns_value():
    timer = make()
    assert timer.write(OS_TIMER_CTRL, 4, 0x05) == 0x05


def test_addresses():
    assert make().addresses() == [OS_TIMER_TICK_VAL, OS_TIMER_CTRL]


def test_unknown_register_raises():
    with pytest.raises(MmioError):
        make().read(OS_TIMER_TICK_VAL + 4, 4)


def test_pedantic_size_check():
    timer = OmapOsTimer(pedantic=True)
    with pytest.raises(MmioError):
        timer.read(OS_TIMER_CTRL, 2)