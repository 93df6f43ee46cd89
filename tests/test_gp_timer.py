import pytest

from omapsoc.gp_timer import (
    GP_TIMER_BASE,
    GP_TIMER_COUNT,
    GP_TIMER_STRIDE,
    REGISTERS,
    OmapGpTimer,
)
from omapsoc.mmio import MmioError


def _addr(timer, name):
    offset = next(o for o, n in REGISTERS.items() if n == name)
    return GP_TIMER_BASE + timer * GP_TIMER_STRIDE + offset


@pytest.fixture
def gpt():
    return OmapGpTimer()


@pytest.mark.parametrize("name", sorted(REGISTERS.values()))
def test_register_round_trip(gpt, name):
    assert gpt.write(_addr(0, name), 4, 0xCAFEF00D) == 0xCAFEF00D
    assert gpt.read(_addr(0, name), 4) == 0xCAFEF00D
    assert gpt.values[name] == 0xCAFEF00D


def test_timers_share_registers(gpt):
    gpt.write(_addr(0, "tclr"), 4, 0x3)
    assert gpt.read(_addr(GP_TIMER_COUNT - 1, "tclr"), 4) == 0x3


def test_registers_are_distinct(gpt):
    gpt.write(_addr(0, "tldr"), 4, 0x1111)
    gpt.write(_addr(0, "tmar"), 4, 0x2222)
    assert gpt.read(_addr(0, "tldr"), 4) == 0x1111
    assert gpt.read(_addr(0, "tmar"), 4) == 0x2222


def test_byte_write_changes_low_byte(gpt):
    gpt.write(_addr(1, "tier"), 4, 0x12345678)
    gpt.write(_addr(1, "tier"), 1, 0xAB)
    assert gpt.read(_addr(1, "tier"), 4) == 0x123456AB
    assert gpt.read(_addr(1, "tier"), 2) == 0x56AB


def test_initial_values_are_zero(gpt):
    assert all(gpt.read(_addr(5, name), 4) == 0 for name in REGISTERS.values())


def test_address_count(gpt):
    assert len(gpt.addresses()) == GP_TIMER_COUNT * len(REGISTERS)


def test_unregistered_offset(gpt):
    with pytest.raises(MmioError):
        gpt.read(GP_TIMER_BASE + 0x28, 4)


def test_pedantic_size():
    gpt = OmapGpTimer(pedantic=True)
    with pytest.raises(MmioError):
        gpt.read(_addr(0, "tclr"), 2)