"""OMAP MPU timers: three down counters driven by the CPU cycle count."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Callable

from .mmio import MmioError, Peripheral

logger = logging.getLogger(__name__)

MPU_TIMER1_BASE = 0xFFFEC500
TIMER_STRIDE = 0x100
TIMER_COUNT = 3

CNTL = 0x00
LOAD = 0x04
READ = 0x08

CNTL_ST = 0
CNTL_AR = 1
CNTL_CLOCK_ENABLE = 5
CNTL_FREE = 6

_MASK32 = 0xFFFFFFFF


def _bit(value, n):
    return (value >> n) & 1


@dataclass
class TimerUnit:
    """State of one MPU timer."""

    cycle: int = 0
    cntl_data: int = 0
    count: int = 0
    load: int = 0
    ar: int = 0
    clock_enable: int = 0
    free: int = 0
    ptv: int = 0
    st: int = 0

    def decode_cntl(self, data):
        """Load the control bits from a written control word."""
        self.ar = _bit(data, CNTL_AR)
        self.clock_enable = _bit(data, CNTL_CLOCK_ENABLE)
        self.free = _bit(data, CNTL_FREE)
        self.ptv = (data >> 2) & 7
        self.st = _bit(data, CNTL_ST)


class OmapMpuTimer(Peripheral):
    """Three MPU timers counting down against a cycle clock."""

    def __init__(self, clock: Callable[[], int] = lambda: 0, *, pedantic=False,
                 base=MPU_TIMER1_BASE):
        super().__init__(pedantic=pedantic)
        self.clock = clock
        self.base = base
        self.units = [TimerUnit() for _ in range(TIMER_COUNT)]
        for n in range(TIMER_COUNT):
            window = base + n * TIMER_STRIDE
            self._register(window + CNTL, f"MPU_CNTL_TIMER{n}", self._cntl)
            self._register(window + LOAD, f"MPU_LOAD_TIMER{n}", self._load)
            self._register(window + READ, f"MPU_READ_TIMER{n}", self._read)

    def unit(self, ppa):
        """Return the timer addressed by `ppa`."""
        return self.units[((ppa - self.base) >> 8) & 3]

    def update_count(self, unit):
        """Bring the unit's counter up to the current cycle and return it.

        A timer that is neither started nor clocked reads as zero.
        """
        if not (unit.st or unit.clock_enable):
            return 0
        now = self.clock()
        elapsed = now - unit.cycle
        unit.cycle = now
        if unit.count - elapsed < 0:
            remain = (elapsed - unit.count) & _MASK32
            if unit.ar:
                unit.count = (unit.load - remain) & _MASK32
            else:
                unit.st = 0
                unit.count = 0
        else:
            unit.count = (unit.count - elapsed) & _MASK32
        return unit.count

    def _cntl(self, ppa, size, value):
        unit = self.unit(ppa)
        if value is None:
            return unit.cntl_data
        data = value & _MASK32
        was_st = unit.st
        unit.decode_cntl(data)
        start = unit.st and (was_st ^ unit.st)
        unit.cntl_data = data
        logger.debug(
            "MPU timer %#010x: FREE=%u CLOCK_ENABLE=%u PTV=%u(%u) AR=%u ST=%u",
            ppa, unit.free, unit.clock_enable, unit.ptv, 2 << unit.ptv,
            unit.ar, unit.st,
        )
        if start:
            unit.cycle = self.clock()
            unit.count = unit.load
        else:
            self.update_count(unit)
        return data

    def _load(self, ppa, size, value):
        if value is None:
            raise MmioError(f"load register at {ppa:#010x} is write-only")
        unit = self.unit(ppa)
        self.update_count(unit)
        unit.load = value & _MASK32
        return unit.load

    def _read(self, ppa, size, value):
        return self.update_count(self.unit(ppa))

    def reset(self):
        """Clear every timer."""
        for unit in self.units:
            for f in fields(TimerUnit):
                setattr(unit, f.name, 0)