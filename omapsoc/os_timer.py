"""OMAP OS timer registers."""

from __future__ import annotations

from .mmio import Peripheral

OS_TIMER_TICK_VAL = 0xFFFB9000
OS_TIMER_CTRL = 0xFFFB9008

CTRL_RESET = 0x00000008
TICK_RESET = 0x00FFFFFF

_CTRL_READ_CLEAR = 1 << 1


class OmapOsTimer(Peripheral):
    """Tick value and control registers of the OS timer."""

    def __init__(self, *, pedantic=False):
        super().__init__(pedantic=pedantic)
        self.base = 0
        self.ctrl = 0
        self.tick_cntr = 0
        self.tick_val = 0
        self._register(OS_TIMER_TICK_VAL, "OS_TIMER_TICK_VAL", self._tick_val,
                       sizes=(4,))
        self._register(OS_TIMER_CTRL, "OS_TIMER_CTRL", self._ctrl, sizes=(4,))

    def _ctrl(self, ppa, size, value):
        if value is None:
            return self.ctrl & ~_CTRL_READ_CLEAR
        self.ctrl = value & 0xFFFFFFFF
        return self.ctrl

    def _tick_val(self, ppa, size, value):
        if value is None:
            return self.tick_val
        self.tick_val = value & 0xFFFFFFFF
        return self.tick_val

    def reset(self):
        """Load the reset values."""
        self.base = 0
        self.ctrl = CTRL_RESET
        self.tick_cntr = TICK_RESET
        self.tick_val = TICK_RESET