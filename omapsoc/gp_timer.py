"""OMAP general-purpose timer register storage."""

from __future__ import annotations

from functools import partial

from .mmio import Peripheral, le_access

GP_TIMER_BASE = 0xFFFB1400
GP_TIMER_STRIDE = 0x0800
GP_TIMER_COUNT = 8

REGISTERS = {
    0x10: "tiocp_cfg",
    0x18: "tisr",
    0x1C: "tier",
    0x20: "twer",
    0x24: "tclr",
    0x2C: "tldr",
    0x38: "tmar",
    0x40: "tsicr",
}


class OmapGpTimer(Peripheral):
    """Eight timer register windows backed by one set of registers."""

    def __init__(self, *, pedantic=False, base=GP_TIMER_BASE):
        super().__init__(pedantic=pedantic)
        self.base = base
        self.values = {name: 0 for name in REGISTERS.values()}
        for timer in range(GP_TIMER_COUNT):
            window = base + timer * GP_TIMER_STRIDE
            for offset, name in REGISTERS.items():
                self._register(window + offset, f"GPT{timer + 1}_{name.upper()}",
                               partial(self._access, name), sizes=(4,))

    def _access(self, name, ppa, size, value):
        buffer = bytearray(self.values[name].to_bytes(4, "little"))
        data = le_access(buffer, 0, size, value)
        if value is not None:
            self.values[name] = int.from_bytes(buffer, "little")
        return data