"""OMAP LCD controller registers."""

from __future__ import annotations

import logging
from functools import partial

from .mmio import Peripheral

logger = logging.getLogger(__name__)

LCD_BASE = 0xFFFEC000

CTRL = 0x00
TIMING0 = 0x04
TIMING1 = 0x08
TIMING2 = 0x0C
STATUS = 0x10
SUBPANEL = 0x14
LINEINT = 0x18
DISPLAY_STATUS = 0x1C

RESET_VALUES = {
    "ctrl": 0,
    "timing0": 0x0000000F,
    "timing1": 0,
    "timing2": 0,
    "status": 0,
    "subpanel": 0,
    "lineint": 0,
    "display_status": 0x000003FF,
}

_OFFSETS = {
    CTRL: "ctrl",
    TIMING0: "timing0",
    TIMING1: "timing1",
    TIMING2: "timing2",
    STATUS: "status",
    SUBPANEL: "subpanel",
    LINEINT: "lineint",
    DISPLAY_STATUS: "display_status",
}

_READ_ONLY = frozenset({"display_status"})

_FIELDS = {
    "ctrl": ("Control Register", (
        ("RESERVED[31:25]", 31, 25), ("STN_565", 24, 24), ("TFT_Map", 23, 23),
        ("LCDCB1", 22, 22), ("PLM", 21, 20), ("FDD", 19, 12),
        ("PXL_GATED", 11, 11), ("LINE_INT_CLR_SEL", 10, 10), ("M8B", 9, 9),
        ("LCDCB0", 8, 8), ("LCD_TFT", 7, 7), ("LINE_INT_MASK", 6, 6),
        ("LINE_INT_NIRQ_MASK", 5, 5), ("LOAD_MASK", 4, 4), ("DONE_MASK", 3, 3),
        ("VSYNC_MASK", 2, 2), ("LCD_BW", 1, 1), ("LCD_EN", 0, 0),
    )),
    "display_status": ("[RO] Display Status Register", (
        ("RESERVED[31:10]", 31, 10), ("LINE_NUMBER", 9, 0),
    )),
    "lineint": ("Line Interrupt Register", (
        ("RESERVED[31:10]", 31, 10), ("LINE_INT_NUMBER", 9, 0),
    )),
    "timing0": ("Timing 0 Register", (
        ("HBP", 31, 24), ("HFP", 23, 16), ("HSW", 15, 10), ("PPL", 9, 0),
    )),
    "timing1": ("Timing 1 Register", (
        ("VBP", 31, 24), ("VFP", 23, 16), ("VSW", 15, 10), ("LPP", 9, 0),
    )),
    "timing2": ("Timing 2 Register", (
        ("RESERVED[31:26]", 31, 26), ("ON_OFF", 25, 25), ("RF", 24, 24),
        ("IEO", 23, 23), ("IPC", 22, 22), ("IHS", 21, 21), ("IVS", 20, 20),
        ("ACBI", 19, 16), ("ACB", 15, 8), ("PCD", 7, 0),
    )),
    "status": ("Status Register", (
        ("RESERVED[31:7]", 31, 7), ("LP", 6, 6), ("FUF", 5, 5),
        ("LINE_INT", 4, 4), ("ABC", 3, 3), ("SYNC_LOST", 2, 2), ("VS", 1, 1),
        ("DONE", 0, 0),
    )),
    "subpanel": ("Subpanel Register", (
        ("SPEN", 31, 31), ("RESERVED[30]", 30, 30), ("HOLS", 29, 29),
        ("RESERVED[28:26]", 28, 26), ("LPPT", 25, 16), ("DPD", 15, 0),
    )),
}


def _trace(name, data):
    if not logger.isEnabledFor(logging.DEBUG):
        return
    title, layout = _FIELDS[name]
    logger.debug("LCD: %s -- %s", title, ", ".join(
        f"{field}: {(data >> lsb) & ((1 << (msb - lsb + 1)) - 1):#x}"
        for field, msb, lsb in layout
    ))


class OmapLcd(Peripheral):
    """LCD controller control, timing and status registers."""

    def __init__(self, *, pedantic=False, base=LCD_BASE):
        super().__init__(pedantic=pedantic)
        self.base = base
        self.regs = {name: 0 for name in _OFFSETS.values()}
        for offset, name in _OFFSETS.items():
            self._register(base + offset, f"LCD_{name.upper()}",
                           partial(self._access, name), sizes=(4,))

    def _access(self, name, ppa, size, value):
        if value is None or name in _READ_ONLY:
            data = self.regs[name]
        else:
            data = value & 0xFFFFFFFF
            self.regs[name] = data
        if value is not None:
            _trace(name, data)
        return data

    def reset(self):
        """Load every register's reset value."""
        self.regs.update(RESET_VALUES)