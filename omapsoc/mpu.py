"""OMAP MPU clock and reset control registers."""

from __future__ import annotations

import logging
from functools import partial

from .mmio import Peripheral

logger = logging.getLogger(__name__)

ARM_CKCTL = 0xFFFECE00
ARM_IDLECT1 = 0xFFFECE04
ARM_IDLECT2 = 0xFFFECE08
ARM_RSTCT2 = 0xFFFECE14
ARM_SYSST = 0xFFFECE18

_SYSST_STATUS_MASK = 0x3F

_REGISTERS = (
    (ARM_CKCTL, "ARM_CKCTL", "ckctl", 0x3000, (
        ("ARM_INTHCK_SEL", 14, 14), ("EN_DSPCK", 13, 13), ("ARM_TIMXO", 12, 12),
        ("DSPMMUDIV", 11, 10), ("TCDIV", 9, 8), ("DSPDIV", 7, 6),
        ("ARMDIV", 5, 4), ("LCDDIV", 3, 2), ("ARM_PERDIV", 1, 0),
    )),
    (ARM_IDLECT1, "ARM_IDLECT1", "idlct1", 0x0400, (
        ("IDL_CLKOUT_ARM", 12, 12), ("WKUP_MODE", 10, 10),
        ("IDLTIM_ARM", 9, 9), ("IDLAPI_ARM", 8, 8), ("IDLDPLL_ARM", 7, 7),
        ("IDLIF_ARM", 6, 6), ("IDLPER_ARM", 2, 2), ("IDLXOPR_ARM", 1, 1),
        ("IDLWDT_ARM", 0, 0),
    )),
    (ARM_IDLECT2, "ARM_IDLECT2", "idlct2", 0x0100, (
        ("EN_CKOUT_ARM", 11, 11), ("DMACK_REQ", 8, 8), ("EN_TIMCK", 7, 7),
        ("EN_APICK", 6, 6), ("EN_LCDCK", 3, 3), ("EN_PERCK", 2, 2),
        ("EN_XORPCK", 1, 1), ("EN_WDTCK", 0, 0),
    )),
    (ARM_RSTCT2, "ARM_RSTCT2", "rstct2", 0x0000, (
        ("PER_EN", 0, 0),
    )),
    (ARM_SYSST, "ARM_SYSST", "sysst", 0x0038, (
        ("CLOCK_SELECT", 13, 11), ("IDLE_DSP", 6, 6), ("POR", 5, 5),
        ("EXT_RST", 4, 4), ("ARM_MCRST", 3, 3), ("ARM_WDRST", 2, 2),
        ("GLOB_SWRST", 1, 1), ("DSP_WDRST", 0, 0),
    )),
)


class OmapMpu(Peripheral):
    """Clock control, idle control, reset control and system status."""

    def __init__(self, *, pedantic=False):
        super().__init__(pedantic=pedantic)
        self.ckctl = 0
        self.idlct1 = 0
        self.idlct2 = 0
        self.rstct2 = 0
        self.sysst = 0
        self._layouts = {}
        for ppa, name, attr, reset, layout in _REGISTERS:
            self._layouts[attr] = layout
            self._register(ppa, name, partial(self._access, attr),
                           reset=reset, sizes=(4,))

    def _access(self, attr, ppa, size, value):
        if value is None:
            return getattr(self, attr)
        data = value & 0xFFFFFFFF
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("MPU %s: %s", attr.upper(), ", ".join(
                f"{name}: {(data >> lsb) & ((1 << (msb - lsb + 1)) - 1)}"
                for name, msb, lsb in self._layouts[attr]
            ))
        if attr == "sysst":
            data &= ~_SYSST_STATUS_MASK & 0xFFFFFFFF
        setattr(self, attr, data)
        return data