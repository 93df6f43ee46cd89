"""OMAP DPLL1 control register."""

from __future__ import annotations

import logging

from .mmio import Peripheral

logger = logging.getLogger(__name__)

DPLL1_CTL_REG = 0xFFFECF00
RESET_VALUE = 0x00002002

_LOCK = 0
_PLL_ENABLE = 4

_FIELDS = (
    ("LS_DISABLE", 15, 15), ("IAI", 14, 14), ("IOB", 13, 13), ("TEST", 12, 12),
    ("PLL_MULT", 11, 7), ("PLL_DIV", 6, 5), ("PLL_ENABLE", 4, 4),
    ("BYPASS_DIV", 3, 2), ("BREAKLN", 1, 1), ("LOCK", 0, 0),
)


class OmapDpll(Peripheral):
    """DPLL1 control; enabling the PLL sets the lock bit at once."""

    def __init__(self, *, pedantic=False):
        super().__init__(pedantic=pedantic)
        self.ctl_reg = 0
        self._register(DPLL1_CTL_REG, "DPLL1_CTL_REG", self._ctl_access,
                       sizes=(2,))

    def _ctl_access(self, ppa, size, value):
        if value is None:
            return self.ctl_reg
        pll_enable = (value >> _PLL_ENABLE) & 1
        self.ctl_reg = (self.ctl_reg & ~(1 << _LOCK)) | (pll_enable << _LOCK)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("DPLL1: " + ", ".join(
                f"{name}: {(value >> lsb) & ((1 << (msb - lsb + 1)) - 1)}"
                for name, msb, lsb in _FIELDS
            ))
        return value

    def reset(self):
        """Load the control register's reset value."""
        self.ctl_reg = RESET_VALUE