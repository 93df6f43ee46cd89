"""OMAP dedicated LCD DMA channel registers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial

from .mmio import Peripheral, le_access

logger = logging.getLogger(__name__)

LCD_BASE = 0xFFFEE300

CSDP = 0xC0
CCR = 0xC2
CTRL = 0xC4
TOP_B1_L = 0xC8
TOP_B1_U = 0xCA
BOT_B1_L = 0xCC
BOT_B1_U = 0xCE
TOP_B2_L = 0xD0
TOP_B2_U = 0xD2
BOT_B2_L = 0xD4
BOT_B2_U = 0xD6
SRC_EI_B1 = 0xD8
SRC_FI_B1_L = 0xDA
SRC_EI_B2 = 0xDC
SRC_FI_B2_L = 0xDE
SRC_EN_B1 = 0xE0
SRC_EN_B2 = 0xE2
SRC_FN_B1 = 0xE4
SRC_FN_B2 = 0xE6
LCH_CTRL = 0xEA
SRC_FI_B1_U = 0xF4
SRC_FI_B2_U = 0xF6

_FIELDS = {
    "ccr": ("LCD Channel Control Register", (
        ("SRC_AMODE_B2", 15, 14), ("SRC_AMODE_B1", 13, 12),
        ("END_PROG", 11, 11), ("OMAP3_1_COMPATIBLE_DISABLE", 10, 10),
        ("REPEAT", 9, 9), ("AUTOINIT", 8, 8), ("ENABLE", 7, 7),
        ("PRIO", 6, 6), ("RESERVED[5]", 5, 5), ("BS", 4, 4),
        ("RESERVED[3:0]", 3, 0),
    )),
    "csdp": ("LCD Channel Source Destination Parameters Register", (
        ("BURST_EN_B2", 15, 14), ("PACK_EN_B2", 13, 13),
        ("DATA_TYPE_B2", 12, 11), ("RESERVED[10:9]", 10, 9),
        ("BURST_EN_B1", 8, 7), ("PACK_EN_B1", 6, 6),
        ("RESERVED[5:2]", 5, 2), ("DATA_TYPE_B1", 1, 0),
    )),
    "ctrl": ("LCD Control Register", (
        ("RESERVED[15:9]", 15, 9), ("LDP", 8, 8), ("LSP", 7, 6),
        ("BUSS_ERROR_IT_COND", 5, 5), ("BUSS_2_IT_COND", 4, 4),
        ("BUSS_1_IT_COND", 3, 3), ("BUSS_ERROR_IT_IE", 2, 2),
        ("BLOCK_IT_IE", 1, 1), ("BLOCK_MODE", 0, 0),
    )),
    "lch_ctrl": ("Logical Channel Control Register", (
        ("RESERVED[15:4]", 15, 4), ("LCH_TYPE[3:0]", 3, 0),
    )),
}


def _bit(value, n):
    return (value >> n) & 1


def _signed(value, bits):
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


def _sub_access(current, offset, size, value):
    """Access `size` bytes at `offset` within a 32-bit field.

    Returns the new field value and the data read or written.
    """
    buffer = bytearray((current & 0xFFFFFFFF).to_bytes(4, "little"))
    data = le_access(buffer, offset, size, value)
    return int.from_bytes(buffer, "little"), data


def _trace(name, data):
    if not logger.isEnabledFor(logging.DEBUG):
        return
    title, layout = _FIELDS[name]
    logger.debug("DMA: %s -- %s", title, ", ".join(
        f"{fname}: {(data >> lsb) & ((1 << (msb - lsb + 1)) - 1):#x}"
        for fname, msb, lsb in layout
    ))


@dataclass
class LcdBuffer:
    """Addressing state of one LCD frame buffer."""

    top: int = 0
    bot: int = 0
    src_ei: int = 0
    src_en: int = 0
    src_fi: int = 0
    src_fn: int = 0


@dataclass
class _LcdState:
    ccr: int = 0
    csdp: int = 0
    ctrl: int = 0
    lch_ctrl: int = 0
    buffers: list = field(default_factory=lambda: [LcdBuffer(), LcdBuffer()])


class OmapDmaLcd(Peripheral):
    """The LCD DMA channel with its two frame buffers."""

    def __init__(self, *, pedantic=False, base=LCD_BASE):
        super().__init__(pedantic=pedantic)
        self.base = base
        self._state = _LcdState()

        for offset, name in ((CCR, "ccr"), (CSDP, "csdp"), (CTRL, "ctrl"),
                             (LCH_CTRL, "lch_ctrl")):
            self._register(base + offset, f"DMA_LCD_{name.upper()}",
                           partial(self._plain_access, name), sizes=(2,))

        for offset, name in ((TOP_B1_L, "TOP_B1_L"), (TOP_B1_U, "TOP_B1_U"),
                             (TOP_B2_L, "TOP_B2_L"), (TOP_B2_U, "TOP_B2_U")):
            self._register(base + offset, f"DMA_LCD_{name}",
                           partial(self._address_access, "top"), sizes=(2, 4))
        for offset, name in ((BOT_B1_L, "BOT_B1_L"), (BOT_B1_U, "BOT_B1_U"),
                             (BOT_B2_L, "BOT_B2_L"), (BOT_B2_U, "BOT_B2_U")):
            self._register(base + offset, f"DMA_LCD_{name}",
                           partial(self._address_access, "bot"), sizes=(2, 4))

        for offset, name in ((SRC_EI_B1, "SRC_EI_B1"), (SRC_EI_B2, "SRC_EI_B2")):
            self._register(base + offset, f"DMA_LCD_{name}",
                           self._src_ei_access, sizes=(2,))
        for offset, name in ((SRC_EN_B1, "SRC_EN_B1"), (SRC_EN_B2, "SRC_EN_B2")):
            self._register(base + offset, f"DMA_LCD_{name}",
                           partial(self._count_access, "src_en"), sizes=(2,))
        for offset, name in ((SRC_FN_B1, "SRC_FN_B1"), (SRC_FN_B2, "SRC_FN_B2")):
            self._register(base + offset, f"DMA_LCD_{name}",
                           partial(self._count_access, "src_fn"), sizes=(2,))
        for offset, name in ((SRC_FI_B1_L, "SRC_FI_B1_L"),
                             (SRC_FI_B1_U, "SRC_FI_B1_U"),
                             (SRC_FI_B2_L, "SRC_FI_B2_L"),
                             (SRC_FI_B2_U, "SRC_FI_B2_U")):
            self._register(base + offset, f"DMA_LCD_{name}",
                           self._src_fi_access, sizes=(2,))

    @property
    def buffers(self):
        """The two frame buffers, B1 first."""
        return self._state.buffers

    @property
    def ccr(self):
        return self._state.ccr

    @property
    def csdp(self):
        return self._state.csdp

    @property
    def ctrl(self):
        return self._state.ctrl

    @property
    def lch_ctrl(self):
        return self._state.lch_ctrl

    def _plain_access(self, name, ppa, size, value):
        if value is None:
            return getattr(self._state, name)
        value &= 0xFFFFFFFF
        setattr(self._state, name, value)
        _trace(name, value)
        return value

    def _address_access(self, name, ppa, size, value):
        buffer = self._state.buffers[_bit(ppa, 4)]
        new, data = _sub_access(getattr(buffer, name), ppa & 3, size, value)
        if value is not None:
            setattr(buffer, name, new & ~1 & 0xFFFFFFFF)
            logger.debug("DMA: LCD %s address B%u %s -- %#010x", name,
                         1 + _bit(ppa, 4), "U" if _bit(ppa, 1) else "L",
                         getattr(buffer, name))
        return data

    def _src_ei_access(self, ppa, size, value):
        buffer = self._state.buffers[_bit(ppa, 2)]
        if value is not None:
            buffer.src_ei = _signed(value, 16)
            logger.debug("DMA: LCD Source Element Index B%u -- %#06x",
                         1 + _bit(ppa, 2), buffer.src_ei & 0xFFFF)
        return buffer.src_ei & 0xFFFFFFFF

    def _count_access(self, name, ppa, size, value):
        buffer = self._state.buffers[_bit(ppa, 1)]
        if value is None:
            return getattr(buffer, name)
        value &= 0xFFFFFFFF
        setattr(buffer, name, value)
        logger.debug("DMA: LCD %s B%u -- %#010x", name, 1 + _bit(ppa, 1), value)
        return value

    def _src_fi_access(self, ppa, size, value):
        upper = _bit(ppa, 5)
        buffer = self._state.buffers[_bit(ppa, 2 - upper)]
        offset = (ppa & 1) | (upper << 1)
        new, data = _sub_access(buffer.src_fi, offset, size, value)
        if value is not None:
            buffer.src_fi = _signed(new, 32)
            logger.debug("DMA: LCD Source Frame Index B%u %s -- %#010x",
                         1 + _bit(ppa, 2 - upper), "U" if upper else "L",
                         new)
        return data

    def reset(self):
        """Clear the parameter and control registers, as the hardware does."""
        self._state.csdp = 0
        self._state.ctrl = 0