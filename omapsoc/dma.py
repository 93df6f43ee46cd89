"""OMAP system DMA controller: global control and the logical channels."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from functools import partial

from .mmio import Peripheral, le_access

logger = logging.getLogger(__name__)

CHANNEL_COUNT = 16
CHANNEL_STRIDE = 0x40

CHANNEL_BASE = 0xFFFED800
GLOBAL_BASE = 0xFFFEDC00

GCR = 0x00
GSCR = 0x04

CSDP = 0x00
CCR = 0x02
CICR = 0x04
CSR = 0x06
CSSA_L = 0x08
CSSA_U = 0x0A
CDSA_L = 0x0C
CDSA_U = 0x0E
CEN = 0x10
CFN = 0x12
CSFI = 0x14
CSEI = 0x16
CSAC = 0x18
CDAC = 0x1A
CDEI = 0x1C
CDFI = 0x1E
COLOR_L = 0x20
COLOR_U = 0x22
CCR2 = 0x24
CLNK_CTRL = 0x28
LCH_CTRL = 0x2A

# Registers held whole in one channel field.
_PLAIN = {
    CSDP: "csdp",
    CCR: "ccr",
    CICR: "cicr",
    CEN: "cen",
    CFN: "cfn",
    CSFI: "csfi",
    CSEI: "csei",
    CSAC: "csac",
    CDAC: "cdac",
    CDEI: "cdei",
    CDFI: "cdfi",
    CCR2: "ccr2",
    CLNK_CTRL: "clnk_ctrl",
    LCH_CTRL: "lch_ctrl",
}

# 32-bit fields reached as a lower and an upper 16-bit half.
_SPLIT = {
    CSSA_L: "cssa",
    CSSA_U: "cssa",
    CDSA_L: "cdsa",
    CDSA_U: "cdsa",
    COLOR_L: "color",
    COLOR_U: "color",
}

_FIELDS = {
    "ccr": ("Channel Control Register", (
        ("DST_AMODE", 15, 14), ("SRC_AMODE", 13, 12), ("END_PROG", 11, 11),
        ("OMAP_3_1_COMPATIBLE_DISABLE", 10, 10), ("REPEAT", 9, 9),
        ("AUTO_INIT", 8, 8), ("ENABLE", 7, 7), ("PRIO", 6, 6), ("FS", 5, 5),
        ("SYNC", 4, 0),
    )),
    "ccr2": ("Channel Control Register 2", (
        ("RESERVED[15:3]", 15, 3), ("BS", 2, 2), ("TCE", 1, 1), ("CFE", 0, 0),
    )),
    "cicr": ("Channel Interrupt Control Register", (
        ("RESERVED[15:6]", 15, 6), ("BLOCK_IE", 5, 5), ("LAST_IE", 4, 4),
        ("FRAME_IE", 3, 3), ("HALF_IE", 2, 2), ("DROP_IE", 1, 1),
        ("TOUT_IE", 0, 0),
    )),
    "clnk_ctrl": ("Channel Link Control Register", (
        ("EL", 15, 15), ("SL", 14, 14), ("RESERVED[13:5]", 13, 5),
        ("NID[4]", 4, 4), ("NID[3:0]", 3, 0),
    )),
    "csdp": ("Channel Source Destination Parameters Register", (
        ("DST_BURST_EN", 15, 14), ("DST_PACK", 13, 13), ("DST", 12, 9),
        ("SRC_BURST_EN", 8, 7), ("SRC_PACK", 6, 6), ("SRC", 5, 2),
        ("DATA_TYPE", 1, 0),
    )),
    "lch_ctrl": ("Logical Channel Control Register", (
        ("LID", 15, 15), ("RESERVED[14:4]", 14, 4), ("LT[3:0]", 3, 0),
    )),
    "gcr": ("Global Control Register", (
        ("RESERVED[15:5]", 15, 5), ("ROUND_ROBIN_DISABLE", 4, 4),
        ("CLK_AUTOGATING_ON", 3, 3), ("FREE", 2, 2), ("RESERVED[1:0]", 1, 0),
    )),
    "gscr": ("Global Software Compatible Register", (
        ("RESERVED[15:4]", 15, 4), ("OMAP3_1_MAPPING_DISABLE", 3, 3),
        ("RESERVED[2:0]", 2, 0),
    )),
}


def _mask(msb, lsb):
    return ((1 << (msb - lsb + 1)) - 1) << lsb


def _trace(name, data):
    if not logger.isEnabledFor(logging.DEBUG):
        return
    described = _FIELDS.get(name)
    if described is None:
        logger.debug("DMA: %s: %#010x", name, data)
        return
    title, layout = described
    parts = ", ".join(
        f"{field}: {(data >> lsb) & ((1 << (msb - lsb + 1)) - 1):#x}"
        for field, msb, lsb in layout
    )
    logger.debug("DMA: %s -- %s", title, parts)


def _field_access(current, offset, size, value):
    """Access `size` bytes at `offset` inside a 32-bit field.

    Returns the new field value and the data read or written.
    """
    buffer = bytearray(current.to_bytes(4, "little"))
    data = le_access(buffer, offset, size, value)
    return int.from_bytes(buffer, "little"), data


@dataclass
class DmaChannel:
    """Register state of one logical DMA channel."""

    ccr: int = 0
    ccr2: int = 0
    cdac: int = 0
    cdei: int = 0
    cdfi: int = 0
    cdsa: int = 0
    cen: int = 0
    cfn: int = 0
    cicr: int = 0
    clnk_ctrl: int = 0
    color: int = 0
    csac: int = 0
    csdp: int = 0
    csei: int = 0
    csfi: int = 0
    csr: int = 0
    cssa: int = 0
    lch_ctrl: int = 0


class OmapDma(Peripheral):
    """Global DMA control registers and the sixteen logical channels."""

    def __init__(self, *, pedantic=False, channel_base=CHANNEL_BASE,
                 global_base=GLOBAL_BASE):
        super().__init__(pedantic=pedantic)
        self.channel_base = channel_base
        self.global_base = global_base
        self.channels = [DmaChannel() for _ in range(CHANNEL_COUNT)]
        self.gcr = 0
        self.gscr = 0

        self._register(global_base + GCR, "DMA_GCR",
                       partial(self._global_access, "gcr"), sizes=(2,))
        self._register(global_base + GSCR, "DMA_GSCR",
                       partial(self._global_access, "gscr"), sizes=(2,))

        for n in range(CHANNEL_COUNT):
            base = channel_base + n * CHANNEL_STRIDE
            for offset, name in _PLAIN.items():
                self._register(base + offset, f"DMA_{name.upper()}_{n}",
                               partial(self._plain_access, name), sizes=(2,))
            for offset, name in _SPLIT.items():
                half = "U" if offset & 2 else "L"
                self._register(base + offset, f"DMA_{name.upper()}_{half}_{n}",
                               partial(self._split_access, name), sizes=(2, 4))
            self._register(base + CSR, f"DMA_CSR_{n}", self._csr_access,
                           sizes=(2,))

    def _channel(self, ppa):
        return self.channels[((ppa - self.channel_base) >> 6) & 0x0F]

    def _global_access(self, name, ppa, size, value):
        if value is None:
            return getattr(self, name)
        value &= 0xFFFFFFFF
        setattr(self, name, value)
        _trace(name, value)
        return value

    def _plain_access(self, name, ppa, size, value):
        channel = self._channel(ppa)
        if value is None:
            return getattr(channel, name)
        value &= 0xFFFFFFFF
        setattr(channel, name, value)
        _trace(name, value)
        return value

    def _split_access(self, name, ppa, size, value):
        channel = self._channel(ppa)
        new, data = _field_access(getattr(channel, name), ppa & 3, size, value)
        if value is not None:
            setattr(channel, name, new)
            _trace(name, new)
        return data

    def _csr_access(self, ppa, size, value):
        if value is not None:
            logger.debug("DMA: [RO] Channel Status Register")
        return self._channel(ppa).csr

    def reset(self):
        """Apply the hardware reset values to the global and channel registers."""
        self.gcr = (self.gcr & ~_mask(15, 5) & 0xFFFFFFFF) | (1 << 3)
        self.gscr &= ~(1 << 3) & 0xFFFFFFFF
        for channel in self.channels:
            channel.ccr = 0
            channel.cicr = (channel.cicr & ~_mask(15, 6) & 0xFFFFFFFF) | 3
            channel.clnk_ctrl &= ~_mask(13, 5) & 0xFFFFFFFF
            channel.csdp = 0
            channel.csr = 0
            channel.lch_ctrl &= ~_mask(14, 4) & 0xFFFFFFFF

    @staticmethod
    def channel_fields():
        """Return the names of the per-channel registers."""
        return [f.name for f in fields(DmaChannel)]