"""OMAP UART register file: line, modem, FIFO and system control."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields

from .mmio import MmioError, Peripheral, le_access

logger = logging.getLogger(__name__)

UART1_BASE = 0xFFFB0000
UART2_BASE = 0xFFFB0800
UART3_BASE = 0xFFFB9800

UART_BASES = (UART1_BASE, UART2_BASE, UART3_BASE)

X08 = 0x08  # EFR, FCR, IIR
LCR = 0x0C
X10 = 0x10  # MCR, XON1
X1C = 0x1C  # SPR, TLR, XOFF2
SCR = 0x40
SYSC = 0x54
SYSS = 0x58

LCR_CONFIG_MODE_B = 0xBF

SYSC_SOFT_RESET = 2
SYSS_RESET_DONE = 0

_EFR_ENHANCED_FN = 4
_MCR_TCR_TLR = 6
_FCR_SELF_CLEARING = (1 << 2) | (1 << 1)


def _bit(value, n):
    return (value >> n) & 1


def _describe(title, layout, data):
    return f"UART {title} -- " + ", ".join(
        f"{name}: {(data >> lsb) & ((1 << (msb - lsb + 1)) - 1)}"
        for name, msb, lsb in layout
    )


_LCR_FIELDS = (
    ("DIV_EN", 7, 7), ("BREAK_EN", 6, 6), ("PARITY_TYPE2", 5, 5),
    ("PARITY_TYPE1", 4, 4), ("PARITY_EN", 3, 3), ("NB_STOP", 2, 2),
    ("CHAR_LENGTH", 1, 0),
)
_SCR_FIELDS = (
    ("RX_TRIG_GRANU1", 7, 7), ("TX_TRIG_GRANU1", 6, 6), ("DSR_IT", 5, 5),
    ("RX_CTS_DSR_WAKE_UP_ENABLE", 4, 4), ("TX_EMPTY_CTL_IT", 3, 3),
    ("DMA_MODE_2", 2, 1), ("DMA_MODE_CTL", 0, 0),
)
_SYSC_FIELDS = (
    ("Reserved", 7, 5), ("IdleMode", 4, 3), ("EnaWakeUp", 2, 2),
    ("SoftReset", 1, 1), ("AutoIdle", 0, 0),
)
_EFR_FIELDS = (
    ("AUTO_CTS_EN", 7, 7), ("AUTO_RTS_EN", 6, 6),
    ("SPECIAL_CHAR_DETECT", 5, 5), ("ENHANCED_FN", 4, 4),
    ("SW_FLOW_CONTROL", 3, 0),
)
_FCR_FIELDS = (
    ("RX_FIFO_TRIG", 7, 6), ("TX_FIFO_TRIG", 5, 4), ("DMA_MODE", 3, 3),
    ("TX_FIFO_CLEAR", 2, 2), ("RX_FIFO_CLEAR", 1, 1), ("FIFO_EN", 0, 0),
)
_MCR_FIELDS = (
    ("RESERVED", 7, 7), ("TCR_TLR", 6, 6), ("XON_EN", 5, 5),
    ("LOOPBACK_EN", 4, 4), ("CD_STS_CH", 3, 3), ("RI_STS_CH", 2, 2),
    ("RTS", 1, 1), ("DTR", 0, 0),
)
_TLR_FIELDS = (("RX_FIFO_TRIG_DMA", 7, 4), ("TX_FIFO_TRIG_DMA", 3, 0))


@dataclass
class UartUnit:
    """Register state of one UART."""

    efr: int = 0
    fcr: int = 0
    lcr: int = 0
    mcr: int = 0
    scr: int = 0
    spr: int = 0
    sysc: int = 0
    syss: int = 0
    tlr: int = 0

    def reset(self):
        """Clear every register and flag the reset as done."""
        for f in fields(self):
            setattr(self, f.name, 0)
        self.syss |= 1 << SYSS_RESET_DONE

    @property
    def tlr_selected(self):
        """True when offset 0x1c reaches the trigger level register."""
        return bool(_bit(self.efr, _EFR_ENHANCED_FN) and _bit(self.mcr, _MCR_TCR_TLR))


class OmapUart(Peripheral):
    """Three UARTs sharing one register layout."""

    def __init__(self, *, pedantic=False, bases=UART_BASES):
        super().__init__(pedantic=pedantic)
        self.bases = tuple(bases)
        self.units = [UartUnit() for _ in self.bases]
        handlers = (
            (X08, "X08", self._x08),
            (LCR, "LCR", self._lcr),
            (X10, "X10", self._x10),
            (X1C, "X1C", self._x1c),
            (SCR, "SCR", self._scr),
            (SYSC, "SYSC", self._sysc),
            (SYSS, "SYSS", self._syss),
        )
        for number, base in enumerate(self.bases, start=1):
            for offset, name, handler in handlers:
                self._register(base + offset, f"UART{number}_{name}", handler,
                               sizes=(1,))

    def unit(self, ppa):
        """Return the UART addressed by `ppa`."""
        window = ppa & ~0xFF
        for base, unit in zip(self.bases, self.units):
            if base == window:
                return unit
        raise MmioError(f"no UART at {ppa:#010x}")

    @staticmethod
    def _byte(unit, attr, size, value):
        buffer = bytearray((getattr(unit, attr) & 0xFF).to_bytes(4, "little"))
        data = le_access(buffer, 0, min(size, 1), value)
        if value is not None:
            setattr(unit, attr, buffer[0])
        return data

    def _lcr(self, ppa, size, value):
        data = self._byte(self.unit(ppa), "lcr", size, value)
        if value is not None and logger.isEnabledFor(logging.DEBUG):
            logger.debug(_describe("Line Control Register", _LCR_FIELDS, data))
        return data

    def _scr(self, ppa, size, value):
        data = self._byte(self.unit(ppa), "scr", size, value)
        if value is not None and logger.isEnabledFor(logging.DEBUG):
            logger.debug(_describe("Supplementary Control Register", _SCR_FIELDS, data))
        return data

    def _sysc(self, ppa, size, value):
        unit = self.unit(ppa)
        if value is None:
            return unit.sysc
        data = value & 0xFF
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(_describe("System Configuration Register", _SYSC_FIELDS, data))
        if _bit(data, SYSC_SOFT_RESET):
            unit.reset()
            data &= ~(1 << SYSC_SOFT_RESET)
        unit.sysc = data
        return data

    def _syss(self, ppa, size, value):
        return self.unit(ppa).syss

    def _x08(self, ppa, size, value):
        unit = self.unit(ppa)
        if unit.lcr == LCR_CONFIG_MODE_B:
            data = self._byte(unit, "efr", size, value)
            if value is not None and logger.isEnabledFor(logging.DEBUG):
                logger.debug(_describe("Enhanced Feature Register", _EFR_FIELDS, data))
            return data
        if value is None:
            raise MmioError(f"interrupt identification register at {ppa:#010x} is not supported")
        data = value & 0xFF
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(_describe("FIFO Control Register", _FCR_FIELDS, data))
        unit.fcr = data & ~_FCR_SELF_CLEARING
        return 0

    def _x10(self, ppa, size, value):
        unit = self.unit(ppa)
        if unit.lcr == LCR_CONFIG_MODE_B:
            raise MmioError(f"XON1 register at {ppa:#010x} is not supported")
        if value is None:
            return unit.mcr
        data = value & 0xFF
        mask = 0xFF if _bit(unit.efr, _EFR_ENHANCED_FN) else 0x1F
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(_describe("Modem Control Register", _MCR_FIELDS, data))
        unit.mcr = (unit.mcr & ~mask & 0xFF) | (data & mask)
        return data

    def _x1c(self, ppa, size, value):
        unit = self.unit(ppa)
        if unit.tlr_selected:
            data = self._byte(unit, "tlr", size, value)
            if value is not None and logger.isEnabledFor(logging.DEBUG):
                logger.debug(_describe("Trigger Level Register", _TLR_FIELDS, data))
            return data
        if unit.lcr == LCR_CONFIG_MODE_B:
            raise MmioError(f"XOFF2 register at {ppa:#010x} is not supported")
        data = self._byte(unit, "spr", size, value)
        if value is not None:
            logger.debug("UART Scratchpad Register: %#05x", data)
        return data

    def reset(self):
        """Reset every UART."""
        for unit in self.units:
            unit.reset()