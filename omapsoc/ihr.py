"""OMAP MPU level-1 and level-2 interrupt handler registers."""

from __future__ import annotations

from functools import partial

from .mmio import Peripheral, le_access

IHR_L1_BASE = 0xFFFECB00
IHR_L2_BASE = 0xFFFE0000

BANK_COUNT = 4
BANK_STRIDE = 0x100
ILR_COUNT = 32

ITR = 0x00
MIR = 0x04
SIR_IRQ = 0x10
SIR_FIQ = 0x14
CONTROL = 0x18
ILR0 = 0x1C
ISR = 0x9C
L1_ENHANCED_CNTL = 0xA0
L2_STATUS = 0xA0
L2_OCP_CFG = 0xA4
L2_INTH_REV = 0xA8

MIR_RESET = 0xFFFFFFFF

_L1_REGISTERS = (
    (ITR, "itr"),
    (MIR, "mir"),
    (SIR_FIQ, "sir_fiq"),
    (SIR_IRQ, "sir_irq"),
    (CONTROL, "control"),
    (ISR, "isr"),
    (L1_ENHANCED_CNTL, "enhanced_cntl"),
)

_L2_REGISTERS = (
    (SIR_FIQ, "sir_fiq"),
    (SIR_IRQ, "sir_irq"),
    (CONTROL, "control"),
    (L2_STATUS, "status"),
    (L2_OCP_CFG, "ocp_cfg"),
    (L2_INTH_REV, "inth_rev"),
)


def ilr_offset(index):
    """Byte offset of interrupt level register `index` within a bank."""
    return ILR0 + (index << 2)


def _ilr_index(ppa):
    return ((ppa & 0xFF) - ILR0) >> 2


def _bank(ppa):
    return ((ppa & 0x3FF) >> 8) & 3


def _word(current, size, value):
    buffer = bytearray((current & 0xFFFFFFFF).to_bytes(4, "little"))
    data = le_access(buffer, 0, size, value)
    return int.from_bytes(buffer, "little"), data


class OmapInterruptHandler(Peripheral):
    """Level-1 handler and the four banks of the level-2 handler."""

    def __init__(self, *, pedantic=False, l1_base=IHR_L1_BASE,
                 l2_base=IHR_L2_BASE):
        super().__init__(pedantic=pedantic)
        self.l1_base = l1_base
        self.l2_base = l2_base
        self.l1 = {name: 0 for _, name in _L1_REGISTERS}
        self.l1_ilr = [0] * ILR_COUNT
        self.l2 = {name: 0 for _, name in _L2_REGISTERS}
        self.l2_itr = [0] * BANK_COUNT
        self.l2_mir = [0] * BANK_COUNT
        self.l2_ilr = [[0] * ILR_COUNT for _ in range(BANK_COUNT)]

        for offset, name in _L1_REGISTERS:
            self._register(l1_base + offset, f"L1_{name.upper()}",
                           partial(self._cell, lambda ppa, n=name: (self.l1, n)),
                           sizes=(4,))
        for i in range(ILR_COUNT):
            self._register(l1_base + ilr_offset(i), f"L1_ILR{i}",
                           partial(self._cell, lambda ppa: (self.l1_ilr, _ilr_index(ppa))),
                           sizes=(4,))

        for offset, name in _L2_REGISTERS:
            self._register(l2_base + offset, f"L2_{name.upper()}",
                           partial(self._cell, lambda ppa, n=name: (self.l2, n)),
                           sizes=(4,))
        for bank in range(BANK_COUNT):
            window = l2_base + bank * BANK_STRIDE
            self._register(window + ITR, f"L2_ITR{bank}",
                           partial(self._cell, lambda ppa: (self.l2_itr, _bank(ppa))),
                           sizes=(4,))
            self._register(window + MIR, f"L2_MIR{bank}",
                           partial(self._cell, lambda ppa: (self.l2_mir, _bank(ppa))),
                           sizes=(4,))
            for i in range(ILR_COUNT):
                self._register(
                    window + ilr_offset(i), f"L2_ILR{bank}_{i}",
                    partial(self._cell,
                            lambda ppa: (self.l2_ilr[_bank(ppa)], _ilr_index(ppa))),
                    sizes=(4,))

    @staticmethod
    def _cell(locate, ppa, size, value):
        store, key = locate(ppa)
        new, data = _word(store[key], size, value)
        if value is not None:
            store[key] = new
        return data

    def reset(self):
        """Mask every interrupt in both levels."""
        self.l1["mir"] = MIR_RESET
        self.l2_mir = [MIR_RESET] * BANK_COUNT