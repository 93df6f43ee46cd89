"""OMAP MPU GPIO modules."""

from __future__ import annotations

from dataclasses import dataclass, fields
from functools import partial

from .mmio import Peripheral, le_access

GPIO1_BASE = 0xFFFBE400
GPIO2_BASE = 0xFFFBEC00
GPIO3_BASE = 0xFFFBB400
GPIO4_BASE = 0xFFFBBC00

GPIO_BASES = (GPIO1_BASE, GPIO2_BASE, GPIO3_BASE, GPIO4_BASE)

DIRECTION_RESET = 0x0000FFFF

REGISTERS = {
    0x10: ("SYSCONFIG", "sysconfig"),
    0x1C: ("IRQENABLE1", "irqenable1"),
    0x2C: ("DATAIN", "datain"),
    0x30: ("DATAOUT", "dataout"),
    0x34: ("DIRECTION", "direction"),
    0x3C: ("EDGE_CTRL2", "edge_control2"),
    0xB0: ("CLEAR_DATAOUT", "clear_dataout"),
    0xC0: ("xxxx_xxc0", "xxxx_xxc0"),
    0xF0: ("SET_DATAOUT", "set_dataout"),
}


@dataclass
class GpioUnit:
    """Register state of one GPIO module."""

    clear_dataout: int = 0
    datain: int = 0
    dataout: int = 0
    direction: int = 0
    edge_control2: int = 0
    irqenable1: int = 0
    set_dataout: int = 0
    sysconfig: int = 0
    xxxx_xxc0: int = 0


def unit_index(ppa):
    """Index of the GPIO module a physical address belongs to."""
    return (((ppa >> 13) & 2) | ((ppa >> 11) & 1)) ^ 3


class OmapMpuGpio(Peripheral):
    """Four GPIO modules sharing one register layout."""

    def __init__(self, *, pedantic=False, bases=GPIO_BASES):
        super().__init__(pedantic=pedantic)
        self.units = [GpioUnit() for _ in range(4)]
        for number, base in enumerate(bases, start=1):
            for offset, (name, attr) in REGISTERS.items():
                self._register(base + offset, f"GPIO{number}_{name}",
                               partial(self._access, attr), sizes=(2, 4))

    def unit(self, ppa):
        """Return the GPIO module addressed by `ppa`."""
        return self.units[unit_index(ppa)]

    def _access(self, attr, ppa, size, value):
        unit = self.unit(ppa)
        buffer = bytearray(getattr(unit, attr).to_bytes(4, "little"))
        data = le_access(buffer, 0, size, value)
        if value is not None:
            setattr(unit, attr, int.from_bytes(buffer, "little"))
        return data

    def reset(self):
        """Clear every module, with all pins set as inputs."""
        for unit in self.units:
            for f in fields(GpioUnit):
                setattr(unit, f.name, 0)
            unit.direction = DIRECTION_RESET