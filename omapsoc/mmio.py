"""Memory-mapped register plumbing shared by the peripherals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)

Handler = Callable[[int, int, Optional[int]], int]

_ACCESS_SIZES = (1, 2, 4)


class MmioError(Exception):
    """Raised for an access that the register map cannot serve."""


def le_access(buffer, offset, size, value=None):
    """Read (value is None) or write a little-endian field of `size` bytes.

    A read returns the stored value; a write stores the value truncated to
    the field width and returns what was stored.
    """
    if size not in _ACCESS_SIZES:
        raise MmioError(f"unsupported access size {size}")
    if offset < 0 or offset + size > len(buffer):
        raise MmioError(
            f"access of {size} bytes at offset {offset:#x} is outside a "
            f"buffer of {len(buffer):#x} bytes"
        )
    if value is None:
        return int.from_bytes(buffer[offset:offset + size], "little")
    value &= (1 << (8 * size)) - 1
    buffer[offset:offset + size] = value.to_bytes(size, "little")
    return value


@dataclass(frozen=True)
class _Register:
    name: str
    handler: Handler
    reset: Optional[int] = None
    sizes: Optional[frozenset] = None


class Peripheral:
    """A block of registers, each served by its own handler.

    Accesses go to absolute physical addresses. A value of None means a
    read; anything else is written. With `pedantic` set, an access whose
    size does not match the register's width is refused.
    """

    reset_size = 4

    def __init__(self, *, pedantic=False):
        self.pedantic = pedantic
        self._registers: dict[int, _Register] = {}

    def _register(self, ppa, name, handler, *, reset=None, sizes: Iterable[int] | None = None):
        self._registers[ppa] = _Register(
            name, handler, reset, frozenset(sizes) if sizes is not None else None
        )

    def addresses(self):
        """Return the registered addresses in ascending order."""
        return sorted(self._registers)

    def access(self, ppa, size, value=None):
        """Read or write the register at `ppa` and return the resulting data."""
        register = self._registers.get(ppa)
        if register is None:
            raise MmioError(f"no register at {ppa:#010x}")
        if size not in _ACCESS_SIZES:
            raise MmioError(f"unsupported access size {size} at {ppa:#010x}")
        if self.pedantic and register.sizes is not None and size not in register.sizes:
            raise MmioError(
                f"{register.name}: access size {size} not allowed at {ppa:#010x}"
            )
        data = register.handler(ppa, size, value) & 0xFFFFFFFF
        logger.debug(
            "%s %s[%#010x] %d: %#010x",
            register.name,
            "write" if value is not None else "read",
            ppa,
            size,
            data,
        )
        return data

    def read(self, ppa, size):
        """Read the register at `ppa`."""
        return self.access(ppa, size, None)

    def write(self, ppa, size, value):
        """Write `value` to the register at `ppa`."""
        return self.access(ppa, size, value)

    def reset(self):
        """Write every register's reset value, where it has one."""
        for ppa, register in sorted(self._registers.items()):
            if register.reset is not None:
                register.handler(ppa, self.reset_size, register.reset)


class MpuMmc(Peripheral):
    """MMC controller registers held as plain storage."""

    REGISTERS = {
        0xFFFB7800: "MPU_MMC_CMD",
        0xFFFB7804: "MPU_MMC_ARGL",
        0xFFFB7808: "MPU_MMC_ARGH",
        0xFFFB7810: "MPU_MMC_STAT",
    }

    def __init__(self, *, pedantic=False):
        super().__init__(pedantic=pedantic)
        self.data = bytearray(0x100)
        for ppa, name in self.REGISTERS.items():
            self._register(ppa, name, self._mem_access, sizes=(2,))

    def _mem_access(self, ppa, size, value):
        return le_access(self.data, ppa & 0xFF, size, value)