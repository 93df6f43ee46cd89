"""Assorted OMAP registers the firmware touches during bring-up."""

from __future__ import annotations

from .mmio import Peripheral, le_access

_SPI1_SSR = 0xFFFB0C14
_I2C_SYSS = 0xFFFB3810
_I2C_SYSC = 0xFFFB3820
_FB_7868 = 0xFFFB7868
_FE_6838 = 0xFFFE6838


class OmapMisc(Peripheral):
    """SPI, I2C, SoSSI and a few unnamed register blocks."""

    def __init__(self, *, pedantic=False):
        super().__init__(pedantic=pedantic)
        self.i2c_syss = 0
        self.sossi = bytearray(0x100)
        self.spi = bytearray(0x100)
        self.x_fe_60 = bytearray(0x100)
        self.x_fe_68 = bytearray(0x100)
        self.x_fe_78 = bytearray(0x100)

        self._register(_SPI1_SSR, "spi1_ssr", self._spi_access)
        self._register(_I2C_SYSS, "xfffb_3810", self._i2c_syss_access)
        self._register(_I2C_SYSC, "xfffb_3820", self._i2c_sysc_access)
        self._register(_FB_7868, "xfffb_7868", self._fb_78_access)
        for offset in range(0x00, 0x24, 4):
            ppa = 0xFFFBAC00 + offset
            self._register(ppa, f"xfffb_{ppa & 0xFFFF:04x}", self._sossi_access)
        for ppa in (0xFFFE6010, 0xFFFE6014, 0xFFFE6018, 0xFFFE601C,
                    0xFFFE6020, 0xFFFE6030, 0xFFFE6034):
            self._register(ppa, f"xfffe_{ppa & 0xFFFF:04x}", self._fe_60_access)
        self._register(_FE_6838, "xfffe_6838", self._fe_68_access)
        for offset in range(0x00, 0x1C, 2):
            ppa = 0xFFFE7800 + offset
            self._register(ppa, f"xfffe_{ppa & 0xFFFF:04x}", self._fe_78_access)

    @staticmethod
    def _target(buffer, ppa, width, size, value):
        return le_access(buffer, ppa & 0xFF, min(size, width), value)

    def _fb_78_access(self, ppa, size, value):
        if value is None:
            return 1 if ppa == _FB_7868 else 0xDEADBEEF
        return value

    def _fe_60_access(self, ppa, size, value):
        data = self._target(self.x_fe_60, ppa, 4, size, value)
        if ppa in (0xFFFE6014, 0xFFFE6018):
            data |= 1
        return data

    def _fe_68_access(self, ppa, size, value):
        data = self._target(self.x_fe_68, ppa, 4, size, value)
        if ppa == _FE_6838 and value is None:
            data ^= 1 << 15
            self._target(self.x_fe_68, ppa, 4, size, data)
        return data

    def _fe_78_access(self, ppa, size, value):
        return self._target(self.x_fe_78, ppa, 4, size, value)

    def _i2c_sysc_access(self, ppa, size, value):
        data = value if value is not None else 0
        if value is not None and (data >> 1) & 1:
            self.i2c_syss |= 1
        return data

    def _i2c_syss_access(self, ppa, size, value):
        data = self.i2c_syss
        if value is None:
            self.i2c_syss = 0
        return data

    def _sossi_access(self, ppa, size, value):
        return self._target(self.sossi, ppa, 2, size, value)

    def _spi_access(self, ppa, size, value):
        data = self._target(self.spi, ppa, 2, size, value)
        if ppa == _SPI1_SSR:
            data |= 1
        return data