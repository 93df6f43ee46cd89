"""OMAP configuration (pin mux and module control) registers."""

from __future__ import annotations

import logging

from .mmio import Peripheral, le_access

logger = logging.getLogger(__name__)

MOD_CONF_CTRL_1 = 0xFFFE1110
RESET_CTL = 0xFFFE1140

_REGISTERS = (
    (0xFFFE100C, "COMP_MODE_CTRL_0", 0),
    (0xFFFE1010, "FUNC_MUX_CTRL_3", 0),
    (0xFFFE1014, "FUNC_MUX_CTRL_4", 0),
    (0xFFFE1018, "FUNC_MUX_CTRL_5", 0),
    (0xFFFE101C, "FUNC_MUX_CTRL_6", 0),
    (0xFFFE1020, "FUNC_MUX_CTRL_7", 0),
    (0xFFFE1024, "FUNC_MUX_CTRL_8", 0),
    (0xFFFE1028, "FUNC_MUX_CTRL_9", 0),
    (0xFFFE102C, "FUNC_MUX_CTRL_A", 0),
    (0xFFFE1030, "FUNC_MUX_CTRL_B", 0),
    (0xFFFE1034, "FUNC_MUX_CTRL_C", 0),
    (0xFFFE1038, "FUNC_MUX_CTRL_D", 0),
    (0xFFFE1040, "PULL_DWN_CTRL_0", 0),
    (0xFFFE1044, "PULL_DWN_CTRL_1", 0),
    (0xFFFE1048, "PULL_DWN_CTRL_2", 0),
    (0xFFFE104C, "PULL_DWN_CTRL_3", 0),
    (0xFFFE1060, "VOLTAGE_CTRL_0", 0),
    (0xFFFE1064, "USB_TRANSCEIVER_CTRL", 0x0006),
    (0xFFFE1080, "MOD_CONF_CTRL_0", 0),
    (0xFFFE1090, "FUNC_MUX_CTRL_E", 0),
    (0xFFFE1094, "FUNC_MUX_CTRL_F", 0),
    (0xFFFE1098, "FUNC_MUX_CTRL_10", 0),
    (0xFFFE109C, "FUNC_MUX_CTRL_11", 0),
    (0xFFFE10A0, "FUNC_MUX_CTRL_12", 0),
    (0xFFFE10AC, "PULL_DWN_CTRL_4", 0),
    (0xFFFE10B4, "PU_PD_SEL_0", 0),
    (0xFFFE10B8, "PU_PD_SEL_1", 0),
    (0xFFFE10BC, "PU_PD_SEL_2", 0),
    (0xFFFE10C0, "PU_PD_SEL_3", 0),
    (0xFFFE10C4, "PU_PD_SEL_4", 0),
    (MOD_CONF_CTRL_1, "MOD_CONF_CTRL_1", 0),
    (RESET_CTL, "RESET_CTL", 0x007F),
    (0xFFFE1160, "x0xfffe_0x1160", 0),
)

_MOD_CONF_CTRL_1_FIELDS = (
    ("CONF_CAM_CLKMUX_R", 31, 31),
    ("CONF_PMT_DCB_SELECT_R", 30, 29),
    ("CONF_OSC1_GZ_R", 28, 28),
    ("CONF_OSC1_PWRDN_R", 27, 27),
    ("RESERVED[26]", 26, 26),
    ("OCP_INTERCON_GATE_EN_R", 25, 25),
    ("CONF_MMC2_CLKFB_SEL_R", 24, 24),
    ("RESERVED[23]", 23, 23),
    ("CONF_MCBSP3_CLK_DIS_R", 22, 22),
    ("CONF_MCBSP2_CLK_DIS_R", 21, 21),
    ("CONF_MCBSP1_CLK_DIS_R", 20, 20),
    ("RESERVED[19:17]", 19, 17),
    ("RESERVED[16]", 16, 16),
    ("CONF_MOD_GPTIMER8_CLK_SEL_R", 15, 14),
    ("CONF_MOD_GPTIMER7_CLK_SEL_R", 13, 12),
    ("CONF_MOD_GPTIMER6_CLK_SEL_R", 11, 10),
    ("CONF_MOD_GPTIMER5_CLK_SEL_R", 9, 8),
    ("CONF_MOD_GPTIMER4_CLK_SEL_R", 7, 6),
    ("CONF_MOD_GPTIMER3_CLK_SEL_R", 5, 4),
    ("CONF_MOD_GPTIMER2_CLK_SEL_R", 3, 2),
    ("CONF_MOD_GPTIMER1_CLK_SEL_R", 1, 0),
)

_RESET_CTL_FIELDS = (
    ("UNUSED[31:7]", 31, 7),
    ("CONF_RNG_IDLE_MODE", 6, 6),
    ("CONF_CAMERAIF_RESET_R", 5, 5),
    ("CONF_UWIRE_RESET_R", 4, 4),
    ("CONF_OSTIMER_RESET_R", 3, 3),
    ("CONF_ARMIO_RESET_R", 2, 2),
    ("RESERVED[1]", 1, 1),
    ("CONF_OCP_RESET_R", 0, 0),
)


def _describe(title, fields, data):
    parts = (
        f"{name}: {(data >> lsb) & ((1 << (msb - lsb + 1)) - 1):#x}"
        for name, msb, lsb in fields
    )
    return f"CFG: {title} -- " + ", ".join(parts)


class OmapConfig(Peripheral):
    """Configuration registers, stored in a 0x200-byte block."""

    def __init__(self, *, pedantic=False):
        super().__init__(pedantic=pedantic)
        self.data = bytearray(0x200)
        self._reset_done = False
        for ppa, name, reset in _REGISTERS:
            self._register(ppa, name, self._mem_access, reset=reset, sizes=(4,))

    def _mem_access(self, ppa, size, value):
        data = le_access(self.data, ppa & 0x1FF, size, value)
        if value is not None and logger.isEnabledFor(logging.DEBUG):
            if ppa == MOD_CONF_CTRL_1:
                logger.debug(_describe("Module Configuration Control 1",
                                       _MOD_CONF_CTRL_1_FIELDS, data))
            elif ppa == RESET_CTL:
                logger.debug(_describe("Reset Control Register",
                                       _RESET_CTL_FIELDS, data))
        return data

    def reset(self):
        """Load the reset values; only the first reset has any effect."""
        if self._reset_done:
            return
        super().reset()
        self._reset_done = True