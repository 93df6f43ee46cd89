import pytest

from omapsoc.cfg import MOD_CONF_CTRL_1, RESET_CTL, OmapConfig
from omapsoc.mmio import MmioError

USB_TRANSCEIVER_CTRL = 0xFFFE1064
FUNC_MUX_CTRL_3 = 0xFFFE1010


def test_reset_values():
    cfg = OmapConfig()
    cfg.reset()
    assert cfg.read(USB_TRANSCEIVER_CTRL, 4) == 0x0006
    assert cfg.read(RESET_CTL, 4) == 0x007F
    assert cfg.read(FUNC_MUX_CTRL_3, 4) == 0


def test_reset_only_once():
    cfg = OmapConfig()
    cfg.reset()
    cfg.write(RESET_CTL, 4, 0x1)
    cfg.reset()
    assert cfg.read(RESET_CTL, 4) == 0x1


@pytest.mark.parametrize("ppa", [MOD_CONF_CTRL_1, RESET_CTL, FUNC_MUX_CTRL_3, 0xFFFE1160])
def test_round_trip(ppa):
    cfg = OmapConfig()
    cfg.write(ppa, 4, 0xA5A55A5A)
    assert cfg.read(ppa, 4) == 0xA5A55A5A


def test_registers_independent():
    cfg = OmapConfig()
    cfg.write(0xFFFE1010, 4, 0xFFFFFFFF)
    assert cfg.read(0xFFFE1014, 4) == 0
    assert cfg.read(0xFFFE100C, 4) == 0


def test_addresses_include_both_lists():
    addresses = OmapConfig().addresses()
    assert 0xFFFE100C in addresses
    assert MOD_CONF_CTRL_1 in addresses
    assert addresses == sorted(set(addresses))


def test_pedantic_rejects_halfword():
    cfg = OmapConfig(pedantic=True)
    with pytest.raises(MmioError):
        cfg.write(RESET_CTL, 2, 1)


def test_unknown_register():
    with pytest.raises(MmioError):
        OmapConfig().read(0xFFFE1004, 4)