import pytest

from omapsoc.dma import (
    CCR,
    CDSA_L,
    CDSA_U,
    CHANNEL_BASE,
    CHANNEL_STRIDE,
    CICR,
    CLNK_CTRL,
    COLOR_L,
    COLOR_U,
    CSDP,
    CSR,
    CSSA_L,
    CSSA_U,
    GCR,
    GLOBAL_BASE,
    GSCR,
    LCH_CTRL,
    DmaChannel,
    OmapDma,
)
from omapsoc.mmio import MmioError


def _ch(n, offset):
    return CHANNEL_BASE + n * CHANNEL_STRIDE + offset


@pytest.fixture
def dma():
    return OmapDma()


@pytest.mark.parametrize("offset", [CSDP, CCR, CICR, CLNK_CTRL, LCH_CTRL])
def test_plain_register_round_trip(dma, offset):
    assert dma.write(_ch(3, offset), 2, 0x1234) == 0x1234
    assert dma.read(_ch(3, offset), 2) == 0x1234


def test_channels_are_independent(dma):
    dma.write(_ch(0, CCR), 2, 0x0080)
    dma.write(_ch(15, CCR), 2, 0x0040)
    assert dma.read(_ch(0, CCR), 2) == 0x0080
    assert dma.read(_ch(15, CCR), 2) == 0x0040
    assert dma.channels[0].ccr == 0x0080
    assert dma.channels[15].ccr == 0x0040


@pytest.mark.parametrize(
    "low,high,field",
    [(CSSA_L, CSSA_U, "cssa"), (CDSA_L, CDSA_U, "cdsa"), (COLOR_L, COLOR_U, "color")],
)
def test_split_halves_compose(dma, low, high, field):
    dma.write(_ch(2, low), 2, 0xBEEF)
    dma.write(_ch(2, high), 2, 0xDEAD)
    assert getattr(dma.channels[2], field) == 0xDEADBEEF
    assert dma.read(_ch(2, low), 2) == 0xBEEF
    assert dma.read(_ch(2, high), 2) == 0xDEAD


def test_split_full_word_access(dma):
    dma.write(_ch(1, CSSA_L), 4, 0x10203040)
    assert dma.read(_ch(1, CSSA_L), 4) == 0x10203040
    assert dma.read(_ch(1, CSSA_U), 2) == 0x1020


def test_csr_is_read_only(dma):
    dma.channels[4].csr = 0x0020
    assert dma.write(_ch(4, CSR), 2, 0xFFFF) == 0x0020
    assert dma.channels[4].csr == 0x0020


def test_global_registers_round_trip(dma):
    dma.write(GLOBAL_BASE + GCR, 2, 0x0014)
    dma.write(GLOBAL_BASE + GSCR, 2, 0x0008)
    assert dma.read(GLOBAL_BASE + GCR, 2) == 0x0014
    assert dma.read(GLOBAL_BASE + GSCR, 2) == 0x0008


def test_reset_keeps_unmasked_bits(dma):
    dma.channels[0].clnk_ctrl = 0xC01F
    dma.reset()
    assert dma.channels[0].clnk_ctrl == 0xC01F


def test_reset_is_idempotent(dma):
    dma.reset()
    first = (dma.gcr, dma.gscr, [DmaChannel(**vars(c)) for c in dma.channels])
    dma.reset()
    assert (dma.gcr, dma.gscr, dma.channels) == first


def test_addresses_cover_all_channels(dma):
    addresses = dma.addresses()
    assert addresses == sorted(addresses)
    assert _ch(0, CSDP) in addresses
    assert _ch(15, LCH_CTRL) in addresses
    assert GLOBAL_BASE + GSCR in addresses


def test_unknown_address_raises(dma):
    with pytest.raises(MmioError):
        dma.read(_ch(0, 0x26), 2)


def test_pedantic_size_check():
    dma = OmapDma(pedantic=True)
    with pytest.raises(MmioError):
        dma.read(_ch(0, CCR), 4)
    dma.write(_ch(0, CSSA_L), 4, 0x1)
    assert dma.read(_ch(0, CSSA_L), 4) == 0x1


def test_channel_fields_list_registers():
    names = OmapDma.channel_fields()
    assert "cssa" in names and "lch_ctrl" in names
    assert len(names) == len(set(names))