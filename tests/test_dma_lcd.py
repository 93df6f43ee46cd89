import pytest

from omapsoc import dma_lcd
from omapsoc.dma_lcd import LcdBuffer, OmapDmaLcd
from omapsoc.mmio import MmioError

B = dma_lcd.LCD_BASE


@pytest.fixture
def lcd():
    return OmapDmaLcd()


def test_register_count(lcd):
    assert len(lcd.addresses()) == 22
    assert lcd.addresses()[0] == B + dma_lcd.CSDP
    assert lcd.addresses()[-1] == B + dma_lcd.SRC_FI_B2_U


def test_top_halves_combine_and_clear_bit0(lcd):
    lcd.write(B + dma_lcd.TOP_B1_L, 2, 0x5679)
    lcd.write(B + dma_lcd.TOP_B1_U, 2, 0x1234)
    assert lcd.buffers[0].top == 0x12345678
    assert lcd.read(B + dma_lcd.TOP_B1_L, 4) == 0x12345678
    assert lcd.read(B + dma_lcd.TOP_B1_U, 2) == 0x1234
    assert lcd.buffers[1].top == 0


def test_bot_b2_full_word(lcd):
    lcd.write(B + dma_lcd.BOT_B2_L, 4, 0x0ABCDEF1)
    assert lcd.buffers[1].bot == 0x0ABCDEF0
    assert lcd.buffers[0].bot == 0


def test_upper_half_word_access_outside_field(lcd):
    with pytest.raises(MmioError):
        lcd.write(B + dma_lcd.TOP_B2_U, 4, 1)


def test_src_ei_sign_extends(lcd):
    lcd.write(B + dma_lcd.SRC_EI_B2, 2, 0xFFFF)
    assert lcd.buffers[1].src_ei == -1
    assert lcd.read(B + dma_lcd.SRC_EI_B2, 2) == 0xFFFFFFFF
    assert lcd.buffers[0].src_ei == 0


def test_src_en_and_fn_select_buffer(lcd):
    lcd.write(B + dma_lcd.SRC_EN_B1, 2, 320)
    lcd.write(B + dma_lcd.SRC_FN_B2, 2, 240)
    assert lcd.read(B + dma_lcd.SRC_EN_B1, 2) == 320
    assert lcd.read(B + dma_lcd.SRC_FN_B2, 2) == 240
    assert lcd.buffers[1].src_en == 0
    assert lcd.buffers[0].src_fn == 0


def test_src_fi_lower_and_upper(lcd):
    lcd.write(B + dma_lcd.SRC_FI_B1_L, 2, 0x1234)
    lcd.write(B + dma_lcd.SRC_FI_B1_U, 2, 0xFFFF)
    assert lcd.buffers[0].src_fi == (0xFFFF1234 - (1 << 32))
    assert lcd.read(B + dma_lcd.SRC_FI_B1_U, 2) == 0xFFFF
    assert lcd.read(B + dma_lcd.SRC_FI_B1_L, 2) == 0x1234
    lcd.write(B + dma_lcd.SRC_FI_B2_U, 2, 0x0001)
    assert lcd.buffers[1].src_fi == 0x10000


@pytest.mark.parametrize("offset,attr", [
    (dma_lcd.CCR, "ccr"), (dma_lcd.CSDP, "csdp"),
    (dma_lcd.CTRL, "ctrl"), (dma_lcd.LCH_CTRL, "lch_ctrl"),
])
def test_plain_round_trip(lcd, offset, attr):
    lcd.write(B + offset, 2, 0x0F0F)
    assert lcd.read(B + offset, 2) == 0x0F0F
    assert getattr(lcd, attr) == 0x0F0F


def test_reset_clears_csdp_and_ctrl_only(lcd):
    lcd.write(B + dma_lcd.CSDP, 2, 0x55)
    lcd.write(B + dma_lcd.CTRL, 2, 0x66)
    lcd.write(B + dma_lcd.CCR, 2, 0x77)
    lcd.reset()
    assert lcd.csdp == 0
    assert lcd.ctrl == 0
    assert lcd.ccr == 0x77


def test_pedantic_rejects_word_on_ccr():
    lcd = OmapDmaLcd(pedantic=True)
    with pytest.raises(MmioError):
        lcd.read(B + dma_lcd.CCR, 4)
    assert lcd.read(B + dma_lcd.TOP_B1_L, 4) == 0


def test_unmapped_address(lcd):
    with pytest.raises(MmioError):
        lcd.read(B + 0xC6, 2)


def test_custom_base():
    lcd = OmapDmaLcd(base=0x1000)
    lcd.write(0x1000 + dma_lcd.CTRL, 2, 3)
    assert lcd.ctrl == 3


def test_buffer_defaults():
    assert LcdBuffer() == LcdBuffer(top=0, bot=0, src_ei=0, src_en=0,
                                    src_fi=0, src_fn=0)