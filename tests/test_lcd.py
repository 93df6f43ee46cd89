import pytest

from omapsoc.lcd import (
    CTRL,
    DISPLAY_STATUS,
    LCD_BASE,
    LINEINT,
    RESET_VALUES,
    STATUS,
    SUBPANEL,
    TIMING0,
    TIMING1,
    TIMING2,
    OmapLcd,
)
from omapsoc.mmio import MmioError


@pytest.fixture
def lcd():
    unit = OmapLcd(pedantic=True)
    unit.reset()
    return unit


def test_reset_values(lcd):
    assert lcd.read(LCD_BASE + DISPLAY_STATUS, 4) == 0x3FF
    assert lcd.read(LCD_BASE + TIMING0, 4) == 0xF
    assert lcd.read(LCD_BASE + CTRL, 4) == 0


@pytest.mark.parametrize("offset", [CTRL, TIMING0, TIMING1, TIMING2,
                                    STATUS, SUBPANEL, LINEINT])
def test_write_read_round_trip(lcd, offset):
    assert lcd.write(LCD_BASE + offset, 4, 0x12345678) == 0x12345678
    assert lcd.read(LCD_BASE + offset, 4) == 0x12345678


def test_display_status_is_read_only(lcd):
    assert lcd.write(LCD_BASE + DISPLAY_STATUS, 4, 0) == RESET_VALUES["display_status"]
    assert lcd.read(LCD_BASE + DISPLAY_STATUS, 4) == RESET_VALUES["display_status"]


def test_reset_restores_after_writes(lcd):
    lcd.write(LCD_BASE + TIMING0, 4, 0xABCDEF01)
    lcd.write(LCD_BASE + CTRL, 4, 1)
    lcd.reset()
    assert lcd.regs == RESET_VALUES


def test_registers_are_independent(lcd):
    lcd.write(LCD_BASE + TIMING1, 4, 0x55)
    assert lcd.read(LCD_BASE + TIMING2, 4) == 0
    assert lcd.read(LCD_BASE + TIMING1, 4) == 0x55


def test_pedantic_rejects_halfword(lcd):
    with pytest.raises(MmioError):
        lcd.read(LCD_BASE + CTRL, 2)


def test_addresses_cover_eight_registers(lcd):
    assert lcd.addresses() == [LCD_BASE + off for off in range(0, 0x20, 4)]


def test_unknown_address(lcd):
    with pytest.raises(MmioError):
        lcd.read(LCD_BASE + 0x20, 4)