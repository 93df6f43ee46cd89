# omapsoc

Register-level models of the peripherals found on an OMAP-family
system-on-chip, for use inside an ARM system emulator.

Each peripheral is a `Peripheral` (from `omapsoc.mmio`). It knows the
physical addresses it answers to and handles reads and writes of 1, 2 or
4 bytes at those addresses. A bus or memory map in your emulator routes
accesses to the right peripheral and calls `read`, `write` or `access`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Peripherals

| Module               | Class                  | Block                                   |
|----------------------|------------------------|-----------------------------------------|
| `omapsoc.mmio`       | `MpuMmc`               | MPU MMC controller registers            |
| `omapsoc.cfg`        | `OmapConfig`           | Pin mux and module configuration        |
| `omapsoc.misc`       | `OmapMisc`             | SPI, I2C, SoSSI and other registers     |
| `omapsoc.dma`        | `OmapDma`              | System DMA global and channel registers |
| `omapsoc.dma_lcd`    | `OmapDmaLcd`           | DMA LCD channel registers               |
| `omapsoc.dpll`       | `OmapDpll`             | DPLL1 control                           |
| `omapsoc.gp_timer`   | `OmapGpTimer`          | General-purpose timer registers         |
| `omapsoc.mpu`        | `OmapMpu`              | MPU clock and reset control             |
| `omapsoc.lcd`        | `OmapLcd`              | LCD controller                          |
| `omapsoc.ihr`        | `OmapInterruptHandler` | Level 1 and level 2 interrupt handlers  |
| `omapsoc.gpio`       | `OmapMpuGpio`          | MPU GPIO modules 1 to 4                 |
| `omapsoc.uart`       | `OmapUart`             | UART 1 to 3                             |
| `omapsoc.mpu_timer`  | `OmapMpuTimer`         | MPU timers 1 to 3                       |
| `omapsoc.os_timer`   | `OmapOsTimer`          | OS timer                                |

## Use

```python
from omapsoc.dpll import OmapDpll

dpll = OmapDpll()
dpll.reset()

for ppa in dpll.addresses():
    print(hex(ppa))

dpll.write(0xFFFECF00, 2, 0x0010)    # set PLL_ENABLE
assert dpll.read(0xFFFECF00, 2) & 1  # LOCK follows PLL_ENABLE
```

Every peripheral has:

- `addresses()` — the physical addresses it handles, in ascending order;
- `read(ppa, size)` and `write(ppa, size, value)` — one register access;
- `access(ppa, size, value)` — a read when `value` is `None`, a write
  otherwise;
- `reset()` — load the register reset values.

Accessing an address a peripheral does not handle, using a size other than
1, 2 or 4, or an access the register model rejects (for example reading the
UART interrupt identification register, or reading an MPU timer load
register) raises `omapsoc.mmio.MmioError`.

Pass `pedantic=True` to a peripheral's constructor to have it also refuse
accesses whose size does not match the register's width.

`OmapMpuTimer` counts down against a cycle clock that you supply as a
callable returning the current cycle count:

```python
from omapsoc.mpu_timer import OmapMpuTimer

cycles = 0
timer = OmapMpuTimer(clock=lambda: cycles)
```

Register writes are described field by field in log messages at `DEBUG`
level, through each module's `logging` logger (for example
`omapsoc.dma`).

## What the package does not do

The package holds register models only. It does not execute ARM code, has
no bus or memory map that ties the peripherals together, loads no firmware
and has no command-line program. It also has no NAND flash model: the
external memory chip selects are left for the embedding emulator to serve.