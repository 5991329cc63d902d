"""Register map and configuration enums for the PCAL9555 I/O expander."""

from enum import IntEnum, IntFlag

PINS_PER_PORT = 8
PIN_COUNT = 16


class Register(IntEnum):
    """Addresses of the device's control registers."""

    INPUT_PORT_0 = 0x00
    INPUT_PORT_1 = 0x01
    OUTPUT_PORT_0 = 0x02
    OUTPUT_PORT_1 = 0x03
    POLARITY_INV_0 = 0x04
    POLARITY_INV_1 = 0x05
    CONFIG_PORT_0 = 0x06
    CONFIG_PORT_1 = 0x07
    DRIVE_STRENGTH_0 = 0x40
    DRIVE_STRENGTH_1 = 0x41
    DRIVE_STRENGTH_2 = 0x42
    DRIVE_STRENGTH_3 = 0x43
    INPUT_LATCH_0 = 0x44
    INPUT_LATCH_1 = 0x45
    PULL_ENABLE_0 = 0x46
    PULL_ENABLE_1 = 0x47
    PULL_SELECT_0 = 0x48
    PULL_SELECT_1 = 0x49
    INT_MASK_0 = 0x4A
    INT_MASK_1 = 0x4B
    INT_STATUS_0 = 0x4C
    INT_STATUS_1 = 0x4D
    OUTPUT_CONF = 0x4F


class GPIODir(IntEnum):
    """Pin direction as stored in the configuration registers."""

    OUTPUT = 0
    INPUT = 1


class Polarity(IntEnum):
    """Input polarity inversion."""

    NORMAL = 0
    INVERTED = 1


class DriveStrength(IntEnum):
    """Output drive strength, from a quarter (LEVEL0) to full (LEVEL3)."""

    LEVEL0 = 0
    LEVEL1 = 1
    LEVEL2 = 2
    LEVEL3 = 3


class OutputMode(IntEnum):
    """Port output stage configuration."""

    PUSH_PULL = 0
    OPEN_DRAIN = 1


class ErrorFlag(IntFlag):
    """Error conditions latched by the driver."""

    NONE = 0
    INVALID_PIN = 1 << 0
    INVALID_MASK = 1 << 1
    I2C_READ_FAIL = 1 << 2
    I2C_WRITE_FAIL = 1 << 3


def split_pin(pin):
    """Return ``(port, bit)`` for a pin index in the range 0-15."""
    if not 0 <= pin < PIN_COUNT:
        raise ValueError(f"pin {pin} out of range 0-{PIN_COUNT - 1}")
    return divmod(pin, PINS_PER_PORT)