import pytest

from pcal9555.registers import (
    DriveStrength,
    ErrorFlag,
    GPIODir,
    OutputMode,
    Polarity,
    Register,
    split_pin,
)


@pytest.mark.parametrize(
    "register, address",
    [
        (Register.INPUT_PORT_0, 0x00),
        (Register.OUTPUT_PORT_1, 0x03),
        (Register.CONFIG_PORT_0, 0x06),
        (Register.DRIVE_STRENGTH_0, 0x40),
        (Register.PULL_SELECT_1, 0x49),
        (Register.INT_STATUS_0, 0x4C),
        (Register.OUTPUT_CONF, 0x4F),
    ],
)
def test_register_addresses(register, address):
    assert register == address


def test_register_addresses_are_unique():
    looked_up = [Register(int(reg)) for reg in Register]
    assert looked_up == list(Register)
    assert len({int(reg) for reg in looked_up}) == len(looked_up)


def test_direction_and_polarity_encoding():
    assert GPIODir(1) is GPIODir.INPUT
    assert GPIODir(0) is GPIODir.OUTPUT
    assert Polarity(1) is Polarity.INVERTED
    assert Polarity(0) is Polarity.NORMAL
    assert OutputMode(1) is OutputMode.OPEN_DRAIN
    assert OutputMode(0) is OutputMode.PUSH_PULL


def test_error_flags_combine():
    combined = ErrorFlag.INVALID_PIN | ErrorFlag.I2C_WRITE_FAIL
    rebuilt = ErrorFlag(int(combined))
    assert rebuilt == combined
    assert ErrorFlag.INVALID_PIN in rebuilt
    assert ErrorFlag.I2C_READ_FAIL not in rebuilt
    assert rebuilt & ErrorFlag.I2C_WRITE_FAIL == ErrorFlag.I2C_WRITE_FAIL


def test_drive_strength_fits_two_bits():
    assert all(0 <= level <= 3 for level in DriveStrength)
    assert DriveStrength(3) is DriveStrength.LEVEL3


@pytest.mark.parametrize("pin", range(16))
def test_split_pin_round_trip(pin):
    port, bit = split_pin(pin)
    assert port in (0, 1)
    assert 0 <= bit < 8
    assert port * 8 + bit == pin


def test_split_pin_first_and_second_port():
    assert split_pin(0) == (0, 0)
    assert split_pin(8) == (1, 0)


@pytest.mark.parametrize("pin", [16, 20, -1])
def test_split_pin_rejects_out_of_range(pin):
    with pytest.raises(ValueError):
        split_pin(pin)