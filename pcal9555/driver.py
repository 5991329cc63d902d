"""Driver for the PCAL9555 16-bit I²C GPIO expander."""

from abc import ABC, abstractmethod

from pcal9555.registers import (
    DriveStrength,
    ErrorFlag,
    GPIODir,
    Polarity,
    Register,
    split_pin,
)

_INPUT = (Register.INPUT_PORT_0, Register.INPUT_PORT_1)
_OUTPUT = (Register.OUTPUT_PORT_0, Register.OUTPUT_PORT_1)
_POLARITY = (Register.POLARITY_INV_0, Register.POLARITY_INV_1)
_CONFIG = (Register.CONFIG_PORT_0, Register.CONFIG_PORT_1)
_LATCH = (Register.INPUT_LATCH_0, Register.INPUT_LATCH_1)
_PULL_ENABLE = (Register.PULL_ENABLE_0, Register.PULL_ENABLE_1)
_PULL_SELECT = (Register.PULL_SELECT_0, Register.PULL_SELECT_1)
_DRIVE_BASE = (Register.DRIVE_STRENGTH_0, Register.DRIVE_STRENGTH_2)

_DEFAULTS = (
    (Register.OUTPUT_PORT_0, 0xFF),
    (Register.OUTPUT_PORT_1, 0xFF),
    (Register.POLARITY_INV_0, 0x00),
    (Register.POLARITY_INV_1, 0x00),
    (Register.CONFIG_PORT_0, 0xFF),
    (Register.CONFIG_PORT_1, 0xFF),
    (Register.DRIVE_STRENGTH_0, 0xFF),
    (Register.DRIVE_STRENGTH_1, 0xFF),
    (Register.DRIVE_STRENGTH_2, 0xFF),
    (Register.DRIVE_STRENGTH_3, 0xFF),
    (Register.INPUT_LATCH_0, 0x00),
    (Register.INPUT_LATCH_1, 0x00),
    (Register.PULL_ENABLE_0, 0xFF),
    (Register.PULL_ENABLE_1, 0xFF),
    (Register.PULL_SELECT_0, 0xFF),
    (Register.PULL_SELECT_1, 0xFF),
    (Register.INT_MASK_0, 0xFF),
    (Register.INT_MASK_1, 0xFF),
    (Register.OUTPUT_CONF, 0x00),
)


class PCAL9555Error(Exception):
    """Base class for driver errors."""


class InvalidPinError(PCAL9555Error, ValueError):
    """A pin index outside 0-15 was given."""

    def __init__(self, pin):
        super().__init__(f"invalid pin {pin}; expected 0-15")
        self.pin = pin


class I2CReadError(PCAL9555Error):
    """A register read failed on every attempt."""

    def __init__(self, register):
        super().__init__(f"I2C read of register 0x{int(register):02X} failed")
        self.register = register


class I2CWriteError(PCAL9555Error):
    """A register write failed on every attempt."""

    def __init__(self, register):
        super().__init__(f"I2C write of register 0x{int(register):02X} failed")
        self.register = register


class I2CBus(ABC):
    """Low-level I²C access supplied by the platform.

    Implementations raise ``OSError`` when the device does not acknowledge.
    """

    @abstractmethod
    def write(self, address, register, data):
        """Write ``data`` (bytes) starting at ``register`` of the device at ``address``."""

    @abstractmethod
    def read(self, address, register, length):
        """Read ``length`` bytes starting at ``register``; return them as bytes."""


def _update_bits(value, bits, set_them):
    return (value | bits) if set_them else (value & ~bits & 0xFF)


class PCAL9555:
    """A PCAL9555 expander on an I²C bus.

    Each transfer is tried ``retries + 1`` times before failing.  Failures raise
    and are also latched in :attr:`error_flags`; a later success of the same
    kind of transfer clears its flag.
    """

    def __init__(self, bus, address, retries=1):
        self._bus = bus
        self.address = address
        self.retries = retries
        self._error_flags = 0
        self._callback = None

    @property
    def error_flags(self):
        """Currently latched error conditions."""
        return ErrorFlag(self._error_flags)

    def clear_error_flags(self, mask=0xFFFF):
        """Clear the latched flags selected by ``mask`` (all by default)."""
        self._error_flags &= ~int(mask)

    def _set_flag(self, flag):
        self._error_flags |= int(flag)

    def _clear_flag(self, flag):
        self._error_flags &= ~int(flag)

    def _read_register(self, register):
        for _ in range(self.retries + 1):
            try:
                data = self._bus.read(self.address, int(register), 1)
            except OSError:
                continue
            self._clear_flag(ErrorFlag.I2C_READ_FAIL)
            return data[0]
        self._set_flag(ErrorFlag.I2C_READ_FAIL)
        raise I2CReadError(register)

    def _write_register(self, register, value):
        payload = bytes([value & 0xFF])
        for _ in range(self.retries + 1):
            try:
                self._bus.write(self.address, int(register), payload)
            except OSError:
                continue
            self._clear_flag(ErrorFlag.I2C_WRITE_FAIL)
            return
        self._set_flag(ErrorFlag.I2C_WRITE_FAIL)
        raise I2CWriteError(register)

    def _locate(self, pin):
        try:
            port, bit = split_pin(pin)
        except ValueError:
            self._set_flag(ErrorFlag.INVALID_PIN)
            raise InvalidPinError(pin) from None
        self._clear_flag(ErrorFlag.INVALID_PIN)
        return port, bit

    def _modify_pin(self, bank, pin, set_it):
        port, bit = self._locate(pin)
        register = bank[port]
        value = self._read_register(register)
        self._write_register(register, _update_bits(value, 1 << bit, set_it))

    def _modify_mask(self, bank, mask, set_them):
        for port, register in enumerate(bank):
            bits = (mask >> (8 * port)) & 0xFF
            value = self._read_register(register)
            self._write_register(register, _update_bits(value, bits, set_them))

    def reset_to_default(self):
        """Write the datasheet power-on defaults to every control register.

        Every register is attempted; if any write failed, the first failure
        is raised afterwards.
        """
        first_failure = None
        for register, value in _DEFAULTS:
            try:
                self._write_register(register, value)
            except I2CWriteError as exc:
                first_failure = first_failure or exc
        if first_failure is not None:
            raise first_failure

    def set_pin_direction(self, pin, direction):
        """Configure one pin as input or output."""
        self._modify_pin(_CONFIG, pin, GPIODir(direction) is GPIODir.INPUT)

    def set_multiple_directions(self, mask, direction):
        """Configure every pin whose bit is set in ``mask``."""
        self._clear_flag(ErrorFlag.INVALID_MASK)
        self._modify_mask(_CONFIG, mask, GPIODir(direction) is GPIODir.INPUT)

    def read_pin(self, pin):
        """Return the input level of a pin."""
        port, bit = self._locate(pin)
        return bool(self._read_register(_INPUT[port]) & (1 << bit))

    def write_pin(self, pin, value):
        """Set the output level of a pin."""
        self._modify_pin(_OUTPUT, pin, bool(value))

    def toggle_pin(self, pin):
        """Invert the output level of a pin."""
        port, bit = self._locate(pin)
        register = _OUTPUT[port]
        value = self._read_register(register)
        self._write_register(register, value ^ (1 << bit))

    def set_pull_enable(self, pin, enable):
        """Enable or disable the pull resistor of a pin."""
        self._modify_pin(_PULL_ENABLE, pin, bool(enable))

    def set_pull_direction(self, pin, pull_up):
        """Select pull-up (True) or pull-down (False) for a pin."""
        self._modify_pin(_PULL_SELECT, pin, bool(pull_up))

    def set_drive_strength(self, pin, level):
        """Set the two-bit output drive strength of a pin."""
        level = DriveStrength(level)
        port, index = self._locate(pin)
        register = Register(_DRIVE_BASE[port] + (1 if index >= 4 else 0))
        shift = (index % 4) * 2
        value = self._read_register(register)
        value = (value & ~(0x3 << shift) & 0xFF) | (int(level) << shift)
        self._write_register(register, value)

    def configure_interrupt_mask(self, mask):
        """Write the interrupt mask; a set bit masks (disables) that pin."""
        self._write_register(Register.INT_MASK_0, mask & 0xFF)
        self._write_register(Register.INT_MASK_1, (mask >> 8) & 0xFF)

    def read_interrupt_status(self):
        """Read (and thereby clear) the 16-bit interrupt status."""
        failure = None
        halves = []
        for register in (Register.INT_STATUS_0, Register.INT_STATUS_1):
            try:
                halves.append(self._read_register(register))
            except I2CReadError as exc:
                failure = failure or exc
                halves.append(0)
        if failure is not None:
            raise failure
        low, high = halves
        return (high << 8) | low

    def set_output_mode(self, port0_open_drain, port1_open_drain):
        """Choose open-drain (True) or push-pull (False) for each port."""
        value = (int(bool(port1_open_drain)) << 1) | int(bool(port0_open_drain))
        self._write_register(Register.OUTPUT_CONF, value)

    def set_pin_polarity(self, pin, polarity):
        """Set input polarity inversion for one pin."""
        self._modify_pin(_POLARITY, pin, Polarity(polarity) is Polarity.INVERTED)

    def set_multiple_polarities(self, mask, polarity):
        """Set input polarity for every pin whose bit is set in ``mask``."""
        self._modify_mask(_POLARITY, mask, Polarity(polarity) is Polarity.INVERTED)

    def enable_input_latch(self, pin, enable):
        """Enable or disable the input latch of one pin."""
        self._modify_pin(_LATCH, pin, bool(enable))

    def enable_multiple_input_latches(self, mask, enable):
        """Enable or disable the input latch of every pin selected by ``mask``."""
        self._clear_flag(ErrorFlag.INVALID_MASK)
        self._modify_mask(_LATCH, mask, bool(enable))

    def set_interrupt_callback(self, callback):
        """Register a callable taking the 16-bit status mask, or None to clear it."""
        self._callback = callback

    def handle_interrupt(self):
        """Read the interrupt status and pass it to the callback, if one is set.

        Returns the status that was delivered, or None when no callback is set.
        """
        if self._callback is None:
            return None
        status = self.read_interrupt_status()
        self._callback(status)
        return status