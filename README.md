# pcal9555

This is a driver for the PCAL9555 16-bit I/O expander. The device has sixteen
pins in two 8-bit ports: pins 0–7 are port 0 and pins 8–15 are port 1. The
driver can:

- set pin directions
- read and write pin levels
- set up pull resistors
- set drive strength and output mode
- set polarity inversion and input latches
- handle interrupts

## Supplying the I2C bus

The driver does not open an I2C bus itself. Pass it an object that implements
the abstract class `pcal9555.driver.I2CBus`. That class has two methods:

- `write(address, register, data)` writes the bytes `data`, starting at
  `register`, to the device at `address`.
- `read(address, register, length)` reads `length` bytes, starting at
  `register`, and returns them as `bytes`.

If the device does not acknowledge a transfer, either method must raise
`OSError`.

## Installation

```
pip install pcal9555
```

## Example

```python
from pcal9555.driver import I2CBus, PCAL9555
from pcal9555.registers import DriveStrength, GPIODir


class MyBus(I2CBus):
    def write(self, address, register, data):
        ...  # send register + data; raise OSError on NACK

    def read(self, address, register, length):
        ...  # return `length` bytes read from register; raise OSError on NACK


gpio = PCAL9555(MyBus(), 0x20)
gpio.reset_to_default()
gpio.set_pin_direction(0, GPIODir.OUTPUT)
gpio.set_drive_strength(0, DriveStrength.LEVEL3)
gpio.toggle_pin(0)
level = gpio.read_pin(8)
```

### Configuration methods

These methods change one pin:

- `set_pin_direction`
- `write_pin`
- `toggle_pin`
- `set_pull_enable`
- `set_pull_direction`: `True` selects pull-up.
- `set_drive_strength`: takes `LEVEL0` to `LEVEL3`.
- `set_pin_polarity`
- `enable_input_latch`

`read_pin` returns a pin's input level as a `bool`.

These methods change every pin whose bit is set in a 16-bit mask:

- `set_multiple_directions`
- `set_multiple_polarities`
- `enable_multiple_input_latches`

`set_output_mode(port0_open_drain, port1_open_drain)` chooses open-drain or
push-pull for each port.

Each pin-level change reads the register, modifies it and writes it back. Bits
for other pins are left as they were.

`reset_to_default()` writes the power-on defaults to every control register:

- all pins are inputs and outputs are high
- pull-ups are enabled
- interrupts are masked
- drive strength is full
- outputs are push-pull

It attempts every register. If any write fails, it raises the first failure
once all registers have been attempted.

The register addresses and enums are in `pcal9555.registers`:

- `Register`
- `GPIODir`
- `Polarity`
- `DriveStrength`
- `OutputMode`
- `ErrorFlag`

`split_pin(pin)` maps a pin index to `(port, bit)`.

### Retries and errors

Each register transfer is tried `retries + 1` times. `retries` is a constructor
argument and also an attribute; its default is 1. If every attempt fails, the
driver raises an exception:

- A failed read raises `I2CReadError`.
- A failed write raises `I2CWriteError`.
- A pin index outside 0–15 raises `InvalidPinError`, which is also a
  `ValueError`.

All three derive from `PCAL9555Error`.

Failures are also latched in the `error_flags` property as `ErrorFlag` bits. A
later successful read or write clears the matching flag. A valid pin index
clears `INVALID_PIN`. `clear_error_flags(mask=0xFFFF)` clears the selected
flags.

### Interrupts

```python
gpio.configure_interrupt_mask(0xFFFE)  # a set bit masks a pin; only pin 0 is enabled
gpio.set_interrupt_callback(lambda status: print(f"pins: {status:016b}"))
gpio.handle_interrupt()  # call this from your INT line handler
```

`read_interrupt_status()` reads both status registers and returns the 16-bit
status. Reading the status also clears it on the device.

`handle_interrupt()` reads the status, passes it to the callback and returns
it. If no callback is set, it reads nothing and returns `None`.

## What the package does not do

The package contains no I2C bus implementation for any platform. It does not
watch the device's INT line. Your code must supply the bus and call
`handle_interrupt()` when an interrupt occurs.

## Running the tests

```
pip install -e .[test]
pytest
```