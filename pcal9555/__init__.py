"""Driver for the PCAL9555 16-bit I2C GPIO expander: register map and device driver."""

__version__ = "1.0.0"
__all__ = ["driver", "registers"]