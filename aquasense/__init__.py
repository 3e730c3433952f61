"""Sampling, filtering and scheduling for temperature, TDS and pH sensors, with uptime, I2C retry and message framing helpers."""

__version__ = "0.1.0"