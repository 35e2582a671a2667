"""Inmate Freeze -- spotlight pursuit/evasion simulation core."""

__version__ = "0.1.0"
