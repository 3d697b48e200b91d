"""Encryption, compression, client versions and asset loading for Ultima Online compatible software."""

__version__ = "0.1.0"