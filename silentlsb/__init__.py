"""Hide data in WAVE audio samples; YCbCr, stego-table and pixel-block tools for images."""

__version__ = "0.1.0"