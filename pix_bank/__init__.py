"""pix-bank: in-memory retail banking with Pix-style instant transfers."""

__version__ = "0.1.0"
