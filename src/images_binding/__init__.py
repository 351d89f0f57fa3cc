"""Local images binding: validates image transform requests and drives an image engine."""

__version__ = "0.1.0"
