"""Zero-config component explorer for React applications."""

__version__ = "1.0.0"
