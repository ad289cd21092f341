"""Single-restaurant ordering client: menu, staged quantities and cart."""

__version__ = "1.0.0"
