"""TailorDesk: client and order management backend with session authentication."""

__version__ = "0.1.0"
