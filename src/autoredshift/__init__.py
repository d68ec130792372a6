"""Time-of-day screen temperature, brightness and wallpaper automation."""

__version__ = "0.3.0"
