"""Compare daily forecasts, RealFeel ranges and alerts across U.S. locations."""

__version__ = "0.1.0"
