"""Monte Carlo forecasting of short-horizon epidemic case counts."""

from .engine import ForecastEngine

__all__ = ["ForecastEngine"]

__version__ = "0.1.0"
