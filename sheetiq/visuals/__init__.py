from .predictions import plot_forecast, plot_regression

__all__ = ["plot_forecast", "plot_regression"]
