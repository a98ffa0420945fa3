"""Errors raised at the upstream I/O boundary."""


class WeatherCompareError(Exception):
    pass


class LocationNotFoundError(WeatherCompareError):
    pass


class CoverageError(WeatherCompareError):
    pass


class ForecastUnavailableError(WeatherCompareError):
    pass


class SlotIndexError(WeatherCompareError, IndexError):
    pass
