"""Exceptions raised by speedo."""


class SpeedoError(Exception):
    """Base class for everything speedo raises on purpose."""


class ConfigurationError(SpeedoError, ValueError):
    """Bad construction parameters, e.g. a zero sampling interval."""
