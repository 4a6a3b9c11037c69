class LinterError(Exception):
    """Base class for errors raised by the lint host"""


class ConfigurationError(LinterError):
    """Invalid rule selection, rule options or configuration file"""


class SourceError(LinterError):
    """A source file could not be read"""
