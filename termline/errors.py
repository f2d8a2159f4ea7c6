# errors.py


class TermlineError(Exception):
    """Base class for all termline errors."""


class ConfigurationError(TermlineError, ValueError):
    """Raised when a setting or argument can't be used as given."""


class InvalidWidthError(ConfigurationError):
    """A wrap width below 1, a negative tab width, or an unusable COLUMNS value."""


class InvalidColorError(ConfigurationError):
    """An RGB value that isn't three decimal channels in 0..255."""


class InvalidThemeError(ConfigurationError):
    """A theme override other than 'dark' or 'light'."""
