"""Exception hierarchy for tellopad"""


class TelloPadError(Exception):
    pass


class ConfigurationError(TelloPadError):
    """Missing or unrecognised configuration; fatal before the loop starts."""


class ProfileLookupFault(ConfigurationError):
    """A device profile is missing a mapping the dispatcher relies on."""


class DeviceOpenError(TelloPadError):
    """The selected controller could not be opened."""


class DeviceReadError(TelloPadError):
    """A single poll failed; `partial` holds whatever state was readable."""

    def __init__(self, message, partial=None):
        super().__init__(message)
        self.partial = partial
