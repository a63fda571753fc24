class ConferenceDataError(Exception):
    """Base class for conference data failures."""


class LoadError(ConferenceDataError):
    """The raw document could not be fetched or is malformed."""


class RangeError(ConferenceDataError, IndexError):
    """A day index falls outside the schedule."""
