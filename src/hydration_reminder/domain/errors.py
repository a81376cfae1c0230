"""Error types raised by the reminder core."""


class HydrationReminderError(Exception):
    """Base error for the hydration reminder."""


class InvalidConfigurationError(HydrationReminderError, ValueError):
    """Raised when settings input cannot produce a valid schedule."""


class CapabilityUnavailableError(HydrationReminderError):
    """Raised when the host cannot deliver notifications."""
