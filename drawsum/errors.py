"""Exceptions raised by the summary pipeline."""


class ConfigurationError(ValueError):
    """A summary request that cannot be carried out as configured.

    Raised when no columns resolve for summarization, or when a wide
    multi-column summary would need more than one interval per cell.
    """
