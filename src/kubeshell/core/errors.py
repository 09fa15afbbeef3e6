# src/kubeshell/core/errors.py


class KubeShellError(Exception):
    """Base class for every failure the CLI reports instead of crashing."""


class ColumnConfigError(KubeShellError):
    """
    A command asked for a column (or sort key) it has no extractor for.
    This is a wiring bug in the calling command, never a user error.
    """


class TimestampError(KubeShellError, ValueError):
    """A creation timestamp was present but not a valid RFC 3339 instant."""


class FilterPatternError(KubeShellError):
    """The user supplied filter regex does not compile."""
