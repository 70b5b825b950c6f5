"""Exceptions raised by reply-tui."""


class ReplyError(Exception):
    """Base class for reply-tui errors."""

    pass


class CompletionError(ReplyError):
    """Raised when a completion callback returns a malformed result."""

    pass


class SettingsError(ReplyError):
    """Raised when settings hold invalid values."""

    pass
