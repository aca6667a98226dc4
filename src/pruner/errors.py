"""Errors raised while pruning branches."""


class PruneError(Exception):
    """Base class for every error that aborts a pruning session."""


class BackendError(PruneError):
    """Repository operation error."""


class EncodingError(PruneError):
    """Branch name is not valid UTF-8."""


class TerminalIOError(PruneError):
    """Reading from or writing to the terminal failed."""


class TerminalModeError(PruneError):
    """Terminal could not be switched into raw mode."""


class InvalidInputError(PruneError):
    """Keystroke that does not map to any action."""

    def __init__(self, key: str) -> None:
        """Initialize error.

        Args:
            key: The character the user typed
        """
        super().__init__(f"Invalid input. Don't know what '{key}' means")
        self.key = key
