"""Raw mode terminal input and output."""

import logging
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional, TextIO

from pruner.errors import TerminalIOError, TerminalModeError

logger = logging.getLogger(__name__)

# Raw mode turns off output post-processing, so lines end with an explicit CR.
NEWLINE = "\r\n"

# Index of the output flags in a termios attribute list
OFLAG = 1


class Terminal:
    """Single keystroke reads and CRLF line writes over a pair of streams."""

    def __init__(self, stdin: BinaryIO, stdout: TextIO) -> None:
        self.stdin = stdin
        self.stdout = stdout

    def is_tty(self) -> bool:
        try:
            return self.stdin.isatty()
        except ValueError:
            return False

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Switch stdin into raw mode for the duration of the block.

        The saved attributes are restored on every exit path. A failure to
        restore is logged and otherwise ignored so it never hides the error
        that ended the block. Streams that are not a TTY are left untouched.
        """
        if not self.is_tty():
            logger.debug("stdin is not a terminal, not entering raw mode")
            yield
            return

        import termios
        import tty

        try:
            fd = self.stdin.fileno()
            saved = termios.tcgetattr(fd)
            tty.setraw(fd)
            # Keep output post-processing so log records on stderr start at column 0
            mode = termios.tcgetattr(fd)
            mode[OFLAG] |= termios.OPOST
            termios.tcsetattr(fd, termios.TCSANOW, mode)
        except (termios.error, OSError) as err:
            raise TerminalModeError(f"Failed to enable raw mode: {err}") from err
        logger.debug("Entered raw mode")

        try:
            yield
        finally:
            try:
                termios.tcsetattr(fd, termios.TCSADRAIN, saved)
                logger.debug("Left raw mode")
            except (termios.error, OSError) as err:
                logger.debug("Failed to restore terminal mode: %s", err)

    def read_key(self) -> Optional[str]:
        """Block until one byte is read. Returns None once input is closed."""
        try:
            data = self.stdin.read(1)
        except OSError as err:
            raise TerminalIOError(f"Failed to read from terminal: {err}") from err
        if not data:
            return None
        return chr(data[0])

    def write(self, text: str) -> None:
        try:
            self.stdout.write(text)
        except OSError as err:
            raise TerminalIOError(f"Failed to write to terminal: {err}") from err

    def writeline(self, text: str = "") -> None:
        self.write(text + NEWLINE)
        self.flush()

    def flush(self) -> None:
        try:
            self.stdout.flush()
        except OSError as err:
            raise TerminalIOError(f"Failed to flush terminal: {err}") from err
