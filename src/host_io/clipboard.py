"""System clipboard access."""

import logging

import pyperclip

from exceptions import ClipboardError

logger = logging.getLogger(__name__)


class Clipboard:
    """Reads and writes UTF-8 text on the system clipboard."""

    def read_text(self) -> str:
        """
        Raises:
            ClipboardError: If no clipboard mechanism is available
        """
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.error(f"Clipboard read failed: {e}")
            raise ClipboardError(f"Failed to read clipboard: {e}") from e
        logger.debug(f"Read {len(text or '')} characters from clipboard")
        return text or ""

    def write_text(self, text: str) -> None:
        """
        Raises:
            ClipboardError: If no clipboard mechanism is available
        """
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.error(f"Clipboard write failed: {e}")
            raise ClipboardError(f"Failed to write clipboard: {e}") from e
        logger.debug(f"Wrote {len(text)} characters to clipboard")
