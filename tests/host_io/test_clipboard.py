"""Tests for the pyperclip-backed clipboard."""

import pytest
import pyperclip
from unittest.mock import patch


@pytest.mark.unit
class TestClipboard:
    """Tests for Clipboard read/write."""

    def test_read_text(self):
        from host_io.clipboard import Clipboard

        with patch("host_io.clipboard.pyperclip.paste", return_value='[{"c": [0, 0, 1, 1]}]'):
            assert Clipboard().read_text() == '[{"c": [0, 0, 1, 1]}]'

    def test_read_empty_clipboard(self):
        """An empty clipboard reads as an empty string."""
        from host_io.clipboard import Clipboard

        with patch("host_io.clipboard.pyperclip.paste", return_value=None):
            assert Clipboard().read_text() == ""

    def test_read_failure(self):
        from exceptions import ClipboardError
        from host_io.clipboard import Clipboard

        error = pyperclip.PyperclipException("no copy/paste mechanism")
        with patch("host_io.clipboard.pyperclip.paste", side_effect=error):
            with pytest.raises(ClipboardError, match="Failed to read clipboard"):
                Clipboard().read_text()

    def test_write_text(self):
        from host_io.clipboard import Clipboard

        with patch("host_io.clipboard.pyperclip.copy") as mock_copy:
            Clipboard().write_text("http://localhost:30000/a.webp")

        mock_copy.assert_called_once_with("http://localhost:30000/a.webp")

    def test_write_failure(self):
        from exceptions import ClipboardError
        from host_io.clipboard import Clipboard

        error = pyperclip.PyperclipException("no copy/paste mechanism")
        with patch("host_io.clipboard.pyperclip.copy", side_effect=error):
            with pytest.raises(ClipboardError, match="Failed to write clipboard"):
                Clipboard().write_text("x")
