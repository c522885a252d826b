"""Clipboard, file, prompt and notification collaborators."""

from .clipboard import Clipboard
from .notifications import Notification, Notifier
from .prompts import always_confirm, confirm_padding
from .storage import read_text_file, save_data_to_file, scene_export_filename

__all__ = [
    "Clipboard",
    "Notification",
    "Notifier",
    "always_confirm",
    "confirm_padding",
    "read_text_file",
    "save_data_to_file",
    "scene_export_filename",
]
