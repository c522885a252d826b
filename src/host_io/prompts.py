"""Blocking confirmation prompts."""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

PADDING_WARNING = (
    "The current scene has non-zero padding. This can cause wall positions "
    "to be incorrect when {verb}.\n"
    "It is recommended to set the scene padding to 0 before {verb} walls.\n"
    "You can change the padding in the scene configuration settings."
)


def padding_warning(operation: str) -> str:
    """Warning text for an "import" or "export"."""
    return PADDING_WARNING.format(verb=f"{operation}ing")


def confirm_padding(operation: str, input_func: Optional[Callable[[str], str]] = None) -> bool:
    """
    Ask whether to continue despite scene padding.

    Returns:
        True only if the user answers yes; end of input counts as no
    """
    print(padding_warning(operation))
    try:
        response = (input_func or input)(f"Continue {operation} anyway? (yes/no): ")
    except EOFError:
        logger.info("No input available for padding confirmation; cancelling")
        return False
    return response.strip().lower() in ("y", "yes")


def always_confirm(operation: str) -> bool:
    """Confirmation used with --yes."""
    logger.debug(f"Padding warning for {operation} auto-confirmed")
    return True
