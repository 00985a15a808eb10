"""Positional printf-style formatting of looked-up messages."""

from collections.abc import Mapping
from typing import Any, Sequence

from pogettext.core.logging import get_module_logger

logger = get_module_logger()


def format_message(message: str, args: Sequence[Any]) -> str:
    """Substitute ``%``-style placeholders in a translated message.

    Placeholder/argument mismatches are not an error: the message is
    returned unformatted so a lookup always yields a string.

    Args:
        message: Translated or fallback text, e.g. ``"%d items"``.
        args: Positional values; a single mapping enables ``%(name)s`` keys.

    Returns:
        The formatted message, or ``message`` unchanged when there are no
        arguments or they do not fit the placeholders.
    """
    if not args:
        return message

    values: Any = tuple(args)
    if len(args) == 1 and isinstance(args[0], Mapping):
        values = args[0]

    try:
        return message % values
    except (TypeError, ValueError, KeyError) as e:
        logger.debug(
            "format_arguments_mismatch",
            message=message,
            arg_count=len(args),
            error=str(e),
        )
        return message
