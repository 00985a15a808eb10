"""Custom exceptions for the gettext catalog system.

Lookups never raise: every exception here comes from loading, parsing or
registry access.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pogettext.i18n.models import Po


class GettextError(Exception):
    """Base exception for all pogettext errors.

    Example:
        try:
            locale.add_domain("messages")
        except GettextError as e:
            logger.error("gettext_error", error=str(e))
    """

    pass


class QuotedStringError(GettextError, ValueError):
    """Raised when a C-style quoted literal cannot be decoded."""

    pass


class PluralExpressionError(GettextError, ValueError):
    """Raised when a Plural-Forms formula cannot be tokenized, parsed or evaluated."""

    pass


class PoParseError(GettextError):
    """Raised by a strict parser when a line or the header block is malformed.

    The partially built catalog is kept on the exception so callers may
    decide to run with degraded data.

    Attributes:
        catalog: Catalog holding every entry committed before the failure.
        line_number: 1-based line of the failure, or None for header errors.
        line: The offending (trimmed) line, or None for header errors.
    """

    def __init__(
        self,
        message: str,
        catalog: "Po",
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ):
        super().__init__(message)
        self.catalog = catalog
        self.line_number = line_number
        self.line = line


class SourceNotFoundError(GettextError):
    """Raised when a byte source cannot resolve an identifier."""

    pass


class DomainNotFoundError(GettextError):
    """Raised when no .po file exists for a domain in a locale.

    Example:
        >>> Locale("fr").add_domain("missing")
        Traceback (most recent call last):
        ...
        DomainNotFoundError: No .po file found for domain 'missing' (locale 'fr')
    """

    pass


class DomainLoadError(GettextError):
    """Raised when a domain file was found but could not be loaded."""

    pass


class LocaleNotFoundError(GettextError, KeyError):
    """Raised when a LocaleSet has no locale for the requested language."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0]) if self.args else ""
