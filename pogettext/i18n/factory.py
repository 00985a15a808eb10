"""Factory functions for creating gettext components.

Provides convenience functions that build locales from the configured
locales directory and parsing mode.
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from pogettext.core.config import settings
from pogettext.core.logging import get_module_logger
from pogettext.i18n.locale import Locale
from pogettext.i18n.locale_set import LocaleSet
from pogettext.i18n.sources import FileSystemSource

logger = get_module_logger()


def create_locale(
    language: str,
    locales_dir: Optional[Union[str, Path]] = None,
    domains: Optional[Iterable[str]] = None,
    default_domain: Optional[str] = None,
    strict: Optional[bool] = None,
) -> Locale:
    """Create a Locale backed by the filesystem and load its domains.

    Args:
        language: Language code (e.g. "fr", "pt_BR").
        locales_dir: Root of the .po tree (default: settings.gettext.LOCALES_DIR).
        domains: Domains to load now (default: just the default domain).
        default_domain: Domain for unsuffixed lookups
            (default: settings.gettext.DEFAULT_DOMAIN).
        strict: Strict parsing (default: settings.gettext.STRICT_PARSING).

    Returns:
        Locale with the requested domains loaded.

    Raises:
        DomainNotFoundError: If a requested domain has no .po file.
        DomainLoadError: If strict parsing rejects a domain file.

    Usage:
        # Use configured defaults
        locale = create_locale("fr")

        # Several domains from a custom tree
        locale = create_locale("fr", locales_dir="/srv/locales", domains=["app", "errors"])
    """
    config = settings.gettext
    root = Path(locales_dir if locales_dir is not None else config.LOCALES_DIR)
    default_domain = default_domain or config.DEFAULT_DOMAIN
    strict = config.STRICT_PARSING if strict is None else strict

    locale = Locale(
        language,
        source=FileSystemSource(root),
        default_domain=default_domain,
        strict=strict,
    )
    to_load = list(domains) if domains is not None else [default_domain]
    for domain in to_load:
        locale.add_domain(domain)

    logger.info(
        "locale_created",
        language=language,
        locales_dir=str(root),
        domains=to_load,
        strict=strict,
    )
    return locale


def create_locale_set(
    languages: Iterable[str],
    domains: Optional[Iterable[str]] = None,
    locales_dir: Optional[Union[str, Path]] = None,
    default_domain: Optional[str] = None,
    strict: Optional[bool] = None,
) -> LocaleSet:
    """Create a LocaleSet and load every language with every domain.

    Arguments default to the gettext settings as in create_locale().

    Raises:
        DomainLoadError: If any language is missing a domain or fails to parse.
    """
    config = settings.gettext
    root = Path(locales_dir if locales_dir is not None else config.LOCALES_DIR)
    default_domain = default_domain or config.DEFAULT_DOMAIN

    locale_set = LocaleSet(
        source=FileSystemSource(root),
        default_domain=default_domain,
        strict=config.STRICT_PARSING if strict is None else strict,
    )
    for domain in domains if domains is not None else [default_domain]:
        locale_set.add_domain(domain)
    for language in languages:
        locale_set.add_locale(language)

    logger.info(
        "locale_set_created",
        locales_dir=str(root),
        languages=locale_set.languages(),
    )
    return locale_set
