"""Registry of Locale objects keyed by language."""

from typing import Dict, List, Optional, Set

from pogettext.core.logging import get_module_logger
from pogettext.i18n.errors import DomainLoadError, GettextError, LocaleNotFoundError
from pogettext.i18n.locale import DEFAULT_DOMAIN, Locale, NullLocale
from pogettext.i18n.rwlock import ReadWriteLock
from pogettext.i18n.sources import Source

logger = get_module_logger()


class LocaleSet:
    """Thread-safe set of locales sharing one source and domain list.

    Domains registered with add_domain() are loaded into every locale
    added afterwards.

    Attributes:
        source: Byte source handed to each new Locale.
        default_domain: Default domain of each new Locale.
        strict: Strict-parsing flag of each new Locale.
    """

    def __init__(
        self,
        source: Optional[Source] = None,
        default_domain: str = DEFAULT_DOMAIN,
        strict: bool = False,
    ):
        self.source = source
        self.default_domain = default_domain
        self.strict = strict
        self._domains: Set[str] = set()
        self._locales: Dict[str, Locale] = {}
        self._lock = ReadWriteLock()

    def add_domain(self, domain: str) -> None:
        """Register ``domain`` for locales added from now on."""
        with self._lock.write_locked():
            self._domains.add(domain)

    def add_locale(self, language: str) -> Locale:
        """Create and load a Locale for ``language`` unless one exists.

        Args:
            language: Language code, e.g. "ja" or "pt_BR".

        Returns:
            The installed Locale (the existing one if already present).

        Raises:
            DomainLoadError: If any registered domain fails to load; nothing
                is installed in that case.
        """
        with self._lock.read_locked():
            existing = self._locales.get(language)
            domains = sorted(self._domains)
        if existing is not None:
            return existing

        locale = Locale(
            language,
            source=self.source,
            default_domain=self.default_domain,
            strict=self.strict,
        )
        for domain in domains:
            try:
                locale.add_domain(domain)
            except GettextError as e:
                logger.error(
                    "locale_domain_load_failed",
                    language=language,
                    domain=domain,
                    error=str(e),
                )
                raise DomainLoadError(
                    f"failed to load domain {domain} for locale {language}"
                ) from e

        with self._lock.write_locked():
            # Another thread may have installed it while we were loading
            installed = self._locales.setdefault(language, locale)
        logger.info("locale_added", language=language, domain_count=len(domains))
        return installed

    def set_locale(self, language: str, locale: Locale) -> None:
        """Install a prebuilt Locale under ``language``."""
        with self._lock.write_locked():
            self._locales[language] = locale

    def get_locale(self, language: str) -> Locale:
        """Return the Locale for ``language``.

        Raises:
            LocaleNotFoundError: If no locale is installed for ``language``.
        """
        with self._lock.read_locked():
            locale = self._locales.get(language)
        if locale is None:
            raise LocaleNotFoundError(f"locale not found: {language}")
        return locale

    def find_locale(self, language: str) -> Locale:
        """Return the Locale for ``language`` or a NullLocale fallback."""
        try:
            return self.get_locale(language)
        except LocaleNotFoundError:
            return NullLocale(language)

    def languages(self) -> List[str]:
        with self._lock.read_locked():
            return sorted(self._locales)
