"""Tests for pogettext.i18n.locale_set module."""

import threading

import pytest

from pogettext.i18n import (
    DomainLoadError,
    FileSystemSource,
    Locale,
    LocaleNotFoundError,
    LocaleSet,
    NullLocale,
)


class TestLocaleSet:
    """Tests for LocaleSet."""

    @pytest.fixture
    def locale_set(self, locales_dir):
        locale_set = LocaleSet(source=FileSystemSource(locales_dir))
        locale_set.add_domain("default")
        return locale_set

    def test_add_locale_loads_registered_domains(self, locale_set):
        """add_locale() loads every registered domain."""
        locale = locale_set.add_locale("fr")
        assert locale.get("Hello") == "Bonjour"
        assert locale_set.get_locale("fr") is locale

    def test_add_locale_is_idempotent(self, locale_set):
        """Adding the same language twice returns the existing Locale."""
        first = locale_set.add_locale("fr")
        assert locale_set.add_locale("fr") is first

    def test_multiple_languages(self, locale_set):
        """Each language resolves independently."""
        locale_set.add_locale("fr")
        locale_set.add_locale("de")
        assert locale_set.get_locale("de").get("Hello") == "Hallo"
        assert locale_set.get_locale("fr").get("Hello") == "Bonjour"
        assert locale_set.languages() == ["de", "fr"]

    def test_add_locale_failure_installs_nothing(self, locale_set):
        """A domain missing for the language raises DomainLoadError."""
        locale_set.add_domain("errors")
        with pytest.raises(DomainLoadError):
            locale_set.add_locale("de")
        assert locale_set.languages() == []

    def test_get_locale_missing(self, locale_set):
        """get_locale() raises LocaleNotFoundError for unknown languages."""
        with pytest.raises(LocaleNotFoundError):
            locale_set.get_locale("ja")
        with pytest.raises(KeyError):
            locale_set.get_locale("ja")

    def test_find_locale_falls_back_to_null_locale(self, locale_set):
        """find_locale() returns a NullLocale for unknown languages."""
        locale = locale_set.find_locale("ja")
        assert isinstance(locale, NullLocale)
        assert locale.get("Hello") == "Hello"

    def test_set_locale(self, locale_set):
        """set_locale() installs a prebuilt Locale."""
        custom = Locale("xx")
        locale_set.set_locale("xx", custom)
        assert locale_set.get_locale("xx") is custom

    def test_new_locales_inherit_settings(self, locales_dir):
        """Locales are created with the set's default domain and strictness."""
        locale_set = LocaleSet(
            source=FileSystemSource(locales_dir), default_domain="errors", strict=True
        )
        locale_set.add_domain("errors")
        locale = locale_set.add_locale("fr")
        assert locale.default_domain == "errors"
        assert locale.strict is True
        assert locale.get("Not found") == "Introuvable"

    def test_concurrent_add_locale_installs_one(self, locale_set):
        """Racing add_locale() calls agree on a single Locale."""
        results = []

        def add():
            results.append(locale_set.add_locale("fr"))

        threads = [threading.Thread(target=add) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert len(results) == 8
        assert all(r is results[0] for r in results)
