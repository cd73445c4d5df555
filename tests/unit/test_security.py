import pytest

from app.core.config import settings
from app.core.errors import ConfigurationError, ForbiddenError, UnauthorizedError
from app.core.security import is_admin_email, normalize_email, parse_admin_emails, require_admin


def test_normalize_email():
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"
    assert normalize_email("   ") is None
    assert normalize_email(None) is None


def test_parse_admin_emails_drops_blanks_and_normalizes():
    assert parse_admin_emails(" A@Example.com, ,b@example.com,") == frozenset({"a@example.com", "b@example.com"})
    assert parse_admin_emails("") == frozenset()
    assert parse_admin_emails(None) == frozenset()


def test_is_admin_email_is_case_insensitive():
    allowlist = {"boss@example.com"}
    assert is_admin_email("BOSS@example.com", allowlist)
    assert not is_admin_email("other@example.com", allowlist)
    assert not is_admin_email(None, allowlist)


def test_require_admin_without_allowlist_is_a_configuration_error(monkeypatch):
    monkeypatch.setattr(settings, "admin_emails", " , ")
    with pytest.raises(ConfigurationError) as exc:
        require_admin("admin@example.com")
    assert exc.value.status_code == 500


def test_require_admin_checks_identity_before_membership():
    with pytest.raises(UnauthorizedError):
        require_admin(None)
    with pytest.raises(ForbiddenError):
        require_admin("someone@example.com")
    assert require_admin("admin@example.com") == "admin@example.com"
