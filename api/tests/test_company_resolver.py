import pytest

from app.models.contributor import Contributor
from app.services.company_resolver import (
    company_from_email,
    normalize_company_name,
    resolve_company,
)


def _contributor(company=None, email=None) -> Contributor:
    return Contributor(id=1, login="dev", contributions=1, company=company, email=email)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("@Acme Corp (Remote), NY", "Acme Corp"),
        ("Acme (Remote), NY", "Acme"),
        ("@google", "Google"),
        ("MICROSOFT", "Microsoft"),
        ("red hat, inc.", "Red Hat"),
        ("  Widgets Inc  ", "Widgets Inc"),
        ("@@double", "@double"),
    ],
)
def test_normalize_company_name(raw, expected):
    assert normalize_company_name(raw) == expected


def test_normalize_only_removes_first_parenthetical():
    assert normalize_company_name("Acme (a) Labs (b)") == "Acmelabs (b)"


def test_normalize_parenthetical_before_comma_rules_apply_in_sequence():
    # Comma truncation runs after the parenthetical strip, so "(Remote)" is gone first.
    assert normalize_company_name("Acme, (Remote) NY") == "Acme"


def test_resolve_prefers_profile_company_over_email():
    contributor = _contributor(company="@Acme Corp (Remote), NY", email="jane@widgets-inc.com")
    assert resolve_company(contributor) == "Acme Corp"


def test_resolve_rejects_single_character_company_and_falls_back_to_email():
    contributor = _contributor(company="@x", email="jane@widgets-inc.com")
    assert resolve_company(contributor) == "Widgets Inc"


def test_resolve_email_fallback():
    assert resolve_company(_contributor(email="jane@widgets-inc.com")) == "Widgets Inc"


@pytest.mark.parametrize(
    "email",
    [
        "jane@gmail.com",
        "jane@GMAIL.com",
        "jane@protonmail.com",
        "123+jane@users.noreply.github.com",
        "noreply@acme.com",
        "not-an-email",
    ],
)
def test_resolve_email_rejected(email):
    assert resolve_company(_contributor(email=email)) is None


def test_resolve_nothing_known():
    assert resolve_company(_contributor()) is None


def test_company_from_email_uses_first_domain_label():
    assert company_from_email("dev@mail.big-data-co.io") == "Mail"
    assert company_from_email("dev@big-data-co.io") == "Big Data Co"


def test_personal_domains_configurable(monkeypatch):
    monkeypatch.setenv("PERSONAL_EMAIL_DOMAINS", "widgets-inc.com, example.org")

    assert company_from_email("jane@widgets-inc.com") is None
    # Replaces the default list
    assert company_from_email("jane@gmail.com") == "Gmail"
