"""Unit tests for the identity provider domain row."""

from sqlalchemy import inspect

from shared.models import (
    REDIRECT_ANY_DOMAIN_KEY,
    REDIRECT_DOMAIN_KEY,
    REDIRECT_EMAIL_MATCHES_KEY,
    IdentityProvider,
    IdentityProviderDomain,
)

ROW_ID = "8f14e45f-ceea-467f-a0e6-0b5c1d2a9e11"


def test_table_layout():
    table = IdentityProviderDomain.__table__

    assert table.name == "IDENTITY_PROVIDER_DOMAIN"
    assert set(table.columns.keys()) == {"ID", "NAME", "IDENTITY_PROVIDER_ID"}
    assert table.columns["ID"].primary_key
    assert table.columns["ID"].type.length == 36  # noqa: PLR2004
    assert table.columns["NAME"].nullable
    assert not table.columns["NAME"].unique
    assert not table.columns["IDENTITY_PROVIDER_ID"].nullable

    (fk,) = table.columns["IDENTITY_PROVIDER_ID"].foreign_keys
    assert fk.target_fullname == "IDENTITY_PROVIDER.INTERNAL_ID"


def test_identity_provider_relationship_is_lazy_many_to_one():
    relationship = inspect(IdentityProviderDomain).relationships["identity_provider"]
    assert relationship.direction.name == "MANYTOONE"
    assert relationship.lazy == "select"


def test_id_round_trips():
    row = IdentityProviderDomain()
    for value in [ROW_ID, "", "x", "a" * 36]:
        row.id = value
        assert row.id == value


def test_id_unset_until_assigned():
    assert IdentityProviderDomain(name="example.com").id is None


def test_name_is_mutable():
    row = IdentityProviderDomain(id=ROW_ID, name="example.com")
    row.name = "example.org"
    assert row.name == "example.org"


def test_identity_provider_is_same_reference():
    provider = IdentityProvider(alias="corp-sso")
    row = IdentityProviderDomain(id=ROW_ID, name="example.com")

    row.identity_provider = provider

    assert row.identity_provider is provider
    assert row in provider.domains


def test_rows_with_same_id_are_equal_regardless_of_name():
    first = IdentityProviderDomain(id=ROW_ID, name="example.com")
    second = IdentityProviderDomain(id=ROW_ID, name="example.org")

    assert first == second
    assert hash(first) == hash(second)


def test_hash_survives_name_change():
    row = IdentityProviderDomain(id=ROW_ID, name="example.com")
    rows = {row}

    row.name = "example.org"

    assert row in rows


def test_rows_with_different_ids_are_not_equal():
    first = IdentityProviderDomain(id=ROW_ID, name="example.com")
    second = IdentityProviderDomain(id="another-id", name="example.com")
    assert first != second


def test_rows_without_id_use_identity():
    first = IdentityProviderDomain(name="example.com")
    second = IdentityProviderDomain(name="example.com")

    assert first != second
    assert first == first  # noqa: PLR0124
    assert len({first, second}) == 2  # noqa: PLR2004


def test_not_equal_to_other_types():
    row = IdentityProviderDomain(id=ROW_ID, name="example.com")
    assert row != ROW_ID
    assert row != IdentityProvider(internal_id=ROW_ID, alias="corp-sso")


def test_to_dict():
    row = IdentityProviderDomain(id=ROW_ID, name="example.com")
    assert row.to_dict() == {"id": ROW_ID, "name": "example.com", "identity_provider_id": None}


def _provider(config):
    return IdentityProvider(
        alias="corp-sso",
        config=config,
        domains=[
            IdentityProviderDomain(name="example.com"),
            IdentityProviderDomain(name="example.org"),
        ],
    )


def test_provider_without_redirect_config_never_redirects():
    provider = _provider({})

    assert provider.redirect_any_domain is False
    assert provider.redirect_email_matches is False
    assert provider.redirect_domain is None
    assert provider.redirects_email_domain("example.com") is False


def test_provider_redirects_for_any_linked_domain():
    provider = _provider({REDIRECT_ANY_DOMAIN_KEY: True})

    assert provider.redirects_email_domain("example.com") is True
    assert provider.redirects_email_domain("example.org") is True
    assert provider.redirects_email_domain("example.net") is False


def test_provider_redirects_only_for_chosen_domain():
    provider = _provider({REDIRECT_EMAIL_MATCHES_KEY: True, REDIRECT_DOMAIN_KEY: "example.com"})

    assert provider.redirect_domain == "example.com"
    assert provider.redirects_email_domain("example.com") is True
    assert provider.redirects_email_domain("example.org") is False


def test_chosen_domain_needs_redirect_flag():
    provider = _provider({REDIRECT_DOMAIN_KEY: "example.com"})
    assert provider.redirects_email_domain("example.com") is False


def test_chosen_domain_must_still_be_linked():
    provider = _provider({REDIRECT_EMAIL_MATCHES_KEY: True, REDIRECT_DOMAIN_KEY: "example.net"})
    assert provider.redirects_email_domain("example.net") is False
