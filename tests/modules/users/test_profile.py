"""
Unit tests for profile completeness checks.
"""

from datetime import date

import pytest

from migration_api.modules.users.models import Member
from migration_api.modules.users.profile import (
    REQUIRED_PROFILE_FIELDS,
    format_field_name,
    is_member_profile_complete,
    is_onboarding_complete,
    missing_onboarding_fields,
    missing_profile_fields,
)


@pytest.fixture
def complete_member():
    return Member(
        id=7,
        email="ada@example.com",
        first_name="Ada",
        last_name="Obi",
        phone="+2348000000000",
        dob=date(2000, 5, 17),
        id_number="A1234567",
        id_type="passport",
        nationality="Nigerian",
        home_address="12 Marina Road",
        home_city="Lagos",
        home_zip_code="100001",
        home_state="Lagos",
        home_country="Nigeria",
        gender="female",
        id_scan_front="https://files.example.com/id-front.jpg",
    )


class TestMemberProfile:
    """Tests for the application profile gate."""

    def test_complete(self, complete_member):
        """A fully filled profile passes with nothing missing."""
        assert is_member_profile_complete(complete_member) is True
        assert missing_profile_fields(complete_member) == []

    @pytest.mark.parametrize("field", REQUIRED_PROFILE_FIELDS)
    def test_each_required_field(self, complete_member, field):
        """Each required field on its own blocks the profile."""
        setattr(complete_member, field, None)

        assert is_member_profile_complete(complete_member) is False
        assert missing_profile_fields(complete_member) == [field]

    def test_empty_string_counts_as_present(self, complete_member):
        """The application gate only treats None as missing."""
        complete_member.home_city = ""

        assert is_member_profile_complete(complete_member) is True

    def test_missing_in_declaration_order(self, complete_member):
        """Missing fields are listed in field-list order."""
        complete_member.gender = None
        complete_member.phone = None

        assert missing_profile_fields(complete_member) == ["phone", "gender"]


class TestOnboarding:
    """Tests for onboarding completeness."""

    def test_empty_string_counts_as_missing(self, complete_member):
        """Onboarding treats empty strings as missing."""
        complete_member.home_city = ""

        assert is_onboarding_complete(complete_member) is False
        assert missing_onboarding_fields(complete_member) == ["home_city"]

    def test_requires_id_scan(self, complete_member):
        """The ID scan is needed for onboarding but not for applying."""
        complete_member.id_scan_front = None

        assert is_member_profile_complete(complete_member) is True
        assert is_onboarding_complete(complete_member) is False


def test_format_field_name():
    """Snake case field names become title-cased labels."""
    assert format_field_name("home_zip_code") == "Home Zip Code"
    assert format_field_name("dob") == "Dob"
