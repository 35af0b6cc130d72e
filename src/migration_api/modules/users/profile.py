"""
Profile Completeness

Checks that gate application initiation on a minimum viable member profile.
"""

from typing import Any

# Fields a member must fill before initiating an application.
REQUIRED_PROFILE_FIELDS: tuple[str, ...] = (
    "phone",
    "dob",
    "id_number",
    "id_type",
    "nationality",
    "home_address",
    "home_city",
    "home_zip_code",
    "home_state",
    "home_country",
    "gender",
)

# Fields checked at the end of onboarding.
ONBOARDING_FIELDS: tuple[str, ...] = (
    "phone",
    "gender",
    "dob",
    "home_address",
    "home_city",
    "home_state",
    "home_country",
    "nationality",
    "id_type",
    "id_number",
    "id_scan_front",
)


def missing_profile_fields(member: Any) -> list[str]:
    """Return required profile fields that are None, in declaration order."""
    return [field for field in REQUIRED_PROFILE_FIELDS if getattr(member, field, None) is None]


def is_member_profile_complete(member: Any) -> bool:
    """
    True iff every required profile field is present.

    An empty string counts as present; only None is treated as missing.
    """
    return not missing_profile_fields(member)


def missing_onboarding_fields(member: Any) -> list[str]:
    """Return onboarding fields that are None or empty."""
    return [field for field in ONBOARDING_FIELDS if getattr(member, field, None) in (None, "")]


def is_onboarding_complete(member: Any) -> bool:
    """True iff every onboarding field is filled; empty strings count as missing."""
    return not missing_onboarding_fields(member)


def format_field_name(field: str) -> str:
    """Turn ``home_zip_code`` into ``Home Zip Code``."""
    return field.replace("_", " ").title()
