"""
Fixtures for application tests.
"""

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from migration_api.modules.applications.models import AgentApplication, Application
from migration_api.modules.programs.models import Program
from migration_api.modules.users.models import Agent, Member


@pytest.fixture
def sample_program():
    """Undergraduate program with a 150.00 application fee."""
    return Program(
        id=1,
        program_name="BSc Computer Science",
        school_name="Test University",
        category="undergraduate",
        application_fee=Decimal("150.00"),
    )


@pytest.fixture
def make_application(sample_program):
    """Factory for direct applications attached to ``sample_program``."""

    def _make(**overrides) -> Application:
        values = {
            "id": 42,
            "member_id": 7,
            "program_id": sample_program.id,
            "program_category": "undergraduate",
            "application_stage": 1,
            "payment_status": "Paid",
            "application_status": "pending",
            "application_date": datetime(2026, 1, 1, tzinfo=UTC),
        }
        values.update(overrides)
        application = Application(**values)
        application.program = sample_program
        return application

    return _make


@pytest.fixture
def make_agent_application(sample_program):
    """Factory for agent applications attached to ``sample_program``."""

    def _make(**overrides) -> AgentApplication:
        values = {
            "id": 5,
            "agent_id": 3,
            "member_id": 11,
            "program_id": sample_program.id,
            "program_category": "undergraduate",
            "application_stage": 1,
            "payment_status": "Unpaid",
            "application_status": "pending",
            "application_date": datetime(2026, 1, 2, tzinfo=UTC),
        }
        values.update(overrides)
        application = AgentApplication(**values)
        application.program = sample_program
        return application

    return _make


@pytest.fixture
def sample_member():
    """Member with a complete profile."""
    return Member(
        id=7,
        email="ada@example.com",
        first_name="Ada",
        last_name="Obi",
        phone="+2348000000000",
        dob=date(2000, 5, 17),
        gender="female",
        nationality="Nigerian",
        id_type="passport",
        id_number="A1234567",
        home_address="12 Marina Road",
        home_city="Lagos",
        home_zip_code="100001",
        home_state="Lagos",
        home_country="Nigeria",
    )


@pytest.fixture
def sample_agent():
    return Agent(
        id=3,
        email="agent@example.com",
        company_name="Global Admissions Ltd",
        contact_person="Tunde Bello",
    )
