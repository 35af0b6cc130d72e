"""
Unit tests for member application initiation and reads.

These tests cover:
- Ordering of the initiation checks
- The document validation flag (enabled and bypassed)
- Eligibility per category
"""

from contextlib import contextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from migration_api.modules.app_config.provider import (
    REQUIRE_DOCUMENT_VALIDATION,
    StaticConfigProvider,
)
from migration_api.modules.applications.member_service import (
    check_eligibility,
    get_application_status,
    get_member_applications,
    initiate_application,
)
from migration_api.modules.applications.models import Application
from migration_api.modules.applications.schemas import ApplicationCreate
from migration_api.modules.documents.requirements import REQUIRED_DOCUMENTS

MEMBER_SERVICE = "migration_api.modules.applications.member_service"
REQUIREMENTS = "migration_api.modules.documents.requirements"

UNDERGRADUATE_DOCS = set(REQUIRED_DOCUMENTS["undergraduate"])


@contextmanager
def initiation_patches(member, program, *, active=0, uploaded=frozenset()):
    with (
        patch(f"{MEMBER_SERVICE}.MemberRepository") as mock_members,
        patch(f"{MEMBER_SERVICE}.ProgramRepository") as mock_programs,
        patch(f"{MEMBER_SERVICE}.repository") as mock_repo,
        patch(f"{REQUIREMENTS}.repository") as mock_docs,
    ):
        mock_members.get_by_id = AsyncMock(return_value=member)
        mock_programs.get_by_id = AsyncMock(return_value=program)
        mock_repo.count_active_for_member = AsyncMock(return_value=active)
        mock_repo.create_application = AsyncMock(
            side_effect=lambda db, model, **values: model(id=100, **values)
        )
        mock_docs.get_uploaded_document_types = AsyncMock(return_value=set(uploaded))

        yield MagicMock(repo=mock_repo, programs=mock_programs, docs=mock_docs)


@pytest.fixture
def create_request():
    return ApplicationCreate(program_id=1, intake="Fall 2026")


class TestInitiateApplication:
    """Tests for initiate_application function."""

    @pytest.mark.asyncio
    async def test_success_creates_pending_unpaid(
        self, mock_db, sample_member, sample_program, create_request
    ):
        """Successfully initiate an application in stage 1, pending and Unpaid."""
        with initiation_patches(
            sample_member, sample_program, uploaded=UNDERGRADUATE_DOCS
        ) as mocks:
            result = await initiate_application(
                mock_db, 7, create_request, StaticConfigProvider()
            )

        assert result.success is True
        assert result.status_code == 201
        assert result.message == "Application initiated successfully"

        application = result.data
        assert isinstance(application, Application)
        assert application.member_id == 7
        assert application.application_stage == 1
        assert application.payment_status == "Unpaid"
        assert application.application_status == "pending"
        assert application.program_category == "undergraduate"
        assert application.intake == "Fall 2026"
        assert application.program is sample_program

        mocks.repo.create_application.assert_awaited_once()
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_member_not_found(self, mock_db, create_request):
        """Unknown members get 404 before any other check."""
        with initiation_patches(None, None):
            result = await initiate_application(
                mock_db, 7, create_request, StaticConfigProvider()
            )

        assert result.status_code == 404
        assert result.message == "Member not found"

    @pytest.mark.asyncio
    async def test_active_limit_reached(
        self, mock_db, sample_member, sample_program, create_request
    ):
        """Reject a fourth active application."""
        with initiation_patches(sample_member, sample_program, active=3) as mocks:
            result = await initiate_application(
                mock_db, 7, create_request, StaticConfigProvider()
            )

        assert result.status_code == 400
        assert result.message == "Maximum active applications (3) reached"
        mocks.repo.create_application.assert_not_called()
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_incomplete_profile_checked_before_documents(
        self, mock_db, sample_member, sample_program, create_request
    ):
        """An incomplete profile is reported before the document check runs."""
        sample_member.phone = None
        sample_member.home_zip_code = None

        with initiation_patches(sample_member, sample_program) as mocks:
            result = await initiate_application(
                mock_db, 7, create_request, StaticConfigProvider()
            )

        assert result.status_code == 400
        assert result.message == "Please complete your profile before applying"
        assert result.details["items"] == ["Phone", "Home Zip Code"]
        mocks.docs.get_uploaded_document_types.assert_not_called()
        mocks.programs.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_string_profile_field_counts_as_present(
        self, mock_db, sample_member, sample_program, create_request
    ):
        """Empty strings satisfy the application profile gate."""
        sample_member.home_state = ""

        with initiation_patches(sample_member, sample_program, uploaded=UNDERGRADUATE_DOCS):
            result = await initiate_application(
                mock_db, 7, create_request, StaticConfigProvider()
            )

        assert result.status_code == 201

    @pytest.mark.asyncio
    async def test_program_not_found(self, mock_db, sample_member, create_request):
        """Unknown programs get 404."""
        with initiation_patches(sample_member, None):
            result = await initiate_application(
                mock_db, 7, create_request, StaticConfigProvider()
            )

        assert result.status_code == 404
        assert result.message == "Program not found"

    @pytest.mark.asyncio
    async def test_missing_documents_payload(
        self, mock_db, sample_member, sample_program, create_request
    ):
        """The missing-documents error lists friendly names in checklist order."""
        uploaded = {"internationalPassport", "olevelResult", "resume"}

        with initiation_patches(sample_member, sample_program, uploaded=uploaded) as mocks:
            result = await initiate_application(
                mock_db, 7, create_request, StaticConfigProvider()
            )

        assert result.success is False
        assert result.status_code == 400
        assert result.message.startswith("Missing required documents: Olevel Pin")
        assert result.details["title"] == "Missing required documents"
        assert result.details["items"] == [
            "Olevel Pin",
            "Academic Reference Letter",
            "Language Test Cert",
        ]
        mocks.repo.create_application.assert_not_called()

    @pytest.mark.asyncio
    async def test_flag_off_skips_document_check(
        self, mock_db, sample_member, sample_program, create_request
    ):
        """Skip the document query when validation is disabled."""
        config = StaticConfigProvider({REQUIRE_DOCUMENT_VALIDATION: False})

        with initiation_patches(sample_member, sample_program, uploaded=set()) as mocks:
            result = await initiate_application(mock_db, 7, create_request, config)

        assert result.status_code == 201
        mocks.docs.get_uploaded_document_types.assert_not_called()

    @pytest.mark.asyncio
    async def test_phd_program_rejected_when_validating(
        self, mock_db, sample_member, sample_program, create_request
    ):
        """PhD programs have no checklist, so validation rejects them."""
        sample_program.category = "phd"

        with initiation_patches(sample_member, sample_program):
            result = await initiate_application(
                mock_db, 7, create_request, StaticConfigProvider()
            )

        assert result.status_code == 400
        assert result.message == "Invalid program category"

    @pytest.mark.asyncio
    async def test_matching_category_is_case_insensitive(
        self, mock_db, sample_member, sample_program
    ):
        """Verify a category that agrees with the program is accepted in any case."""
        request = ApplicationCreate(program_id=1, program_category="UnderGraduate")

        with initiation_patches(sample_member, sample_program, uploaded=UNDERGRADUATE_DOCS):
            result = await initiate_application(mock_db, 7, request, StaticConfigProvider())

        assert result.status_code == 201
        assert result.data.program_category == "undergraduate"

    @pytest.mark.asyncio
    async def test_category_cannot_swap_checklist(self, mock_db, sample_member, sample_program):
        """Verify a postgraduate program cannot be applied to with the undergraduate checklist."""
        sample_program.category = "postgraduate"
        request = ApplicationCreate(program_id=1, program_category="undergraduate")

        with initiation_patches(
            sample_member, sample_program, uploaded=UNDERGRADUATE_DOCS
        ) as mocks:
            result = await initiate_application(mock_db, 7, request, StaticConfigProvider())

        assert result.status_code == 400
        assert result.message.startswith("Program category mismatch")
        mocks.docs.get_uploaded_document_types.assert_not_called()
        mocks.repo.create_application.assert_not_called()

    @pytest.mark.asyncio
    async def test_category_mismatch_rejected_with_validation_off(
        self, mock_db, sample_member, sample_program
    ):
        """Verify the category check does not depend on the document flag."""
        config = StaticConfigProvider({REQUIRE_DOCUMENT_VALIDATION: False})
        request = ApplicationCreate(program_id=1, program_category="phd")

        with initiation_patches(sample_member, sample_program) as mocks:
            result = await initiate_application(mock_db, 7, request, config)

        assert result.status_code == 400
        mocks.repo.create_application.assert_not_called()

    @pytest.mark.parametrize("category", ["banana", "diploma", ""])
    def test_unknown_category_rejected_by_schema(self, category):
        """Verify only undergraduate, postgraduate and phd are accepted."""
        with pytest.raises(ValidationError):
            ApplicationCreate(program_id=1, program_category=category)

    @pytest.mark.asyncio
    async def test_unexpected_error_rolls_back(
        self, mock_db, sample_member, sample_program, create_request
    ):
        """Unexpected errors roll back and return 500."""
        with initiation_patches(
            sample_member, sample_program, uploaded=UNDERGRADUATE_DOCS
        ) as mocks:
            mocks.repo.create_application.side_effect = RuntimeError("db down")
            result = await initiate_application(
                mock_db, 7, create_request, StaticConfigProvider()
            )

        assert result.status_code == 500
        assert result.message == "db down"
        mock_db.rollback.assert_awaited()


class TestMemberReads:
    """Tests for member application reads."""

    @pytest.mark.asyncio
    async def test_get_application_status_not_found(self, mock_db):
        """Another member's application id gives 404."""
        with patch(f"{MEMBER_SERVICE}.repository") as mock_repo:
            mock_repo.get_member_application = AsyncMock(return_value=None)
            result = await get_application_status(mock_db, 7, 42)

        assert result.status_code == 404
        mock_repo.get_member_application.assert_awaited_once_with(mock_db, 42, 7)

    @pytest.mark.asyncio
    async def test_get_member_applications(self, mock_db, make_application):
        """Return the member's applications as listed by the repository."""
        rows = [make_application(id=2), make_application(id=1)]

        with patch(f"{MEMBER_SERVICE}.repository") as mock_repo:
            mock_repo.list_for_member = AsyncMock(return_value=rows)
            result = await get_member_applications(mock_db, 7)

        assert result.success is True
        assert result.data == rows


class TestCheckEligibility:
    """Tests for check_eligibility function."""

    @pytest.mark.asyncio
    async def test_undergraduate_only(self, mock_db):
        """Undergraduate documents alone make only undergraduate eligible."""
        with patch(f"{MEMBER_SERVICE}.document_repository") as mock_docs:
            mock_docs.get_uploaded_document_types = AsyncMock(return_value=UNDERGRADUATE_DOCS)
            result = await check_eligibility(mock_db, 7)

        undergraduate = result.data["undergraduate"]
        postgraduate = result.data["postgraduate"]

        assert undergraduate["is_eligible"] is True
        assert undergraduate["missing_documents"] == []
        assert undergraduate["message"] == "Eligible for undergraduate programs"

        assert postgraduate["is_eligible"] is False
        assert postgraduate["missing_documents"] == [
            "University Degree Certificate",
            "University Transcript",
            "Sop",
            "Research Docs",
        ]
        assert postgraduate["message"] == "Missing required documents for postgraduate programs"

    @pytest.mark.asyncio
    async def test_nothing_uploaded(self, mock_db):
        """With no uploads the member is eligible for nothing."""
        with patch(f"{MEMBER_SERVICE}.document_repository") as mock_docs:
            mock_docs.get_uploaded_document_types = AsyncMock(return_value=set())
            result = await check_eligibility(mock_db, 7)

        assert "Olevel Pin" in result.data["undergraduate"]["missing_documents"]
        assert result.data["undergraduate"]["is_eligible"] is False
