"""
Document Completeness Checker

Decides whether an owner (member or agent student) has uploaded every
document a program category requires.
"""

import re
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.errors import InvalidProgramCategoryError, PreconditionFailedError
from migration_api.modules.documents import repository

REQUIRED_DOCUMENTS: dict[str, list[str]] = {
    "undergraduate": [
        "internationalPassport",
        "olevelResult",
        "olevelPin",
        "academicReferenceLetter",
        "resume",
        "languageTestCert",
    ],
    "postgraduate": [
        "internationalPassport",
        "olevelResult",
        "academicReferenceLetter",
        "resume",
        "universityDegreeCertificate",
        "universityTranscript",
        "sop",
        "researchDocs",
        "languageTestCert",
    ],
}

# Every type the upload endpoints accept (identity scans are optional extras)
VALID_DOCUMENT_TYPES: frozenset[str] = frozenset(
    {doc for docs in REQUIRED_DOCUMENTS.values() for doc in docs}
    | {"photo", "idScanFront", "idScanBack"}
)

OWNER_MEMBER = "member"
OWNER_STUDENT = "student"


@dataclass
class DocumentCheckResult:
    is_complete: bool
    missing_docs: list[str] = field(default_factory=list)


def get_required_documents(program_category: str) -> list[str]:
    """
    Return the checklist for a category (case-insensitive).

    Raises:
        InvalidProgramCategoryError: For any category without a checklist,
            including phd
    """
    required = REQUIRED_DOCUMENTS.get((program_category or "").lower())
    if required is None:
        raise InvalidProgramCategoryError(program_category)
    return list(required)


def find_missing_documents(required: list[str], uploaded: set[str]) -> list[str]:
    """Set difference that keeps the order of ``required``."""
    return [doc for doc in required if doc not in uploaded]


async def check_required_documents(
    db: AsyncSession,
    owner_id: int,
    program_category: str,
    *,
    owner_kind: str = OWNER_MEMBER,
) -> DocumentCheckResult:
    """
    Compare uploaded document types against the category checklist.

    Args:
        db: Database session
        owner_id: Member id or agent student id
        program_category: undergraduate or postgraduate
        owner_kind: "member" or "student"

    Returns:
        DocumentCheckResult; ``missing_docs`` follows the checklist order
    """
    required = get_required_documents(program_category)
    uploaded = await repository.get_uploaded_document_types(db, owner_id, owner_kind)
    missing = find_missing_documents(required, uploaded)
    return DocumentCheckResult(is_complete=not missing, missing_docs=missing)


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def format_document_name(document_type: str) -> str:
    """``internationalPassport`` -> ``International Passport``."""
    spaced = _CAMEL_BOUNDARY.sub(" ", document_type)
    return spaced[:1].upper() + spaced[1:]


async def ensure_required_documents(
    db: AsyncSession,
    owner_id: int,
    program_category: str,
    *,
    owner_kind: str = OWNER_MEMBER,
) -> None:
    """
    Raises:
        InvalidProgramCategoryError: For a category without a checklist
        PreconditionFailedError: Listing the missing documents by display name
    """
    result = await check_required_documents(db, owner_id, program_category, owner_kind=owner_kind)
    if result.is_complete:
        return

    names = [format_document_name(doc) for doc in result.missing_docs]
    raise PreconditionFailedError(
        f"Missing required documents: {', '.join(names)}. "
        "Please upload all required documents before applying.",
        "MISSING_DOCUMENTS",
        title="Missing required documents",
        items=names,
        note=f"Required for {program_category.lower()} programs.",
        help="Upload the listed documents from the documents page, then try again.",
    )
