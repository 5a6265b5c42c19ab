"""AI проверка статей."""

from newsgrid.application.verification.verification_service import (
    ClaimSearchResult,
    QuickReport,
    VerificationOutcome,
    VerificationService,
)

__all__ = [
    "ClaimSearchResult",
    "QuickReport",
    "VerificationOutcome",
    "VerificationService",
]
