"""Transaction duplicate rule: same date, near-equal amount, similar description."""

from importbox.schemas.duplicates import (
    DuplicateCheckResult,
    ExistingTransaction,
    MatchReason,
    TransactionCandidate,
)

from .base import MatchStrategy
from .constants import DEFAULT_AMOUNT_TOLERANCE, DEFAULT_SIMILARITY_THRESHOLD
from .similarity import calculate_similarity


class TransactionMatchStrategy(MatchStrategy):
    """Flag a transaction as a duplicate of a stored one.

    A stored transaction matches when its date equals the candidate's, the
    amounts differ by less than ``amount_tolerance`` and the descriptions are
    at least ``similarity_threshold`` percent similar. The most similar match
    wins.
    """

    candidate_model = TransactionCandidate
    existing_model = ExistingTransaction

    def __init__(
        self,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        amount_tolerance: float = DEFAULT_AMOUNT_TOLERANCE,
    ):
        self.similarity_threshold = similarity_threshold
        self.amount_tolerance = amount_tolerance

    def compare(
        self,
        candidate: TransactionCandidate,
        existing: ExistingTransaction,
    ) -> DuplicateCheckResult | None:
        if not candidate.date or candidate.date != existing.date:
            return None
        if abs(candidate.amount - existing.amount) >= self.amount_tolerance:
            return None
        similarity = calculate_similarity(candidate.description, existing.description)
        if similarity < self.similarity_threshold:
            return None
        return DuplicateCheckResult(
            is_duplicate=True,
            matched_record=existing,
            similarity=similarity,
            match_reason=MatchReason.FUZZY_DESCRIPTION,
        )
