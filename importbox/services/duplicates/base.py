"""Base duplicate-matching strategy and factory."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import BaseModel

from importbox.exceptions import UnknownEntityError
from importbox.schemas.duplicates import DuplicateCheckResult
from importbox.schemas.import_schemas import EntityType, coerce_entity

NO_MATCH = DuplicateCheckResult(is_duplicate=False)


class MatchStrategy(ABC):
    """Entity-specific rule deciding whether a candidate duplicates a stored record.

    Subclasses declare how to coerce inputs and how to compare one candidate
    with one existing record; picking the best match over a collection is
    shared.
    """

    candidate_model: type[BaseModel]
    existing_model: type[BaseModel]

    def coerce_candidate(self, candidate: Any) -> Any:
        """Accept a model, an object with matching attributes, or a dict."""
        if isinstance(candidate, self.candidate_model):
            return candidate
        return self.candidate_model.model_validate(candidate)

    def coerce_existing(self, existing: Iterable[Any]) -> list[Any]:
        return [
            record if isinstance(record, self.existing_model) else self.existing_model.model_validate(record)
            for record in existing
        ]

    @abstractmethod
    def compare(self, candidate: Any, existing: Any) -> DuplicateCheckResult | None:
        """Compare one candidate with one existing record.

        Args:
            candidate: Coerced candidate.
            existing: Coerced existing record.

        Returns:
            A duplicate result if this record matches, otherwise None.
        """

    def rank(self, result: DuplicateCheckResult) -> tuple[float, ...]:
        """Sort key for choosing between matches; higher is better."""
        return (result.similarity,)

    def check(self, candidate: Any, existing: Iterable[Any]) -> DuplicateCheckResult:
        """Best match for ``candidate`` among ``existing``.

        The first record wins among equally ranked matches. No existing
        records, or no match, gives ``is_duplicate=False``.
        """
        coerced = self.coerce_candidate(candidate)
        best: DuplicateCheckResult | None = None
        for record in self.coerce_existing(existing):
            result = self.compare(coerced, record)
            if result is not None and (best is None or self.rank(result) > self.rank(best)):
                best = result
        return best or NO_MATCH

    def check_many(
        self,
        candidates: Iterable[Any],
        existing: Iterable[Any],
    ) -> list[DuplicateCheckResult]:
        """Check each candidate independently against the same existing records.

        Candidates are not compared with one another.
        """
        records: Sequence[Any] = self.coerce_existing(existing)
        return [self.check(candidate, records) for candidate in candidates]


def get_match_strategy(entity: EntityType | str, **options: Any) -> MatchStrategy:
    """Return the duplicate-matching strategy for an entity type.

    Args:
        entity: ``transaction`` or ``lead``.
        **options: Passed to the strategy constructor, e.g.
            ``similarity_threshold`` for transactions.

    Raises:
        UnknownEntityError: For entities without a duplicate rule.
    """
    # Imported here to avoid a cycle: strategies subclass MatchStrategy
    from importbox.services.duplicates.leads import LeadMatchStrategy
    from importbox.services.duplicates.transactions import TransactionMatchStrategy

    entity = coerce_entity(entity)
    if entity is EntityType.TRANSACTION:
        return TransactionMatchStrategy(**options)
    if entity is EntityType.LEAD:
        return LeadMatchStrategy(**options)

    raise UnknownEntityError(entity.value)
