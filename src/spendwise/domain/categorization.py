"""Categorization engine.

Resolution order, first match wins:

1. exact learned match on the lowercased, trimmed description
2. learned match on the description's core name
3. fuzzy learned match: core names of at least ``FUZZY_MIN_LENGTH``
   characters where one contains the other
4. first keyword rule (in declared order) with a keyword in the description
5. "Other"

The fuzzy tier has no similarity threshold beyond length and containment,
so short generic merchant names can pick up a neighbour's category.
"""

from typing import Mapping, Optional, Sequence

from spendwise.database.base import LearnedCategoryStore
from spendwise.domain.categories import (
    CATEGORY_RULES,
    DEFAULT_CATEGORY,
    SMART_HINTS,
    is_valid_category,
)
from spendwise.domain.entities import SmartHint
from spendwise.domain.errors import ValidationError, unknown_category
from spendwise.domain.merchant import normalize_merchant
from spendwise.logging_setup import get_logger

logger = get_logger(__name__)

FUZZY_MIN_LENGTH = 5
LEARN_CORE_MIN_LENGTH = 3


def learned_key(description: str) -> str:
    """Return the learned-map key for a full description."""
    return description.strip().lower()


class CategorizationService:
    """Assigns categories and learns from user corrections."""

    def __init__(
        self,
        store: LearnedCategoryStore,
        rules: Optional[Mapping[str, Sequence[str]]] = None,
        hints: Optional[Sequence[SmartHint]] = None,
    ):
        """Initialize categorization service.

        Args:
            store: Learned-category store
            rules: Ordered category -> keywords mapping (defaults to CATEGORY_RULES)
            hints: Smart hints for uncategorized descriptions (defaults to SMART_HINTS)
        """
        self.store = store
        self.rules = rules if rules is not None else CATEGORY_RULES
        self.hints = hints if hints is not None else SMART_HINTS

    def categorize(self, description: str) -> str:
        """Return exactly one category for a description."""
        return self.resolve(description)[0]

    def resolve(self, description: str) -> tuple[str, str]:
        """Return ``(category, tier)`` where tier names the rule that matched.

        Tiers are "learned", "learned-core", "learned-fuzzy", "keyword" and
        "default".
        """
        key = learned_key(description or "")
        if not key:
            return DEFAULT_CATEGORY, "default"

        category = self.store.get(key)
        if category is not None:
            return category, "learned"

        core, _ = normalize_merchant(key)
        if core and core != key:
            category = self.store.get(core)
            if category is not None:
                return category, "learned-core"

        if len(core) >= FUZZY_MIN_LENGTH:
            for stored_key, stored_category in self.store.items():
                stored_core, _ = normalize_merchant(stored_key)
                if len(stored_core) < FUZZY_MIN_LENGTH:
                    continue
                if core in stored_core or stored_core in core:
                    return stored_category, "learned-fuzzy"

        for rule_category, keywords in self.rules.items():
            if any(keyword in key for keyword in keywords):
                return rule_category, "keyword"

        return DEFAULT_CATEGORY, "default"

    def learn(self, description: str, category: str) -> None:
        """Remember a user's category choice for a description.

        Stores the lowercased description and, when it differs and has at
        least three characters, its core name.

        Raises:
            ValidationError: If the category is unknown or description is empty
        """
        if not is_valid_category(category):
            raise ValidationError(unknown_category(category))
        key = learned_key(description or "")
        if not key:
            raise ValidationError("Cannot learn a category for an empty description")

        self.store.set(key, category)
        core, _ = normalize_merchant(key)
        if len(core) >= LEARN_CORE_MIN_LENGTH and core != key:
            self.store.set(core, category)
            logger.debug("Learned %r and core %r -> %s", key, core, category)
        else:
            logger.debug("Learned %r -> %s", key, category)

    def suggest(self, description: str) -> Optional[SmartHint]:
        """Return a smart hint for a description that resolves to "Other"."""
        if self.categorize(description) != DEFAULT_CATEGORY:
            return None
        _, prefix = normalize_merchant(description)
        key = learned_key(description or "")
        for hint in self.hints:
            if hint.pattern.endswith("*"):
                # Processor hints match the prefix the normalizer recognized
                if prefix is not None and prefix == hint.pattern[:-1]:
                    return hint
            elif hint.pattern in key:
                return hint
        return None

    # Learned-category inspection
    def learned_categories(self) -> list[tuple[str, str]]:
        """Return every learned (key, category) pair."""
        return self.store.items()

    def learned_count(self) -> int:
        """Return the number of learned keys."""
        return self.store.count()

    def clear_learned(self) -> int:
        """Forget every learned mapping. Returns the number removed."""
        count = self.store.clear()
        logger.info("Cleared %d learned categories", count)
        return count
