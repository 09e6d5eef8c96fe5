from __future__ import annotations

from typing import Protocol


class SkillVocabularyProvider(Protocol):
    def hard_skills(self) -> tuple[str, ...]:
        """Return hard skill terms in their display casing."""

    def soft_skills(self) -> tuple[str, ...]:
        """Return soft skill terms in their display casing."""

    def transferable_mappings(self) -> tuple[tuple[str, str, float], ...]:
        """Return (resume term, target skill, confidence) triples."""
