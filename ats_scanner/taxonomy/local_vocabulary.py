from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from .provider import SkillVocabularyProvider


def _dedupe(terms: Iterable[Any]) -> tuple[str, ...]:
    seen: set[str] = set()
    output: list[str] = []
    for term in terms:
        text = " ".join(str(term).split())
        key = text.lower()
        if not text or key in seen:
            continue
        seen.add(key)
        output.append(text)
    return tuple(output)


class LocalSkillVocabulary(SkillVocabularyProvider):
    def __init__(
        self,
        hard: Iterable[str],
        soft: Iterable[str],
        transferable: Iterable[tuple[str, str, float]] = (),
    ) -> None:
        self._hard = _dedupe(hard)
        self._soft = _dedupe(soft)
        self._transferable = tuple(
            (str(source).strip().lower(), str(target).strip(), max(0.0, min(1.0, float(confidence))))
            for source, target, confidence in transferable
        )

    @classmethod
    def from_json(cls, vocabulary_path: str | Path | None = None) -> "LocalSkillVocabulary":
        path = Path(vocabulary_path) if vocabulary_path else Path(__file__).with_name("skills.json")
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)

        hard_raw = raw.get("hard", [])
        if isinstance(hard_raw, dict):
            hard = [term for group in hard_raw.values() for term in group]
        else:
            hard = list(hard_raw)
        transferable = [
            (item["source"], item["target"], item.get("confidence", 0.5))
            for item in raw.get("transferable", [])
            if isinstance(item, dict) and item.get("source") and item.get("target")
        ]
        return cls(hard=hard, soft=raw.get("soft", []), transferable=transferable)

    def hard_skills(self) -> tuple[str, ...]:
        return self._hard

    def soft_skills(self) -> tuple[str, ...]:
        return self._soft

    def transferable_mappings(self) -> tuple[tuple[str, str, float], ...]:
        return self._transferable
