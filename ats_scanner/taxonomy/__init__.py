from functools import lru_cache

from .local_vocabulary import LocalSkillVocabulary
from .provider import SkillVocabularyProvider


@lru_cache(maxsize=1)
def get_default_vocabulary() -> SkillVocabularyProvider:
    return LocalSkillVocabulary.from_json()


__all__ = ["SkillVocabularyProvider", "LocalSkillVocabulary", "get_default_vocabulary"]
