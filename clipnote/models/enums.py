from enum import Enum
from typing import Any


class LanguageCode(Enum):
    """Output languages supported for generated summaries and questions."""
    EN = "en"
    ID = "id"

    @classmethod
    def parse(cls, value: Any) -> "LanguageCode":
        """Exact match on 'en' / 'id'; anything else collapses to EN."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value:
                return member
        return cls.EN


DEFAULT_LANGUAGE = LanguageCode.EN
