"""
Preferred output language lookup that never fails a generation request.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from clipnote.models.enums import DEFAULT_LANGUAGE, LanguageCode
from clipnote.repositories.settings_repo import SettingsRepository
from clipnote.services.video_pipeline.providers import no_current_user
from clipnote.utils.logger import get_logger

logger = get_logger(__name__)


def resolve_preferred_language(user_lookup: Callable[[], Any]) -> LanguageCode:
    """
    Run `user_lookup` and map its outcome to a LanguageCode.

    A failed lookup takes the fallback branch and returns the default; a
    successful one is parsed, so unknown values also end up as the default.
    """
    try:
        stored = user_lookup()
    except Exception as exc:
        logger.info("Could not get user language preference, using default: %s", exc)
        return DEFAULT_LANGUAGE
    return LanguageCode.parse(stored)


class LanguagePreferenceResolver:
    def __init__(
        self,
        settings_repo: Optional[SettingsRepository] = None,
        current_user: Optional[Callable[[], str]] = None,
    ) -> None:
        self.settings_repo = settings_repo or SettingsRepository()
        self.current_user = current_user or no_current_user

    def resolve(self, user_id: Optional[str] = None) -> LanguageCode:
        def lookup() -> Any:
            uid = user_id if user_id is not None else self.current_user()
            return self.settings_repo.get_preferred_language(uid)

        return resolve_preferred_language(lookup)
