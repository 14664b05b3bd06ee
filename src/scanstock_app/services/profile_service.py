from __future__ import annotations

import logging
from typing import Any, Mapping

from scanstock_sdk import ApiSession, UserProfile

from .errors import normalize_error

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load_profile(self) -> UserProfile:
        logger.info("profile_fetch_attempt")
        try:
            profile = self.session.users_client().me()
        except Exception as exc:
            raise normalize_error(exc, "Failed to load profile") from exc
        logger.info("profile_fetch_success", extra={"user_id": profile.id})
        return profile

    def update_profile(self, user_id: str | int, payload: Mapping[str, Any]) -> UserProfile:
        try:
            profile = self.session.users_client().update_user(user_id, payload)
        except Exception as exc:
            raise normalize_error(exc, "Failed to update profile") from exc
        logger.info("profile_update_success", extra={"user_id": profile.id})
        return profile
