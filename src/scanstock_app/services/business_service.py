from __future__ import annotations

import logging
from typing import Any, Mapping

from scanstock_sdk import ApiSession, BusinessCreate, BusinessProfile, BusinessUpdate
from scanstock_sdk.exceptions import NotFoundError

from .errors import normalize_error

logger = logging.getLogger(__name__)


class BusinessService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load_profile(self) -> BusinessProfile | None:
        """Current business profile, or None when none has been set up."""
        try:
            return self.session.business_client().get_business()
        except NotFoundError:
            return None
        except Exception as exc:
            raise normalize_error(exc, "Failed to load business profile") from exc

    def save_profile(self, payload: Mapping[str, Any]) -> BusinessProfile:
        existing = self.load_profile()
        try:
            if existing is None:
                profile = self.session.business_client().create_business(BusinessCreate.model_validate(payload))
            else:
                profile = self.session.business_client().update_business(BusinessUpdate.model_validate(payload))
        except Exception as exc:
            raise normalize_error(exc, "Failed to save business profile") from exc
        logger.info("business_profile_saved", extra={"is_new": existing is None})
        return profile
