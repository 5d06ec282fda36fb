from __future__ import annotations

import logging
from typing import Optional

from ..core.enums import Role
from ..profiles.repository import ProfileRepository

logger = logging.getLogger(__name__)


class RoleResolver:
    """Looks up the role stored on a user's profile.

    Lookup failures resolve to ``None`` (no admin privilege) and are logged only.
    """

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def resolve(self, user_id: str) -> Optional[Role]:
        try:
            return self._profiles.get_role(user_id)
        except Exception:
            logger.exception("Error fetching role for user %s", user_id)
            return None
