"""
Admin session persistence.

Holds exactly one admin code in a small text file. Expiry is decided by the
server; this store never inspects the token.
"""

import logging
from pathlib import Path
from typing import Optional

from tutor_admin.core.config import settings

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else settings.session_file

    def load_session(self) -> str:
        """Return the saved admin code, or "" when nothing usable is stored."""
        try:
            return self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Session storage unreadable at %s: %s", self.path, e)
            return ""

    def save_session(self, token: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(token, encoding="utf-8")
        except OSError as e:
            logger.debug("Could not persist session to %s: %s", self.path, e)

    def clear_session(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.debug("Could not clear session at %s: %s", self.path, e)
