"""
JSON file session store.

The whole session is written to a temporary file and moved into place, so a
reader sees either the previous record or the new one, never half of each.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as SchemaError

from railbook.core.logging import get_logger
from railbook.schemas.user import Session
from railbook.services.interfaces.session_store import SessionStore

logger = get_logger(__name__)


class FileSessionStore(SessionStore):
    def __init__(self, path):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[Session]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        try:
            return Session.model_validate(json.loads(raw))
        except (ValueError, SchemaError) as e:
            # Half a session is no session
            logger.warning("session_file_invalid", path=str(self.path), error=str(e))
            self.clear()
            return None

    def save(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".session-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(session.model_dump_json())
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
