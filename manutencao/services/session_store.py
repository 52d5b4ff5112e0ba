"""
Durable key-value storage for the local session.
Values are JSON documents kept in a single file so the logged-in user and
UI preferences survive restarts.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from manutencao.core.config import get_settings

logger = logging.getLogger(__name__)

USER_KEY = "manutencao_pro_user"
THEME_KEY_PREFIX = "manutencao_pro_theme:"


class SessionStore:
    """JSON file backed key-value store."""

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path or get_settings().SESSION_FILE)

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            # Corrupt file: start over instead of locking the user out
            logger.error(f"Failed to read session file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)


def theme_key(user_id: str) -> str:
    return f"{THEME_KEY_PREFIX}{user_id}"
