"""File-backed persistence for the remote store endpoint."""

import json
from pathlib import Path
from urllib.parse import urlparse

from src.config import get_logger
from src.core.exceptions import StorageError, ValidationError
from src.core.interfaces.inventory_store import IConfigStore

logger = get_logger(__name__)


def validate_endpoint(endpoint: str) -> str:
    """Return the trimmed endpoint, or raise if it is not an http(s) URL."""
    value = endpoint.strip()
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(
            field="endpoint",
            message="Endpoint must be an http(s) URL",
            value=endpoint,
        )
    return value


class FileConfigStore(IConfigStore):
    """
    Keeps the endpoint in a small JSON document.

    Falls back to the configured default when nothing has been saved yet.
    """

    def __init__(self, path: Path, fallback: str = ""):
        self.path = path
        self._fallback = fallback

    def get_stored_config(self) -> str:
        if not self.path.exists():
            return self._fallback

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("store_config_unreadable", path=str(self.path), error=str(e))
            return self._fallback

        endpoint = data.get("endpoint", "") if isinstance(data, dict) else ""
        return endpoint or self._fallback

    def save_config(self, endpoint: str) -> None:
        value = validate_endpoint(endpoint)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({"endpoint": value}, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(
                f"Failed to save store config: {e}",
                code="CONFIG_WRITE_FAILED",
                details={"path": str(self.path)},
            ) from e
        logger.info("store_config_saved", path=str(self.path))
