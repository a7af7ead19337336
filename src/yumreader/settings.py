"""Cache and transport settings for yumreader."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from yumreader.constants import CACHE_DIR, CACHE_ENABLED, CACHE_EXPIRE, HTTP_TIMEOUT


class Settings(BaseModel):
    """Configuration shared by the cache store, manifest resolver and lists.

    Instances are immutable; build a new one (or use ``model_copy(update=...)``)
    to change a value.
    """

    model_config = ConfigDict(frozen=True)

    cache_path: Path = CACHE_DIR
    cache_expire: int = Field(default=CACHE_EXPIRE, ge=0)
    cache_enabled: bool = CACHE_ENABLED
    timeout: float = Field(default=HTTP_TIMEOUT, gt=0)

    def ensure_cache_path(self) -> Path:
        """Create the cache root if needed and return it."""
        path = self.cache_path.expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return path
