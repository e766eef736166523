"""
Service config - environment variables (and .env) feed Settings.
Change appName in app.config.json to rebrand.
"""
import json
from pathlib import Path

from pydantic import BaseModel, Field

from domain_age.utils.env import env_bool, env_int, env_str, load_env

load_env()

_config_path = Path(__file__).resolve().parent.parent / "app.config.json"
_config = json.loads(_config_path.read_text()) if _config_path.exists() else {}

APP_NAME = _config.get("appName", "")


class Settings(BaseModel):
    """Runtime settings for the checker and the HTTP server."""
    host: str = Field("0.0.0.0", description="Listen address")
    port: int = Field(8080, description="Listen port")
    cache_ttl_seconds: int = Field(24 * 60 * 60, gt=0, description="How long a result stays cached")
    cache_sweep_seconds: int = Field(60 * 60, gt=0, description="Interval between expired-entry sweeps")
    cache_maxsize: int = Field(10000, gt=0, description="Max number of cached domains")
    cache_failed_lookups: bool = Field(True, description="Also cache results that carry an error")
    normalize_domains: bool = Field(False, description="Lower-case and strip domains before lookup/caching")
    cors_enabled: bool = Field(True, description="Add CORS headers and answer OPTIONS")
    log_level: str = Field("INFO", description="Root log level for the server entry point")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=env_str("HOST", "0.0.0.0"),
            port=env_int("PORT", 8080),
            cache_ttl_seconds=env_int("CACHE_TTL_SEC", 24 * 60 * 60),
            cache_sweep_seconds=env_int("CACHE_SWEEP_SEC", 60 * 60),
            cache_maxsize=env_int("CACHE_MAXSIZE", 10000),
            cache_failed_lookups=env_bool("CACHE_FAILED_LOOKUPS", True),
            normalize_domains=env_bool("NORMALIZE_DOMAINS", False),
            cors_enabled=env_bool("CORS_ENABLED", True),
            log_level=env_str("LOG_LEVEL", "INFO").upper(),
        )
