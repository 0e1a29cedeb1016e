"""
Description: Apex MCP Server configuration loader
Main features:
    - Single settings tree for the server
    - YAML file loading with environment variable overrides
    - Immutable API credentials handed to each tool registry
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from apex_mcp.errors import ConfigurationError


DEFAULT_API_URL = "https://api.apexagents.ai"

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


# region Settings models
class RequestSettings(BaseModel):
    # None means no client-side timeout
    timeout: float | None = None


class ApexSettings(BaseModel):
    """Remote Apex API settings"""
    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    request: RequestSettings = Field(default_factory=RequestSettings)


class ServerSettings(BaseModel):
    """Transport selection and HTTP listener"""
    transport: Literal["stdio", "http"] = "http"
    host: str = "0.0.0.0"
    port: int = 3000


class ToolsSettings(BaseModel):
    enabled: list[str] = Field(default_factory=list)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class Credentials(BaseModel):
    """Bearer token and base URL owned by one registry instance"""
    model_config = ConfigDict(frozen=True)

    bearer_token: str
    api_base_url: str = DEFAULT_API_URL

    @classmethod
    def create(cls, bearer_token: str | None, api_base_url: str | None = None) -> Credentials:
        token = (bearer_token or "").strip()
        if not token:
            raise ConfigurationError("Please provide APEX_API_KEY environment variable")
        base_url = (api_base_url or DEFAULT_API_URL).strip().rstrip("/")
        return cls(bearer_token=token, api_base_url=base_url or DEFAULT_API_URL)


class Settings(BaseModel):
    """Settings root"""
    apex: ApexSettings = Field(default_factory=ApexSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    tools: ToolsSettings = Field(default_factory=ToolsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def credentials(self) -> Credentials:
        """
        Resolve the API credentials

        Raises:
            ConfigurationError: the API key is missing or empty
        """
        return Credentials.create(self.apex.api_key, self.apex.api_url)
# endregion


# region Loading
def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        def replace(match: re.Match[str]) -> str:
            expr = match.group(1)
            if ":-" in expr:
                key, default = expr.split(":-", 1)
                return os.getenv(key, default)
            return os.getenv(expr, "")

        return _ENV_PATTERN.sub(replace, value)
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: _expand_env(val) for key, val in value.items()}
    return value


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return _expand_env(data)


def _set_nested(data: dict[str, Any], keys: list[str], value: Any) -> None:
    current = data
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


def _parse_env_override(env_key: str, env_value: str) -> Any:
    if env_key == "APEX_TOOLS_ENABLED":
        return [item.strip() for item in env_value.split(",") if item.strip()]
    if env_key == "MCP_TRANSPORT":
        return env_value.strip().lower()
    return env_value


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    mapping = {
        "APEX_API_KEY": ["apex", "api_key"],
        "APEX_API_URL": ["apex", "api_url"],
        "APEX_REQUEST_TIMEOUT": ["apex", "request", "timeout"],
        "MCP_TRANSPORT": ["server", "transport"],
        "HOST": ["server", "host"],
        "PORT": ["server", "port"],
        "APEX_TOOLS_ENABLED": ["tools", "enabled"],
        "LOG_LEVEL": ["logging", "level"],
        "LOG_FORMAT": ["logging", "format"],
    }
    for env_key, path in mapping.items():
        env_value = os.getenv(env_key)
        if env_value is not None and env_value != "":
            _set_nested(data, path, _parse_env_override(env_key, env_value))
    return data


def load_settings(config_path: str | None = None) -> Settings:
    path = Path(config_path or os.getenv("CONFIG_PATH", "config.yaml"))
    data = _load_yaml(path)
    data = _apply_env_overrides(data)
    return Settings.model_validate(data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings singleton"""
    return load_settings()
# endregion
