"""Load and validate .agentseedrc configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from agentseed.analyzer.fs import file_exists, read_text
from agentseed.config.schema import DEFAULT_MODELS, AgentseedConfig
from agentseed.exceptions import ConfigError

log = structlog.get_logger("agentseed.config")

CONFIG_FILES = [".agentseedrc", ".agentseedrc.yml", ".agentseedrc.yaml"]

# Provider -> environment variable holding its API key
API_KEY_ENV: dict[str, str] = {
    "claude": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def load_config(
    root: Path | str,
    *,
    provider: str | None = None,
    model: str | None = None,
    no_llm: bool | None = None,
) -> AgentseedConfig:
    """Read the first config file found in *root*, apply overrides, validate.

    Raises:
        ConfigError: the file is not valid YAML, is not a mapping, or fails
            schema validation.
    """
    raw = _read_config_file(Path(root))

    if provider:
        raw["provider"] = provider
    if model:
        raw["model"] = model
    if no_llm is not None:
        raw["noLlm"] = no_llm
        raw.pop("no_llm", None)

    resolved_provider = str(raw.get("provider") or "claude")
    if not (raw.get("apiKey") or raw.get("api_key")):
        env_var = API_KEY_ENV.get(resolved_provider)
        if env_var and os.environ.get(env_var):
            raw["apiKey"] = os.environ[env_var]
    if not raw.get("model"):
        raw["model"] = DEFAULT_MODELS.get(resolved_provider)

    try:
        return AgentseedConfig.model_validate(raw)
    except ValidationError as exc:
        issues = "\n".join(
            f"  {'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(f"Invalid configuration:\n{issues}") from exc


def _read_config_file(root: Path) -> dict[str, Any]:
    for filename in CONFIG_FILES:
        path = root / filename
        if not file_exists(path):
            continue
        log.debug("config.loading", path=str(path))
        try:
            data = yaml.safe_load(read_text(path))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to parse {filename}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Failed to parse {filename}: expected a mapping at the top level")
        return data
    return {}
