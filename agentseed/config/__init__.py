"""Configuration loading (.agentseedrc)."""

from agentseed.config.loader import load_config
from agentseed.config.schema import DEFAULT_MODELS, AgentseedConfig, SectionsConfig

__all__ = ["DEFAULT_MODELS", "AgentseedConfig", "SectionsConfig", "load_config"]
