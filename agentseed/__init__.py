"""agentseed: infer a repository's stack and conventions, write AI agent context files."""

__version__ = "0.1.0"

from agentseed.analyzer import AnalysisResult, analyze
from agentseed.config import AgentseedConfig, load_config
from agentseed.exceptions import AgentseedError, AnalysisError, ConfigError, ProviderError
from agentseed.scanner import SubfolderCandidate, detect_subfolders

__all__ = [
    "AgentseedConfig",
    "AgentseedError",
    "AnalysisError",
    "AnalysisResult",
    "ConfigError",
    "ProviderError",
    "SubfolderCandidate",
    "analyze",
    "detect_subfolders",
    "load_config",
]
