"""Custom exceptions for agentseed."""


class AgentseedError(Exception):
    """Base exception for all agentseed errors."""

    code = "AGENTSEED_ERROR"

    def __init__(self, message: str, code: str | None = None):
        if code is not None:
            self.code = code
        super().__init__(message)


class ConfigError(AgentseedError):
    """Raised when .agentseedrc cannot be parsed or fails validation."""

    code = "CONFIG_ERROR"


class ProviderError(AgentseedError):
    """Raised when an LLM provider call fails (network, auth, empty response)."""

    code = "PROVIDER_ERROR"

    def __init__(self, message: str, provider: str):
        self.provider = provider
        super().__init__(message)


class AnalysisError(AgentseedError):
    """Raised for unrecoverable analysis-stage failures (e.g. missing root directory)."""

    code = "ANALYSIS_ERROR"
