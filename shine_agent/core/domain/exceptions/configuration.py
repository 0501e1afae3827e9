"""Configuration exceptions."""

from .base import ShineAgentError


class ConfigurationError(ShineAgentError):
    """Required configuration is missing or invalid."""

    error_code = "SHN_CFG_001"


class MissingAPIKeyError(ConfigurationError):
    """An API key needed by an outbound adapter is not set."""

    error_code = "SHN_CFG_002"
