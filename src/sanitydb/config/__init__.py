"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import (
    IDEMPOTENT_METHODS,
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryablePayloadError,
    RetryPolicy,
)
from .sanity import DEFAULT_API_VERSION, SanityOptions, get_sanity_options

__all__ = [
    "DEFAULT_API_VERSION",
    "IDEMPOTENT_METHODS",
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "RetryablePayloadError",
    "SanityOptions",
    "env_flag",
    "get_sanity_options",
    "optional_env_var",
    "require_env_vars",
]
