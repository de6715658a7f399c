"""Sanity connection options."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_API_VERSION: Final[str] = "v2021-10-21"
SANITY_API_HOST: Final[str] = "api.sanity.io"
SANITY_CDN_HOST: Final[str] = "apicdn.sanity.io"
SANITY_TIMEOUT_SECONDS: Final[float] = 30.0


def _default_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="sanity",
        timeout_seconds=SANITY_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=25, per_seconds=1.0),
    )


@dataclass(frozen=True, slots=True)
class SanityOptions:
    """Connection target and credentials for one Sanity dataset."""

    project_id: str
    dataset: str
    token: str | None = None
    use_cdn: bool = False
    api_version: str = DEFAULT_API_VERSION
    resilience: ResilienceConfig = field(default_factory=_default_resilience)

    def validate(self) -> SanityOptions:
        """Return ``self`` or raise if a required value is missing or malformed."""

        missing = [
            name
            for name, value in (("project_id", self.project_id), ("dataset", self.dataset))
            if not value or not value.strip()
        ]
        if missing:
            raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")
        if not self.api_version.startswith("v"):
            raise ConfigurationError(
                f"Sanity API version must look like 'v1' or 'vYYYY-MM-DD', got {self.api_version!r}"
            )
        cache = self.resilience.cache
        if cache is not None and cache.enabled and cache.backend == "memory":
            # each request runs in its own client, so only an sqlite file outlives it
            raise ConfigurationError("Sanity response caching requires the sqlite backend")
        return self

    def api_url(self, *, cdn: bool = False) -> str:
        host = SANITY_CDN_HOST if cdn else SANITY_API_HOST
        return f"https://{self.project_id}.{host}/{self.api_version}"

    @classmethod
    def from_environment(cls, *, resilience: ResilienceConfig | None = None) -> SanityOptions:
        values = require_env_vars(("SANITY_PROJECT_ID", "SANITY_DATASET"))
        return cls(
            project_id=values["SANITY_PROJECT_ID"],
            dataset=values["SANITY_DATASET"],
            token=optional_env_var("SANITY_TOKEN"),
            use_cdn=env_flag("SANITY_USE_CDN"),
            api_version=optional_env_var("SANITY_API_VERSION") or DEFAULT_API_VERSION,
            resilience=resilience or _default_resilience(),
        ).validate()


def get_sanity_options(*, resilience: ResilienceConfig | None = None) -> SanityOptions:
    return SanityOptions.from_environment(resilience=resilience)
