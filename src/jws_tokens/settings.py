"""Runtime settings loaded from environment variables.

Python has no build-time feature flags, so algorithm selection happens here:
an algorithm whose backend library is installed can still be switched off
by listing it in ``JWS_DISABLED_ALGORITHMS`` (comma-separated, exact case).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class JWSSettings(BaseSettings):
    """Library settings.

    Attributes:
        disabled_algorithms: Comma-separated algorithm names (e.g. "RS384,ES512")
            that must be treated as unavailable. Disabled names fail to parse,
            so tokens declaring them can never be decoded or verified.
    """

    model_config = SettingsConfigDict(env_prefix="JWS_")

    disabled_algorithms: str = ""

    def disabled_algorithm_names(self) -> frozenset[str]:
        """Parse the comma-separated disabled algorithm list."""
        if not self.disabled_algorithms:
            return frozenset()
        return frozenset(
            name.strip() for name in self.disabled_algorithms.split(",") if name.strip()
        )


@lru_cache(maxsize=1)
def get_settings() -> JWSSettings:
    """Return the process-wide settings, read once from the environment.

    Call ``get_settings.cache_clear()`` after changing the environment.
    """
    return JWSSettings()
