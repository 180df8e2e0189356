"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from bightwatch.models.common import FailurePolicy

DEFAULT_USER_AGENT = (
    "BoatSafe/1.0 (https://boatsafe.oceanbight.com contact@oceanbight.com)"
)


class FetchConfig(BaseModel):
    model_config = {"extra": "forbid"}

    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = Field(default=15.0, gt=0.0)


class RateLimitConfig(BaseModel):
    model_config = {"extra": "forbid"}

    window_minutes: int = Field(default=60, ge=1)
    max_clients: int = Field(default=10_000, ge=1)
    # Header injected by a trusted reverse proxy, e.g. "X-Nf-Client-Connection-Ip".
    trusted_ip_header: str | None = None


class ClientConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "http://127.0.0.1:8000/.netlify/functions"
    storage_path: str | None = "data/bightwatch_storage.json"
    cache_ttl_minutes: int = Field(default=30, ge=0)
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    retries: int = Field(default=3, ge=0)
    refresh_minutes: int = Field(default=30, ge=1)


class FamilyConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str
    max_requests: int = Field(default=60, ge=1)
    cache_max_age_seconds: int = Field(default=1800, ge=0)
    on_upstream_failure: FailurePolicy = FailurePolicy.FAIL


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    fetch: FetchConfig = FetchConfig()
    rate_limit: RateLimitConfig = RateLimitConfig()
    client: ClientConfig = ClientConfig()
    families: list[FamilyConfig] = []

    def family(self, name: str) -> FamilyConfig:
        for fam in self.families:
            if fam.name == name:
                return fam
        raise KeyError(f"Unknown family: {name}")
