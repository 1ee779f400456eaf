"""Configuration for the request interceptor.

``InterceptorConfig`` is the explicit configuration handed to the
interceptor at construction time.  ``Settings`` reads the same values
from ``REQUEST_METRICS_*`` environment variables for hosts that prefer
env-driven wiring.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_NAMESPACE = "request_metrics.RequestInterceptor"
DEFAULT_REGISTRY_KEY = f"{DEFAULT_NAMESPACE}.registry"
DEFAULT_OTHER_METRIC_NAME = "other"

# Meter suffixes for the status codes most services care about.
STANDARD_STATUS_METRIC_NAMES: dict[int, str] = {
    200: "ok",
    201: "created",
    204: "noContent",
    400: "badRequest",
    404: "notFound",
    500: "serverError",
}

MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599


class InterceptorConfig(BaseModel):
    """Immutable interceptor configuration."""

    model_config = ConfigDict(frozen=True)

    registry_key: str | None = DEFAULT_REGISTRY_KEY
    status_metric_names: dict[int, str] = Field(default_factory=dict)
    other_metric_name: str = Field(default=DEFAULT_OTHER_METRIC_NAME, min_length=1)
    namespace: str = Field(default=DEFAULT_NAMESPACE, min_length=1)

    @field_validator("status_metric_names")
    @classmethod
    def _check_status_metric_names(cls, value: dict[int, str]) -> dict[int, str]:
        for status, name in value.items():
            if not MIN_STATUS_CODE <= status <= MAX_STATUS_CODE:
                raise ValueError(
                    f"status code {status} outside {MIN_STATUS_CODE}-{MAX_STATUS_CODE}"
                )
            if not name:
                raise ValueError(f"empty metric name for status code {status}")
        return value

    @classmethod
    def standard(cls, **overrides) -> "InterceptorConfig":
        """Config with the standard status-name table."""
        values = {"status_metric_names": dict(STANDARD_STATUS_METRIC_NAMES), **overrides}
        return cls(**values)


class Settings(BaseSettings):
    """Environment-backed settings.

    ``REQUEST_METRICS_STATUS_METRIC_NAMES`` is parsed as JSON, e.g.
    ``{"404": "notFound", "503": "unavailable"}``.
    """

    model_config = SettingsConfigDict(
        env_prefix="REQUEST_METRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    registry_key: str | None = DEFAULT_REGISTRY_KEY
    status_metric_names: dict[int, str] = Field(
        default_factory=lambda: dict(STANDARD_STATUS_METRIC_NAMES)
    )
    other_metric_name: str = DEFAULT_OTHER_METRIC_NAME
    namespace: str = DEFAULT_NAMESPACE

    def interceptor_config(self) -> InterceptorConfig:
        """Build the validated interceptor configuration."""
        return InterceptorConfig(
            registry_key=self.registry_key,
            status_metric_names=self.status_metric_names,
            other_metric_name=self.other_metric_name,
            namespace=self.namespace,
        )


settings = Settings()
