"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - Service secrets have no default: a missing one fails at startup, not per request
    - get_settings() is cached (lru_cache), single instance per process
    - Request logic receives settings through dependencies, never reads os.environ

Design Decisions:
    - Upstream URLs default to the production endpoints and are overridable per environment
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gateway.core.domain_types import ResponseShape


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"  # nosec B104
    port: int = 8000

    # ROP civil registry (SOAP)
    rop_wsdl_url: str = "http://10.14.7.77/ROP-PRO-V-2-DT/rop_service.asmx?wsdl"
    rop_service_password: str = Field(min_length=1)
    rop_response_shape: ResponseShape = ResponseShape.RAW

    # Bulk SMS (SOAP)
    sms_wsdl_url: str = "https://tamimahsms.com/user/BulkPush.asmx?wsdl"
    sms_username: str = Field(min_length=1)
    sms_password: str = Field(min_length=1)

    # Mail API (OAuth2 client credentials)
    email_tenant_id: str = Field(min_length=1)
    email_client_id: str = Field(min_length=1)
    email_client_secret: str = Field(min_length=1)
    email_sender: str = "no.reply@cpa.gov.om"
    graph_base_url: str = "https://graph.microsoft.com/v1.0"
    graph_scope: str = "https://graph.microsoft.com/.default"

    # MOCI inspection API (REST, bearer pass-through)
    moci_base_url: str = (
        "https://maidan.cpa.gov.om/cpa-web-api-pro/InspectionMobile"
    )

    # Applies to every outbound call
    upstream_timeout_seconds: float = Field(default=30.0, gt=0)

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("graph_base_url", "moci_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def secret_values(self) -> tuple[str, ...]:
        """Values the log redaction filter masks."""
        return (
            self.rop_service_password, self.sms_password, self.email_client_secret,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
