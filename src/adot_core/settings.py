from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

from .errors import ConfigError


class Settings(BaseSettings):
    project_id: Optional[str] = Field(default=None, alias="PROJECT_ID")
    credentials_path: Optional[str] = Field(
        default=None, alias="GOOGLE_APPLICATION_CREDENTIALS"
    )
    ipinfo_token: Optional[str] = Field(default=None, alias="IPINFO_TOKEN")

    geo_endpoint: str = Field(
        default="https://ipinfo.io/json", alias="ADOT_GEO_ENDPOINT"
    )
    readme_path: str = Field(default="README.md", alias="ADOT_README_PATH")

    log_level: str = Field(default="INFO", alias="ADOT_LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


class ResolvedConfig(BaseModel):
    """Validated configuration for one workflow run.

    Passed by value into the store client; nothing is written back into the
    process environment.
    """

    model_config = ConfigDict(frozen=True)

    project_id: str
    credentials_path: str
    api_token: Optional[str] = None
    geo_endpoint: str = "https://ipinfo.io/json"


def resolve_config(
    settings: Optional[Settings] = None, require_token: bool = False
) -> ResolvedConfig:
    """Return the resolved configuration or raise ConfigError for the first missing variable."""
    s = settings if settings is not None else Settings()
    required = [
        ("PROJECT_ID", s.project_id),
        ("GOOGLE_APPLICATION_CREDENTIALS", s.credentials_path),
    ]
    if require_token:
        required.append(("IPINFO_TOKEN", s.ipinfo_token))
    for variable, value in required:
        if not value:
            raise ConfigError(variable)
    return ResolvedConfig(
        project_id=s.project_id,
        credentials_path=s.credentials_path,
        api_token=s.ipinfo_token if require_token else None,
        geo_endpoint=s.geo_endpoint,
    )
