"""
Pydantic models for YAML configuration validation.
Provides schema validation with clear error messages for browser configurations.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from crosspage_selector.core.models import DEFAULT_PAGE_SIZE, DEFAULT_TOTAL_RECORDS, PAGE_SIZE_OPTIONS

DEFAULT_BASE_URL = "https://api.artic.edu/api/v1/artworks"
DEFAULT_HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; CrossPageSelector/0.1)"}


class FieldsConfig(BaseModel):
    """Response keys that hold each record field."""
    id: str = Field("id", description="Key of the integer record id")
    title: str = Field("title", description="Key of the record title")
    secondary_label: str = Field("artist_title", description="Key of the optional secondary label")


class RetryConfig(BaseModel):
    """Transport-level retry behaviour of the HTTP client."""
    max_attempts: int = Field(1, ge=1, le=10, description="Total attempts per request")
    base_delay_s: float = Field(1.0, ge=0, description="Initial backoff delay in seconds")
    jitter_s: float = Field(0.3, ge=0, description="Maximum random jitter added to each delay")
    retry_statuses: List[int] = Field(
        default_factory=lambda: [429, 500, 502, 503, 504],
        description="HTTP statuses that trigger a retry",
    )


class SourceConfig(BaseModel):
    """Configuration for the paged data source."""
    base_url: str = Field(DEFAULT_BASE_URL, description="Endpoint that accepts page/limit parameters")
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra HTTP headers")
    params: Dict[str, Any] = Field(default_factory=dict, description="Extra query parameters")
    page_param: str = Field("page", description="Name of the 1-based page parameter")
    limit_param: str = Field("limit", description="Name of the page size parameter")
    timeout_s: float = Field(30, gt=0, le=300, description="Request timeout in seconds")
    default_total: int = Field(DEFAULT_TOTAL_RECORDS, ge=0, description="Total used when the response omits one")
    fields: FieldsConfig = Field(default_factory=FieldsConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v):
        if not v.startswith(('http://', 'https://')):
            raise ValueError('base_url must be a valid HTTP/HTTPS URL')
        return v

    @model_validator(mode='after')
    def validate_param_names(self):
        if self.page_param == self.limit_param:
            raise ValueError('page_param and limit_param must differ')
        return self


class ViewConfig(BaseModel):
    """Configuration for the paginated view."""
    page_size: int = Field(DEFAULT_PAGE_SIZE, description="Initial rows per page")
    page_size_options: List[int] = Field(
        default_factory=lambda: list(PAGE_SIZE_OPTIONS),
        description="Allowed rows-per-page values",
    )
    delay_ms: int = Field(0, ge=0, le=60000, description="Delay between chained fetches in milliseconds")
    max_fetches: Optional[int] = Field(None, ge=1, description="Cap on fetches per user action")

    @field_validator('page_size_options')
    @classmethod
    def validate_options(cls, v):
        if not v:
            raise ValueError('page_size_options cannot be empty')
        if any(o <= 0 for o in v):
            raise ValueError('page_size_options must be positive')
        return sorted(set(v))

    @model_validator(mode='after')
    def validate_page_size(self):
        if self.page_size not in self.page_size_options:
            raise ValueError(f'page_size {self.page_size} must be one of {self.page_size_options}')
        return self


class BrowserConfig(BaseModel):
    """Root configuration model."""
    source: SourceConfig = Field(default_factory=SourceConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    logging_config: str = Field("configs/logging.yaml", description="Path to the logging dictConfig YAML")


def load_and_validate_config(config_path: str) -> BrowserConfig:
    """
    Load and validate a browser configuration from YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Validated BrowserConfig object

    Raises:
        ValueError: If the YAML is malformed or the configuration is invalid
        FileNotFoundError: If config file doesn't exist
    """
    import yaml

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}")

    return validate_config(raw_config or {}, source=config_path)


def validate_config(raw_config: Dict[str, Any], source: str = "<dict>") -> BrowserConfig:
    """Validate an already-parsed configuration mapping."""
    try:
        return BrowserConfig(**raw_config)
    except ValidationError as e:
        # Format validation errors nicely
        error_messages = []
        for error in e.errors():
            field_path = '.'.join(str(loc) for loc in error['loc'])
            error_messages.append(f"  {field_path}: {error['msg']}")

        raise ValueError(
            f"Configuration validation failed for {source}:\n" +
            '\n'.join(error_messages)
        ) from e
