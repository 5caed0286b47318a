"""Configuration schema models using Pydantic."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class ProviderName(str, Enum):
    """Job providers, in the order their results are merged."""

    THEIRSTACK = "theirstack"
    JSEARCH = "jsearch"
    ADZUNA = "adzuna"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class ProvidersConfig(BaseModel):
    """Per-provider switches.

    A provider that is enabled here but has no credentials in the environment
    is still soft-disabled at runtime.
    """

    theirstack_enabled: bool = Field(True, description="Query TheirStack")
    jsearch_enabled: bool = Field(True, description="Query JSearch (RapidAPI)")
    adzuna_enabled: bool = Field(True, description="Query Adzuna")
    theirstack_bulk_size: int = Field(
        200, ge=1, le=1000, description="Page size requested from TheirStack before client-side filtering"
    )

    def is_enabled(self, provider: ProviderName) -> bool:
        """Return whether ``provider`` is switched on."""
        return getattr(self, f"{ProviderName(provider).value}_enabled")


class PipelineConfig(BaseModel):
    """Bounds and thresholds of the match pipeline."""

    search_limit: int = Field(100, ge=1, le=500, description="Limit passed to the aggregator")
    max_candidates: int = Field(30, ge=1, le=200, description="Candidates scored per run")
    min_match_score: int = Field(50, ge=0, le=100, description="Matches below this score are dropped")
    persist_top: int = Field(10, ge=0, description="Top matches written to the job store")
    scoring_concurrency: int = Field(10, ge=1, le=64, description="Concurrent scoring calls")

    @model_validator(mode="after")
    def validate_bounds(self):
        """Persisted matches are a subset of the scored candidates."""
        if self.persist_top > self.max_candidates:
            raise ValueError(
                f"persist_top ({self.persist_top}) cannot exceed max_candidates ({self.max_candidates})"
            )
        return self


class LLMConfig(BaseModel):
    """Completion settings used by the match scorer."""

    model: str = Field("gpt-4o-mini", min_length=1, description="Chat completion model")
    temperature: float = Field(0.7, ge=0.0, le=2.0)
    timeout_seconds: float = Field(15.0, gt=0, le=120, description="Per-call timeout")
    max_retries: int = Field(0, ge=0, le=5, description="SDK-level retries per call")

    @field_validator("model")
    @classmethod
    def strip_model(cls, v: str) -> str:
        """Strip whitespace from the model name."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("model cannot be empty")
        return stripped


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AdvancedConfig(BaseModel):
    """Advanced runtime settings."""

    http_request_timeout: int = Field(
        15, ge=5, le=300, description="Request timeout for provider API calls (seconds)"
    )
    user_agent: str = Field(
        "Pathfinder/1.0",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )
    max_jobs_per_provider: int = Field(
        200, ge=0, description="Maximum jobs kept per provider call (0 = unlimited)"
    )

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object. Every section has defaults."""

    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    advanced: AdvancedConfig = Field(default_factory=AdvancedConfig)
