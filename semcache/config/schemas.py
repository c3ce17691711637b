"""
semcache — Configuration Schemas

Typed configuration models using Pydantic for validation.
All configuration is defined here and validated when loaded.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_MIN_PROXIMITY = 0.9


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class IndexBackend(str, Enum):
    """Supported vector index backends."""

    UPSTASH = "upstash"
    MEMORY = "memory"
    CHROMA = "chroma"  # Requires the chroma extra


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class IndexConfig(BaseModel):
    """Vector index configuration."""

    backend: IndexBackend = Field(default=IndexBackend.MEMORY, description="Vector index backend to use")

    # Upstash-specific settings (only used when backend=upstash)
    url: str | None = Field(default=None, description="Upstash Vector REST URL")
    token: str | None = Field(default=None, description="Upstash Vector REST token")

    # Local embedding settings (only used when backend=memory)
    embedding_dimensions: int = Field(
        default=256,
        ge=8,
        description="Dimensions of the hashing embedder used by the memory backend",
    )

    # Chroma-specific settings (only used when backend=chroma)
    persist_directory: str | None = Field(
        default=None,
        description="Chroma persistence directory (None = ephemeral in-process client)",
    )
    collection_name: str = Field(default="semcache", description="Chroma collection name prefix")

    @model_validator(mode="after")
    def validate_credentials(self) -> "IndexConfig":
        """Upstash credentials are given together or not at all."""
        if self.backend == IndexBackend.UPSTASH and bool(self.url) != bool(self.token):
            raise ValueError("url and token must both be set for the upstash backend (or both omitted)")
        return self


class SemanticCacheConfig(BaseModel):
    """Semantic cache facade configuration."""

    min_proximity: float = Field(
        default=DEFAULT_MIN_PROXIMITY,
        gt=0.0,
        le=1.0,
        description="Similarity score a match must strictly exceed to count as a hit",
    )
    namespace: str | None = Field(default=None, description="Index namespace scoping every operation")

    @field_validator("namespace")
    @classmethod
    def normalize_namespace(cls, v: str | None) -> str | None:
        """Treat blank namespaces as no namespace."""
        if v is None:
            return None
        v = v.strip()
        return v or None


class AppConfig(BaseModel):
    """Root configuration for semcache."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    index: IndexConfig = Field(default_factory=IndexConfig)
    cache: SemanticCacheConfig = Field(default_factory=SemanticCacheConfig)

    @field_validator("index")
    @classmethod
    def validate_index(cls, v: IndexConfig, info: Any) -> IndexConfig:
        """The in-process fake is not allowed in production."""
        environment = info.data.get("environment")
        if environment == Environment.PRODUCTION and v.backend == IndexBackend.MEMORY:
            raise ValueError("The memory index backend cannot be used in production")
        return v

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
