"""Configuration data models using Pydantic."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...domain.value_objects.marker_definition import MarkerDefinition


class ScanConfig(BaseModel):
    """Source tree scanning configuration."""
    source_extension: str = Field(
        default=".go",
        description="Extension of source files to analyze"
    )
    test_suffix: str = Field(
        default="_test.go",
        description="File name suffix of test files (never analyzed)"
    )
    constructor_prefix: str = Field(
        default="New",
        min_length=1,
        description="Name prefix identifying constructor functions"
    )
    excluded_dirs: List[str] = Field(
        default_factory=lambda: [".git", "vendor", "node_modules"],
        description="Directory names that are never descended into"
    )
    max_workers: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Worker threads for per-file analysis"
    )
    project_marker: str = Field(
        default="go.mod",
        description="File marking the project root and module definition"
    )

    @field_validator('source_extension')
    @classmethod
    def validate_extension(cls, v):
        """Ensure extension starts with a dot."""
        if not v.startswith("."):
            raise ValueError("source_extension must start with '.'")
        return v


class MarkerConfig(BaseModel):
    """A marker definition declared in configuration."""
    kind: str = Field(
        description="Kind name (e.g. value_object); replaces a built-in of the same kind"
    )
    package_path: str = Field(
        description="Import path of the package declaring the marker type"
    )
    type_name: str = Field(
        description="Marker type name"
    )
    field_name: str = Field(
        default="_",
        description="Field name carrying the marker"
    )

    @field_validator('kind')
    @classmethod
    def normalize_kind(cls, v):
        """Normalize kind names to snake case."""
        return v.strip().lower().replace("-", "_")

    def to_definition(self) -> MarkerDefinition:
        return MarkerDefinition(
            kind=self.kind,
            package_path=self.package_path,
            type_name=self.type_name,
            field_name=self.field_name,
        )


class OutputConfig(BaseModel):
    """Output configuration."""
    default_format: str = Field(
        default="console",
        description="Default output format (console, json, sarif)"
    )
    color: bool = Field(
        default=True,
        description="Enable colored console output"
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose output"
    )

    @field_validator('default_format')
    @classmethod
    def validate_format(cls, v):
        """Ensure format is valid."""
        valid_formats = ["console", "json", "sarif"]
        v = v.lower()
        if v not in valid_formats:
            raise ValueError(f"format must be one of {valid_formats}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(
        default="WARNING",
        description="Console logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    file: Optional[str] = Field(
        default=None,
        description="JSON log file path (disabled when unset)"
    )
    console: bool = Field(
        default=True,
        description="Enable console logging"
    )
    rotation: str = Field(
        default="daily",
        description="Log rotation strategy (daily, none)"
    )
    retention_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Number of days to retain logs"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}")
        return v

    @field_validator('rotation')
    @classmethod
    def validate_rotation(cls, v):
        """Ensure rotation strategy is valid."""
        valid_strategies = ["daily", "none"]
        v = v.lower()
        if v not in valid_strategies:
            raise ValueError(f"rotation must be one of {valid_strategies}")
        return v


class DddCheckConfig(BaseModel):
    """Complete dddcheck configuration."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    scan: ScanConfig = Field(default_factory=ScanConfig)
    markers: List[MarkerConfig] = Field(
        default_factory=list,
        description="Marker definitions added to or overriding the built-in ones"
    )
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def marker_definitions(self) -> List[MarkerDefinition]:
        return [m.to_definition() for m in self.markers]

    def to_yaml(self) -> str:
        """Convert configuration to YAML string."""
        import yaml
        return yaml.dump(
            self.model_dump(),
            default_flow_style=False,
            sort_keys=False,
        )
