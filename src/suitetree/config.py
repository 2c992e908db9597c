"""Configuration management for SuiteTree."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class ProjectConfig(BaseModel):
    """Project identification and metadata."""

    name: str = Field(default="my-project", description="Project name for identification")
    description: str = Field(default="", description="Brief description of the test project")


class RunConfig(BaseModel):
    """Run configuration that test ids are disambiguated by."""

    name: str = Field(default="default", description="Configuration name (e.g., a browser or platform)")
    parameters: dict[str, str] = Field(default_factory=dict, description="Additional configuration parameters")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Configuration name cannot be empty")
        return v.strip()

    def configuration_key(self) -> str:
        """Build the key used in test ids, e.g. ``chromium,headless=true``."""
        parts = [self.name]
        parts.extend(f"{key}={value}" for key, value in sorted(self.parameters.items()))
        return ",".join(parts)


class TimeoutConfig(BaseModel):
    """Ambient timeouts applied to tests without an override."""

    default_timeout_ms: int = Field(default=30000, description="Timeout for a single test")
    slow_multiplier: int = Field(default=3, description="Timeout factor for tests marked slow")

    @field_validator("default_timeout_ms", "slow_multiplier")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v


class SuiteTreeConfig(BaseModel):
    """Main configuration for SuiteTree."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    run: RunConfig = Field(default_factory=RunConfig)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "SuiteTreeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.model_validate(data)

    @classmethod
    def find_and_load(cls, start_dir: Path | str | None = None) -> "SuiteTreeConfig":
        """Find and load configuration file, searching up the directory tree."""
        if start_dir is None:
            start_dir = Path.cwd()
        else:
            start_dir = Path(start_dir)

        config_names = ["suitetree.json", ".suitetree.json"]

        current = start_dir.resolve()
        while True:
            for name in config_names:
                config_path = current / name
                if config_path.exists():
                    return cls.from_file(config_path)
            if current == current.parent:
                break
            current = current.parent

        raise FileNotFoundError(
            "No configuration file found. Create suitetree.json or run 'suitetree init'"
        )

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)


def get_default_config() -> SuiteTreeConfig:
    """Return a default configuration."""
    return SuiteTreeConfig(
        project=ProjectConfig(name="my-project"),
        run=RunConfig(name="default"),
        timeouts=TimeoutConfig(),
    )


def create_example_config(output_path: Path | str) -> Path:
    """Create an example configuration file."""
    output_path = Path(output_path)
    config = get_default_config()
    config.project.description = "Brief description of your test project"
    config.run.name = "chromium"
    config.run.parameters = {"headless": "true"}
    config.to_file(output_path)
    return output_path
