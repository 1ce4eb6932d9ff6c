"""
Central configuration management for FloraSearch.

Loads settings from environment variables and provides typed access.
Settings are plain values: build one with load_settings() and pass it to
the operations that need paths or the run prefix.
"""
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PathSettings(BaseSettings):
    """Path configuration."""
    collection: Path = Field(default=Path("data/collection"), alias="COLLECTION_PATH")
    archives: Path = Field(default=Path("data/archives"), alias="ARCHIVES_PATH")
    reports: Path = Field(default=Path("data/reports"), alias="REPORTS_PATH")

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    def resolve(self, base_dir: Path) -> "PathSettings":
        """Resolve relative paths against base directory."""
        return PathSettings(
            collection=base_dir / self.collection,
            archives=base_dir / self.archives,
            reports=base_dir / self.reports
        )


class Settings(BaseSettings):
    """Main settings aggregator."""
    paths: PathSettings = Field(default_factory=PathSettings)

    # Prefix used to name generated report files
    default_prefix: str = Field(default="PRE-1", alias="RUN_PREFIX")

    # Maximum number of ranked documents written to a report
    report_limit: int = Field(default=30, ge=1, alias="REPORT_LIMIT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


def load_settings(base_dir: Path | None = None) -> Settings:
    """
    Build a fresh settings value from the environment.

    Args:
        base_dir: Optional directory to resolve relative paths against

    Returns:
        Settings instance (never cached)
    """
    settings = Settings()
    if base_dir is not None:
        settings = settings.model_copy(update={"paths": settings.paths.resolve(base_dir)})
    return settings


# Convenience function
def load_dotenv_if_exists():
    """Load .env file from the project root if it exists."""
    from dotenv import load_dotenv
    env_path = Path(__file__).parent.parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)
