from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Project Explorer"
    debug: bool = False

    # JSON project catalog loaded once at startup (optional)
    projects_file: str | None = None

    # Quiet period before a title search edit re-runs the pipeline
    title_search_debounce_ms: int = 500

    # Tags pulled to the top of the results, highest priority first
    tag_priority: list[str] = ["Khronos Official", "Staff Picks"]

    # Feature flag for the legacy bucketing behavior
    # When True, a project is appended to every bucket its tags map to,
    # and once to UNTAGGED per unknown tag.
    # Default: False (each project lands in exactly one bucket)
    legacy_bucket_fan_out: bool = False

    # Pipeline runs kept in the in-process metrics history
    pipeline_metrics_history_size: int = 1000


settings = Settings()
