"""Application configuration loaded from environment variables."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    input_dir: Path = Path("excel")
    output_dir: Path = Path("output")
    output_basename: str = "linkedin-data-list"
    write_sqlite: bool = False
    log_level: str = "info"
    app_port: int = 8050
    max_upload_size_mb: int = 50

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("output_basename")
    @classmethod
    def validate_output_basename(cls, v: str) -> str:
        """Output files are written as <output_dir>/<basename>.<ext>, so the
        basename must be a bare file stem."""
        v = v.strip()
        if not v or Path(v).name != v or Path(v).suffix:
            raise ValueError(
                f"OUTPUT_BASENAME must be a file name without directory or extension, got '{v}'"
            )
        return v

    @property
    def csv_path(self) -> Path:
        return self.output_dir / f"{self.output_basename}.csv"

    @property
    def xlsx_path(self) -> Path:
        return self.output_dir / f"{self.output_basename}.xlsx"

    @property
    def db_path(self) -> Path:
        return self.output_dir / f"{self.output_basename}.db"

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"


settings = Settings()
