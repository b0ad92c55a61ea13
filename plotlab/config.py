from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


IMAGE_FORMATS = ("png", "svg", "pdf")


class Settings(BaseSettings):
    """
    Central config loaded from environment variables and optionally .env (local).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -------------------------
    # Output
    # -------------------------
    data_dir: str = Field("./plotlab-data", alias="PLOTLAB_DATA_DIR")
    image_format: str = Field("png", alias="PLOTLAB_IMAGE_FORMAT")
    dpi: int = Field(100, alias="PLOTLAB_DPI")

    # -------------------------
    # seaborn example datasets cache (None -> seaborn default ~/seaborn-data)
    # -------------------------
    seaborn_data_home: Optional[str] = Field(None, alias="SEABORN_DATA")

    # -------------------------
    # Theme
    # -------------------------
    theme_style: str = Field("whitegrid", alias="PLOTLAB_THEME_STYLE")
    theme_context: str = Field("notebook", alias="PLOTLAB_THEME_CONTEXT")
    palette: str = Field("deep", alias="PLOTLAB_PALETTE")

    # -------------------------
    # Limits
    # -------------------------
    max_rows: int = Field(200_000, alias="PLOTLAB_MAX_ROWS")
    pairplot_max_vars: int = Field(8, alias="PLOTLAB_PAIRPLOT_MAX_VARS")
    session_ttl_hours: int = Field(24, alias="PLOTLAB_SESSION_TTL_HOURS")

    # -------------------------
    # API
    # -------------------------
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ALLOW_ORIGINS")
    log_level: str = Field("INFO", alias="PLOTLAB_LOG_LEVEL")

    def model_post_init(self, __context) -> None:
        """
        Normalize case-insensitive values and reject an image format matplotlib
        cannot write through our media-type table.
        """
        self.image_format = self.image_format.strip().lower()
        self.log_level = self.log_level.strip().upper()
        if self.image_format not in IMAGE_FORMATS:
            raise ValueError(
                f"PLOTLAB_IMAGE_FORMAT must be one of {', '.join(IMAGE_FORMATS)}, got {self.image_format!r}"
            )


settings = Settings()
