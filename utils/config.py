"""
Unified configuration management with Pydantic validation.
Loads and validates all environment variables.
"""

from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator, ValidationError
from pydantic_settings import BaseSettings

# Load environment variables
load_dotenv()


class Config(BaseSettings):
    """Application configuration with validation."""

    # ========================
    # Branding
    # ========================
    brand_name: str = Field(default="JCELL", alias="BRAND_NAME")
    app_title: str = Field(default="JCELL - Checklist Técnico", alias="APP_TITLE")

    # ========================
    # Page Geometry (millimetres)
    # ========================
    page_width_mm: float = Field(default=210.0, alias="PAGE_WIDTH_MM")
    page_height_mm: float = Field(default=297.0, alias="PAGE_HEIGHT_MM")
    page_margin_mm: float = Field(default=10.0, alias="PAGE_MARGIN_MM")

    # ========================
    # Renderer Configuration
    # ========================
    render_width_px: int = Field(default=800, alias="RENDER_WIDTH_PX")
    render_scale: int = Field(default=2, alias="RENDER_SCALE")
    render_font_path: Optional[str] = Field(default=None, alias="RENDER_FONT_PATH")

    # ========================
    # Photo Configuration
    # ========================
    max_photo_size_mb: float = Field(default=5.0, alias="MAX_PHOTO_SIZE_MB")
    photo_extensions: str = Field(
        default="jpg,jpeg,png,webp,gif,bmp",
        alias="PHOTO_EXTENSIONS"
    )

    # ========================
    # File Storage Configuration
    # ========================
    report_dir: str = Field(default="reports", alias="REPORT_DIR")
    log_dir: str = Field(default="logs", alias="LOG_DIR")

    # ========================
    # Logging Configuration
    # ========================
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")

    # ========================
    # Development Configuration
    # ========================
    environment: str = Field(default="development", alias="ENVIRONMENT")
    skip_health_checks: bool = Field(default=False, alias="SKIP_HEALTH_CHECKS")

    # ========================
    # Validators
    # ========================

    @field_validator("brand_name")
    @classmethod
    def validate_brand(cls, v: str) -> str:
        """Brand ends up in file names, so it must not be blank."""
        if not v.strip():
            raise ValueError("BRAND_NAME must not be empty")
        return v.strip()

    @field_validator("page_width_mm", "page_height_mm", "render_width_px", "render_scale", "max_photo_size_mb")
    @classmethod
    def validate_positive(cls, v, info):
        """Validate strictly positive sizes."""
        if v <= 0:
            raise ValueError(f"{info.field_name} must be greater than 0")
        return v

    @field_validator("page_margin_mm")
    @classmethod
    def validate_margin(cls, v: float) -> float:
        """Validate page margin."""
        if v < 0:
            raise ValueError("PAGE_MARGIN_MM must be non-negative")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment."""
        valid_envs = ["development", "staging", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT must be one of {valid_envs}")
        return v.lower()

    @model_validator(mode="after")
    def validate_page_fits_margins(self):
        """Margins on every edge must leave some printable area."""
        if self.page_height_mm - 2 * self.page_margin_mm <= 0:
            raise ValueError(
                f"PAGE_MARGIN_MM={self.page_margin_mm} leaves no usable height "
                f"on a {self.page_height_mm}mm page"
            )
        if self.page_width_mm - 2 * self.page_margin_mm <= 0:
            raise ValueError(
                f"PAGE_MARGIN_MM={self.page_margin_mm} leaves no usable width "
                f"on a {self.page_width_mm}mm page"
            )
        return self

    # ========================
    # Helper Properties
    # ========================

    @property
    def photo_extensions_list(self) -> List[str]:
        """Get uploader extensions as list."""
        return [ext.strip().lower() for ext in self.photo_extensions.split(",") if ext.strip()]

    @property
    def max_photo_size_bytes(self) -> int:
        """Photo size limit in bytes."""
        return int(self.max_photo_size_mb * 1024 * 1024)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == "development"

    def get_report_dir(self) -> Path:
        """Get report directory as Path object."""
        path = Path(self.report_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def get_log_dir(self) -> Path:
        """Get log directory as Path object."""
        path = Path(self.log_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def get_log_file(self) -> Optional[Path]:
        """Log file path when file logging is enabled."""
        if not self.log_to_file:
            return None
        return self.get_log_dir() / "checklist.log"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


def get_config() -> Config:
    """
    Load and validate configuration.
    Exits if configuration is invalid.
    """
    try:
        return Config()

    except ValidationError as e:
        print("\n❌ Configuration Error:")
        print("=" * 60)
        for error in e.errors():
            field = " -> ".join(str(loc) for loc in error["loc"])
            print(f"\n Field: {field}")
            print(f"  Error: {error['msg']}")
            if "input" in error:
                print(f"  Value: {error['input']}")
        print("\n" + "=" * 60)
        print("\nPlease check your .env file and fix the errors above.")
        print("See .env.example for reference.\n")
        raise SystemExit(1)


# Global configuration instance
config = get_config()


# Export commonly used paths
REPORT_DIR = config.get_report_dir()
LOG_DIR = config.get_log_dir()
