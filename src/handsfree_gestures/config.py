import logging
from pathlib import Path

import platformdirs
from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger("handsfree_gestures.config")


class FingersConfig(BaseModel):
    curved_threshold_degrees: float = Field(
        60.0, ge=0.0, le=180.0, description="Max fold angle (degrees) for a finger to be considered curved"
    )
    extended_threshold_degrees: float = Field(
        140.0, ge=0.0, le=180.0, description="Min fold angle (degrees) for a finger to be considered extended"
    )
    thumb_extended_threshold_degrees: float = Field(
        120.0, ge=0.0, le=180.0, description="Min CMC-MCP-TIP angle (degrees) for the thumb to be considered extended"
    )

    @model_validator(mode="after")
    def check_thresholds_order(self) -> "FingersConfig":
        if self.curved_threshold_degrees > self.extended_threshold_degrees:
            raise ValueError("curved_threshold_degrees must not exceed extended_threshold_degrees")
        return self


class SwipeConfig(BaseModel):
    displacement_threshold: float = Field(
        0.1, gt=0.0, description="Min horizontal palm displacement since the swipe anchor to confirm a swipe"
    )
    velocity_min: float = Field(
        0.5, ge=0.0, description="Min palm speed (coordinate units per second) between the last two samples"
    )
    noise_floor: float = Field(
        0.01, ge=0.0, description="Min horizontal palm movement between two samples to arm a swipe anchor"
    )
    horizontal_ratio: float = Field(
        1.5, ge=0.0, description="Horizontal displacement must exceed the vertical one times this ratio"
    )
    history_size: int = Field(5, ge=2, description="Number of palm positions kept in the motion history")


class DebounceConfig(BaseModel):
    cooldown_ms: float = Field(
        300.0, ge=0.0, description="Time (ms) after a confirmed gesture during which others are suppressed"
    )
    consecutive_detections_required: int = Field(
        3, ge=1, description="Number of consecutive identical frames needed to confirm a gesture"
    )


class EngineConfig(BaseModel):
    confidence_threshold: float = Field(
        0.8, ge=0.0, le=1.0, description="Min hand score for a frame to be considered as tracked"
    )
    fingers: FingersConfig = Field(
        default_factory=lambda: FingersConfig(),
        description="Configuration for finger extension detection",
    )
    swipe: SwipeConfig = Field(
        default_factory=lambda: SwipeConfig(),
        description="Configuration for swipe detection",
    )
    debounce: DebounceConfig = Field(
        default_factory=lambda: DebounceConfig(),
        description="Configuration for gesture confirmation",
    )


class CLIConfig(BaseModel):
    """Configuration for CLI settings."""

    events_only: bool = Field(True, description="Only print confirmed gestures when replaying a recording")


class Config(BaseModel):
    engine: EngineConfig = Field(default_factory=lambda: EngineConfig(), description="Gesture engine configuration")
    cli: CLIConfig = Field(default_factory=lambda: CLIConfig(), description="CLI configuration")

    @classmethod
    def get_user_path(cls) -> Path:
        app_name = "handsfree-gestures"
        config_dir = Path(platformdirs.user_config_dir(app_name))
        return config_dir / "config.json"

    @classmethod
    def validate_path(cls, path: Path | str | None) -> Path:
        if path is None:
            path = cls.get_user_path()
        elif isinstance(path, str):
            path = Path(path)

        return path.resolve()

    @classmethod
    def load(cls, path: Path | str | None = None) -> "Config":
        path = cls.validate_path(path)

        if not path.exists():
            # If the config file does not exist, return a default config
            logger.info("Config file %s does not exist. Returning default config.", path)
            return cls()

        if not path.is_file():
            raise ValueError(f"Path {path} exists and is not a file.")

        try:
            return cls.model_validate_json(path.read_text())
        except ValueError as exc:
            logger.warning("Error loading config from %s: %s. Returning default config.", path, exc)
            return cls()

    def save(self, path: Path | str | None = None) -> Path:
        path = self.validate_path(path)

        if path.exists() and not path.is_file():
            raise ValueError(f"Path {path} exists and is not a file.")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2))
        logger.info("Config saved to %s", path)
        return path
