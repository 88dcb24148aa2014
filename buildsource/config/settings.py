"""BuildSource configuration settings.

Loads configuration from environment variables with sensible defaults.
A local .env file is honoured for development.
"""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATA_DIR = str(Path(__file__).resolve().parent.parent / "data")

REGRESSOR_KINDS = ("mlp", "linear")


def _optional_int(name: str) -> Optional[int]:
    """Read an optional integer environment variable."""
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    # Data store
    data_dir: str = field(default_factory=lambda: os.getenv("BUILDSOURCE_DATA_DIR", DEFAULT_DATA_DIR))

    # Regression model
    regressor_kind: str = field(default_factory=lambda: os.getenv("REGRESSOR_KIND", "mlp").lower())
    training_epochs: int = field(default_factory=lambda: int(os.getenv("TRAINING_EPOCHS", "100")))
    training_batch_size: int = field(default_factory=lambda: int(os.getenv("TRAINING_BATCH_SIZE", "32")))
    training_learning_rate: float = field(default_factory=lambda: float(os.getenv("TRAINING_LEARNING_RATE", "0.01")))
    synthetic_sample_count: int = field(default_factory=lambda: int(os.getenv("SYNTHETIC_SAMPLE_COUNT", "100")))
    random_seed: Optional[int] = field(default_factory=lambda: _optional_int("RANDOM_SEED"))

    # Server
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    def validate(self) -> None:
        """Validate settings values.

        Raises:
            ValueError: If a setting is out of range.
        """
        if self.regressor_kind not in REGRESSOR_KINDS:
            raise ValueError(
                f"REGRESSOR_KIND must be one of {', '.join(REGRESSOR_KINDS)}, got {self.regressor_kind!r}"
            )
        if self.training_epochs < 1:
            raise ValueError("TRAINING_EPOCHS must be >= 1")
        if self.training_batch_size < 1:
            raise ValueError("TRAINING_BATCH_SIZE must be >= 1")
        if self.training_learning_rate <= 0:
            raise ValueError("TRAINING_LEARNING_RATE must be > 0")
        if self.synthetic_sample_count < 0:
            raise ValueError("SYNTHETIC_SAMPLE_COUNT must be >= 0")


# Singleton settings instance
settings = Settings()
