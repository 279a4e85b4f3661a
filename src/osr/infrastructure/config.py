"""Runtime settings, read from the environment.

The CLI exposes the same settings as options; values given on the
command line take precedence over the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from osr.domain.exceptions import ValidationError
from osr.domain.repository.product_store import DEFAULT_TIMEOUT_SECONDS

DATA_DIR_ENV = "OSR_DATA_DIR"
TIMEOUT_ENV = "OSR_TIMEOUT"

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValidationError(
                f"Timeout must be positive, got {self.timeout_seconds}"
            )

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        data_dir = Path(env[DATA_DIR_ENV]) if env.get(DATA_DIR_ENV) else DEFAULT_DATA_DIR
        raw_timeout = env.get(TIMEOUT_ENV)
        if not raw_timeout:
            return Settings(data_dir=data_dir)
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ValidationError(f"Invalid {TIMEOUT_ENV} value: {raw_timeout!r}") from exc
        return Settings(data_dir=data_dir, timeout_seconds=timeout)
