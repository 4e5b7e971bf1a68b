# renderer/settings.py
"""Render settings: named quality levels plus environment overrides."""
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from core.errors import ConfigurationError

QUALITY_LEVELS = {
    "preview": {"samples": 4, "bounces": 8},
    "balanced": {"samples": 32, "bounces": 25},
    "final": {"samples": 100, "bounces": 50},
}
DEFAULT_QUALITY = "preview"
DEFAULT_WIDTH = 400
DEFAULT_ASPECT_RATIO = 16.0 / 9.0


@dataclass(frozen=True)
class RenderSettings:
    image_width: int = DEFAULT_WIDTH
    aspect_ratio: float = DEFAULT_ASPECT_RATIO
    samples: int = QUALITY_LEVELS[DEFAULT_QUALITY]["samples"]
    max_depth: int = QUALITY_LEVELS[DEFAULT_QUALITY]["bounces"]
    seed: Optional[int] = None
    quality: str = DEFAULT_QUALITY

    @property
    def image_height(self) -> int:
        return max(1, int(self.image_width / self.aspect_ratio))

    @classmethod
    def from_quality(cls, quality: str, **overrides) -> "RenderSettings":
        try:
            level = QUALITY_LEVELS[quality]
        except KeyError:
            raise ConfigurationError(
                f"unknown quality level {quality!r}; expected one of {sorted(QUALITY_LEVELS)}"
            ) from None
        settings = cls(samples=level["samples"], max_depth=level["bounces"], quality=quality)
        return settings.with_overrides(**overrides)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RenderSettings":
        """
        Read RT_QUALITY, RT_WIDTH, RT_SAMPLES, RT_MAX_DEPTH and RT_SEED.
        Unset variables keep the quality level's defaults.
        """
        env = os.environ if environ is None else environ
        settings = cls.from_quality(env.get("RT_QUALITY", DEFAULT_QUALITY))
        return settings.with_overrides(
            image_width=_env_int(env, "RT_WIDTH"),
            samples=_env_int(env, "RT_SAMPLES"),
            max_depth=_env_int(env, "RT_MAX_DEPTH"),
            seed=_env_int(env, "RT_SEED"),
        )

    def with_overrides(self, **overrides) -> "RenderSettings":
        """Return a copy with every non-None override applied, then validate."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        settings = replace(self, **changes) if changes else self
        settings.validate()
        return settings

    def validate(self):
        if self.image_width < 1:
            raise ConfigurationError(f"image width must be positive, got {self.image_width}")
        if not self.aspect_ratio > 0:
            raise ConfigurationError(f"aspect ratio must be positive, got {self.aspect_ratio}")
        if self.samples < 1:
            raise ConfigurationError(f"samples per pixel must be positive, got {self.samples}")
        if self.max_depth < 1:
            raise ConfigurationError(f"max depth must be positive, got {self.max_depth}")


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
