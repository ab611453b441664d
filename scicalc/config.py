"""Environment-driven settings for scicalc.

    SCICALC_ANGLE_MODE   deg | rad        (default: deg)
    SCICALC_LAYOUT       basic | standard | scientific (default: scientific)

CLI options take precedence over the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from scicalc.keypad import Layout
from scicalc.models import AngleMode

ANGLE_MODE_VAR = "SCICALC_ANGLE_MODE"
LAYOUT_VAR = "SCICALC_LAYOUT"


@dataclass
class Settings:
    angle_mode: AngleMode = AngleMode.DEGREES
    layout: Layout = Layout.SCIENTIFIC


def parse_angle_mode(value: str) -> AngleMode:
    try:
        return AngleMode(value.strip().lower())
    except ValueError:
        raise ValueError(f"Invalid angle mode: {value!r} (expected 'deg' or 'rad')") from None


def parse_layout(value: str) -> Layout:
    try:
        return Layout(value.strip().lower())
    except ValueError:
        choices = ", ".join(layout.value for layout in Layout)
        raise ValueError(f"Invalid layout: {value!r} (expected one of {choices})") from None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        env: Mapping to read instead of os.environ (used by tests).

    Raises:
        ValueError: a variable is set to an unsupported value.
    """
    env = os.environ if env is None else env
    settings = Settings()
    if env.get(ANGLE_MODE_VAR):
        settings.angle_mode = parse_angle_mode(env[ANGLE_MODE_VAR])
    if env.get(LAYOUT_VAR):
        settings.layout = parse_layout(env[LAYOUT_VAR])
    return settings
