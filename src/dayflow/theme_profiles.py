"""Preview theme profile schema and resolver."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from reportlab.lib import colors

from .profiles import read_json_file


@dataclass(frozen=True)
class ThemeProfile:
    """Serializable preview theme values."""

    background: str = "#F9F9F9"
    text_primary: str = "#2C3E50"
    text_secondary: str = "#7F8C8D"
    accent: str = "#E67E22"
    grid_lines: str = "#BDC3C7"
    half_hour_lines: str = "#EEEEEE"
    event_fill: str = "#D6EAF8"
    event_nested_fill: str = "#AED6F1"
    event_border: str = "#2E86C1"
    font_header: str = "Helvetica-Bold"
    font_regular: str = "Helvetica"
    font_bold: str = "Helvetica-Bold"

    def to_theme_class(self) -> type:
        """Return a runtime Theme-like class with parsed color objects."""
        return type(
            "Theme",
            (),
            {
                "BACKGROUND": _parse_color(self.background, key="background"),
                "TEXT_PRIMARY": _parse_color(self.text_primary, key="text_primary"),
                "TEXT_SECONDARY": _parse_color(self.text_secondary, key="text_secondary"),
                "ACCENT": _parse_color(self.accent, key="accent"),
                "GRID_LINES": _parse_color(self.grid_lines, key="grid_lines"),
                "HALF_HOUR_LINES": _parse_color(self.half_hour_lines, key="half_hour_lines"),
                "EVENT_FILL": _parse_color(self.event_fill, key="event_fill"),
                "EVENT_NESTED_FILL": _parse_color(
                    self.event_nested_fill, key="event_nested_fill"
                ),
                "EVENT_BORDER": _parse_color(self.event_border, key="event_border"),
                "FONT_HEADER": _parse_font(self.font_header, key="font_header"),
                "FONT_REGULAR": _parse_font(self.font_regular, key="font_regular"),
                "FONT_BOLD": _parse_font(self.font_bold, key="font_bold"),
            },
        )


_BUILTIN_THEME_PROFILES: dict[str, ThemeProfile] = {
    "default": ThemeProfile(),
    "mono": ThemeProfile(
        accent="#333333",
        event_fill="#F2F2F2",
        event_nested_fill="#DDDDDD",
        event_border="#333333",
    ),
}


def available_theme_profiles() -> tuple[str, ...]:
    """Return built-in theme profile names."""
    return tuple(sorted(_BUILTIN_THEME_PROFILES))


def resolve_theme(
    *,
    profile: str = "default",
    theme_file: str | Path | None = None,
) -> type:
    """Resolve one built-in theme plus optional file overrides."""
    if profile not in _BUILTIN_THEME_PROFILES:
        valid = ", ".join(available_theme_profiles())
        msg = f"unknown theme profile '{profile}'. Valid profiles: {valid}."
        raise ValueError(msg)

    resolved_profile = _BUILTIN_THEME_PROFILES[profile]
    if theme_file is not None:
        resolved_profile = replace(resolved_profile, **_load_theme_file(Path(theme_file)))
    return resolved_profile.to_theme_class()


def _load_theme_file(path: Path) -> dict[str, Any]:
    payload = read_json_file(path, label="theme")
    if not isinstance(payload, dict):
        msg = "theme file content must be a JSON object."
        raise ValueError(msg)

    allowed = set(ThemeProfile.__dataclass_fields__)
    unknown = sorted(key for key in payload if key not in allowed)
    if unknown:
        msg = f"unknown theme key(s): {', '.join(unknown)}."
        raise ValueError(msg)

    return payload


def _parse_color(raw_value: str, *, key: str) -> colors.Color:
    if not isinstance(raw_value, str) or not raw_value.strip():
        msg = f"theme key '{key}' must be a non-empty color string."
        raise ValueError(msg)
    try:
        if raw_value.startswith("#"):
            return colors.HexColor(raw_value)
        return colors.toColor(raw_value)
    except Exception as exc:  # noqa: BLE001
        msg = f"invalid color value '{raw_value}' for theme key '{key}'."
        raise ValueError(msg) from exc


def _parse_font(raw_value: str, *, key: str) -> str:
    if not isinstance(raw_value, str) or not raw_value.strip():
        msg = f"theme key '{key}' must be a non-empty font name string."
        raise ValueError(msg)
    return raw_value
