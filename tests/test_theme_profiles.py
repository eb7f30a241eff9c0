"""Tests for preview theme resolution and validation."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from reportlab.lib import colors

from dayflow.theme_profiles import available_theme_profiles, resolve_theme


class ThemeProfileTests(unittest.TestCase):
    def test_builtin_theme_profiles(self) -> None:
        self.assertEqual(available_theme_profiles(), ("default", "mono"))

    def test_default_theme_event_colors(self) -> None:
        theme = resolve_theme()
        self.assertEqual(theme.FONT_REGULAR, "Helvetica")
        self.assertEqual(theme.EVENT_FILL.rgb(), colors.HexColor("#D6EAF8").rgb())
        self.assertEqual(theme.EVENT_BORDER.rgb(), colors.HexColor("#2E86C1").rgb())

    def test_mono_profile_overrides_event_fill(self) -> None:
        theme = resolve_theme(profile="mono")
        self.assertEqual(theme.EVENT_FILL.rgb(), colors.HexColor("#F2F2F2").rgb())

    def test_theme_file_overrides_profile(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            theme_path = Path(tmp_dir) / "theme.json"
            theme_path.write_text(
                json.dumps({"event_nested_fill": "#112233", "font_regular": "Courier"}),
                encoding="utf-8",
            )

            theme = resolve_theme(profile="mono", theme_file=theme_path)

        self.assertEqual(theme.EVENT_NESTED_FILL.rgb(), colors.HexColor("#112233").rgb())
        self.assertEqual(theme.FONT_REGULAR, "Courier")
        self.assertEqual(theme.EVENT_BORDER.rgb(), colors.HexColor("#333333").rgb())

    def test_unknown_profile_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "unknown theme profile 'neon'"):
            resolve_theme(profile="neon")

    def test_unknown_key_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            theme_path = Path(tmp_dir) / "theme.json"
            theme_path.write_text(json.dumps({"sidebar_bg": "#111111"}), encoding="utf-8")

            with self.assertRaisesRegex(ValueError, "unknown theme key\\(s\\): sidebar_bg"):
                resolve_theme(theme_file=theme_path)

    def test_invalid_color_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            theme_path = Path(tmp_dir) / "theme.json"
            theme_path.write_text(json.dumps({"event_fill": "not-a-color"}), encoding="utf-8")

            with self.assertRaisesRegex(ValueError, "invalid color value 'not-a-color'"):
                resolve_theme(theme_file=theme_path)

    def test_missing_theme_file_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            with self.assertRaisesRegex(ValueError, "theme file .* does not exist"):
                resolve_theme(theme_file=Path(tmp_dir) / "missing.json")


if __name__ == "__main__":
    unittest.main()
