"""Canvas seam for the layout preview.

Preview components draw through `DrawingPrimitives`, so tests can record the
calls and only `create_reportlab_primitives` touches ReportLab.
"""

from __future__ import annotations

from typing import Any, Protocol

from reportlab.pdfgen import canvas


class DrawingPrimitives(Protocol):
    """Operations the preview needs for the grid, the labels and the event boxes."""

    def set_fill_color(self, color: Any) -> None: ...
    def set_stroke_color(self, color: Any) -> None: ...
    def set_line_width(self, width: float) -> None: ...
    def set_fill_alpha(self, alpha: float) -> None: ...
    def set_font(self, font_name: str, size: float) -> None: ...
    def string_width(self, text: str, font_name: str, size: float) -> float: ...
    def draw_string(self, x: float, y: float, text: str) -> None: ...
    def draw_centred_string(self, x: float, y: float, text: str) -> None: ...
    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...
    def rect(
        self, x: float, y: float, width: float, height: float, *, fill: int = 0, stroke: int = 1
    ) -> None: ...
    def round_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        *,
        fill: int = 0,
        stroke: int = 1,
    ) -> None: ...
    def save_state(self) -> None: ...
    def restore_state(self) -> None: ...
    def set_title(self, title: str) -> None: ...
    def show_page(self) -> None: ...
    def save(self) -> None: ...


class ReportLabPrimitives:
    """Preview drawing on a ReportLab canvas."""

    def __init__(self, target: canvas.Canvas) -> None:
        self._target = target

    def set_fill_color(self, color: Any) -> None:
        self._target.setFillColor(color)

    def set_stroke_color(self, color: Any) -> None:
        self._target.setStrokeColor(color)

    def set_line_width(self, width: float) -> None:
        self._target.setLineWidth(width)

    def set_fill_alpha(self, alpha: float) -> None:
        """Set fill opacity; event boxes fade with lower importance."""
        self._target.setFillAlpha(alpha)

    def set_font(self, font_name: str, size: float) -> None:
        self._target.setFont(font_name, size)

    def string_width(self, text: str, font_name: str, size: float) -> float:
        """Measure `text`, used to shorten event titles to their box width."""
        return self._target.stringWidth(text, font_name, size)

    def draw_string(self, x: float, y: float, text: str) -> None:
        self._target.drawString(x, y, text)

    def draw_centred_string(self, x: float, y: float, text: str) -> None:
        self._target.drawCentredString(x, y, text)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._target.line(x1, y1, x2, y2)

    def rect(
        self, x: float, y: float, width: float, height: float, *, fill: int = 0, stroke: int = 1
    ) -> None:
        self._target.rect(x, y, width, height, fill=fill, stroke=stroke)

    def round_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        *,
        fill: int = 0,
        stroke: int = 1,
    ) -> None:
        self._target.roundRect(x, y, width, height, radius, fill=fill, stroke=stroke)

    def save_state(self) -> None:
        """Open a scope for one event box's alpha and colors."""
        self._target.saveState()

    def restore_state(self) -> None:
        self._target.restoreState()

    def set_title(self, title: str) -> None:
        self._target.setTitle(title)

    def show_page(self) -> None:
        self._target.showPage()

    def save(self) -> None:
        self._target.save()


def create_reportlab_primitives(
    output_path: str,
    *,
    pagesize: tuple[float, float],
) -> ReportLabPrimitives:
    """Open a PDF canvas for one preview page of `pagesize` points."""
    return ReportLabPrimitives(canvas.Canvas(output_path, pagesize=pagesize))
