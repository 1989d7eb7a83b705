"""Detect CSS rules whose text and background colours fail WCAG AA contrast."""

from __future__ import annotations

import re

from site_audit.detectors.base import BaseDetector
from site_audit.models import Finding, Severity

# WCAG AA minimum for normal-size text
MIN_CONTRAST_RATIO = 4.5

_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_RULE = re.compile(r"([^{}]+)\{([^{}]*)\}")
_DECLARATION = re.compile(r"(?:^|;)\s*(color|background-color|background)\s*:\s*([^;]+)", re.IGNORECASE)
_HEX = re.compile(r"#([0-9a-f]{6}|[0-9a-f]{3})\b", re.IGNORECASE)
_RGB = re.compile(r"rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})", re.IGNORECASE)
_URL = re.compile(r"url\([^)]*\)", re.IGNORECASE)

_NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "silver": (192, 192, 192),
    "lightgray": (211, 211, 211),
    "lightgrey": (211, 211, 211),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "orange": (255, 165, 0),
    "navy": (0, 0, 128),
}


def parse_color(value: str) -> tuple[int, int, int] | None:
    """Parse the first hex, rgb() or named colour in a CSS value."""
    value = _URL.sub("", value)
    m = _HEX.search(value)
    if m:
        digits = m.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)

    m = _RGB.search(value)
    if m:
        return tuple(min(255, int(g)) for g in m.groups())  # type: ignore[return-value]

    for word in re.findall(r"[a-z]+", value.lower()):
        if word in _NAMED_COLORS:
            return _NAMED_COLORS[word]
    return None


def relative_luminance(rgb: tuple[int, int, int]) -> float:
    def channel(c: int) -> float:
        s = c / 255
        return s / 12.92 if s <= 0.03928 else ((s + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(fg: tuple[int, int, int], bg: tuple[int, int, int]) -> float:
    lighter, darker = sorted((relative_luminance(fg), relative_luminance(bg)), reverse=True)
    return (lighter + 0.05) / (darker + 0.05)


def low_contrast_rules(css: str) -> list[tuple[str, float]]:
    """Return (selector, ratio) for every rule declaring both colours with too little contrast."""
    failing = []
    for selector, body in _RULE.findall(_COMMENT.sub("", css)):
        colors: dict[str, tuple[int, int, int]] = {}
        for prop, value in _DECLARATION.findall(body):
            parsed = parse_color(value)
            if parsed is not None:
                colors["fg" if prop.lower() == "color" else "bg"] = parsed
        if "fg" in colors and "bg" in colors:
            ratio = contrast_ratio(colors["fg"], colors["bg"])
            if ratio < MIN_CONTRAST_RATIO:
                failing.append((selector.strip(), round(ratio, 2)))
    return failing


class ColorContrastDetector(BaseDetector):
    name = "color_contrast"
    category = "accessibility"
    description = "Text/background colour pairs below WCAG AA contrast"
    requires = ("css",)

    def detect(self, snapshot) -> list[Finding]:
        affected = []
        rule_count = 0
        for entry, text in snapshot.iter_text("css"):
            failing = low_contrast_rules(text)
            if failing:
                rule_count += len(failing)
                affected.append(entry.path)

        if not affected:
            return []

        return [
            Finding(
                id="a11y-contrast",
                title="Insufficient color contrast",
                description=(
                    f"{rule_count} style rules give text poor contrast with its background"
                ),
                severity=Severity.HIGH,
                affected=affected,
                recommendations=[
                    "Ensure text meets WCAG AA contrast requirements (4.5:1 for normal text)",
                    "Use tools like WebAIM Contrast Checker during design",
                    "Test with color blindness simulators",
                ],
                category=self.category,
            )
        ]
