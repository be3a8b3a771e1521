from __future__ import annotations

# Greyscale, print-friendly palette for the measurement report.
REPORT_COLORS = {
    "title": "#1a1a1a",
    "section_title": "#262626",
    "footer": "#333333",
    "meta": "#4d4d4d",
    "placeholder": "#808080",
    "rule": "#b3b3b3",
    "table_text": "#000000",
}

RULE_WIDTH = 0.5
