"""
ui/
---
Presentation layer.

    from ui import render_snapshot
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_snapshot, CanvasConfig, tag_color

from ui.controls import (
    playback_controls,
    algorithm_selector,
    input_form,
    format_values,
    analytics_panel,
    comparison_panel,
    pseudocode_viewer,
    explanation_panel,
)

__all__ = [
    "render_snapshot",
    "CanvasConfig",
    "tag_color",
    "playback_controls",
    "algorithm_selector",
    "input_form",
    "format_values",
    "analytics_panel",
    "comparison_panel",
    "pseudocode_viewer",
    "explanation_panel",
]
