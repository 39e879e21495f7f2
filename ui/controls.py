"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – play/pause/next/prev/rewind/speed + step counter
  • algorithm_selector  – dropdown grouped by family
  • input_form          – values text box + one field per algorithm parameter
  • analytics_panel     – steps, comparisons, swaps, writes, result, …
  • comparison_panel    – side-by-side metrics of two runs
  • pseudocode_viewer   – with live line highlighting from snapshot.phase
  • explanation_panel   – the snapshot narrative ("why this step happened")

Design:
  - All panels are stateless render functions.
  - State is passed in as arguments.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

import html
from typing import Any, Dict, List, Optional

from algorithms import FAMILIES, AlgoInfo, algorithms_by_family
from algorithms.snapshot import Snapshot
from engine import SPEED_PRESETS, ComparisonResult, RunMetrics


def _esc(value: Any) -> str:
    return html.escape(str(value))


def format_values(info: AlgoInfo, values: List[Any]) -> str:
    """Inverse of the form parsers: the text a user would type for `values`."""
    if info.input_kind == "chars":
        return "".join(str(c) for c in values)
    if info.input_kind == "intervals":
        return "; ".join(f"{s},{e}" for s, e in values)
    return ", ".join(str(v) for v in values)


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_playing: bool = False,
    current_step: Optional[int] = None,
    total_steps: int = 0,
    speed: str = "medium",
    is_finished: bool = False,
) -> str:
    play_icon = "⏸" if is_playing else "▶"
    play_label = "Pause" if is_playing else "Play"
    shown = "–" if current_step is None else current_step + 1

    options = []
    for name, ms in SPEED_PRESETS.items():
        sel = 'selected' if name == speed else ''
        options.append(f'<option value="{name}" {sel}>{name.capitalize()} ({ms} ms)</option>')

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-rewind" title="Rewind to start">⏮</button>
        <button id="btn-prev" title="Previous step">◀</button>
        <button id="btn-play" title="{play_label}">{play_icon}</button>
        <button id="btn-next" title="Next step">▶</button>
        <button id="btn-end" title="Jump to end">⏭</button>
        <button id="btn-reset" title="Reset">✖</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{shown}</span> / <span id="total-steps">{total_steps}</span>
        {' <span class="finished-badge">FINISHED</span>' if is_finished else ''}
      </div>
      <input type="range" id="step-slider" min="0" max="{max(total_steps - 1, 0)}" value="{current_step or 0}">
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">
          {''.join(options)}
        </select>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(selected_key: str = "bubble_sort") -> str:
    optgroups = []
    for family, label in FAMILIES.items():
        opts = []
        for algo in algorithms_by_family(family):
            sel = 'selected' if algo.key == selected_key else ''
            opts.append(
                f'<option value="{algo.key}" {sel}>{_esc(algo.label)} — {_esc(algo.complexity_time)}</option>'
            )
        if opts:
            optgroups.append(f'<optgroup label="{_esc(label)}">{"".join(opts)}</optgroup>')

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(optgroups)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Input Form
# ---------------------------------------------------------------------------
_KIND_HINTS = {
    "int":         "any integer",
    "positive":    "integer ≥ 1",
    "window":      "1 … length",
    "index":       "0 … length-1",
    "slot":        "0 … length",
    "position":    "1 … length (1-based)",
    "cycle":       "-1 (no cycle) … length-1",
    "sorted_list": "sorted, comma separated",
}


def input_form(
    info: Optional[AlgoInfo],
    values_text: Optional[str] = None,
    params: Optional[Dict[str, Any]] = None,
    error: str = "",
) -> str:
    if info is None:
        return """
        <div class="panel input-form">
          <h3>✏️ Input</h3>
          <p class="placeholder">Select an algorithm first.</p>
        </div>
        """

    example = info.example or {}
    if values_text is None:
        values_text = format_values(info, example.get("values", []))
    params = dict(example.get("params", {}), **(params or {}))

    placeholder = {
        "chars":     "letters or digits, e.g. racecar",
        "intervals": "start,end; start,end …",
    }.get(info.input_kind, "comma separated integers")

    fields = []
    for name, kind in info.params.items():
        raw = params.get(name, "")
        if isinstance(raw, (list, tuple)):
            raw = ", ".join(str(v) for v in raw)
        fields.append(
            f'<label>{_esc(name)} <small>({_KIND_HINTS.get(kind, kind)})</small>'
            f'<input type="text" class="param-input" data-param="{_esc(name)}" value="{_esc(raw)}"></label>'
        )

    notes = []
    if info.needs_sorted:
        notes.append("values must be sorted ascending")
    if info.input_rule == "rotated":
        notes.append("distinct values, rotated sorted order")
    if info.input_rule == "positive":
        notes.append("positive values only")
    if info.input_rule == "distinct_adjacent":
        notes.append("neighbours must differ")

    return f"""
    <div class="panel input-form">
      <h3>✏️ Input — {_esc(info.label)}</h3>
      <label>Values
        <input type="text" id="values-input" value="{_esc(values_text)}" placeholder="{placeholder}">
      </label>
      {''.join(fields)}
      {f'<p class="hint">{_esc("; ".join(notes))}</p>' if notes else ''}
      {f'<p class="error">{_esc(error)}</p>' if error else ''}
      <button id="btn-run" class="btn-primary">▶ Run Algorithm</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Run an algorithm to see metrics.</p>
        </div>
        """

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {_esc(metrics.algo_label)}</h3>
      <table>
        <tr><td>Input Size:</td><td><strong>{metrics.input_size}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Comparisons:</td><td><strong>{metrics.comparisons}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>
        <tr><td>Writes:</td><td><strong>{metrics.writes}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Memory:</td><td><strong>{metrics.memory_bytes // 1024} KB</strong></td></tr>
      </table>
      <p class="outcome">{_esc(metrics.outcome)}</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(comp: Optional[ComparisonResult] = None) -> str:
    if not comp:
        return """
        <div class="panel comparison-panel">
          <h3>⚖️ Comparison Mode</h3>
          <p class="placeholder">Run two algorithms on the same input to compare.</p>
        </div>
        """

    left = comp.left
    right = comp.right

    def winner_badge(winner_label):
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {_esc(winner_label)}"

    rows = [
        ("Total Steps", left.total_steps, right.total_steps, comp.winner_steps),
        ("Comparisons", left.comparisons, right.comparisons, comp.winner_comparisons),
        ("Swaps",       left.swaps,       right.swaps,       comp.winner_swaps),
        ("Writes",      left.writes,      right.writes,      comp.winner_writes),
    ]
    body = "".join(
        f"<tr><td>{name}</td><td>{l}</td><td>{r}</td><td>{winner_badge(w)}</td></tr>"
        for name, l, r, w in rows
    )

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ Comparison: {_esc(left.algo_label)} vs {_esc(right.algo_label)}</h3>
      <table class="comparison-table">
        <thead>
          <tr>
            <th>Metric</th>
            <th>{_esc(left.algo_label)}</th>
            <th>{_esc(right.algo_label)}</th>
            <th>Winner</th>
          </tr>
        </thead>
        <tbody>
          {body}
          <tr>
            <td>Wall Time</td>
            <td>{left.wall_time_ms:.2f} ms</td>
            <td>{right.wall_time_ms:.2f} ms</td>
            <td>—</td>
          </tr>
        </tbody>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(info: Optional[AlgoInfo], snapshot: Optional[Snapshot] = None) -> str:
    if info is None or not info.pseudocode:
        return """
        <div class="code-block">
          <div style="color: #7d8590; padding: 20px; text-align: center;">
            Select an algorithm to view pseudocode
          </div>
        </div>
        """

    current_line = info.line_for(snapshot.phase) if snapshot is not None else -1
    lines_html = []
    for i, line in enumerate(info.pseudocode):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{_esc(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel (Learning Mode)
# ---------------------------------------------------------------------------
def explanation_panel(snapshot: Optional[Snapshot] = None) -> str:
    if snapshot is None or not snapshot.narrative:
        text = "▶ Click <strong>Run Algorithm</strong> to see step-by-step explanations of what's happening at each stage."
    else:
        text = _esc(snapshot.narrative)
    return f"""<div class="explanation-text">{text}</div>"""
