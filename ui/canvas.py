"""
canvas.py — SVG Snapshot Renderer
===================================
Pure rendering function: Snapshot → SVG string.

The renderer consumes:
  • snapshot – the current Snapshot (values, highlights, pointers,
               chains/nodes for linked structures, overlay data)
  • config   – visual config (canvas size, colors, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  This function is stateless — the caller passes in
    everything it needs and gets back a string.  It never touches the
    engine, so any Snapshot (live, exported, hand-built) can be drawn.
  - Tag-based coloring is a simple dict lookup: highlight tag → hex
    color.  Unknown tags render as "default".
  - Arrays are a row of cells with index labels underneath and pointer
    names stacked above.  Linked structures draw one row per chain, with
    arrows between nodes, "D" for a dummy anchor and a curved back-edge
    when overlay["cycle_to"] is set.
  - Overlay data (prefix table, hash map, merged intervals, capacity, …)
    goes into a key/value panel in the top-right corner.
"""

import html
from typing import Any, Dict, List, Optional, Tuple

from algorithms.snapshot import Snapshot, thaw


# ---------------------------------------------------------------------------
# Visual Config: color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 420
    bg:     str = "#0d1117"

    # highlight tag → fill
    tag_colors: Dict[str, str] = {
        "default":   "#1c2128",   # dark grey
        "active":    "#06b6d4",   # bright teal
        "comparing": "#0ea5e9",   # cyan blue
        "swapping":  "#f97316",   # orange
        "sorted":    "#10b981",   # emerald green
        "pivot":     "#eab308",   # amber
        "found":     "#a855f7",   # purple
        "removed":   "#991b1b",   # dark red
        "inserted":  "#22c55e",   # green
        "shifting":  "#f59e0b",   # yellow-orange
        "entering":  "#38bdf8",   # light blue
        "leaving":   "#fb7185",   # rose
        "best":      "#ec4899",   # pink
        "dummy":     "#4b5563",   # slate
        "visited":   "#164e63",   # deep teal
        "minimum":   "#84cc16",   # lime
        "window":    "#1e3a8a",   # navy
    }

    # array cells
    cell_width:   int = 56
    cell_height:  int = 48
    cell_gap:     int = 8
    cell_stroke:  str = "#30363d"
    cell_text:    str = "#e6edf3"
    cell_font:    int = 15
    index_color:  str = "#7d8590"
    index_font:   int = 11

    # linked nodes
    node_radius:  int = 22
    node_gap:     int = 44
    row_height:   int = 120
    arrow_color:  str = "#7d8590"
    arrow_size:   int = 8
    cycle_color:  str = "#ec4899"

    # pointers
    pointer_color: str = "#fbbf24"
    pointer_font:  int = 12

    # header / overlay panel
    header_color:      str = "#e6edf3"
    overlay_bg:        str = "#161b22"
    overlay_border:    str = "#30363d"
    overlay_text:      str = "#7d8590"
    overlay_accent:    str = "#0ea5e9"
    overlay_font_size: int = 12
    overlay_width:     int = 250


CONFIG = CanvasConfig()

_MARGIN = 40
_TOP    = 110        # y of the first row of cells / nodes
_SANS   = "font-family=\"'DM Sans', sans-serif\""
_MONO   = "font-family=\"'JetBrains Mono', monospace\""


def tag_color(tag: str, config: CanvasConfig = CONFIG) -> str:
    return config.tag_colors.get(tag, config.tag_colors["default"])


def _fmt(value: Any) -> str:
    if value is None:
        return "D"
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return f"{value[0]}–{value[1]}"
    return str(value)


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_snapshot(
    snapshot: Optional[Snapshot],
    config: CanvasConfig = CONFIG,
    show_overlays: bool = True,
) -> str:
    """
    Returns an SVG string.

    Args:
        snapshot      : Snapshot to draw (None draws an empty canvas).
        config        : Visual config.
        show_overlays : If True, render the overlay key/value panel.
    """
    body: List[str] = []
    width, height = config.width, config.height

    if snapshot is not None:
        if snapshot.is_linked:
            parts, needed_w, needed_h = _render_chains(snapshot, config)
        else:
            parts, needed_w, needed_h = _render_array(snapshot, config)
        body.extend(parts)
        width  = max(width, needed_w)
        height = max(height, needed_h)
        body.append(_render_header(snapshot, config))
        if show_overlays:
            body.append(_render_overlay_panel(snapshot, config, x=width - config.overlay_width - 10, y=10))

    svg_parts = [
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{width}" height="{height}" fill="{config.bg}"/>',
    ]
    svg_parts.extend(p for p in body if p)
    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def _render_header(snapshot: Snapshot, config: CanvasConfig) -> str:
    phase = html.escape(snapshot.phase or "")
    label = f"step {snapshot.step_number}" + (f" · {phase}" if phase else "")
    if snapshot.terminal:
        label += " · done"
    return (
        f'<text x="{_MARGIN}" y="30" font-size="13" font-weight="700" {_SANS} '
        f'fill="{config.header_color}">{label}</text>'
    )


def _pointer_labels(pointers: Dict[str, Any]) -> Dict[Any, List[str]]:
    """position key → pointer names sitting there, in insertion order."""
    out: Dict[Any, List[str]] = {}
    for name, key in pointers.items():
        out.setdefault(key, []).append(name)
    return out


def _render_pointer_stack(names: List[str], cx: float, top: float, config: CanvasConfig) -> str:
    parts = []
    for i, name in enumerate(reversed(names)):
        y = top - 10 - i * 15
        parts.append(
            f'<text x="{cx}" y="{y}" text-anchor="middle" font-size="{config.pointer_font}" '
            f'{_MONO} fill="{config.pointer_color}" font-weight="600">{html.escape(name)}</text>'
        )
    # small down-arrow under the lowest label
    parts.append(
        f'<polygon points="{cx - 4},{top - 7} {cx + 4},{top - 7} {cx},{top - 1}" fill="{config.pointer_color}"/>'
    )
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------
def _render_array(snapshot: Snapshot, config: CanvasConfig) -> Tuple[List[str], int, int]:
    values = list(snapshot.values)
    wide   = any(isinstance(v, (list, tuple)) for v in values)
    cw     = config.cell_width + (24 if wide else 0)
    step   = cw + config.cell_gap
    y      = _TOP + 30
    ptrs   = _pointer_labels(thaw(snapshot.pointers))

    parts = ['<g class="array">']
    for i, value in enumerate(values):
        x = _MARGIN + i * step
        tag = snapshot.tag(i)
        parts.append(
            f'<g class="cell" data-index="{i}" data-tag="{tag}">'
            f'<rect x="{x}" y="{y}" width="{cw}" height="{config.cell_height}" rx="6" '
            f'fill="{tag_color(tag, config)}" stroke="{config.cell_stroke}" stroke-width="2"/>'
            f'<text x="{x + cw / 2}" y="{y + config.cell_height / 2 + 5}" text-anchor="middle" '
            f'font-size="{config.cell_font}" {_SANS} fill="{config.cell_text}" font-weight="600">'
            f'{html.escape(_fmt(value))}</text>'
            f'<text x="{x + cw / 2}" y="{y + config.cell_height + 16}" text-anchor="middle" '
            f'font-size="{config.index_font}" {_MONO} fill="{config.index_color}">{i}</text>'
            f'</g>'
        )
        if i in ptrs:
            parts.append(_render_pointer_stack(ptrs[i], x + cw / 2, y, config))

    # pointers past the end (exclusive bounds, lower_bound's hi = n, …)
    for key, names in ptrs.items():
        if isinstance(key, int) and key >= len(values):
            x = _MARGIN + key * step
            parts.append(_render_pointer_stack(names, x + cw / 2, y, config))

    parts.append("</g>")
    width = _MARGIN * 2 + max(len(values), 1) * step + config.overlay_width
    return parts, width, y + config.cell_height + 80


# ---------------------------------------------------------------------------
# Linked structures
# ---------------------------------------------------------------------------
def _render_chains(snapshot: Snapshot, config: CanvasConfig) -> Tuple[List[str], int, int]:
    nodes  = snapshot.nodes
    ptrs   = _pointer_labels(thaw(snapshot.pointers))
    cycle  = snapshot.overlay.get("cycle_to")
    r      = config.node_radius
    step   = 2 * r + config.node_gap
    left   = _MARGIN + 70            # room for the chain name

    parts: List[str] = ['<g class="chains">']
    centers: Dict[int, Tuple[float, float]] = {}
    longest = 0

    for row, (name, ids) in enumerate(snapshot.chains.items()):
        cy = _TOP + 40 + row * config.row_height
        longest = max(longest, len(ids))
        parts.append(
            f'<text x="{_MARGIN}" y="{cy + 4}" font-size="12" {_MONO} '
            f'fill="{config.index_color}">{html.escape(name)}</text>'
        )
        for i, node_id in enumerate(ids):
            cx = left + r + i * step
            centers.setdefault(node_id, (cx, cy))
            tag = snapshot.tag(node_id)
            parts.append(
                f'<g class="node" data-id="{node_id}" data-tag="{tag}">'
                f'<circle cx="{cx}" cy="{cy}" r="{r}" fill="{tag_color(tag, config)}" '
                f'stroke="{config.cell_stroke}" stroke-width="2"/>'
                f'<text x="{cx}" y="{cy + 5}" text-anchor="middle" font-size="{config.cell_font}" '
                f'{_SANS} fill="{config.cell_text}" font-weight="600">{html.escape(_fmt(nodes.get(node_id)))}</text>'
                f'</g>'
            )
            if node_id in ptrs:
                parts.append(_render_pointer_stack(ptrs[node_id], cx, cy - r, config))
            if i + 1 < len(ids):
                parts.append(_render_arrow(cx + r, cx + step - r, cy, config.arrow_color, config))

        # tail: null, or the back-edge of a cycle
        if ids:
            tail_x = left + r + (len(ids) - 1) * step
            if cycle is not None and cycle in ids and row == 0:
                target_x = left + r + ids.index(cycle) * step
                parts.append(_render_cycle_edge(tail_x, target_x, cy, config))
            else:
                parts.append(_render_arrow(tail_x + r, tail_x + r + 26, cy, config.arrow_color, config))
                parts.append(
                    f'<text x="{tail_x + r + 32}" y="{cy + 4}" font-size="11" {_MONO} '
                    f'fill="{config.index_color}">null</text>'
                )

    parts.append("</g>")
    width  = left + max(longest, 1) * step + 60 + config.overlay_width
    height = _TOP + 40 + len(snapshot.chains) * config.row_height + 20
    return parts, width, height


def _render_arrow(x1: float, x2: float, y: float, color: str, config: CanvasConfig) -> str:
    """Horizontal arrow from x1 to x2 with its head at x2."""
    size = config.arrow_size
    return (
        f'<line x1="{x1}" y1="{y}" x2="{x2 - size}" y2="{y}" stroke="{color}" stroke-width="2"/>'
        f'<polygon points="{x2},{y} {x2 - size},{y - size / 2} {x2 - size},{y + size / 2}" fill="{color}"/>'
    )


def _render_cycle_edge(tail_x: float, target_x: float, y: float, config: CanvasConfig) -> str:
    r = config.node_radius
    drop = r + 36
    color = config.cycle_color
    return (
        f'<g class="cycle-edge">'
        f'<path d="M {tail_x} {y + r} C {tail_x} {y + drop}, {target_x} {y + drop}, {target_x} {y + r + 6}" '
        f'fill="none" stroke="{color}" stroke-width="2" stroke-dasharray="5,3"/>'
        f'<polygon points="{target_x},{y + r} {target_x - 4},{y + r + 8} {target_x + 4},{y + r + 8}" fill="{color}"/>'
        f'<text x="{(tail_x + target_x) / 2}" y="{y + drop}" text-anchor="middle" font-size="11" '
        f'{_MONO} fill="{color}">cycle</text>'
        f'</g>'
    )


# ---------------------------------------------------------------------------
# Overlay Panel
# ---------------------------------------------------------------------------
def _stack_lines(frames: List[Dict[str, Any]]) -> List[str]:
    """One line per call frame, innermost last."""
    if not frames:
        return ["stack: (empty)"]
    lines = [f"stack: {len(frames)} frame(s)"]
    for f in frames:
        line = f"  {f['depth']}. {f['call']}"
        if f["state"] == "returning":
            line += f" ↑ {f['returns']}"
        elif f["state"] == "active":
            line += " ◀"
        lines.append(line[:30])
    return lines


def _render_overlay_panel(snapshot: Snapshot, config: CanvasConfig, x: int, y: int) -> str:
    """Key/value panel for auxiliary data; node ids are not shown."""
    items = [(k, v) for k, v in thaw(snapshot.overlay).items() if k != "cycle_to"]
    if not items:
        return ""

    lines: List[str] = []
    for key, value in items:
        if key == "stack":
            lines.extend(_stack_lines(value))
            continue
        if key == "merged" and isinstance(value, list):
            text = ", ".join(f"[{g['start']},{g['end']}]" for g in value)
        elif isinstance(value, dict):
            text = ", ".join(f"{k}:{v}" for k, v in value.items())
        else:
            text = str(value)
        if len(text) > 30:
            text = text[:29] + "…"
        lines.append(f"{key}: {text}")

    height = 36 + len(lines) * 18
    parts = [
        f'<g class="overlay-panel" transform="translate({x},{y})">',
        f'  <rect width="{config.overlay_width}" height="{height}" fill="{config.overlay_bg}" '
        f'stroke="{config.overlay_border}" stroke-width="1" rx="8" opacity="0.95"/>',
        f'  <text x="12" y="22" font-size="13" font-weight="700" fill="{config.overlay_accent}" {_SANS}>State</text>',
    ]
    for i, line in enumerate(lines):
        parts.append(
            f'  <text x="12" y="{44 + i * 18}" font-size="{config.overlay_font_size}" {_MONO} '
            f'fill="{config.overlay_text}">{html.escape(line)}</text>'
        )
    parts.append("</g>")
    return "\n".join(parts)
