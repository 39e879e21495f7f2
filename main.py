"""
main.py — DSA Visualizer Flask App
====================================
The web server that powers the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/algorithms         – registry listing (?tag=… filters by tag)
  POST /api/config/algo        – select an algorithm (resets playback)
  POST /api/config/speed       – preset name or explicit interval_ms
  POST /api/run                – validate input, record the trace, load it
  POST /api/step/next          – advance one step
  POST /api/step/prev          – go back one step
  POST /api/step/goto          – jump to step N (clamped)
  POST /api/play               – start auto-advancing
  POST /api/pause              – stop auto-advancing
  POST /api/reset              – back to idle
  GET  /api/state              – current frame + playback status (polled while running)
  POST /api/compare            – run two algorithms on the same input
  GET  /api/trace              – export the recorded run as JSON

State management:
  Traces hold live Snapshot objects and the controller owns a timer, so
  neither fits in the signed cookie session.  The cookie only carries a
  session id; the matching SessionContext (controller, last recorder,
  selected algorithm) lives in an in-process registry guarded by a lock.
  The registry is an LRU capped by DSAVIZ_MAX_SESSIONS; entries idle longer
  than DSAVIZ_SESSION_IDLE_S are dropped too, and every dropped controller is
  reset first.  Read-only routes (/ and /api/state) never create an entry.
"""

import logging
import secrets
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template_string, request, session

from algorithms import algorithms_by_tag, families, get_algorithm, list_algorithms
from engine import (
    SPEED_PRESETS,
    PlaybackController,
    Recorder,
    TimerScheduler,
    UnknownAlgorithmError,
    compare,
)
from forms import InputError, validate_run_request
from settings import get_logger, load_settings, settings
from ui import (
    algorithm_selector,
    analytics_panel,
    comparison_panel,
    explanation_panel,
    input_form,
    playback_controls,
    pseudocode_viewer,
    render_snapshot,
)

log = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = settings.secret_key

DEFAULT_ALGO = "bubble_sort"

# Factory for the delay primitive behind each session's controller.
make_scheduler = TimerScheduler


# ---------------------------------------------------------------------------
# Per-session state
# ---------------------------------------------------------------------------
@dataclass
class SessionContext:
    controller:    PlaybackController
    algo_key:      str                = DEFAULT_ALGO
    speed:         str                = settings.default_speed
    recorder:      Optional[Recorder] = None
    values_text:   Optional[str]      = None
    params:        Dict[str, Any]     = field(default_factory=dict)
    last_seen:     float              = 0.0


# Oldest-used first; bounded by DSAVIZ_MAX_SESSIONS and DSAVIZ_SESSION_IDLE_S.
_contexts: "OrderedDict[str, SessionContext]" = OrderedDict()
_contexts_lock = threading.Lock()
_clock = time.monotonic


def _evict(now: float) -> None:
    """Drop least recently used contexts that are over the limit or idle too long."""
    cfg = load_settings()
    while _contexts:
        sid, oldest = next(iter(_contexts.items()))
        if len(_contexts) <= cfg.max_sessions and now - oldest.last_seen <= cfg.session_idle_s:
            break
        del _contexts[sid]
        oldest.controller.reset()
        log.debug("evicted session context %s", sid)


def find_context() -> Optional[SessionContext]:
    """The caller's context if it is still live; never allocates one."""
    sid = session.get("sid")
    now = _clock()
    with _contexts_lock:
        _evict(now)
        ctx = _contexts.get(sid) if sid else None
        if ctx is not None:
            _contexts.move_to_end(sid)
            ctx.last_seen = now
        return ctx


def get_context() -> SessionContext:
    """The caller's context, created (and the cookie set) on first use."""
    ctx = find_context()
    if ctx is not None:
        return ctx
    sid = secrets.token_hex(16)
    ctx = SessionContext(controller=PlaybackController(scheduler=make_scheduler()), last_seen=_clock())
    with _contexts_lock:
        _contexts[sid] = ctx
        _evict(ctx.last_seen)
    session["sid"] = sid
    log.debug("new session context %s", sid)
    return ctx


def _idle_context() -> SessionContext:
    """Throwaway context for read-only requests from sessions without state."""
    return SessionContext(controller=PlaybackController(scheduler=make_scheduler()))


def drop_contexts() -> None:
    """Reset every session's playback and forget all contexts."""
    with _contexts_lock:
        for ctx in _contexts.values():
            ctx.controller.reset()
        _contexts.clear()


def _payload(ctx: SessionContext) -> Dict[str, Any]:
    """Everything the page needs to redraw the current frame."""
    ctrl = ctx.controller
    snapshot = ctrl.current_snapshot
    info = get_algorithm(ctx.algo_key)
    status = ctrl.status()
    return {
        "svg":          render_snapshot(snapshot),
        "pseudocode":   pseudocode_viewer(info, snapshot),
        "explanation":  explanation_panel(snapshot),
        "narrative":    snapshot.narrative if snapshot else "",
        "phase":        snapshot.phase if snapshot else "",
        "terminal":     snapshot.terminal if snapshot else False,
        "current_step": status["index"],
        "total_steps":  status["length"],
        "status":       status,
    }


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    ctx = find_context() or _idle_context()
    ctrl = ctx.controller
    info = get_algorithm(ctx.algo_key)
    snapshot = ctrl.current_snapshot

    html = render_template_string(INDEX_TEMPLATE,
        svg=render_snapshot(snapshot),
        playback=playback_controls(
            is_playing=ctrl.running,
            current_step=ctrl.index,
            total_steps=ctrl.length,
            speed=ctx.speed,
            is_finished=ctrl.is_finished,
        ),
        algo_selector=algorithm_selector(selected_key=ctx.algo_key),
        input_form=input_form(info, ctx.values_text, ctx.params),
        analytics=analytics_panel(ctx.recorder.metrics if ctx.recorder else None),
        comparison=comparison_panel(),
        pseudocode=pseudocode_viewer(info, snapshot),
        explanation=explanation_panel(snapshot),
    )
    return html


# ---------------------------------------------------------------------------
# API: Registry & Config
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    tag = request.args.get("tag")
    listed = algorithms_by_tag(tag) if tag else list_algorithms()
    return jsonify({
        "families": families(),
        "algorithms": [
            {
                "key":         a.key,
                "label":       a.label,
                "family":      a.family,
                "params":      a.params,
                "time":        a.complexity_time,
                "space":       a.complexity_space,
                "description": a.description,
                "tags":        a.tags,
                "example":     a.example,
            }
            for a in listed
        ],
    })


@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    algo_key = _json_body().get("algo_key", DEFAULT_ALGO)
    info = get_algorithm(algo_key)
    if info is None:
        return jsonify({"error": f"Unknown algorithm: {algo_key}"}), 404

    ctx = get_context()
    ctx.controller.reset()
    ctx.algo_key = algo_key
    ctx.recorder = None
    ctx.values_text = None
    ctx.params = {}

    return jsonify({
        "algo_key":   algo_key,
        "input_form": input_form(info),
        "pseudocode": pseudocode_viewer(info),
        "analytics":  analytics_panel(),
        "status":     ctx.controller.status(),
    })


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data = _json_body()
    ctx = get_context()
    try:
        if "interval_ms" in data:
            interval = ctx.controller.set_speed(data["interval_ms"])
            ctx.speed = "custom"
        else:
            speed = data.get("speed", "medium")
            interval = ctx.controller.set_speed_preset(speed)
            ctx.speed = speed
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"speed": ctx.speed, "interval_ms": interval})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = _json_body()
    ctx = get_context()
    data.setdefault("algo", ctx.algo_key)

    try:
        info, values, params = validate_run_request(data)
    except InputError as e:
        return jsonify({"error": str(e)}), 400
    except UnknownAlgorithmError as e:
        return jsonify({"error": str(e)}), 404

    rec = Recorder()
    rec.start(info.key, values, **params)
    rec.run_to_completion()

    ctx.algo_key = info.key
    ctx.recorder = rec
    ctx.values_text = data.get("values") if isinstance(data.get("values"), str) else None
    ctx.params = dict(data.get("params") or {})
    ctx.controller.load(rec.trace)
    log.info("run %s on %d values: %d steps", info.key, len(values), len(rec.trace))

    body = _payload(ctx)
    body["analytics"] = analytics_panel(rec.metrics)
    body["result"] = rec.metrics.result
    return jsonify(body)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
def _no_trace():
    return jsonify({"error": "Run an algorithm first"}), 409


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    ctx = get_context()
    if ctx.controller.trace is None:
        return _no_trace()
    moved = ctx.controller.step_forward()
    return jsonify(dict(_payload(ctx), moved=moved))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    ctx = get_context()
    if ctx.controller.trace is None:
        return _no_trace()
    moved = ctx.controller.step_backward()
    return jsonify(dict(_payload(ctx), moved=moved))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    ctx = get_context()
    if ctx.controller.trace is None:
        return _no_trace()
    idx = _json_body().get("index", 0)
    if isinstance(idx, bool) or not isinstance(idx, int):
        return jsonify({"error": "index must be an integer"}), 400
    ctx.controller.seek(idx)
    return jsonify(_payload(ctx))


# ---------------------------------------------------------------------------
# API: Run / Pause / Reset / State
# ---------------------------------------------------------------------------
@app.route("/api/play", methods=["POST"])
def api_play():
    ctx = get_context()
    if ctx.controller.trace is None:
        return _no_trace()
    ctx.controller.run()
    return jsonify(_payload(ctx))


@app.route("/api/pause", methods=["POST"])
def api_pause():
    ctx = get_context()
    ctx.controller.pause()
    return jsonify(_payload(ctx))


@app.route("/api/reset", methods=["POST"])
def api_reset():
    ctx = get_context()
    ctx.controller.reset()
    ctx.recorder = None
    return jsonify(_payload(ctx))


@app.route("/api/state")
def api_state():
    return jsonify(_payload(find_context() or _idle_context()))


# ---------------------------------------------------------------------------
# API: Comparison & Export
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = _json_body()
    left_key = data.get("left")
    right_key = data.get("right")
    if not left_key or not right_key:
        return jsonify({"error": "Both 'left' and 'right' algorithms are required"}), 400

    recorders = []
    try:
        for key in (left_key, right_key):
            info, values, params = validate_run_request({
                "algo":   key,
                "values": data.get("values", ""),
                "params": data.get("params") or {},
            })
            rec = Recorder()
            rec.start(info.key, values, **params)
            rec.run_to_completion()
            recorders.append(rec)
    except InputError as e:
        return jsonify({"error": str(e)}), 400
    except UnknownAlgorithmError as e:
        return jsonify({"error": str(e)}), 404

    comp = compare(recorders[0], recorders[1])
    return jsonify({"comparison": comp.to_dict(), "html": comparison_panel(comp)})


@app.route("/api/trace")
def api_trace():
    ctx = get_context()
    if ctx.recorder is None:
        return _no_trace()
    return jsonify(ctx.recorder.export())


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>DSA Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-emerald: #10b981;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar { width: 360px; background: var(--bg-dark); border-right: 1px solid var(--border);
               overflow-y: auto; padding: 20px 14px; }
    #main { flex: 1; display: flex; flex-direction: column; }
    #canvas-container { flex: 1; display: flex; align-items: center; justify-content: center;
                        border-bottom: 1px solid var(--border); overflow: auto; }
    #bottom-panel { display: grid; grid-template-columns: 1fr 1fr; gap: 16px; padding: 16px;
                    background: var(--bg-dark); min-height: 260px; max-height: 340px; }
    #bottom-panel > div { background: var(--bg-panel); border: 1px solid var(--border);
                          border-radius: 10px; padding: 14px; overflow-y: auto; }
    #bottom-panel h3 { font-size: 13px; text-transform: uppercase; color: var(--accent-cyan);
                       margin-bottom: 10px; }

    .panel { background: var(--bg-panel); border: 1px solid var(--border); border-radius: 10px;
             padding: 14px; margin-bottom: 14px; }
    .panel h3 { font-size: 13px; text-transform: uppercase; margin-bottom: 10px; }
    .button-row { display: flex; gap: 6px; margin-bottom: 10px; }
    button { background: var(--accent-cyan); color: #fff; border: none; padding: 8px 12px;
             border-radius: 6px; cursor: pointer; font-weight: 600; }
    .btn-primary { background: var(--accent-emerald); margin-top: 10px; width: 100%; }
    select, input[type="text"], input[type="range"] {
      width: 100%; padding: 8px 10px; margin: 4px 0; background: var(--bg-darker);
      border: 1px solid var(--border); border-radius: 6px; color: var(--text-primary);
    }
    label { display: block; margin: 8px 0 2px; font-size: 12px; color: var(--text-secondary); }
    .step-info { font-family: monospace; margin: 8px 0; color: var(--text-secondary); }
    .finished-badge { background: var(--accent-emerald); color: #fff; padding: 2px 8px;
                      border-radius: 4px; font-size: 11px; }
    .code-block { font-family: monospace; font-size: 13px; line-height: 1.6; }
    .code-line { padding: 2px 10px; border-radius: 4px; white-space: pre; }
    .code-line.highlight { background: rgba(14, 165, 233, 0.18); border-left: 3px solid var(--accent-cyan); }
    .explanation-text { color: var(--text-secondary); line-height: 1.8; font-size: 14px; }
    .hint { font-size: 11px; color: var(--text-secondary); font-style: italic; margin-top: 6px; }
    .error { color: var(--accent-rose); font-size: 12px; margin-top: 6px; }
    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; color: var(--accent-cyan); font-family: monospace; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="algo-selector-box">{{ algo_selector|safe }}</div>
    <div id="input-form">{{ input_form|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
    <div id="comparison">{{ comparison|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div id="pseudocode-container">
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
      <div id="explanation-container">
        <h3>Step Explanation</h3>
        <div id="explanation">{{ explanation|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    let pollTimer = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function showError(message) {
      const box = document.querySelector('#input-form .error') || document.createElement('p');
      box.className = 'error';
      box.textContent = message;
      document.querySelector('#input-form .panel')?.appendChild(box);
    }

    function applyFrame(data) {
      if (data.error) { showError(data.error); return; }
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.explanation) document.getElementById('explanation').innerHTML = data.explanation;
      if (data.analytics) document.getElementById('analytics').innerHTML = data.analytics;
      const st = data.status || {};
      const shown = st.index === null || st.index === undefined ? '–' : st.index + 1;
      document.getElementById('current-step').textContent = shown;
      document.getElementById('total-steps').textContent = st.length || 0;
      const slider = document.getElementById('step-slider');
      slider.max = Math.max((st.length || 1) - 1, 0);
      slider.value = st.index || 0;
      document.getElementById('btn-play').textContent = st.running ? '⏸' : '▶';
      if (st.running && !pollTimer) {
        pollTimer = setInterval(async () => applyFrame(await (await fetch('/api/state')).json()),
                                Math.max(st.interval_ms / 2, 25));
      } else if (!st.running && pollTimer) {
        clearInterval(pollTimer);
        pollTimer = null;
      }
    }

    function collectParams() {
      const params = {};
      document.querySelectorAll('.param-input').forEach(el => { params[el.dataset.param] = el.value; });
      return params;
    }

    function bindInputForm() {
      document.getElementById('btn-run')?.addEventListener('click', async () => {
        document.querySelector('#input-form .error')?.remove();
        applyFrame(await post('/api/run', {
          algo: document.getElementById('algo-selector').value,
          values: document.getElementById('values-input').value,
          params: collectParams(),
        }));
      });
    }
    bindInputForm();

    document.getElementById('btn-next')?.addEventListener('click', async () => applyFrame(await post('/api/step/next')));
    document.getElementById('btn-prev')?.addEventListener('click', async () => applyFrame(await post('/api/step/prev')));
    document.getElementById('btn-rewind')?.addEventListener('click', async () => applyFrame(await post('/api/step/goto', {index: 0})));
    document.getElementById('btn-end')?.addEventListener('click', async () => applyFrame(await post('/api/step/goto', {index: 1000000})));
    document.getElementById('btn-reset')?.addEventListener('click', async () => applyFrame(await post('/api/reset')));
    document.getElementById('step-slider')?.addEventListener('change', async (e) => {
      applyFrame(await post('/api/step/goto', {index: +e.target.value}));
    });

    document.getElementById('btn-play')?.addEventListener('click', async () => {
      const playing = document.getElementById('btn-play').textContent === '⏸';
      applyFrame(await post(playing ? '/api/pause' : '/api/play'));
    });

    document.getElementById('algo-selector')?.addEventListener('change', async (e) => {
      const data = await post('/api/config/algo', {algo_key: e.target.value});
      if (data.input_form) { document.getElementById('input-form').innerHTML = data.input_form; bindInputForm(); }
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.analytics) document.getElementById('analytics').innerHTML = data.analytics;
      applyFrame(await (await fetch('/api/state')).json());
    });

    document.getElementById('speed-selector')?.addEventListener('change', async (e) => {
      await post('/api/config/speed', {speed: e.target.value});
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    get_logger()
    log.info("DSA Visualizer on http://%s:%d (%s)", settings.host, settings.port, settings.environment)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)
