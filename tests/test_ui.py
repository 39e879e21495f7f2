from algorithms import REGISTRY, get_algorithm
from algorithms.snapshot import Snapshot
from engine import generate_trace
from ui import (
    algorithm_selector,
    explanation_panel,
    format_values,
    input_form,
    playback_controls,
    pseudocode_viewer,
    render_snapshot,
    tag_color,
)


# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
def test_empty_canvas():
    svg = render_snapshot(None)
    assert svg.startswith("<svg")
    assert 'class="cell"' not in svg
    assert 'class="node"' not in svg


def test_array_cells_carry_their_tags(bubble_trace):
    svg = render_snapshot(bubble_trace[1])
    assert svg.count('class="cell"') == 3
    assert 'data-index="0" data-tag="comparing"' in svg
    assert 'data-index="2" data-tag="default"' in svg


def test_linked_nodes_are_drawn_per_chain():
    snap = generate_trace("ll_traverse", [1, 2])[0]
    svg = render_snapshot(snap)
    assert svg.count('class="node"') == 2
    for node_id in snap.primary_chain:
        assert f'data-id="{node_id}"' in svg
    assert "null" in svg


def test_cycle_back_edge_replaces_null():
    terminal = generate_trace("detect_cycle", [3, 2, 0, -4], cycle_index=1).terminal
    svg = render_snapshot(terminal)
    assert 'class="cycle-edge"' in svg
    assert ">null<" not in svg


def test_overlay_panel_can_be_hidden():
    snap = generate_trace("build_prefix", [3, 1, 4])[1]
    assert 'class="overlay-panel"' in render_snapshot(snap)
    assert 'class="overlay-panel"' not in render_snapshot(snap, show_overlays=False)


def test_call_stack_is_listed_in_the_overlay():
    trace = generate_trace("rec_reverse", [1, 2, 3])
    svg = render_snapshot(trace[3])
    assert "stack: 3 frame(s)" in svg
    assert "0. reverse(1)" in svg
    assert "2. reverse(3) ◀" in svg
    assert "stack: (empty)" in render_snapshot(trace.terminal)


def test_unknown_tags_fall_back_to_default_color():
    assert tag_color("no-such-tag") == tag_color("default")
    assert tag_color("comparing") != tag_color("default")


# ---------------------------------------------------------------------------
# Controls
# ---------------------------------------------------------------------------
def test_playback_controls_show_position():
    html = playback_controls(is_playing=True, current_step=4, total_steps=10, speed="fast")
    assert '<span id="current-step">5</span>' in html
    assert '<span id="total-steps">10</span>' in html
    assert 'title="Pause"' in html
    assert "FINISHED" not in html
    assert "FINISHED" in playback_controls(current_step=9, total_steps=10, is_finished=True)


def test_algorithm_selector_groups_by_family():
    html = algorithm_selector(selected_key="rec_search")
    assert html.count("<option ") == len(REGISTRY)
    assert html.count("<optgroup ") == len({a.family for a in REGISTRY.values()})
    recursion = html.split('<optgroup label="Recursion">')[1].split("</optgroup>")[0]
    assert recursion.count("<option ") == 4
    assert 'value="rec_search" selected' in recursion
    assert html.count("selected") == 1


def test_input_form_prefills_the_example():
    html = input_form(get_algorithm("merge_sorted"))
    assert 'id="values-input" value="1, 3, 5"' in html
    assert 'data-param="other" value="2, 4, 6"' in html
    assert "sorted ascending" in html


def test_input_form_keeps_user_text_and_error():
    html = input_form(get_algorithm("pair_sum"), values_text="9, 1", params={"target": "10"},
                      error="Pair With Target Sum needs the values sorted ascending")
    assert 'value="9, 1"' in html
    assert 'data-param="target" value="10"' in html
    assert 'class="error"' in html


def test_input_form_without_algorithm():
    assert "Select an algorithm first." in input_form(None)


def test_format_values_per_input_kind():
    assert format_values(get_algorithm("is_palindrome"), list("abba")) == "abba"
    assert format_values(get_algorithm("merge_intervals"), [[1, 3], [2, 6]]) == "1,3; 2,6"
    assert format_values(get_algorithm("bubble_sort"), [3, 1]) == "3, 1"


def test_pseudocode_highlights_the_current_phase(bubble_trace):
    info = get_algorithm("bubble_sort")
    snap = bubble_trace[1]
    html = pseudocode_viewer(info, snap)
    assert html.count("code-line highlight") == 1
    assert f'class="code-line highlight" data-line="{info.line_for(snap.phase)}"' in html
    assert "code-line highlight" not in pseudocode_viewer(info)


def test_explanation_is_escaped():
    assert "a &lt; b" in explanation_panel(Snapshot(narrative="a < b"))
    assert "Run Algorithm" in explanation_panel(None)
