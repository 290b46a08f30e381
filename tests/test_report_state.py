from dataclasses import replace

import pytest

from footprint import DEMO_METRICS
from report_state import STATUS_GENERATING, STATUS_IDLE, STATUS_READY, ReportState


def test_starts_on_home_without_input():
    snap = ReportState().snapshot()
    assert snap.page == "home"
    assert snap.metrics is None
    assert snap.status == STATUS_IDLE


def test_navigate_rejects_unknown_page():
    state = ReportState()
    state.navigate("about")
    assert state.snapshot().page == "about"
    with pytest.raises(ValueError):
        state.navigate("settings")
    assert state.snapshot().page == "about"


def test_submit_switches_to_dashboard_and_clears_results(acme):
    state = ReportState()
    ticket = state.begin(DEMO_METRICS)
    state.settle(ticket, ["old"])
    state.submit(acme)
    snap = state.snapshot()
    assert snap.page == "dashboard"
    assert snap.metrics == acme
    assert snap.recommendations == []
    assert snap.status == STATUS_IDLE
    assert state.cached(acme) is None


def test_generating_until_settled(acme):
    state = ReportState()
    state.submit(acme)
    ticket = state.begin(acme)
    assert ticket.metrics == acme
    assert state.snapshot().status == STATUS_GENERATING
    assert state.settle(ticket, ["a", "b"]) is True
    snap = state.snapshot()
    assert snap.status == STATUS_READY
    assert snap.recommendations == ["a", "b"]


def test_settled_results_are_reused_for_same_input(acme):
    state = ReportState()
    state.submit(acme)
    assert state.cached(acme) is None
    state.settle(state.begin(acme), ["a"])
    assert state.cached(acme) == ["a"]
    assert state.cached(replace(acme, waste_ppe_kg=1)) is None


def test_overlapping_requests_for_same_input_both_settle(acme):
    state = ReportState()
    state.submit(acme)
    first = state.begin(acme)
    second = state.begin(acme)
    assert second.seq > first.seq

    assert state.settle(second, ["fresh"]) is True
    # the older answer is still valid for this input but does not replace the newer one
    assert state.settle(first, ["older"]) is True
    snap = state.snapshot()
    assert snap.status == STATUS_READY
    assert snap.recommendations == ["fresh"]


def test_older_request_settling_first_is_kept(acme):
    state = ReportState()
    state.submit(acme)
    first = state.begin(acme)
    second = state.begin(acme)
    assert state.settle(first, ["older"]) is True
    assert state.snapshot().recommendations == ["older"]
    assert state.settle(second, ["fresh"]) is True
    assert state.snapshot().recommendations == ["fresh"]


def test_new_input_invalidates_pending_request(acme):
    state = ReportState()
    state.submit(acme)
    ticket = state.begin(acme)
    newer = replace(acme, energy_usage_kwh=1)
    state.submit(newer)
    assert state.settle(ticket, ["for old input"]) is False
    assert state.snapshot().recommendations == []
    assert state.cached(acme) is None
    assert state.cached(newer) is None


def test_demo_request_superseded_by_submitted_input(acme):
    state = ReportState()
    ticket = state.begin(DEMO_METRICS)
    state.submit(acme)
    assert state.settle(ticket, ["demo"]) is False
    assert state.snapshot().status == STATUS_IDLE
