"""
Tests for the invocation coordinator: validation short-circuits, outcome
classification, the acceptance gate and the correlation check.

"During the request" behaviour is simulated by transport steps that are
callables: they run while the coordinator is inside REQUESTING.
"""

import pytest

from seo_insights.abstractions.dto.invocation import InvocationRequest, StructuredResult, TextResult
from seo_insights.infrastructure.tools.catalog import build_catalog
from seo_insights.exceptions import (
    ErrorKind,
    HttpStatusError,
    InvocationError,
    InvocationInProgressError,
    UnknownToolError,
)
from seo_insights.settings.credentials import GEMINI_KEY

from conftest import FIXED_NOW, REPORT_TEXT, FakeResponse, connection_error, ok

ALL_TOOL_IDS = [d.id for d in build_catalog()]


# ---------- Validation ----------

@pytest.mark.parametrize("tool_id", ALL_TOOL_IDS)
@pytest.mark.parametrize("credential", [None, "", "short", "0123456789"])
def test_missing_or_short_credential_never_reaches_network(make_coordinator, tool_id, credential):
    coordinator, transport = make_coordinator([ok("unused")], default_tool=tool_id)

    outcome = coordinator.invoke(InvocationRequest(tool_id=tool_id, user_input="cloud storage", credential=credential))

    assert isinstance(outcome, InvocationError)
    assert outcome.kind is ErrorKind.MISSING_CREDENTIAL
    assert outcome.tool_id == tool_id
    assert transport.calls == []
    assert coordinator.state.error is outcome
    assert coordinator.state.loading is False


@pytest.mark.parametrize("tool_id", ALL_TOOL_IDS)
@pytest.mark.parametrize("user_input", ["", "   ", "\n\t"])
def test_blank_input_never_reaches_network(make_coordinator, tool_id, user_input):
    coordinator, transport = make_coordinator([ok("unused")], default_tool=tool_id)

    outcome = coordinator.submit(user_input)

    assert outcome.kind is ErrorKind.EMPTY_INPUT
    assert transport.calls == []
    assert coordinator.state.error is outcome


def test_credential_is_checked_before_input(make_coordinator, store):
    coordinator, _ = make_coordinator([ok("unused")])
    store.set(GEMINI_KEY, None)

    assert coordinator.submit("").kind is ErrorKind.MISSING_CREDENTIAL


def test_unknown_tool_is_rejected_before_network(make_coordinator):
    coordinator, transport = make_coordinator([ok("unused")])

    outcome = coordinator.submit("cloud storage", tool_id="does-not-exist")

    assert isinstance(outcome, UnknownToolError)
    assert transport.calls == []
    # Not the active tool, so the session is left untouched
    assert coordinator.state.error is None


def test_submit_reads_credential_from_store(make_coordinator):
    coordinator, transport = make_coordinator([ok(REPORT_TEXT)])

    coordinator.submit("cloud storage")

    assert transport.calls[0].headers["x-goog-api-key"] == "AIza-test-key-0123456789"


# ---------- Classification ----------

def test_core_tool_success_yields_structured_result(make_coordinator, registry):
    coordinator, transport = make_coordinator([ok(REPORT_TEXT)])

    outcome = coordinator.submit("cloud storage")

    assert isinstance(outcome, StructuredResult)
    assert outcome.kind == "structured"
    assert outcome.tool_id == registry.core_tool.id
    assert outcome.payload.target_topic == "cloud storage"
    assert len(outcome.payload.related_keywords) == 3
    assert "generationConfig" in transport.calls[0].body
    state = coordinator.state
    assert state.result is outcome and state.error is None and state.loading is False


def test_core_tool_non_json_text_is_malformed(make_coordinator):
    coordinator, _ = make_coordinator([ok("not json")])

    outcome = coordinator.submit("cloud storage")

    assert outcome.kind is ErrorKind.MALFORMED_SCHEMA_RESPONSE
    assert coordinator.state.error is outcome
    assert coordinator.state.result is None


def test_core_tool_empty_text_is_malformed(make_coordinator):
    coordinator, _ = make_coordinator([ok("")])

    assert coordinator.submit("cloud storage").kind is ErrorKind.MALFORMED_SCHEMA_RESPONSE


def test_core_tool_missing_text_path_is_empty_body(make_coordinator):
    coordinator, _ = make_coordinator([FakeResponse(200, {"candidates": []})])

    assert coordinator.submit("cloud storage").kind is ErrorKind.EMPTY_RESPONSE_BODY


def test_free_text_tool_success_yields_text_result(make_coordinator):
    coordinator, transport = make_coordinator([ok("## Titles\n1. ...")], default_tool="title-generator")

    outcome = coordinator.submit("cloud storage")

    assert isinstance(outcome, TextResult)
    assert outcome.kind == "text"
    assert outcome.text.startswith("## Titles")
    assert outcome.produced_at == FIXED_NOW
    assert "generationConfig" not in transport.calls[0].body
    assert coordinator.state.result is outcome


@pytest.mark.parametrize("text", ["", "   ", None])
def test_free_text_tool_empty_or_absent_text_is_empty_body(make_coordinator, text):
    coordinator, _ = make_coordinator([ok(text)], default_tool="title-generator")

    outcome = coordinator.submit("cloud storage")

    assert outcome.kind is ErrorKind.EMPTY_RESPONSE_BODY
    assert coordinator.state.error is outcome


def test_exhausted_transport_wraps_last_error(make_coordinator, sleeper):
    coordinator, transport = make_coordinator([connection_error(), FakeResponse(500, None, text="boom")])

    outcome = coordinator.submit("cloud storage")

    assert outcome.kind is ErrorKind.EXHAUSTED_RETRIES
    assert isinstance(outcome.cause, HttpStatusError)
    assert outcome.cause.status_code == 500
    assert len(transport.calls) == 3
    assert len(sleeper.calls) == 2
    assert coordinator.state.error is outcome


def test_transient_failure_then_success(make_coordinator):
    coordinator, transport = make_coordinator([connection_error(), ok(REPORT_TEXT)])

    outcome = coordinator.submit("cloud storage")

    assert isinstance(outcome, StructuredResult)
    assert len(transport.calls) == 2


def test_new_outcome_replaces_previous_one(make_coordinator):
    coordinator, _ = make_coordinator([ok("not json"), ok(REPORT_TEXT)])

    first = coordinator.submit("cloud storage")
    assert coordinator.state.error is first

    second = coordinator.submit("cloud storage")
    assert coordinator.state.result is second
    assert coordinator.state.error is None


# ---------- Acceptance gate ----------

def test_second_submission_while_loading_is_rejected(make_coordinator):
    seen = {}

    def during_request():
        seen["loading"] = coordinator.state.loading
        with pytest.raises(InvocationInProgressError):
            coordinator.submit("another topic")
        seen["calls_inside"] = len(transport.calls)
        return ok(REPORT_TEXT)

    coordinator, transport = make_coordinator([during_request])

    outcome = coordinator.submit("cloud storage")

    assert seen == {"loading": True, "calls_inside": 1}
    assert len(transport.calls) == 1
    assert isinstance(outcome, StructuredResult)
    assert coordinator.state.result is outcome


def test_gate_reopens_after_settling(make_coordinator):
    coordinator, transport = make_coordinator([ok(REPORT_TEXT)])

    coordinator.submit("one")
    coordinator.submit("two")

    assert len(transport.calls) == 2


def test_unexpected_exception_releases_the_gate(make_coordinator):
    coordinator, _ = make_coordinator([RuntimeError("bug in transport")])

    with pytest.raises(RuntimeError):
        coordinator.submit("cloud storage")

    assert coordinator.state.loading is False


# ---------- Correlation ----------

def test_switching_tool_mid_flight_resets_and_discards_late_result(make_coordinator):
    snapshots = {}

    def during_request():
        snapshots["before"] = coordinator.state
        snapshots["after_switch"] = coordinator.switch_tool("title-generator")
        return ok(REPORT_TEXT)

    coordinator, _ = make_coordinator([during_request])

    outcome = coordinator.submit("cloud storage")

    assert snapshots["before"].loading is True
    after = snapshots["after_switch"]
    assert (after.active_tool_id, after.loading, after.result, after.error) == ("title-generator", False, None, None)
    # The late structured result is returned to the caller but never lands in the session
    assert isinstance(outcome, StructuredResult)
    assert coordinator.state == after


def test_switching_away_and_back_still_discards_late_result(make_coordinator, registry):
    core_id = registry.core_tool.id

    def during_request():
        coordinator.switch_tool("title-generator")
        coordinator.switch_tool(core_id)
        return ok(REPORT_TEXT)

    coordinator, _ = make_coordinator([during_request])

    coordinator.submit("cloud storage")

    state = coordinator.state
    assert state.active_tool_id == core_id
    assert state.result is None and state.error is None and state.loading is False


def test_late_error_is_discarded_too(make_coordinator):
    def during_request():
        coordinator.switch_tool("title-generator")
        return FakeResponse(500, None, text="boom")

    coordinator, _ = make_coordinator([during_request], max_attempts=1)

    outcome = coordinator.submit("cloud storage")

    assert outcome.kind is ErrorKind.EXHAUSTED_RETRIES
    assert coordinator.state.error is None


def test_credential_change_mid_flight_discards_result(make_coordinator, store):
    def during_request():
        coordinator.update_credential("AIza-another-key-987654321")
        return ok(REPORT_TEXT)

    coordinator, _ = make_coordinator([during_request])

    coordinator.submit("cloud storage")

    assert coordinator.state.result is None
    assert coordinator.state.loading is False
    assert store.get(GEMINI_KEY) == "AIza-another-key-987654321"


def test_switch_to_unknown_tool_leaves_session_untouched(make_coordinator):
    coordinator, _ = make_coordinator([ok("not json")])
    coordinator.submit("cloud storage")
    before = coordinator.state

    with pytest.raises(UnknownToolError):
        coordinator.switch_tool("nope")

    assert coordinator.state is before


def test_invoking_a_non_active_tool_does_not_write_the_session(make_coordinator):
    coordinator, transport = make_coordinator([ok("text")])

    outcome = coordinator.submit("cloud storage", tool_id="title-generator")

    assert isinstance(outcome, TextResult)
    assert len(transport.calls) == 1
    assert coordinator.state.result is None
    assert coordinator.state.loading is False
