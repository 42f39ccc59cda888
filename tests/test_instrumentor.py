import json
import threading

from janji.instrumentor import (
    InstrumentationTimer,
    Instrumentor,
    ProfileResult,
    cleanup_output_string,
    get_instrumentor,
)


def _events(path):
    return json.loads(path.read_text(encoding="utf-8"))["traceEvents"]


def test_session_writes_valid_trace(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session("Runtime", str(path))
    inst.write_profile(ProfileResult("Run", 1.5, 3, 7))
    inst.end_session()
    events = _events(path)
    assert events[0] == {}
    assert events[1] == {
        "cat": "function",
        "dur": 3,
        "name": "Run",
        "ph": "X",
        "pid": 0,
        "tid": 7,
        "ts": 1.5,
    }
    assert inst.session_name is None


def test_raw_header_and_timestamp_precision(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session("Startup", str(path))
    assert inst.session_name == "Startup"
    inst.write_profile(ProfileResult("Init", 2.0, 1, 1))
    inst.end_session()
    text = path.read_text(encoding="utf-8")
    assert text.startswith('{"otherData": {},"traceEvents":[{}')
    assert text.endswith("]}")
    assert '"ts":2.000' in text


def test_write_without_session_is_ignored(tmp_path):
    inst = Instrumentor()
    inst.write_profile(ProfileResult("Lost", 0.0, 0, 0))
    assert inst.session_name is None
    assert list(tmp_path.iterdir()) == []


def test_begin_closes_previous_session(tmp_path):
    first = tmp_path / "first.json"
    second = tmp_path / "second.json"
    inst = Instrumentor()
    inst.begin_session("One", str(first))
    inst.begin_session("Two", str(second))
    assert _events(first) == [{}]
    assert inst.session_name == "Two"
    inst.end_session()
    assert _events(second) == [{}]


def test_unwritable_path_opens_no_session(tmp_path):
    inst = Instrumentor()
    inst.begin_session("Bad", str(tmp_path / "missing" / "trace.json"))
    assert inst.session_name is None


def test_timer_context_records_scope(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session("Scope", str(path))
    with InstrumentationTimer("Block", inst) as timer:
        pass
    inst.end_session()
    assert timer.stopped
    events = _events(path)
    assert len(events) == 2
    assert events[1]["name"] == "Block"
    assert events[1]["dur"] >= 0
    assert events[1]["tid"] == threading.get_ident()


def test_explicit_stop_not_repeated_on_exit(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session("Scope", str(path))
    with InstrumentationTimer("Once", inst) as timer:
        result = timer.stop()
    inst.end_session()
    assert result.name == "Once"
    assert result.elapsed_time >= 0
    assert len(_events(path)) == 2


def test_get_instrumentor_is_singleton(tmp_path):
    first = get_instrumentor()
    assert isinstance(first, Instrumentor)
    first.begin_session("Shared", str(tmp_path / "shared.json"))
    try:
        assert get_instrumentor().session_name == "Shared"
    finally:
        get_instrumentor().end_session()
    assert first.session_name is None
    assert _events(tmp_path / "shared.json") == [{}]


def test_cleanup_removes_token():
    assert cleanup_output_string("void __cdecl Run()", "__cdecl ") == "void Run()"


def test_cleanup_replaces_double_quotes():
    assert cleanup_output_string('say "hi"', "__cdecl ") == "say 'hi'"


def test_cleanup_token_at_end():
    assert cleanup_output_string("a __cdecl ", "__cdecl ") == "a "


def test_cleanup_empty_remove_keeps_text():
    assert cleanup_output_string("plain", "") == "plain"