from __future__ import annotations

import threading

import pytest

from lib_log_local.adapters.capture import CaptureDevice
from lib_log_local.adapters.logger import Logger
from lib_log_local.application.local_logger import LocalLogger
from lib_log_local.domain.levels import InvalidSeverity, Severity


@pytest.fixture
def logger(parent: Logger) -> LocalLogger:
    return LocalLogger(parent, level="debug")


def test_parent_logger_is_referenced_not_copied(parent: Logger) -> None:
    assert LocalLogger(parent).parent_logger is parent


def test_parent_logger_is_required() -> None:
    with pytest.raises(ValueError):
        LocalLogger(None)  # type: ignore[arg-type]


# Level ---------------------------------------------------------------------


def test_constructor_level_overrides_parent(logger: LocalLogger, parent: Logger) -> None:
    assert logger.level is Severity.DEBUG
    assert parent.level is Severity.INFO


def test_level_defers_to_parent_when_unset(parent: Logger) -> None:
    logger = LocalLogger(parent)
    assert logger.local_level is None
    assert logger.level is Severity.INFO
    parent.level = "error"
    assert logger.level is Severity.ERROR


def test_set_level_changes_only_the_local_level(logger: LocalLogger, parent: Logger) -> None:
    logger.level = "error"
    assert logger.level is Severity.ERROR
    assert parent.level is Severity.INFO
    logger.set_level(None)
    assert logger.level is Severity.INFO


def test_invalid_level_fails_at_assignment(logger: LocalLogger, parent: Logger) -> None:
    with pytest.raises(InvalidSeverity):
        logger.level = "loud"
    with pytest.raises(InvalidSeverity):
        LocalLogger(parent, level=99)
    assert logger.level is Severity.DEBUG


def test_with_level_applies_to_local_and_parent_and_reverts(logger: LocalLogger, parent: Logger) -> None:
    with logger.with_level("warn") as applied:
        assert applied is Severity.WARN
        assert logger.level is Severity.WARN
        assert parent.level is Severity.WARN
    assert logger.level is Severity.DEBUG
    assert parent.level is Severity.INFO


def test_with_level_reverts_when_the_block_raises(logger: LocalLogger, parent: Logger) -> None:
    with pytest.raises(RuntimeError):
        with logger.with_level("error"):
            raise RuntimeError("boom")
    assert logger.level is Severity.DEBUG
    assert parent.level is Severity.INFO


def test_with_local_level_leaves_the_parent_alone(logger: LocalLogger, parent: Logger) -> None:
    with logger.with_local_level("warn"):
        assert logger.level is Severity.WARN
        assert parent.level is Severity.INFO
    assert logger.level is Severity.DEBUG
    assert parent.level is Severity.INFO


def test_nested_level_scopes_revert_to_the_enclosing_value(logger: LocalLogger) -> None:
    with logger.with_local_level("error"):
        with logger.with_local_level("info"):
            assert logger.level is Severity.INFO
        assert logger.level is Severity.ERROR
    assert logger.level is Severity.DEBUG


def test_silence_defaults_to_error(logger: LocalLogger, parent: Logger) -> None:
    with logger.silence():
        assert logger.level is Severity.ERROR
        assert logger.is_info() is False
        assert parent.is_info() is False
    assert logger.level is Severity.DEBUG


def test_log_at_is_with_level(logger: LocalLogger, parent: Logger) -> None:
    with logger.log_at("warn"):
        assert parent.level is Severity.WARN
    assert parent.level is Severity.INFO


def test_scoped_level_wins_over_a_permanent_change_made_inside_the_scope(logger: LocalLogger) -> None:
    with logger.with_local_level("warn"):
        logger.level = "error"
        assert logger.level is Severity.WARN
    assert logger.level is Severity.ERROR


@pytest.mark.parametrize(
    "level, enabled",
    [
        ("debug", {"debug", "info", "warn", "error", "fatal"}),
        ("info", {"info", "warn", "error", "fatal"}),
        ("warn", {"warn", "error", "fatal"}),
        ("error", {"error", "fatal"}),
        ("fatal", {"fatal"}),
        ("unknown", set()),
    ],
)
def test_predicates_follow_the_effective_level(logger: LocalLogger, level: str, enabled: set[str]) -> None:
    logger.level = level
    observed = {name for name in ("debug", "info", "warn", "error", "fatal") if getattr(logger, f"is_{name}")()}
    assert observed == enabled


@pytest.mark.parametrize("name", ["debug", "info", "warn", "error", "fatal"])
def test_level_setters_change_only_the_local_level(parent: Logger, name: str) -> None:
    logger = LocalLogger(parent)
    getattr(logger, f"set_{name}")()
    assert logger.level is Severity.coerce(name)
    assert parent.level is Severity.INFO


# Label ---------------------------------------------------------------------


def test_label_from_constructor_is_written(parent: Logger, capture: CaptureDevice) -> None:
    LocalLogger(parent, label="Worker").info("hello")
    assert capture.entries[-1].label == "Worker"


def test_label_defers_to_parent_and_can_be_changed(parent: Logger) -> None:
    parent.label = "App"
    logger = LocalLogger(parent)
    assert logger.label == "App"
    logger.label = "Local"
    assert logger.label == "Local"
    assert parent.label == "App"
    logger.set_label(None)
    assert logger.label == "App"


def test_with_label_is_scoped(parent: Logger, capture: CaptureDevice) -> None:
    logger = LocalLogger(parent, label="Local")
    with logger.with_label("Scoped"):
        logger.info("inside")
    logger.info("outside")
    assert [entry.label for entry in capture.entries] == ["Scoped", "Local"]


def test_explicit_label_argument_wins(parent: Logger, capture: CaptureDevice) -> None:
    LocalLogger(parent, label="Local").info("hello", label="Explicit")
    assert capture.entries[-1].label == "Explicit"


# Attributes ----------------------------------------------------------------


def test_constructor_attributes_only_apply_to_local_entries(parent: Logger, capture: CaptureDevice) -> None:
    logger = LocalLogger(parent, attributes={"user": "test_user"})
    assert logger.local_attributes == {"user": "test_user"}

    logger.info("with tags")
    parent.info("without tags")

    first, second = capture.entries
    assert first.attributes == {"user": "test_user"}
    assert second.attributes == {}


def test_add_and_remove_permanent_tags(parent: Logger) -> None:
    logger = LocalLogger(parent)
    assert logger.local_attributes == {}
    logger.add_local_tags(user="test_user")
    logger.add_local_tags({"role": "admin", "team": {"id": 3}})
    assert logger.local_attributes == {"user": "test_user", "role": "admin", "team.id": 3}
    logger.remove_local_tags("user", "team")
    assert logger.local_attributes == {"role": "admin", "team.id": 3}


def test_tag_local_block_is_scoped_and_keeps_the_parent_clean(parent: Logger) -> None:
    logger = LocalLogger(parent, attributes={"component": "jobs"})
    with logger.tag_local(user="test_user") as visible:
        assert visible == {"component": "jobs", "user": "test_user"}
        assert logger.local_attributes == {"component": "jobs", "user": "test_user"}
        assert parent.attributes == {}
    assert logger.local_attributes == {"component": "jobs"}


def test_nested_tag_local_blocks(parent: Logger, capture: CaptureDevice) -> None:
    logger = LocalLogger(parent)
    with logger.tag_local(outer=1):
        with logger.tag_local(inner=2):
            logger.info("inner")
        logger.info("outer")
    logger.info("none")
    assert [entry.attributes for entry in capture.entries] == [{"outer": 1, "inner": 2}, {"outer": 1}, {}]


def test_tag_local_current_without_scope_drops_tags(parent: Logger, capture: CaptureDevice) -> None:
    logger = LocalLogger(parent)
    assert logger.tag_local_current(user=1) is False
    logger.info("next")
    assert capture.entries[-1].attributes == {}


def test_tag_local_current_inside_scope_lasts_until_the_scope_exits(parent: Logger, capture: CaptureDevice) -> None:
    logger = LocalLogger(parent)
    with logger.tag_local(request="r-1"):
        assert logger.tag_local_current(user=1) is True
        logger.info("inside")
    logger.info("outside")
    assert [entry.attributes for entry in capture.entries] == [{"request": "r-1", "user": 1}, {}]


def test_all_attributes_merge_local_over_parent(parent: Logger) -> None:
    logger = LocalLogger(parent)
    assert logger.attributes == {}
    logger.add_local_tags(user="test_user", pid=1)
    assert logger.attributes == {"user": "test_user", "pid": 1}
    parent.tag_globally(pid=123, host="h")
    assert logger.attributes == {"pid": 1, "host": "h", "user": "test_user"}
    with parent.tag(request="r-1"):
        assert logger.attributes["request"] == "r-1"


def test_tag_is_forwarded_to_the_parent(parent: Logger, capture: CaptureDevice) -> None:
    logger = LocalLogger(parent)
    with logger.tag(value="v"):
        parent.info("direct")
    assert capture.entries[-1].attributes == {"value": "v"}


def test_callable_attributes_are_resolved_per_call(parent: Logger, capture: CaptureDevice) -> None:
    counter = iter(range(10))
    logger = LocalLogger(parent, attributes={"tick": lambda: next(counter)})
    logger.info("a")
    logger.info("b")
    assert [entry.attributes["tick"] for entry in capture.entries] == [0, 1]
    assert callable(logger.local_attributes["tick"])


def test_call_attributes_are_added(parent: Logger, capture: CaptureDevice) -> None:
    LocalLogger(parent, attributes={"a": 1}).info("msg", b=2)
    assert capture.entries[-1].attributes == {"a": 1, "b": 2}


# Emission ------------------------------------------------------------------


@pytest.mark.parametrize("name", ["debug", "info", "warn", "warning", "error", "fatal", "critical", "unknown"])
def test_emit_methods_write_at_their_severity(logger: LocalLogger, capture: CaptureDevice, name: str) -> None:
    getattr(logger, name)("msg")
    entry = capture.entries[-1]
    assert entry.message == "msg"
    assert entry.severity is Severity.coerce(name)


@pytest.mark.parametrize(
    "name, level",
    [("fatal", "unknown"), ("error", "fatal"), ("warn", "error"), ("info", "warn"), ("debug", "info")],
)
def test_emit_methods_respect_the_local_level(logger: LocalLogger, capture: CaptureDevice, name: str, level: str) -> None:
    logger.level = level
    getattr(logger, name)("msg")
    assert capture.entries == []


def test_lazy_messages_are_evaluated_only_when_emitted(logger: LocalLogger, capture: CaptureDevice) -> None:
    calls: list[str] = []

    def build() -> str:
        calls.append("built")
        return "msg from callable"

    logger.info(build)
    logger.level = "error"
    logger.info(build)

    assert calls == ["built"]
    assert capture.entries[-1].message == "msg from callable"


def test_add_and_log_take_a_severity(logger: LocalLogger, capture: CaptureDevice) -> None:
    logger.add(Severity.INFO, "added")
    logger.log("warn", "logged", key="v")
    assert [(e.severity, e.message) for e in capture.entries] == [(Severity.INFO, "added"), (Severity.WARN, "logged")]
    assert capture.entries[-1].attributes == {"key": "v"}


def test_shovel_operator_appends_raw_messages(logger: LocalLogger, capture: CaptureDevice) -> None:
    logger << "raw"
    logger.write("more")
    assert [e.message for e in capture.entries] == ["raw", "more"]


def test_local_debug_passes_while_parent_debug_is_filtered(capture: CaptureDevice) -> None:
    parent = Logger(capture, level="warn")
    local = LocalLogger(parent, level="debug")

    local.debug("x")
    assert len(capture) == 1
    parent.debug("x")
    assert len(capture) == 1


def test_emission_unwinds_parent_overrides(parent: Logger) -> None:
    logger = LocalLogger(parent, level="debug", label="Local", attributes={"a": 1})
    logger.info("msg")
    assert parent.level is Severity.INFO
    assert parent.label is None
    assert parent.attributes == {}


def test_parent_overrides_unwind_when_the_device_raises(parent: Logger) -> None:
    class Exploding:
        def write(self, entry: object) -> None:
            raise OSError("disk full")

    parent.add_device(Exploding())
    logger = LocalLogger(parent, level="debug", attributes={"a": 1})
    logger.info("msg")
    assert parent.level is Severity.INFO
    assert parent.attributes == {}


def test_with_level_affects_direct_parent_calls(capture: CaptureDevice) -> None:
    parent = Logger(capture, level="info")
    logger = LocalLogger(parent)
    with logger.with_level("error"):
        parent.warn("suppressed")
    with logger.with_local_level("error"):
        parent.warn("emitted")
    assert [e.message for e in capture.entries] == ["emitted"]


# Chaining and forwarding ---------------------------------------------------


def test_local_logger_can_wrap_another_local_logger(parent: Logger, capture: CaptureDevice) -> None:
    outer = LocalLogger(parent, level="warn", label="Outer", attributes={"outer": 1})
    inner = LocalLogger(outer, level="debug", label="Inner", attributes={"inner": 2})

    inner.debug("chained")
    outer.debug("filtered")

    assert len(capture) == 1
    entry = capture.entries[0]
    assert entry.label == "Inner"
    assert entry.attributes == {"outer": 1, "inner": 2}
    assert inner.level is Severity.DEBUG
    assert outer.level is Severity.WARN


def test_unknown_attributes_are_forwarded_to_the_parent(parent: Logger) -> None:
    logger = LocalLogger(parent)
    logger.tag_globally(env="test")
    assert parent.global_attributes == {"env": "test"}
    assert hasattr(logger, "devices")


def test_unsupported_operations_raise_attribute_error(parent: Logger) -> None:
    logger = LocalLogger(parent)
    assert not hasattr(logger, "no_such_operation")
    with pytest.raises(AttributeError):
        logger.no_such_operation()


def test_threads_sharing_one_local_logger_are_isolated(capture: CaptureDevice) -> None:
    parent = Logger(capture, level="info")
    logger = LocalLogger(parent)
    barrier = threading.Barrier(2)

    def work(unit_id: int) -> None:
        with logger.tag_local(id=unit_id):
            barrier.wait(timeout=5)
            logger.info(f"unit {unit_id}")
            barrier.wait(timeout=5)

    threads = [threading.Thread(target=work, args=(unit,)) for unit in (1, 2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    by_message = {entry.message: entry.attributes for entry in capture.entries}
    assert by_message == {"unit 1": {"id": 1}, "unit 2": {"id": 2}}


def test_chained_local_logger_template_wins_over_the_wrapped_template(parent: Logger, capture: CaptureDevice) -> None:
    outer = LocalLogger(parent, attributes={"component": "outer", "shared": 1})
    inner = LocalLogger(outer, attributes={"component": "inner"})

    inner.info("chained")

    assert inner.attributes == {"component": "inner", "shared": 1}
    assert capture.entries[-1].attributes == inner.attributes


def test_chained_local_logger_scope_wins_over_the_wrapped_template(parent: Logger, capture: CaptureDevice) -> None:
    outer = LocalLogger(parent, attributes={"key": "outer"})
    inner = LocalLogger(outer)

    with inner.tag_local(key="inner-scope"):
        inner.info("scoped")
        reported = inner.attributes
    inner << "raw"

    scoped, raw = capture.entries
    assert scoped.attributes == reported == {"key": "inner-scope"}
    assert raw.attributes == {"key": "outer"}


def test_call_attributes_win_over_local_attributes_in_a_chain(parent: Logger, capture: CaptureDevice) -> None:
    inner = LocalLogger(LocalLogger(parent, attributes={"key": "outer"}), attributes={"key": "inner"})
    inner.info("msg", key="call")
    assert capture.entries[-1].attributes == {"key": "call"}


def test_local_attribute_named_label_is_still_emitted(parent: Logger, capture: CaptureDevice) -> None:
    LocalLogger(parent, label="Local", attributes={"label": "attr"}).info("msg")
    entry = capture.entries[-1]
    assert (entry.label, entry.attributes) == ("Local", {"label": "attr"})


def test_empty_local_label_does_not_fall_back_to_the_parent(parent: Logger, capture: CaptureDevice) -> None:
    parent.label = "App"
    logger = LocalLogger(parent, label="")
    assert logger.label == ""
    logger.info("msg")
    assert capture.entries[-1].label == ""


def test_unknown_predicate_and_setter(parent: Logger) -> None:
    logger = LocalLogger(parent)
    assert logger.is_unknown() is True
    logger.set_unknown()
    assert logger.level is Severity.UNKNOWN
    assert logger.is_fatal() is False
    assert logger.is_unknown() is True
