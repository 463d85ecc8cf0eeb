import threading

import pytest

from vision_report.api.media import MediaProvider
from vision_report.api.status import Status
from vision_report.api.testcase import (
    EXCEPTION_PLACEHOLDER,
    NULL_EXCEPTION_DETAILS,
    NULL_EXCEPTION_NAME,
    UNNAMED_STEP,
    UNTITLED_TEST,
    IdSequence,
    Log,
    Test,
)


def _raise(error: BaseException) -> BaseException:
    try:
        raise error
    except BaseException as e:
        return e


def test_id_sequence_formats_fixed_width_tokens():
    seq = IdSequence()
    assert [seq.next_id() for _ in range(3)] == ["TC001", "TC002", "TC003"]


def test_id_sequence_is_unique_across_threads():
    seq = IdSequence()
    ids = []
    lock = threading.Lock()

    def worker():
        for _ in range(200):
            value = seq.next_id()
            with lock:
                ids.append(value)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(ids) == len(set(ids)) == 1600
    assert seq.current == 1600


def test_blank_name_and_id_get_defaults():
    seq = IdSequence()
    test = Test(None, id_sequence=seq)
    assert test.name == UNTITLED_TEST
    assert test.id == "TC001"
    assert Test("   ", test_id="  ", id_sequence=seq).id == "TC002"


def test_explicit_id_is_trimmed_and_does_not_consume_sequence():
    seq = IdSequence()
    test = Test("Login", test_id="  LOGIN-1 ", id_sequence=seq)
    assert test.id == "LOGIN-1"
    assert seq.current == 0


def test_log_defaults_for_blank_name_and_missing_details():
    test = Test("t", id_sequence=IdSequence()).log(Status.PASS, "", None)
    log = test.logs[0]
    assert log.name == UNNAMED_STEP
    assert log.details == ""
    assert log.status == Status.PASS
    assert log.media is None


def test_log_none_status_raises():
    test = Test("t", id_sequence=IdSequence())
    with pytest.raises(ValueError):
        test.log(None, "step")
    assert test.logs == ()


def test_log_parses_string_status():
    test = Test("t", id_sequence=IdSequence()).log("fail", "step").log("whatever", "other")
    assert [log.status for log in test.logs] == [Status.FAIL, Status.INFO]


def test_fluent_chaining_returns_same_test():
    test = Test("t", id_sequence=IdSequence())
    assert test.description("d").assign_author("a").assign_category("c").info("x") is test


def test_authors_and_categories_keep_order_and_duplicates():
    test = Test("t", id_sequence=IdSequence())
    test.assign_category("Cat1", None, "Cat1", " ", " Cat2 ")
    test.assign_category("Cat2")
    test.assign_author("Ann", "", "Bob", "Ann")
    assert test.categories == ("Cat1", "Cat1", "Cat2", "Cat2")
    assert test.authors == ("Ann", "Bob", "Ann")


def test_log_updates_end_time(step_clock):
    test = Test("t", id_sequence=IdSequence(), clock=step_clock)
    start = test.start_time
    assert test.end_time == start
    test.log(Status.PASS, "a").log(Status.PASS, "b")
    assert test.end_time > start


def test_log_exception_with_none_logs_fail_entry():
    test = Test("t", id_sequence=IdSequence()).log_exception(None)
    log = test.logs[0]
    assert log.status == Status.FAIL
    assert log.name == NULL_EXCEPTION_NAME
    assert log.details == NULL_EXCEPTION_DETAILS
    assert log.error is None
    assert not log.has_error


def test_log_exception_uses_message_and_captures_trace():
    error = _raise(ZeroDivisionError("division by zero"))
    test = Test("t", id_sequence=IdSequence()).log(Status.PASS, "ok").log_exception(error)
    log = test.logs[-1]
    assert log.status == Status.FAIL
    assert log.name == "division by zero"
    assert log.error is error
    assert log.has_error
    trace = log.stack_trace()
    assert "Traceback" in trace
    assert "ZeroDivisionError: division by zero" in trace
    assert test.calculate_final_status() == Status.FAIL


def test_log_exception_blank_message_uses_placeholder():
    test = Test("t", id_sequence=IdSequence()).log_exception(_raise(KeyError()))
    assert test.logs[0].name == EXCEPTION_PLACEHOLDER


def test_log_exception_keeps_media(png_file):
    media = MediaProvider.from_path(png_file)
    test = Test("t", id_sequence=IdSequence()).log_exception(RuntimeError("boom"), media)
    assert test.logs[0].media == media


def test_log_entries_are_immutable():
    log = Log.create(Status.INFO, "name")
    with pytest.raises(Exception):
        log.name = "other"


def test_log_create_defaults():
    log = Log.create(None, None, None)
    assert log.status == Status.INFO
    assert log.name == "[Unnamed Log]"
    assert log.stack_trace() == ""
    assert log.timestamp.endswith(("AM", "PM"))


@pytest.mark.parametrize("statuses,expected", [
    ([Status.INFO, Status.PASS, Status.PASS], Status.PASS),
    ([Status.INFO, Status.PASS, Status.SKIP], Status.SKIP),
    ([Status.PASS, Status.FAIL], Status.FAIL),
    ([], Status.SKIP),
])
def test_calculate_final_status(statuses, expected):
    test = Test("t", id_sequence=IdSequence())
    for status in statuses:
        test.log(status, "step")
    assert test.calculate_final_status() == expected
