import pytest

from dvtoolbox.ioutil import retry_if_interrupted


def test_retry_if_interrupted():
    call_count = 0

    def flaky():
        nonlocal call_count
        call_count += 1
        if call_count < 3:
            raise InterruptedError("interrupted")
        return "done"

    result = retry_if_interrupted(flaky)
    assert result == "done"
    assert call_count == 3


def test_returns_value_of_successful_call():
    attempts = iter([InterruptedError("interrupted"), 42])

    def func():
        item = next(attempts)
        if isinstance(item, Exception):
            raise item
        return item

    assert retry_if_interrupted(func) == 42


def test_other_errors_propagate_without_retry():
    calls = []

    def broken():
        calls.append(1)
        raise BrokenPipeError("broken")

    with pytest.raises(BrokenPipeError):
        retry_if_interrupted(broken)
    assert len(calls) == 1