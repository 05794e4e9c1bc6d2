import pytest

from dvtoolbox.validation import ValidationError


def test_single_error_format():
    err = ValidationError([("field", "went wrong")])
    assert str(err) == "field: went wrong\n"


def test_errors_are_sorted_by_field():
    err = ValidationError([("zeta", "second"), ("alpha", "first")])
    assert err.errors == [("alpha", "first"), ("zeta", "second")]
    assert str(err) == "alpha: first\nzeta: second\n"


def test_same_field_keeps_insertion_order():
    err = ValidationError([("f", "one"), ("f", "two")])
    assert [message for _, message in err.errors] == ["one", "two"]


def test_is_value_error_with_message():
    err = ValidationError([("x", "bad")])
    assert str(err) == "x: bad\n"
    assert err.args[0] == "x: bad\n"
    assert err.errors[0] == ("x", "bad")
    with pytest.raises(ValueError, match="x: bad"):
        raise err