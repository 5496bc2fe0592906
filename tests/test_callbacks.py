import pytest

from lexdef.callbacks import Emit, Fail, Skip, resolve_callback, skip


def _number(n):
    return ("Number", n)


def _kilo(slice_):
    try:
        return int(slice_[:-1]) * 1_000
    except ValueError:
        return None


def _mega(slice_):
    try:
        return int(slice_[:-1]) * 1_000_000
    except ValueError:
        return None


def test_skip_callback_returns_skip():
    assert resolve_callback(skip(object())) == Skip()


def test_skip_class_is_accepted():
    assert resolve_callback(Skip, _number, "Other") == Skip()


def test_plain_value_goes_through_constructor():
    assert resolve_callback(5, _number) == Emit(("Number", 5))


def test_documented_kilo_mega_example():
    results = [
        resolve_callback(int("5"), _number),
        resolve_callback(_kilo("42k"), _number),
        resolve_callback(_mega("75m"), _number),
    ]
    assert results == [
        Emit(("Number", 5)),
        Emit(("Number", 42_000)),
        Emit(("Number", 75_000_000)),
    ]


def test_none_is_default_error():
    assert resolve_callback(_kilo("xk"), _number, "Other") == Fail("Other")


def test_false_is_default_error():
    assert resolve_callback(False, _number, "Other") == Fail("Other")


def test_true_builds_unit_token():
    assert resolve_callback(True, lambda _: "Unit") == Emit("Unit")


def test_default_error_defaults_to_none():
    assert resolve_callback(False) == Fail(None)


def test_exception_becomes_error():
    err = ValueError("bad")
    outcome = resolve_callback(err, _number)
    assert isinstance(outcome, Fail)
    assert outcome.error is err


def test_filter_even_numbers_example():
    def even(n):
        return Emit(n) if n % 2 == 0 else Skip()

    outcomes = [resolve_callback(even(int(s)), _number) for s in "20 11 42 23 100 8002".split()]
    emitted = [o.value for o in outcomes if isinstance(o, Emit)]
    assert emitted == [
        ("Number", 20),
        ("Number", 42),
        ("Number", 100),
        ("Number", 8002),
    ]
    assert sum(isinstance(o, Skip) for o in outcomes) == 2


def test_filter_result_example():
    def nice_even(n):
        if n % 2 == 0:
            if n == 10:
                return Fail("NumberIsTen")
            return Emit(n)
        return Skip

    outcomes = [
        resolve_callback(nice_even(int(s)), _number, "Other")
        for s in "20 11 42 23 100 10".split()
    ]
    kept = [o for o in outcomes if not isinstance(o, Skip)]
    assert kept == [
        Emit(("Number", 20)),
        Emit(("Number", 42)),
        Emit(("Number", 100)),
        Fail("NumberIsTen"),
    ]


def test_fail_is_not_passed_to_constructor():
    def boom(_):
        raise AssertionError("constructor must not run")

    assert resolve_callback(Fail("E"), boom) == Fail("E")


def test_without_constructor_value_is_token():
    assert resolve_callback("Text") == Emit("Text")
    assert resolve_callback(Emit("Float")) == Emit("Float")


def test_constructor_errors_propagate():
    def broken(_):
        raise KeyError("x")

    with pytest.raises(KeyError):
        resolve_callback(3, broken)


@pytest.mark.parametrize("value", [0, 1, "", "abc", (1, 2)])
def test_non_bool_values_are_products(value):
    assert resolve_callback(value, lambda v: ("T", v)) == Emit(("T", value))