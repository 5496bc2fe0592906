"""What a token callback may return, and how that return value is resolved.

A callback attached to a pattern runs when the pattern matches. Whatever it
returns decides what the lexer does with the match:

================================  ============================================
Callback returns                  Outcome
================================  ============================================
``True``                          token built from ``constructor(None)``
``False``                         error: the default error
``None``                          error: the default error
an ``Exception`` instance         error: that exception
:class:`Skip` (class or object)   the match is skipped
``Emit(value)``                   token built from ``constructor(value)``
``Fail(error)``                   error: ``error``
anything else                     token built from ``constructor(value)``
================================  ============================================

:func:`resolve_callback` turns any of these into one of three outcomes:
:class:`Emit` holding the finished token, :class:`Fail` holding the error,
or :class:`Skip`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Skip:
    """Skip the current match, as if it were whitespace."""


@dataclass(frozen=True)
class Emit(Generic[T]):
    """Produce a token from ``value``.

    Returned by a callback, ``value`` is the product handed to the token's
    constructor. Returned by :func:`resolve_callback`, it is the finished token.
    """

    value: T


@dataclass(frozen=True)
class Fail(Generic[E]):
    """Report an error for the current match."""

    error: E


Outcome = Union[Emit[Any], Fail[Any], Skip]

_SKIP = Skip()


def skip(lexer: Any = None) -> Skip:
    """Predefined callback that skips whatever it was attached to."""
    return _SKIP


def _identity(value: Any) -> Any:
    return value


def resolve_callback(
    value: Any,
    constructor: Optional[Callable[[Any], Any]] = None,
    default_error: Any = None,
) -> Outcome:
    """Turn a callback's return value into an :class:`Emit`, :class:`Fail` or :class:`Skip`.

    ``constructor`` builds the token from the callback's product; when it is
    None the product is taken to be the token itself. ``default_error`` is the
    error reported when a callback signals failure without giving one.
    """
    build = constructor if constructor is not None else _identity

    if value is Skip or isinstance(value, Skip):
        return _SKIP
    if isinstance(value, Emit):
        return Emit(build(value.value))
    if isinstance(value, Fail):
        return value
    if isinstance(value, bool):
        return Emit(build(None)) if value else Fail(default_error)
    if value is None:
        return Fail(default_error)
    if isinstance(value, Exception):
        return Fail(value)
    return Emit(build(value))