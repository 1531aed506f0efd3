"""Exception hierarchy for repeatcal_lite.

Recurrence expansion itself never raises for structurally valid rules; these
types cover the few precondition violations the library does surface.
"""


class LiteRepeatError(Exception):
    """Base exception for all repeatcal_lite errors."""


class LiteDateParseError(LiteRepeatError, ValueError):
    """A calendar date string could not be parsed.

    Raised when:
    - The value is not a ``YYYY-MM-DD`` string
    - The string names a date that does not exist (e.g. 2025-02-30)

    Well-formed dates are the caller's responsibility; this error only makes the
    violation explicit instead of propagating a bogus value.
    """


class LiteViewError(LiteRepeatError, ValueError):
    """An unknown calendar view name was requested."""
