"""Exact decimal arithmetic for monetary amounts.

Every amount in the shopping domain is a ``Decimal``. Amounts are persisted as
decimal text so nothing passes through binary floating point on the way to or
from storage, and no rounding step is ever applied: a VAT figure such as
``127.188`` is carried through to the final total as is.
"""

from collections.abc import Iterable
from contextlib import contextmanager
from decimal import Decimal, Inexact, InvalidOperation, localcontext

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Wide enough for quantity x price x percentage chains on any realistic basket
MONEY_PRECISION = 60


def to_decimal(value) -> Decimal:
    """Parse a stored or supplied amount into a ``Decimal``.

    Floats are converted through their shortest repr, so ``5.99`` becomes
    ``Decimal("5.99")`` rather than the binary approximation. ``None`` is zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool):
        raise ValueError(f"Invalid monetary amount: {value!r}")
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Invalid monetary amount: {value!r}") from None
    else:
        raise ValueError(f"Invalid monetary amount: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Invalid monetary amount: {value!r}")
    return amount


def as_text(value) -> str:
    """Render an amount as the decimal text stored on aggregates and events."""
    return str(to_decimal(value))


def is_decimal_text(value) -> bool:
    try:
        to_decimal(value)
    except ValueError:
        return False
    return True


@contextmanager
def money_context():
    """Widened decimal context that raises ``decimal.Inexact`` instead of rounding.

    All arithmetic on amounts goes through it, including the helpers below.
    """
    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        ctx.traps[Inexact] = True
        yield ctx


def add(*amounts) -> Decimal:
    with money_context():
        return sum((to_decimal(amount) for amount in amounts), ZERO)


def subtract(amount, other) -> Decimal:
    with money_context():
        return to_decimal(amount) - to_decimal(other)


def multiply(amount, factor) -> Decimal:
    with money_context():
        return to_decimal(amount) * to_decimal(factor)


def total_of(amounts: Iterable[Decimal]) -> Decimal:
    return add(*amounts)


def percentage_of(amount, percentage) -> Decimal:
    """Return ``amount * (percentage / 100)`` without any rounding."""
    with money_context():
        return to_decimal(amount) * (to_decimal(percentage) / HUNDRED)
