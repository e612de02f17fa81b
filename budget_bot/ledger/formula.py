"""
Running-sum formulas.

A daily or category cell holds "=t1+t2+...+tN", one term per expense.
The bot only ever appends a term; the spreadsheet does the adding.
"""

from decimal import ROUND_HALF_UP, Decimal

from budget_bot.models.expense import PaymentMethod


CENTS = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    """Amount with exactly two decimals: 400 -> '400.00'."""
    return str(Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP))


def format_term(amount: Decimal, payment_method: PaymentMethod) -> str:
    """Formula term for one expense. Cash terms are parenthesized."""
    formatted = format_amount(amount)
    if payment_method == PaymentMethod.CASH:
        return f"({formatted})"
    return formatted


def accumulate(current_formula: str, amount: Decimal, payment_method: PaymentMethod) -> str:
    """
    Append one expense to a cell's content.

    Not idempotent: every call stands for a new expense.

    >>> accumulate("", Decimal("400"), PaymentMethod.CASH)
    '=(400.00)'
    >>> accumulate("=12.50", Decimal("3"), PaymentMethod.CARD)
    '=12.50+3.00'
    """
    term = format_term(amount, payment_method)
    current_formula = current_formula or ""
    if not current_formula.strip():
        return f"={term}"
    if not current_formula.startswith("="):
        # A plain number typed by hand becomes the first term
        current_formula = f"={current_formula}"
    return f"{current_formula}+{term}"
