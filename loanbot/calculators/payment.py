"""Fixed-rate loan payment calculator.

Plain float arithmetic, no rounding — callers format for display.

Annuity formula, with r = annual_rate / 12 and n = term in months:

    payment = P × r × (1+r)^n / ((1+r)^n − 1) = P × r / (1 − (1+r)^−n)

Computed in the second form: for very long terms (1+r)^−n underflows to 0
and the payment tends to the interest-only P × r.

A non-positive rate degrades to straight-line repayment P / n.
"""

from __future__ import annotations


def amortized_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """Monthly payment that fully repays ``principal`` over ``term_months``.

    Args:
        principal: Amount borrowed.
        annual_rate: Nominal annual rate as a fraction (0.12 = 12%).
        term_months: Number of monthly payments, at least 1.

    Returns:
        The fixed monthly payment.

    Raises:
        ValueError: If term_months is below 1.
    """
    if term_months < 1:
        msg = f"Loan term must be at least 1 month, got {term_months}"
        raise ValueError(msg)

    r = annual_rate / 12
    if r <= 0:
        return principal / term_months

    discount = 1 - (1 + r) ** -term_months
    if discount <= 0:
        # r too small to register next to 1
        return principal / term_months
    return principal * r / discount


def total_payable(monthly_payment: float, term_months: int) -> float:
    """Sum of all payments over the term."""
    return monthly_payment * term_months


def overpayment(total: float, principal: float) -> float:
    """Interest paid on top of the principal."""
    return total - principal
