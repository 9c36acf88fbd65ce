"""Financial calculators — annuity payment, totals, overpayment."""

from loanbot.calculators.payment import amortized_payment, overpayment, total_payable

__all__ = [
    "amortized_payment",
    "total_payable",
    "overpayment",
]
