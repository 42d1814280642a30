from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, replace
from datetime import date
from typing import List

from ..models.student import PAYMENT_METHODS, PaymentRecord, Student

MONTH_NAMES = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]


@dataclass
class PaymentRow:
    student: Student
    payment: PaymentRecord


@dataclass
class FinanceSummary:
    revenue_this_month: float
    total_pending_overdue: float
    active_students: int
    pct_paid: int


def current_month_ref(today: date | None = None) -> str:
    today = today or date.today()
    return f"{today.year}-{today.month:02d}"


def format_month_year(month_ref: str) -> str:
    year, month = month_ref.split("-")[:2]
    return f"{MONTH_NAMES[int(month) - 1]} de {year}"


def all_payments(students: List[Student]) -> List[PaymentRow]:
    rows = [PaymentRow(s, p) for s in students for p in s.payment_history]
    rows.sort(key=lambda r: r.payment.date, reverse=True)
    return rows


def summarize(students: List[Student], month_ref: str) -> FinanceSummary:
    revenue = 0.0
    outstanding = 0.0
    paid_count = 0
    total_count = 0
    for row in all_payments(students):
        p = row.payment
        if p.month_reference == month_ref:
            total_count += 1
            if p.status == "paid":
                revenue += p.amount_paid
                paid_count += 1
        if p.status in {"pending", "overdue"}:
            outstanding += p.amount
    active = sum(1 for s in students if s.is_active)
    pct = round(paid_count / total_count * 100) if total_count else 0
    return FinanceSummary(revenue, outstanding, active, pct)


def filter_payments(
    rows: List[PaymentRow],
    status: str = "all",
    month_ref: str = "",
    query: str = "",
) -> List[PaymentRow]:
    if status != "all":
        rows = [r for r in rows if r.payment.status == status]
    if month_ref:
        rows = [r for r in rows if r.payment.month_reference == month_ref]
    q = query.strip().lower()
    if q:
        rows = [r for r in rows if q in r.student.name.lower()]
    return rows


def record_payment(
    student: Student,
    month_ref: str,
    amount_paid: float,
    method: str = "Pix",
    today: date | None = None,
    payment_id: str | None = None,
) -> Student:
    """Return ``student`` with a paid monthly fee prepended to its history."""
    if not month_ref:
        raise ValueError("Month reference is required")
    if amount_paid is None or amount_paid <= 0:
        raise ValueError("Payment amount must be positive")
    if method not in PAYMENT_METHODS:
        raise ValueError(f"Unknown payment method: {method!r}")
    day = (today or date.today()).isoformat()
    payment = PaymentRecord(
        id=payment_id or f"pay-{int(time.time() * 1000)}-{secrets.token_hex(2)}",
        date=day,
        month_reference=month_ref,
        amount=student.monthly_fee,
        amount_paid=float(amount_paid),
        description=f"Mensalidade {format_month_year(month_ref)}",
        status="paid",
        payment_method=method,
        paid_at=day,
        plan=student.plan,
    )
    return replace(student, payment_history=[payment] + student.payment_history, payment_status="Em dia")
