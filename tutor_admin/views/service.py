"""Dashboard derivations: stats, student list, referrer leaderboard, student detail.

Every function here is pure: same snapshot and UI state in, same view out.
"""

from decimal import Decimal
from typing import List, Optional, Tuple

from tutor_admin.core.config import settings
from tutor_admin.core.enums import ALL_SCHOOLS
from tutor_admin.core.schemas import Payment, Snapshot, Student

from .formatting import (
    format_currency,
    format_short_date,
    timestamp_sort_key,
    whatsapp_link,
)
from .lookup import (
    codes_with_lessons,
    find_student,
    lessons_for,
    payments_for,
    referred_students,
    student_label,
)
from .schemas import (
    LeaderboardView,
    PaymentLine,
    ReferrerRow,
    StatsView,
    StudentDetailView,
    StudentListView,
    StudentRow,
    UiState,
)

DASH = "—"


def _sum_amounts(payments) -> Decimal:
    return sum((p.amount for p in payments), Decimal("0"))


# --- Stats ---
def compute_stats(snapshot: Snapshot) -> StatsView:
    with_lessons = codes_with_lessons(snapshot)
    pending = sum(1 for s in snapshot.students if s.code not in with_lessons)
    total_revenue = _sum_amounts(snapshot.payments)
    return StatsView(
        student_count=len(snapshot.students),
        lesson_count=len(snapshot.lessons),
        total_revenue=total_revenue,
        pending_count=pending,
        revenue_label=format_currency(total_revenue),
    )


# --- Student list ---
def filter_students(students: Tuple[Student, ...], ui: UiState) -> List[Student]:
    """School tab first, then name/code search. Order is preserved."""
    out = list(students)
    if ui.school_filter != ALL_SCHOOLS:
        out = [s for s in out if s.school == ui.school_filter]

    query = ui.search_query.strip().lower()
    if query:
        out = [s for s in out if query in s.name.lower() or query in s.code.lower()]
    return out


def compute_student_list(snapshot: Snapshot, ui: UiState) -> StudentListView:
    with_lessons = codes_with_lessons(snapshot)
    students = filter_students(snapshot.students, ui)
    # sorted() is stable with reverse=True, so equal timestamps keep sheet order.
    students = sorted(students, key=lambda s: timestamp_sort_key(s.created_at), reverse=True)

    rows = tuple(
        StudentRow(
            code=s.code,
            name=s.name,
            school=s.school,
            created_at=s.created_at,
            created_label=format_short_date(s.created_at),
            is_pending=s.code not in with_lessons,
        )
        for s in students
    )
    empty_message = None
    if not rows:
        empty_message = "No students match your search." if ui.search_query.strip() else "No students yet."
    return StudentListView(rows=rows, empty_message=empty_message)


# --- Referrer leaderboard ---
def compute_leaderboard(snapshot: Snapshot, reward_per_referral: Optional[Decimal] = None) -> LeaderboardView:
    reward = settings.reward_per_referral if reward_per_referral is None else Decimal(reward_per_referral)
    rows: List[ReferrerRow] = []
    for r in snapshot.referrers:
        referred = len(referred_students(snapshot, r.code_name))
        earned = referred * reward
        outstanding = earned - r.total_paid_out
        rows.append(
            ReferrerRow(
                code_name=r.code_name,
                full_name=r.full_name,
                referred_count=referred,
                earned=earned,
                paid_out=r.total_paid_out,
                outstanding=outstanding,
                earned_label=format_currency(earned),
                outstanding_label=f"{format_currency(outstanding)} owed" if outstanding > 0 else DASH,
            )
        )
    rows.sort(key=lambda row: row.referred_count, reverse=True)
    return LeaderboardView(rows=tuple(rows), empty_message=None if rows else "No referrers yet.")


# --- Student detail ---
def _payment_summary(p: Payment) -> str:
    parts = []
    if p.pdf_pages:
        parts.append(f"{p.pdf_pages} pages")
    if p.paid_at:
        parts.append(format_short_date(p.paid_at))
    if p.notes:
        parts.append(p.notes)
    return " · ".join(parts)


def compute_student_detail(
    snapshot: Snapshot,
    code: str,
    country_code: Optional[str] = None,
) -> Optional[StudentDetailView]:
    """Join one student to their lessons and payments. None if the code is unknown."""
    student = find_student(snapshot, code)
    if student is None:
        return None

    lessons = lessons_for(snapshot, code)
    payments = payments_for(snapshot, code)
    total_paid = _sum_amounts(payments)
    return StudentDetailView(
        student=student,
        heading=student_label(student),
        referrer_label=student.referrer or DASH,
        interests_label=f"{student.interest1}, {student.interest2}",
        whatsapp_link=whatsapp_link(student.phone, country_code),
        lessons=lessons,
        payments=tuple(
            PaymentLine(payment=p, amount_label=format_currency(p.amount), summary=_payment_summary(p))
            for p in payments
        ),
        total_paid=total_paid,
        total_paid_label=format_currency(total_paid),
        is_pending=not lessons,
    )
