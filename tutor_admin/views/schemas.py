"""View models derived from a snapshot plus transient UI state."""

from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, Field

from tutor_admin.core.enums import ALL_SCHOOLS
from tutor_admin.core.schemas import Lesson, Payment, Student


class ViewModel(BaseModel):
    class Config:
        frozen = True


class UiState(ViewModel):
    """Transient dashboard state: the search box and the active school tab."""

    search_query: str = ""
    school_filter: str = ALL_SCHOOLS


class StatsView(ViewModel):
    student_count: int
    lesson_count: int
    total_revenue: Decimal
    pending_count: int
    revenue_label: str


class StudentRow(ViewModel):
    code: str
    name: str
    school: str
    created_at: str
    created_label: str
    is_pending: bool


class StudentListView(ViewModel):
    rows: Tuple[StudentRow, ...]
    empty_message: Optional[str] = Field(None, description="Set only when rows is empty")


class ReferrerRow(ViewModel):
    code_name: str
    full_name: str
    referred_count: int
    earned: Decimal
    paid_out: Decimal
    outstanding: Decimal = Field(..., description="earned - paid_out; may be negative")
    earned_label: str
    outstanding_label: str = Field(..., description="'₦500 owed', or '—' when nothing is owed")

    @property
    def owes(self) -> bool:
        return self.outstanding > 0


class LeaderboardView(ViewModel):
    rows: Tuple[ReferrerRow, ...]
    empty_message: Optional[str] = Field(None, description="Set only when rows is empty")


class PaymentLine(ViewModel):
    payment: Payment
    amount_label: str
    summary: str = Field(..., description="e.g. '45 pages · Jan 5 · cash'")


class StudentDetailView(ViewModel):
    student: Student
    heading: str
    referrer_label: str
    interests_label: str
    whatsapp_link: Optional[str] = None
    lessons: Tuple[Lesson, ...]
    payments: Tuple[PaymentLine, ...]
    total_paid: Decimal
    total_paid_label: str
    is_pending: bool
