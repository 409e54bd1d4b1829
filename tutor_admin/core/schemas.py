"""Snapshot records as delivered by the spreadsheet API (PascalCase keys)."""

from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator


def _to_text(val) -> str:
    if val is None:
        return ""
    return val if isinstance(val, str) else str(val)


def _to_decimal(val) -> Decimal:
    # Spreadsheet cells may be blank or hold text; those count as 0.
    if val is None or isinstance(val, bool):
        return Decimal("0")
    try:
        out = val if isinstance(val, Decimal) else Decimal(str(val).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return out if out.is_finite() else Decimal("0")


class SheetRecord(BaseModel):
    class Config:
        frozen = True
        populate_by_name = True
        extra = "ignore"


class Student(SheetRecord):
    code: str = Field("", alias="Code")
    name: str = Field("", alias="Name")
    phone: str = Field("", alias="Phone")
    school: str = Field("", alias="School")
    department: str = Field("", alias="Department")
    interest1: str = Field("", alias="Interest1")
    interest2: str = Field("", alias="Interest2")
    referrer: str = Field("", alias="Referrer", description="Referrer CodeName; soft reference")
    created_at: str = Field("", alias="CreatedAt")

    @field_validator(
        "code", "name", "phone", "school", "department",
        "interest1", "interest2", "referrer", "created_at",
        mode="before",
    )
    @classmethod
    def _text(cls, v):
        return _to_text(v)


class Lesson(SheetRecord):
    student_code: str = Field("", alias="StudentCode")
    subject: str = Field("", alias="Subject")
    course_code: str = Field("", alias="CourseCode")
    folder_path: str = Field("", alias="FolderPath")
    delivered_at: str = Field("", alias="DeliveredAt")

    @field_validator("student_code", "subject", "course_code", "folder_path", "delivered_at", mode="before")
    @classmethod
    def _text(cls, v):
        return _to_text(v)


class Payment(SheetRecord):
    student_code: str = Field("", alias="StudentCode")
    amount: Decimal = Field(Decimal("0"), alias="Amount")
    pdf_pages: Optional[int] = Field(None, alias="PDFPages")
    notes: str = Field("", alias="Notes")
    paid_at: str = Field("", alias="PaidAt")

    @field_validator("student_code", "notes", "paid_at", mode="before")
    @classmethod
    def _text(cls, v):
        return _to_text(v)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v):
        return _to_decimal(v)

    @field_validator("pdf_pages", mode="before")
    @classmethod
    def _pages(cls, v):
        if v is None or v == "":
            return None
        pages = _to_decimal(v)
        if pages <= 0:
            return None
        return int(pages)


class Referrer(SheetRecord):
    code_name: str = Field("", alias="CodeName")
    full_name: str = Field("", alias="FullName")
    phone: str = Field("", alias="Phone")
    school: str = Field("", alias="School")
    total_paid_out: Decimal = Field(Decimal("0"), alias="TotalPaidOut")

    @field_validator("code_name", "full_name", "phone", "school", mode="before")
    @classmethod
    def _text(cls, v):
        return _to_text(v)

    @field_validator("total_paid_out", mode="before")
    @classmethod
    def _paid_out(cls, v):
        return _to_decimal(v)


class AppConfig(SheetRecord):
    whatsapp_number: str = Field("", alias="whatsappNumber")
    app_url: str = Field("", alias="appURL")

    @field_validator("whatsapp_number", "app_url", mode="before")
    @classmethod
    def _text(cls, v):
        return _to_text(v).strip()


class Snapshot(SheetRecord):
    """Everything the dashboard shows. Replaced as a whole, never patched."""

    students: Tuple[Student, ...] = ()
    lessons: Tuple[Lesson, ...] = ()
    payments: Tuple[Payment, ...] = ()
    referrers: Tuple[Referrer, ...] = ()
    config: AppConfig = Field(default_factory=AppConfig)

    @field_validator("students", "lessons", "payments", "referrers", mode="before")
    @classmethod
    def _rows(cls, v):
        return () if v is None else v

    @field_validator("config", mode="before")
    @classmethod
    def _config(cls, v):
        return {} if v is None else v

    @property
    def is_empty(self) -> bool:
        return not (self.students or self.lessons or self.payments or self.referrers)


EMPTY_SNAPSHOT = Snapshot()
