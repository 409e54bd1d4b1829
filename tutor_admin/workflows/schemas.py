"""Add-entity forms. Field aliases are the camelCase keys the endpoint reads."""

from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from tutor_admin.core.enums import School


def _json_number(value: Decimal):
    return int(value) if value == value.to_integral_value() else float(value)


class WorkflowForm(BaseModel):
    # Message shown when any required field is missing.
    required_message: ClassVar[str] = "Please fill in all required fields."

    class Config:
        populate_by_name = True
        str_strip_whitespace = True


class AddStudentForm(WorkflowForm):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    school: School
    department: str = Field(..., min_length=1)
    interest1: str = Field(..., min_length=1)
    interest2: str = Field(..., min_length=1)
    referrer: str = ""

    @field_validator("referrer", mode="after")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()


class AddLessonForm(WorkflowForm):
    required_message: ClassVar[str] = "Please fill in student, subject, and folder path."

    student_code: str = Field(..., min_length=1, alias="studentCode")
    subject: str = Field(..., min_length=1)
    course_code: str = Field("", alias="courseCode")
    folder_path: str = Field(..., min_length=1, alias="folderPath")


class AddPaymentForm(WorkflowForm):
    required_message: ClassVar[str] = "Please select a student and enter an amount."

    student_code: str = Field(..., min_length=1, alias="studentCode")
    amount: Decimal = Field(..., ge=0)
    pdf_pages: Optional[int] = Field(None, ge=0, alias="pdfPages")
    notes: str = ""

    @field_validator("pdf_pages", mode="before")
    @classmethod
    def _blank_pages(cls, v):
        return None if isinstance(v, str) and not v.strip() else v

    @field_serializer("amount")
    def _amount_json(self, v: Decimal):
        return _json_number(v)

    @field_serializer("pdf_pages")
    def _pages_json(self, v: Optional[int]):
        # The sheet stores an empty cell when no page count was given.
        return "" if v is None else v


class AddReferrerForm(WorkflowForm):
    code_name: str = Field(..., min_length=1, alias="codeName")
    full_name: str = Field(..., min_length=1, alias="fullName")
    phone: str = Field(..., min_length=1)
    school: School

    @field_validator("code_name", mode="after")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()
