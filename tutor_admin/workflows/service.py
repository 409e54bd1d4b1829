"""
Add-entity workflows: student, lesson, payment, referrer.

Each invocation is a small state machine:

    EDITING --submit--> SUBMITTING --ok--> SUCCESS --close--> CLOSED (reload)
       ^                    |
       +---server/network---+      local validation failures never leave EDITING

Exactly one mutate call is made per accepted submit; submit() while a call is
in flight is ignored.
"""

import logging
from typing import Any, Awaitable, Callable, ClassVar, Dict, Optional, Type

from pydantic import BaseModel, Field, ValidationError

from tutor_admin.api.client import ApiClient
from tutor_admin.api.schemas import MutationOutcome
from tutor_admin.core.enums import MutationAction, WorkflowErrorKind, WorkflowStatus
from tutor_admin.core.exceptions import (
    FieldValidationError,
    NetworkError,
    ServerError,
    WorkflowStateError,
)
from tutor_admin.core.schemas import Snapshot
from tutor_admin.views.lookup import find_student

from .messages import (
    REFERRAL_LINK_UNAVAILABLE,
    lesson_notification,
    onboarding_message,
    referral_link,
)
from .schemas import AddLessonForm, AddPaymentForm, AddReferrerForm, AddStudentForm, WorkflowForm
from .student_picker import StudentPicker

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Connection error. Try again."

OnClosed = Callable[[], Awaitable[Any]]


class WorkflowResult(BaseModel):
    """Artifacts offered on the success screen. Nothing is copied automatically."""

    action: MutationAction
    student_code: Optional[str] = None
    onboarding_message: Optional[str] = None
    notification_message: Optional[str] = None
    referral_link: Optional[str] = None
    referral_link_hint: Optional[str] = Field(None, description="Shown instead of a link that cannot be built")

    class Config:
        frozen = True


# Field-specific messages for values that are present but unusable.
_INVALID_FIELD_MESSAGES = {
    "amount": {"greater_than_equal": "Amount cannot be negative."},
    "pdf_pages": {"greater_than_equal": "PDF pages cannot be negative."},
}
_DEFAULT_INVALID_MESSAGES = {
    "amount": "Amount must be a number.",
    "pdf_pages": "PDF pages must be a whole number.",
    "school": "Please choose a valid school.",
}


def form_error_message(form_model: Type[WorkflowForm], exc: ValidationError) -> str:
    """Collapse a pydantic error into the single line shown under the form."""
    errors = exc.errors()
    for err in errors:
        value = err.get("input")
        if err["type"] in ("missing", "string_too_short") or (isinstance(value, str) and not value.strip()):
            return form_model.required_message
    aliases = {info.alias: name for name, info in form_model.model_fields.items() if info.alias}
    for err in errors:
        field = str(err["loc"][0]) if err.get("loc") else ""
        field = aliases.get(field, field)
        specific = _INVALID_FIELD_MESSAGES.get(field, {}).get(err["type"])
        if specific:
            return specific
        if field in _DEFAULT_INVALID_MESSAGES:
            return _DEFAULT_INVALID_MESSAGES[field]
    return form_model.required_message


class Workflow:
    action: ClassVar[MutationAction]
    form_model: ClassVar[Type[WorkflowForm]]

    def __init__(
        self,
        api: ApiClient,
        snapshot: Snapshot,
        token: str,
        on_closed: Optional[OnClosed] = None,
    ) -> None:
        self.api = api
        self.snapshot = snapshot
        self.token = token
        self.on_closed = on_closed
        self.values: Dict[str, Any] = {}
        self.status = WorkflowStatus.EDITING
        self.error: Optional[str] = None
        self.error_kind: Optional[WorkflowErrorKind] = None
        self.result: Optional[WorkflowResult] = None

    @property
    def can_submit(self) -> bool:
        return self.status == WorkflowStatus.EDITING

    def set_field(self, name: str, value: Any) -> None:
        if self.status != WorkflowStatus.EDITING:
            raise WorkflowStateError(f"Cannot edit a form that is {self.status.value}")
        self.values[name] = value

    def update(self, **values: Any) -> None:
        for name, value in values.items():
            self.set_field(name, value)

    def validate(self) -> WorkflowForm:
        """Build the submit payload or raise FieldValidationError."""
        try:
            return self.form_model.model_validate(self._form_values())
        except ValidationError as e:
            raise FieldValidationError(form_error_message(self.form_model, e)) from e

    async def submit(self) -> WorkflowStatus:
        if not self.can_submit:
            logger.debug("Ignoring %s submit while %s", self.action.value, self.status.value)
            return self.status

        try:
            form = self.validate()
        except FieldValidationError as e:
            self._fail(WorkflowErrorKind.FIELD, e.message)
            return self.status

        self.status = WorkflowStatus.SUBMITTING
        self.error = None
        self.error_kind = None
        try:
            outcome = await self.api.mutate(self.action, form, self.token)
        except ServerError as e:
            logger.info("%s rejected by server: %s", self.action.value, e.message)
            self._fail(WorkflowErrorKind.SERVER, e.message)
        except NetworkError:
            self._fail(WorkflowErrorKind.CONNECTION, CONNECTION_ERROR_MESSAGE)
        else:
            self.result = self._build_result(form, outcome)
            self.status = WorkflowStatus.SUCCESS
            logger.info("%s succeeded", self.action.value)
        return self.status

    def cancel(self) -> None:
        """Dismiss without saving. No reload happens."""
        if self.status == WorkflowStatus.SUBMITTING:
            raise WorkflowStateError("Wait for the submission to finish")
        if self.status == WorkflowStatus.SUCCESS:
            raise WorkflowStateError("Close the success screen with close()")
        self.status = WorkflowStatus.CLOSED

    async def close(self) -> None:
        """Leave the success screen; the dashboard reloads from the server."""
        if self.status != WorkflowStatus.SUCCESS:
            self.cancel()
            return
        self.status = WorkflowStatus.CLOSED
        if self.on_closed is not None:
            await self.on_closed()

    def _form_values(self) -> Dict[str, Any]:
        return dict(self.values)

    def _fail(self, kind: WorkflowErrorKind, message: str) -> None:
        self.status = WorkflowStatus.EDITING
        self.error_kind = kind
        self.error = message

    def _build_result(self, form: WorkflowForm, outcome: MutationOutcome) -> WorkflowResult:
        return WorkflowResult(action=self.action)


class AddStudentWorkflow(Workflow):
    action = MutationAction.ADD_STUDENT
    form_model = AddStudentForm

    def _build_result(self, form: AddStudentForm, outcome: MutationOutcome) -> WorkflowResult:
        code = outcome.code or ""
        return WorkflowResult(
            action=self.action,
            student_code=code,
            onboarding_message=onboarding_message(code, self.snapshot.config),
        )


class _PickedStudentWorkflow(Workflow):
    """Lesson and payment forms choose their student through a StudentPicker."""

    def __init__(self, *args, preselected_code: Optional[str] = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.picker = StudentPicker(self.snapshot, preselected_code)

    def _form_values(self) -> Dict[str, Any]:
        # The picker is the only source of the student code, under either key.
        values = {k: v for k, v in self.values.items() if k not in ("student_code", "studentCode")}
        values["student_code"] = self.picker.selected_code
        return values


class AddLessonWorkflow(_PickedStudentWorkflow):
    action = MutationAction.ADD_LESSON
    form_model = AddLessonForm

    def _build_result(self, form: AddLessonForm, outcome: MutationOutcome) -> WorkflowResult:
        student = find_student(self.snapshot, form.student_code)
        name = student.name if student else form.student_code
        return WorkflowResult(
            action=self.action,
            student_code=form.student_code,
            notification_message=lesson_notification(
                name, form.subject, form.student_code, self.snapshot.config
            ),
        )


class AddPaymentWorkflow(_PickedStudentWorkflow):
    action = MutationAction.ADD_PAYMENT
    form_model = AddPaymentForm

    def _build_result(self, form: AddPaymentForm, outcome: MutationOutcome) -> WorkflowResult:
        return WorkflowResult(action=self.action, student_code=form.student_code)


class AddReferrerWorkflow(Workflow):
    action = MutationAction.ADD_REFERRER
    form_model = AddReferrerForm

    def _build_result(self, form: AddReferrerForm, outcome: MutationOutcome) -> WorkflowResult:
        link = referral_link(form.code_name, self.snapshot.config)
        return WorkflowResult(
            action=self.action,
            referral_link=link,
            referral_link_hint=None if link else REFERRAL_LINK_UNAVAILABLE,
        )


WORKFLOWS: Dict[MutationAction, Type[Workflow]] = {
    MutationAction.ADD_STUDENT: AddStudentWorkflow,
    MutationAction.ADD_LESSON: AddLessonWorkflow,
    MutationAction.ADD_PAYMENT: AddPaymentWorkflow,
    MutationAction.ADD_REFERRER: AddReferrerWorkflow,
}


def start_workflow(
    action: MutationAction,
    api: ApiClient,
    snapshot: Snapshot,
    token: str,
    on_closed: Optional[OnClosed] = None,
    preselected_code: Optional[str] = None,
) -> Workflow:
    cls = WORKFLOWS[MutationAction(action)]
    if issubclass(cls, _PickedStudentWorkflow):
        return cls(api, snapshot, token, on_closed, preselected_code=preselected_code)
    return cls(api, snapshot, token, on_closed)
