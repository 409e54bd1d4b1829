from enum import Enum


class School(str, Enum):
    FULAFIA = "FULAFIA"
    ATBU = "ATBU"
    UNIBEN = "UNIBEN"


# Filter tab value that disables the school filter.
ALL_SCHOOLS = "All"


class Screen(str, Enum):
    LOGIN = "login"
    DASHBOARD = "dashboard"
    DETAIL = "detail"


class ReadAction(str, Enum):
    STATS = "stats"
    ADMIN = "admin"


class MutationAction(str, Enum):
    ADD_STUDENT = "addStudent"
    ADD_LESSON = "addLesson"
    ADD_PAYMENT = "addPayment"
    ADD_REFERRER = "addReferrer"


class WorkflowStatus(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    CLOSED = "closed"


class WorkflowErrorKind(str, Enum):
    FIELD = "field"
    SERVER = "server"
    CONNECTION = "connection"
