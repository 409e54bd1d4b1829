"""
Resolve soft references inside one snapshot.

StudentCode and Referrer are plain identifiers that the server never enforces,
so every helper here returns "unknown" (None, an empty tuple, or the raw code)
instead of raising when nothing matches.
"""

from typing import FrozenSet, Optional, Tuple

from tutor_admin.core.schemas import Lesson, Payment, Referrer, Snapshot, Student


def find_student(snapshot: Snapshot, code: str) -> Optional[Student]:
    return next((s for s in snapshot.students if s.code == code), None)


def find_referrer(snapshot: Snapshot, code_name: str) -> Optional[Referrer]:
    return next((r for r in snapshot.referrers if r.code_name == code_name), None)


def student_label(student: Student) -> str:
    return f"{student.code} — {student.name}"


def label_for_code(snapshot: Snapshot, code: str) -> str:
    """'S1 — Ada' for a known student, otherwise the code itself."""
    student = find_student(snapshot, code)
    return student_label(student) if student else code


def lessons_for(snapshot: Snapshot, code: str) -> Tuple[Lesson, ...]:
    return tuple(l for l in snapshot.lessons if l.student_code == code)


def payments_for(snapshot: Snapshot, code: str) -> Tuple[Payment, ...]:
    return tuple(p for p in snapshot.payments if p.student_code == code)


def codes_with_lessons(snapshot: Snapshot) -> FrozenSet[str]:
    return frozenset(l.student_code for l in snapshot.lessons)


def referred_students(snapshot: Snapshot, code_name: str) -> Tuple[Student, ...]:
    # Exact, case-sensitive match against the stored value.
    return tuple(s for s in snapshot.students if s.referrer == code_name)
