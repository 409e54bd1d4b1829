"""
Incremental student lookup used by the lesson and payment forms.

The visible text and the selected code are kept separately; any edit to the
text after a selection drops the code, so a stale code is never submitted.
"""

from typing import Optional, Tuple

from tutor_admin.core.schemas import Snapshot
from tutor_admin.views.lookup import label_for_code, student_label


class StudentPicker:
    def __init__(self, snapshot: Snapshot, preselected_code: Optional[str] = None) -> None:
        self._options: Tuple[Tuple[str, str], ...] = tuple(
            (s.code, student_label(s)) for s in snapshot.students
        )
        self.text = ""
        self.selected_code = ""
        self.is_open = False
        if preselected_code:
            # Detail screen pre-fills the form; an unknown code still shows as itself.
            self.text = label_for_code(snapshot, preselected_code)
            self.selected_code = preselected_code

    def focus(self) -> Tuple[Tuple[str, str], ...]:
        return self._show("")

    def type(self, text: str) -> Tuple[Tuple[str, str], ...]:
        """Replace the visible text, clear any selection, return the matching (code, label) pairs."""
        self.text = text
        self.selected_code = ""
        return self._show(text)

    def select(self, code: str) -> None:
        for option_code, label in self._options:
            if option_code == code:
                self.text = label
                self.selected_code = code
                self.is_open = False
                return
        raise KeyError(code)

    def close(self) -> None:
        self.is_open = False

    def matches(self, query: str) -> Tuple[Tuple[str, str], ...]:
        q = query.lower()
        return tuple(opt for opt in self._options if not q or q in opt[1].lower())

    def _show(self, query: str) -> Tuple[Tuple[str, str], ...]:
        visible = self.matches(query)
        self.is_open = bool(visible)
        return visible
