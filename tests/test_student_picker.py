import pytest

from tutor_admin.workflows.student_picker import StudentPicker

from factories import make_snapshot, student


@pytest.fixture()
def snapshot():
    return make_snapshot(students=[student("S1", "Ada"), student("S2", "Bola"), student("X9", "Adaeze")])


def test_focus_lists_everyone(snapshot) -> None:
    picker = StudentPicker(snapshot)
    assert [code for code, _ in picker.focus()] == ["S1", "S2", "X9"]
    assert picker.is_open


def test_typing_filters_on_code_and_name_label(snapshot) -> None:
    picker = StudentPicker(snapshot)
    assert [code for code, _ in picker.type("ADA")] == ["S1", "X9"]
    assert [code for code, _ in picker.type("x9")] == ["X9"]
    assert picker.type("zzz") == ()
    assert not picker.is_open


def test_select_sets_label_and_code(snapshot) -> None:
    picker = StudentPicker(snapshot)
    picker.type("bo")
    picker.select("S2")
    assert picker.text == "S2 — Bola"
    assert picker.selected_code == "S2"
    assert not picker.is_open


def test_editing_after_select_clears_code(snapshot) -> None:
    picker = StudentPicker(snapshot)
    picker.select("S1")
    picker.type("S1 — Ad")
    assert picker.selected_code == ""


def test_select_unknown_code_raises(snapshot) -> None:
    with pytest.raises(KeyError):
        StudentPicker(snapshot).select("NOPE")


def test_preselected_code(snapshot) -> None:
    picker = StudentPicker(snapshot, preselected_code="S2")
    assert picker.text == "S2 — Bola"
    assert picker.selected_code == "S2"

    unknown = StudentPicker(snapshot, preselected_code="GONE")
    assert unknown.text == "GONE"
