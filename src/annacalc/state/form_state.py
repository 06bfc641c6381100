from dataclasses import dataclass, replace
from typing import Optional, Tuple

from annacalc.core.gpa import CourseEntry, Number, SemesterEntry
from annacalc.core.grades import CourseType, default_credits, to_course_type


class FormStateError(Exception):
    pass


@dataclass(frozen=True)
class CourseRow:
    course_type: CourseType = CourseType.THEORY
    credits: Optional[Number] = 3
    grade: Optional[str] = None


@dataclass(frozen=True)
class SemesterRow:
    name: str = ""
    credits: Optional[Number] = None
    gpa: Optional[Number] = None


@dataclass(frozen=True)
class FormState:
    """Rows the user is editing. Every transition returns a new FormState."""

    semester_name: str = ""
    courses: Tuple[CourseRow, ...] = (CourseRow(),)
    semesters: Tuple[SemesterRow, ...] = (SemesterRow(),)

    def to_courses(self) -> Tuple[CourseEntry, ...]:
        return tuple(CourseEntry(row.course_type, row.credits, row.grade) for row in self.courses)

    def to_semesters(self) -> Tuple[SemesterEntry, ...]:
        return tuple(SemesterEntry(row.name, row.credits, row.gpa) for row in self.semesters)


def _check_position(rows: tuple, position: int, label: str) -> None:
    if not 0 <= position < len(rows):
        raise FormStateError(f"No {label} at position {position + 1}")


def _replace_at(rows: tuple, position: int, row) -> tuple:
    return rows[:position] + (row,) + rows[position + 1:]


def set_semester_name(state: FormState, name: str) -> FormState:
    return replace(state, semester_name=name)


def add_course_row(state: FormState) -> FormState:
    return replace(state, courses=state.courses + (CourseRow(),))


def remove_course_row(state: FormState, position: int) -> FormState:
    _check_position(state.courses, position, "course")
    if len(state.courses) <= 1:
        raise FormStateError("At least one course is required!")
    return replace(state, courses=state.courses[:position] + state.courses[position + 1:])


def update_course_row(state: FormState, position: int, **changes) -> FormState:
    _check_position(state.courses, position, "course")
    row = replace(state.courses[position], **changes)
    return replace(state, courses=_replace_at(state.courses, position, row))


def set_course_type(state: FormState, position: int, course_type) -> FormState:
    _check_position(state.courses, position, "course")
    kind = to_course_type(course_type)
    # Fixed course types fill their credits; manual entry starts empty.
    row = replace(state.courses[position], course_type=kind, credits=default_credits(kind))
    return replace(state, courses=_replace_at(state.courses, position, row))


def add_semester_row(state: FormState) -> FormState:
    return replace(state, semesters=state.semesters + (SemesterRow(),))


def remove_semester_row(state: FormState, position: int) -> FormState:
    _check_position(state.semesters, position, "semester")
    if len(state.semesters) <= 1:
        raise FormStateError("At least one semester is required!")
    return replace(state, semesters=state.semesters[:position] + state.semesters[position + 1:])


def update_semester_row(state: FormState, position: int, **changes) -> FormState:
    _check_position(state.semesters, position, "semester")
    row = replace(state.semesters[position], **changes)
    return replace(state, semesters=_replace_at(state.semesters, position, row))
