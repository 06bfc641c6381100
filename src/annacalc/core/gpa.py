import logging
import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, Optional, Tuple, Union

from annacalc.core.grades import (
    DISTRIBUTION_BUCKETS,
    CourseType,
    GradeLetter,
    classify_performance,
    classify_standing,
    distribution_bucket,
    grade_value,
    to_course_type,
    to_grade_letter,
)


logger = logging.getLogger(__name__)

Number = Union[int, float]

MISSING_COURSE_FIELDS = "missing credits or grade"
CREDITS_OUT_OF_RANGE = "credits out of range [1,10]"
MISSING_SEMESTER_FIELDS = "missing name/credits/gpa"
GPA_OUT_OF_RANGE = "gpa out of range [0,10]"
CREDITS_BELOW_MINIMUM = "credits below minimum 1"
CREDITS_TOO_LARGE = "credits too large"

MIN_COURSE_CREDITS = 1
MAX_COURSE_CREDITS = 10
MIN_SEMESTER_CREDITS = 1
MIN_GPA = 0
MAX_GPA = 10

DEFAULT_SEMESTER_NAME = "Current Semester"

_MESSAGES = {
    MISSING_COURSE_FIELDS: "Please fill all fields for Course {index}",
    CREDITS_OUT_OF_RANGE: "Credits for Course {index} should be between 1 and 10",
    MISSING_SEMESTER_FIELDS: "Please fill all fields for Semester {index}",
    GPA_OUT_OF_RANGE: "GPA for Semester {index} should be between 0 and 10",
    CREDITS_BELOW_MINIMUM: "Credits for Semester {index} should be at least 1",
    CREDITS_TOO_LARGE: "Credits for Semester {index} are too large to total",
}


class ValidationError(ValueError):
    """A course or semester record failed validation.

    ``index`` is the 1-based position of the first offending record and
    ``reason`` is one of the reason constants defined in this module.
    """

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        self.message = _MESSAGES.get(reason, "Invalid record {index}").format(index=index)
        super().__init__(self.message)


@dataclass(frozen=True)
class CourseEntry:
    course_type: CourseType = CourseType.THEORY
    credits: Optional[Number] = None
    grade: Optional[Union[GradeLetter, str]] = None


@dataclass(frozen=True)
class SemesterEntry:
    name: str = ""
    credits: Optional[Number] = None
    gpa: Optional[Number] = None


@dataclass(frozen=True)
class CourseBreakdown:
    position: int
    course_type: CourseType
    credits: Number
    grade: GradeLetter
    grade_value: int
    grade_points: Number


@dataclass(frozen=True)
class SemesterBreakdown:
    position: int
    name: str
    credits: Number
    gpa: Number
    grade_points: Number


@dataclass(frozen=True)
class GPAResult:
    semester_name: str
    weighted_average: float
    total_credits: Number
    total_grade_points: Number
    performance_level: str
    courses: Tuple[CourseBreakdown, ...] = ()
    grade_distribution: Dict[str, int] = field(default_factory=dict)

    @property
    def gpa(self) -> float:
        return self.weighted_average


@dataclass(frozen=True)
class CGPAResult:
    weighted_average: float
    total_credits: Number
    total_grade_points: Number
    performance_level: str
    academic_standing: str
    semesters: Tuple[SemesterBreakdown, ...] = ()

    @property
    def cgpa(self) -> float:
        return self.weighted_average

    @property
    def semester_count(self) -> int:
        return len(self.semesters)


def round_half_up(value: float, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def weighted_average(total_points: Number, total_credits: Number) -> float:
    if total_credits <= 0:
        return 0.0
    return round_half_up(total_points / total_credits)


def _is_blank_number(value: Optional[Number]) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def _is_finite(value: Number) -> bool:
    return not isinstance(value, float) or math.isfinite(value)


def _credits_missing(credits: Optional[Number]) -> bool:
    # Zero counts as missing, same as an empty field.
    return _is_blank_number(credits) or credits == 0


def _parse_grade(grade) -> Optional[GradeLetter]:
    if grade is None or (isinstance(grade, str) and not grade.strip()):
        return None
    try:
        return to_grade_letter(grade)
    except ValueError:
        return None


def grade_distribution(grades: Iterable[Union[GradeLetter, str]]) -> Dict[str, int]:
    counts = {bucket: 0 for bucket in DISTRIBUTION_BUCKETS}
    for grade in grades:
        counts[distribution_bucket(grade)] += 1
    return {bucket: count for bucket, count in counts.items() if count > 0}


def _validate_course(index: int, course: CourseEntry) -> GradeLetter:
    grade = _parse_grade(course.grade)
    if _credits_missing(course.credits) or grade is None:
        raise ValidationError(index, MISSING_COURSE_FIELDS)
    if not MIN_COURSE_CREDITS <= course.credits <= MAX_COURSE_CREDITS:
        raise ValidationError(index, CREDITS_OUT_OF_RANGE)
    return grade


def _validate_semester(index: int, semester: SemesterEntry) -> None:
    name = (semester.name or "").strip()
    if not name or _credits_missing(semester.credits) or _is_blank_number(semester.gpa):
        raise ValidationError(index, MISSING_SEMESTER_FIELDS)
    if not MIN_GPA <= semester.gpa <= MAX_GPA:
        raise ValidationError(index, GPA_OUT_OF_RANGE)
    if semester.credits < MIN_SEMESTER_CREDITS:
        raise ValidationError(index, CREDITS_BELOW_MINIMUM)


def compute_gpa(courses: Iterable[CourseEntry], semester_name: str = "") -> GPAResult:
    """
    GPA = Σ(credits * grade_value) / Σ(credits), rounded half-up to 2 places.

    Raises ValidationError for the first invalid course; nothing is computed
    for the remaining records.
    """
    breakdown = []
    total_credits: Number = 0
    total_points: Number = 0

    for index, course in enumerate(courses, start=1):
        try:
            grade = _validate_course(index, course)
        except ValidationError as exc:
            logger.info("gpa_validation_failed index=%s reason=%s", exc.index, exc.reason)
            raise
        value = grade_value(grade)
        points = course.credits * value
        total_credits += course.credits
        total_points += points
        breakdown.append(
            CourseBreakdown(
                position=index,
                course_type=to_course_type(course.course_type),
                credits=course.credits,
                grade=grade,
                grade_value=value,
                grade_points=points,
            )
        )

    average = weighted_average(total_points, total_credits)
    logger.debug("gpa_computed courses=%s credits=%s gpa=%.2f", len(breakdown), total_credits, average)

    return GPAResult(
        semester_name=(semester_name or "").strip() or DEFAULT_SEMESTER_NAME,
        weighted_average=average,
        total_credits=total_credits,
        total_grade_points=total_points,
        performance_level=classify_performance(average),
        courses=tuple(breakdown),
        grade_distribution=grade_distribution(entry.grade for entry in breakdown),
    )


def compute_cgpa(semesters: Iterable[SemesterEntry]) -> CGPAResult:
    """
    CGPA = Σ(semester_credits * gpa) / Σ(semester_credits), rounded half-up to 2 places.
    """
    breakdown = []
    total_credits: Number = 0
    total_points: Number = 0

    for index, semester in enumerate(semesters, start=1):
        try:
            _validate_semester(index, semester)
            try:
                points = semester.credits * semester.gpa
                total_credits += semester.credits
                total_points += points
            except OverflowError as exc:
                raise ValidationError(index, CREDITS_TOO_LARGE) from exc
            # Float totals must stay finite or the average becomes inf/NaN.
            if not (_is_finite(total_credits) and _is_finite(total_points)):
                raise ValidationError(index, CREDITS_TOO_LARGE)
        except ValidationError as exc:
            logger.info("cgpa_validation_failed index=%s reason=%s", exc.index, exc.reason)
            raise
        breakdown.append(
            SemesterBreakdown(
                position=index,
                name=semester.name.strip(),
                credits=semester.credits,
                gpa=semester.gpa,
                grade_points=points,
            )
        )

    cgpa = weighted_average(total_points, total_credits)
    logger.debug("cgpa_computed semesters=%s credits=%s cgpa=%.2f", len(breakdown), total_credits, cgpa)

    return CGPAResult(
        weighted_average=cgpa,
        total_credits=total_credits,
        total_grade_points=total_points,
        performance_level=classify_performance(cgpa),
        academic_standing=classify_standing(cgpa),
        semesters=tuple(breakdown),
    )
