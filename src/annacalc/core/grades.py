from enum import Enum
from typing import Dict, List, Optional, Tuple


class CourseType(str, Enum):
    THEORY = "theory"
    PRACTICAL = "practical"
    PROJECT = "project"
    MANUAL = "manual"


class GradeLetter(str, Enum):
    O = "O"
    A_PLUS = "A+"
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C = "C"
    RA = "RA"
    SA = "SA"
    W = "W"


GRADE_POINTS: Dict[GradeLetter, int] = {
    GradeLetter.O: 10,
    GradeLetter.A_PLUS: 9,
    GradeLetter.A: 8,
    GradeLetter.B_PLUS: 7,
    GradeLetter.B: 6,
    GradeLetter.C: 5,
    GradeLetter.RA: 0,
    GradeLetter.SA: 0,
    GradeLetter.W: 0,
}

# Manual entry has no default; the user types the credits in.
DEFAULT_CREDITS: Dict[CourseType, Optional[int]] = {
    CourseType.THEORY: 3,
    CourseType.PRACTICAL: 4,
    CourseType.PROJECT: 1,
    CourseType.MANUAL: None,
}

COURSE_TYPE_LABELS: Dict[CourseType, str] = {
    CourseType.THEORY: "Theory Course",
    CourseType.PRACTICAL: "Practical Course",
    CourseType.PROJECT: "Project Work",
    CourseType.MANUAL: "Custom Credits",
}

ARREAR_BUCKET = "RA/SA/W"

DISTRIBUTION_BUCKETS: Tuple[str, ...] = ("O", "A+", "A", "B+", "B", "C", ARREAR_BUCKET)

GRADE_DESCRIPTIONS: Dict[str, str] = {
    "O": "Outstanding",
    "A+": "Excellent",
    "A": "Very Good",
    "B+": "Good",
    "B": "Average",
    "C": "Below Average",
    ARREAR_BUCKET: "Fail/Absent/Withdrawn",
}

PERFORMANCE_LEVELS: Tuple[Tuple[float, str], ...] = (
    (9.5, "Outstanding Performance"),
    (8.5, "Excellent Performance"),
    (7.5, "Very Good Performance"),
    (6.5, "Good Performance"),
    (5.5, "Average Performance"),
    (4.5, "Below Average Performance"),
)
LOWEST_PERFORMANCE = "Poor Performance"

ACADEMIC_STANDINGS: Tuple[Tuple[float, str], ...] = (
    (9.0, "First Class with Distinction"),
    (7.5, "First Class"),
    (6.5, "Second Class"),
    (5.0, "Third Class"),
)
LOWEST_STANDING = "Needs Improvement"


def to_grade_letter(value) -> GradeLetter:
    if isinstance(value, GradeLetter):
        return value
    try:
        return GradeLetter(str(value).strip().upper())
    except ValueError as exc:
        raise ValueError(f"Unsupported letter grade: {value}") from exc


def to_course_type(value) -> CourseType:
    if isinstance(value, CourseType):
        return value
    try:
        return CourseType(str(value).strip().lower())
    except ValueError as exc:
        raise ValueError(f"Unsupported course type: {value}") from exc


def grade_value(letter) -> int:
    return GRADE_POINTS[to_grade_letter(letter)]


def default_credits(course_type) -> Optional[int]:
    return DEFAULT_CREDITS[to_course_type(course_type)]


def distribution_bucket(letter) -> str:
    grade = to_grade_letter(letter)
    if grade in (GradeLetter.RA, GradeLetter.SA, GradeLetter.W):
        return ARREAR_BUCKET
    return grade.value


def classify_performance(score: float) -> str:
    for threshold, label in PERFORMANCE_LEVELS:
        if score >= threshold:
            return label
    return LOWEST_PERFORMANCE


def classify_standing(cgpa: float) -> str:
    for threshold, label in ACADEMIC_STANDINGS:
        if cgpa >= threshold:
            return label
    return LOWEST_STANDING


def grading_scheme() -> List[Dict[str, object]]:
    """Reference table of the grading system, one row per distribution bucket."""
    return [
        {
            "grade": bucket,
            "points": GRADE_POINTS[GradeLetter.RA] if bucket == ARREAR_BUCKET else grade_value(bucket),
            "description": GRADE_DESCRIPTIONS[bucket],
        }
        for bucket in DISTRIBUTION_BUCKETS
    ]


def course_types() -> List[Dict[str, object]]:
    return [
        {"course_type": kind.value, "label": COURSE_TYPE_LABELS[kind], "default_credits": DEFAULT_CREDITS[kind]}
        for kind in CourseType
    ]
