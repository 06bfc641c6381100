import unittest

from annacalc.core.gpa import (
    CREDITS_BELOW_MINIMUM,
    CREDITS_OUT_OF_RANGE,
    CREDITS_TOO_LARGE,
    GPA_OUT_OF_RANGE,
    MISSING_COURSE_FIELDS,
    MISSING_SEMESTER_FIELDS,
    CourseEntry,
    SemesterEntry,
    ValidationError,
    compute_cgpa,
    compute_gpa,
    grade_distribution,
    round_half_up,
)
from annacalc.core.grades import CourseType, GradeLetter


class GPATests(unittest.TestCase):
    def test_gpa(self):
        courses = [
            CourseEntry(CourseType.THEORY, 3, "O"),
            CourseEntry(CourseType.PRACTICAL, 4, "A"),
        ]
        result = compute_gpa(courses)
        self.assertEqual(result.total_credits, 7)
        self.assertEqual(result.total_grade_points, 62)
        self.assertEqual(result.gpa, 8.86)
        self.assertEqual(result.performance_level, "Excellent Performance")
        self.assertEqual(result.semester_name, "Current Semester")

    def test_breakdown_keeps_input_order(self):
        courses = [
            CourseEntry(CourseType.PROJECT, 1, "B+"),
            CourseEntry(CourseType.MANUAL, 2, GradeLetter.W),
        ]
        result = compute_gpa(courses, semester_name="  Semester 5 ")
        self.assertEqual(result.semester_name, "Semester 5")
        self.assertEqual([c.position for c in result.courses], [1, 2])
        self.assertEqual(result.courses[0].grade, GradeLetter.B_PLUS)
        self.assertEqual(result.courses[0].grade_points, 7)
        self.assertEqual(result.courses[1].grade_value, 0)

    def test_arrear_grade_is_poor(self):
        result = compute_gpa([CourseEntry(CourseType.THEORY, 3, "RA")])
        self.assertEqual(result.gpa, 0.0)
        self.assertEqual(result.performance_level, "Poor Performance")

    def test_no_courses(self):
        result = compute_gpa([])
        self.assertEqual(result.total_credits, 0)
        self.assertEqual(result.gpa, 0.0)
        self.assertEqual(result.grade_distribution, {})

    def test_grade_distribution_collapses_arrears(self):
        courses = [
            CourseEntry(CourseType.THEORY, 3, "O"),
            CourseEntry(CourseType.THEORY, 3, "O"),
            CourseEntry(CourseType.THEORY, 3, "RA"),
            CourseEntry(CourseType.THEORY, 3, "SA"),
            CourseEntry(CourseType.THEORY, 3, "W"),
        ]
        result = compute_gpa(courses)
        self.assertEqual(result.grade_distribution, {"O": 2, "RA/SA/W": 3})

    def test_grade_distribution_order(self):
        self.assertEqual(list(grade_distribution(["C", "A+", "O"])), ["O", "A+", "C"])

    def test_missing_grade_fails_fast(self):
        courses = [
            CourseEntry(CourseType.THEORY, 3, "O"),
            CourseEntry(CourseType.THEORY, 3, ""),
            CourseEntry(CourseType.THEORY, 42, "A"),
        ]
        with self.assertRaises(ValidationError) as ctx:
            compute_gpa(courses)
        self.assertEqual(ctx.exception.index, 2)
        self.assertEqual(ctx.exception.reason, MISSING_COURSE_FIELDS)
        self.assertEqual(str(ctx.exception), "Please fill all fields for Course 2")

    def test_zero_credits_is_missing(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_gpa([CourseEntry(CourseType.MANUAL, 0, "O")])
        self.assertEqual(ctx.exception.reason, MISSING_COURSE_FIELDS)

    def test_unknown_grade_is_missing(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_gpa([CourseEntry(CourseType.THEORY, 3, "Z")])
        self.assertEqual(ctx.exception.reason, MISSING_COURSE_FIELDS)

    def test_credits_out_of_range(self):
        for credits in (0.5, 11, -2):
            with self.subTest(credits=credits):
                with self.assertRaises(ValidationError) as ctx:
                    compute_gpa([CourseEntry(CourseType.MANUAL, credits, "A")])
                self.assertEqual(ctx.exception.index, 1)
                self.assertEqual(ctx.exception.reason, CREDITS_OUT_OF_RANGE)

    def test_credit_bounds_accepted(self):
        result = compute_gpa([CourseEntry(CourseType.MANUAL, 1, "O"), CourseEntry(CourseType.MANUAL, 10, "C")])
        self.assertEqual(result.total_credits, 11)
        self.assertEqual(result.total_grade_points, 60)
        self.assertEqual(result.gpa, 5.45)

    def test_average_stays_in_range(self):
        for letter in ("O", "A+", "A", "B+", "B", "C", "RA", "SA", "W"):
            with self.subTest(letter=letter):
                gpa = compute_gpa([CourseEntry(CourseType.THEORY, 3, letter)]).gpa
                self.assertGreaterEqual(gpa, 0)
                self.assertLessEqual(gpa, 10)

    def test_classifies_rounded_average(self):
        courses = [CourseEntry(CourseType.MANUAL, 10, "O")] * 9 + [CourseEntry(CourseType.MANUAL, 9, "O")]
        courses += [CourseEntry(CourseType.MANUAL, 10, "A+")] * 10
        result = compute_gpa(courses)
        self.assertEqual(result.total_credits, 199)
        self.assertEqual(result.gpa, 9.5)
        self.assertEqual(result.performance_level, "Outstanding Performance")

    def test_idempotent(self):
        courses = [CourseEntry(CourseType.THEORY, 3, "A+"), CourseEntry(CourseType.PRACTICAL, 4, "B")]
        self.assertEqual(compute_gpa(courses), compute_gpa(courses))


class CGPATests(unittest.TestCase):
    def test_cgpa(self):
        result = compute_cgpa([SemesterEntry("Sem1", 20, 8.5), SemesterEntry("Sem2", 22, 9.0)])
        self.assertEqual(result.total_credits, 42)
        self.assertAlmostEqual(result.total_grade_points, 368)
        self.assertEqual(result.cgpa, 8.76)
        self.assertEqual(result.academic_standing, "First Class")
        self.assertEqual(result.performance_level, "Excellent Performance")
        self.assertEqual(result.semester_count, 2)

    def test_blank_name(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_cgpa([SemesterEntry("", 10, 5)])
        self.assertEqual(ctx.exception.index, 1)
        self.assertEqual(ctx.exception.reason, MISSING_SEMESTER_FIELDS)

    def test_whitespace_name_is_missing(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_cgpa([SemesterEntry("Sem1", 20, 8), SemesterEntry("   ", 20, 8)])
        self.assertEqual(ctx.exception.index, 2)

    def test_missing_gpa(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_cgpa([SemesterEntry("Sem1", 20, None)])
        self.assertEqual(ctx.exception.reason, MISSING_SEMESTER_FIELDS)

    def test_zero_gpa_is_allowed(self):
        result = compute_cgpa([SemesterEntry("Sem1", 20, 0)])
        self.assertEqual(result.cgpa, 0.0)
        self.assertEqual(result.academic_standing, "Needs Improvement")

    def test_gpa_out_of_range(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_cgpa([SemesterEntry("Sem1", 20, 10.5)])
        self.assertEqual(ctx.exception.reason, GPA_OUT_OF_RANGE)
        self.assertEqual(ctx.exception.message, "GPA for Semester 1 should be between 0 and 10")

    def test_credits_below_minimum(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_cgpa([SemesterEntry("Sem1", 0.5, 8)])
        self.assertEqual(ctx.exception.reason, CREDITS_BELOW_MINIMUM)

    def test_range_checked_before_minimum(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_cgpa([SemesterEntry("Sem1", 0.5, 11)])
        self.assertEqual(ctx.exception.reason, GPA_OUT_OF_RANGE)

    def test_classifies_rounded_cgpa(self):
        result = compute_cgpa([SemesterEntry("Sem1", 20, 9.496)])
        self.assertEqual(result.cgpa, 9.5)
        self.assertEqual(result.performance_level, "Outstanding Performance")

    def test_huge_credits_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_cgpa([SemesterEntry("Sem1", 1e308, 10)])
        self.assertEqual(ctx.exception.index, 1)
        self.assertEqual(ctx.exception.reason, CREDITS_TOO_LARGE)

    def test_credit_total_overflow_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_cgpa([SemesterEntry("Sem1", 1e308, 0), SemesterEntry("Sem2", 1e308, 0)])
        self.assertEqual(ctx.exception.index, 2)
        self.assertEqual(ctx.exception.reason, CREDITS_TOO_LARGE)

    def test_huge_integer_credits(self):
        result = compute_cgpa([SemesterEntry("Sem1", 10**400, 8), SemesterEntry("Sem2", 10**400, 9)])
        self.assertEqual(result.cgpa, 8.5)

    def test_no_semesters(self):
        result = compute_cgpa([])
        self.assertEqual(result.cgpa, 0.0)
        self.assertEqual(result.total_credits, 0)


class RoundingTests(unittest.TestCase):
    def test_half_up(self):
        self.assertEqual(round_half_up(2.675), 2.68)
        self.assertEqual(round_half_up(0.125), 0.13)
        self.assertEqual(round_half_up(8.857142857), 8.86)


if __name__ == "__main__":
    unittest.main()
