import logging
from dataclasses import asdict
from typing import Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from annacalc.config.settings import settings
from annacalc.core.gpa import CourseEntry, SemesterEntry, ValidationError, compute_cgpa, compute_gpa
from annacalc.core.grades import (
    CourseType,
    classify_performance,
    classify_standing,
    course_types,
    default_credits,
    grading_scheme,
)
from annacalc.services.preferences_service import PreferencesService, PreferencesServiceError
from annacalc.state.app_state import AppState


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="AnnaCalc API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_origin_regex=settings.cors_allow_origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CoursePayload(BaseModel):
    course_type: CourseType = CourseType.THEORY
    credits: Optional[Union[int, float]] = None
    grade: Optional[str] = None


class GPAPayload(BaseModel):
    semester_name: str = ""
    courses: List[CoursePayload] = Field(default_factory=list)


class SemesterPayload(BaseModel):
    name: str = ""
    credits: Optional[Union[int, float]] = None
    gpa: Optional[Union[int, float]] = None


class CGPAPayload(BaseModel):
    semesters: List[SemesterPayload] = Field(default_factory=list)


class ThemePayload(BaseModel):
    theme: str


def _course_entry(payload: CoursePayload) -> CourseEntry:
    credits = payload.credits
    if credits is None:
        credits = default_credits(payload.course_type)
    return CourseEntry(course_type=payload.course_type, credits=credits, grade=payload.grade)


def _validation_failed(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"index": exc.index, "reason": exc.reason, "message": exc.message},
    )


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/grades")
def list_grades() -> List[Dict]:
    return grading_scheme()


@app.get("/course-types")
def list_course_types() -> List[Dict]:
    return course_types()


@app.post("/gpa")
def calculate_gpa(payload: GPAPayload) -> Dict:
    try:
        result = compute_gpa([_course_entry(c) for c in payload.courses], payload.semester_name)
    except ValidationError as exc:
        raise _validation_failed(exc) from exc
    logger.info("gpa_request courses=%s gpa=%.2f", len(payload.courses), result.gpa)
    return {**asdict(result), "gpa": result.gpa}


@app.post("/cgpa")
def calculate_cgpa(payload: CGPAPayload) -> Dict:
    entries = [SemesterEntry(name=s.name, credits=s.credits, gpa=s.gpa) for s in payload.semesters]
    try:
        result = compute_cgpa(entries)
    except ValidationError as exc:
        raise _validation_failed(exc) from exc
    logger.info("cgpa_request semesters=%s cgpa=%.2f", len(entries), result.cgpa)
    return {**asdict(result), "cgpa": result.cgpa, "semester_count": result.semester_count}


@app.get("/classify/performance")
def performance_level(score: float = Query(ge=0, le=10)) -> Dict[str, str]:
    return {"performance_level": classify_performance(score)}


@app.get("/classify/standing")
def academic_standing(cgpa: float = Query(ge=0, le=10)) -> Dict[str, str]:
    return {"academic_standing": classify_standing(cgpa)}


@app.get("/preferences/theme")
def get_theme() -> Dict[str, str]:
    try:
        return {"theme": PreferencesService.from_settings().load_theme()}
    except PreferencesServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.put("/preferences/theme")
def set_theme(payload: ThemePayload) -> Dict[str, str]:
    try:
        return {"theme": PreferencesService.from_settings().save_theme(payload.theme)}
    except PreferencesServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.post("/preferences/theme/toggle")
def toggle_theme() -> Dict[str, str]:
    try:
        prefs = PreferencesService.from_settings()
        state = AppState.load(prefs).toggled(prefs)
    except PreferencesServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return {"theme": state.theme}
