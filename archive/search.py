# archive/search.py - question and course search shared by the API and the search page

from django.conf import settings
from django.db.models import Count, Q

from .models import Course, Department, Question, University
from .utils import parse_int


def search_limit():
    return getattr(settings, 'ARCHIVE_SEARCH_LIMIT', 50)


SCOPE_LOOKUPS = (
    ('course', 'course_id'),
    ('department', 'course__department_id'),
    ('university', 'course__department__university_id'),
)


def _scope_filter(params):
    """
    Hierarchy filter from the most specific of course / department / university.
    Returns (Q or None, valid). An id that is not a number matches nothing.
    """
    for param, lookup in SCOPE_LOOKUPS:
        raw = params.get(param)
        if not raw:
            continue
        value = parse_int(raw)
        if value is None:
            return None, False
        return Q(**{lookup: value}), True
    return None, True


def search_questions(params, limit=None):
    """
    Questions matching `q` (question or answer text, case-insensitive) and the
    hierarchy/year/examType filters. No conditions at all gives no results.
    """
    limit = limit or search_limit()
    conditions = []

    query = (params.get('q') or '').strip()
    if query:
        conditions.append(Q(content__icontains=query) | Q(answer__content__icontains=query))

    scope, valid = _scope_filter(params)
    if not valid:
        return Question.objects.none()
    if scope is not None:
        conditions.append(scope)

    year = parse_int(params.get('year'))
    if year is not None:
        conditions.append(Q(year=year))

    exam_type = (params.get('examType') or '').strip()
    if exam_type:
        conditions.append(Q(exam_type=exam_type))

    if not conditions:
        return Question.objects.none()

    return (
        Question.objects.filter(*conditions)
        .select_related('answer', 'course__department__university')
        .order_by('-year', 'question_no')[:limit]
    )


def search_courses(params, limit=None):
    """Courses whose code or name contains `q`, scoped by department or university."""
    limit = limit or search_limit()
    qs = Course.objects.select_related('department__university').annotate(
        question_count=Count('questions'),
    )

    query = (params.get('q') or '').strip()
    if query:
        qs = qs.filter(Q(code__icontains=query) | Q(name__icontains=query))

    department = params.get('department')
    university = params.get('university')
    if department:
        department_id = parse_int(department)
        if department_id is None:
            return Course.objects.none()
        qs = qs.filter(department_id=department_id)
    elif university:
        university_id = parse_int(university)
        if university_id is None:
            return Course.objects.none()
        qs = qs.filter(department__university_id=university_id)

    semester = parse_int(params.get('semester'))
    if semester is not None:
        qs = qs.filter(semester=semester)

    return qs.order_by('department__university__name', 'department__name', 'semester', 'code')[:limit]


def question_filter_options():
    return {
        'universities': University.objects.order_by('name'),
        'departments': Department.objects.order_by('name'),
        'courses': Course.objects.order_by('code'),
        'years': list(Question.objects.order_by('-year').values_list('year', flat=True).distinct()),
        'exam_types': list(Question.objects.order_by('exam_type').values_list('exam_type', flat=True).distinct()),
    }


def course_filter_options():
    return {
        'universities': list(University.objects.order_by('name').values('id', 'name')),
        'departments': list(Department.objects.order_by('name').values('id', 'name', 'university_id')),
        'semesters': list(range(1, 9)),
    }
