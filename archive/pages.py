"""Server-rendered archive pages: university → department → course → year."""

import logging
from itertools import groupby

from django.db import DatabaseError
from django.db.models import Count
from django.http import Http404
from django.shortcuts import get_object_or_404, render
from django.urls import reverse

from .models import Course, Department, Question, University
from .search import search_courses, search_questions
from .utils import parse_int

logger = logging.getLogger(__name__)


def _crumbs(*items):
    return [{'label': 'Home', 'url': reverse('home')}] + [
        {'label': label, 'url': url} for label, url in items
    ]


def _get_course(university, department, course):
    return get_object_or_404(
        Course.objects.select_related('department__university'),
        slug=course,
        department__slug=department,
        department__university__slug=university,
    )


def home(request):
    universities = University.objects.annotate(department_count=Count('departments')).order_by('name')
    return render(request, 'archive/home.html', {
        'universities': universities,
        'breadcrumbs': _crumbs(),
    })


def university_detail(request, university):
    university = get_object_or_404(University, slug=university)
    departments = university.departments.annotate(course_count=Count('courses')).order_by('name')
    return render(request, 'archive/university.html', {
        'university': university,
        'departments': departments,
        'breadcrumbs': _crumbs((university.name, None)),
    })


def department_detail(request, university, department):
    """
    Courses of a department with per-year question counts. A database failure
    renders the connection-error page instead of a server error.
    """
    try:
        department = (
            Department.objects.select_related('university')
            .filter(slug=department, university__slug=university)
            .first()
        )
        if department is None:
            raise Http404('Department not found')

        courses = list(
            department.courses.annotate(question_count=Count('questions')).order_by('code')
        )
        stats = (
            Question.objects.filter(course__department=department)
            .values('course_id', 'year')
            .annotate(count=Count('id'))
            .order_by('course_id', '-year')
        )
        year_stats = {
            course_id: [{'year': row['year'], 'count': row['count']} for row in rows]
            for course_id, rows in groupby(stats, key=lambda row: row['course_id'])
        }
        for course in courses:
            course.year_stats = year_stats.get(course.id, [])
    except DatabaseError:
        logger.exception('Error loading department page %s/%s', university, department)
        return render(request, 'archive/database_error.html', status=503)

    university_obj = department.university
    return render(request, 'archive/department.html', {
        'university': university_obj,
        'department': department,
        'courses_with_questions': [c for c in courses if c.question_count > 0],
        'courses_without_questions': [c for c in courses if c.question_count == 0],
        'breadcrumbs': _crumbs(
            (university_obj.name, reverse('university-detail', args=[university_obj.slug])),
            (department.name, None),
        ),
    })


def course_detail(request, university, department, course):
    course = _get_course(university, department, course)
    stats = (
        Question.objects.filter(course=course)
        .values('year', 'exam_type')
        .annotate(count=Count('id'))
        .order_by('-year', 'exam_type')
    )
    years = []
    for year, rows in groupby(stats, key=lambda row: row['year']):
        exam_types = [{'exam_type': row['exam_type'], 'count': row['count']} for row in rows]
        years.append({
            'year': year,
            'exam_types': exam_types,
            'total': sum(row['count'] for row in exam_types),
        })

    dept = course.department
    return render(request, 'archive/course.html', {
        'course': course,
        'years': years,
        'total_questions': course.questions.count(),
        'breadcrumbs': _crumbs(
            (dept.university.name, reverse('university-detail', args=[dept.university.slug])),
            (dept.name, reverse('department-detail', args=[dept.university.slug, dept.slug])),
            (course.name, None),
        ),
    })


def year_questions(request, university, department, course, year):
    course = _get_course(university, department, course)
    exam_type = request.GET.get('type') or None

    questions = Question.objects.filter(course=course, year=year).select_related('answer')
    exam_types = list(questions.order_by('exam_type').values_list('exam_type', flat=True).distinct())
    if exam_type:
        questions = questions.filter(exam_type=exam_type)
    questions = questions.order_by('exam_type', 'question_no')

    dept = course.department
    return render(request, 'archive/year.html', {
        'course': course,
        'year': year,
        'exam_type': exam_type,
        'exam_types': exam_types,
        'questions': questions,
        'breadcrumbs': _crumbs(
            (dept.university.name, reverse('university-detail', args=[dept.university.slug])),
            (dept.name, reverse('department-detail', args=[dept.university.slug, dept.slug])),
            (course.name, reverse('course-detail', args=[dept.university.slug, dept.slug, course.slug])),
            (str(year), None),
        ),
    })


def search(request):
    mode = 'courses' if request.GET.get('mode') == 'courses' else 'questions'
    if mode == 'courses':
        results = search_courses(request.GET) if request.GET else Course.objects.none()
    else:
        results = search_questions(request.GET)

    return render(request, 'archive/search.html', {
        'mode': mode,
        'results': results,
        'query': request.GET.get('q', ''),
        'universities': University.objects.order_by('name'),
        'selected_university': parse_int(request.GET.get('university')),
        'breadcrumbs': _crumbs(('Search', None)),
    })
