import pytest
from rest_framework.test import APIClient

from archive.models import Answer, Course, Department, Question, University


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def university(db):
    return University.objects.create(name='Khulna University of Engineering & Technology', slug='kuet')


@pytest.fixture
def department(university):
    return Department.objects.create(name='Computer Science & Engineering', slug='cse', university=university)


@pytest.fixture
def course(department):
    return Course.objects.create(code='CSE135', name='Data Structures', slug='cse135', department=department, semester=3)


@pytest.fixture
def question(course):
    question = Question.objects.create(
        course=course,
        year=2023,
        exam_type='Final',
        question_no=1,
        marks=10,
        content='Check whether a binary tree is a valid binary search tree.',
    )
    Answer.objects.create(question=question, content='Recurse with min/max bounds.', source='CLRS, Chapter 12')
    return question
