import json

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from archive.models import Course, Question

pytestmark = pytest.mark.django_db


def test_upload_pages_render(client, course):
    for path in ('/admin/upload/', '/admin/courses/import/'):
        response = client.get(path)
        assert response.status_code == 200
        assert b'csrfmiddlewaretoken' in response.content


def test_question_upload_applies_selected_course_year_and_type(client, course):
    document = json.dumps([
        {'content': 'Define a heap.', 'answer': {'content': 'A complete binary tree.'}},
        {'content': 'Other course?', 'courseId': 999, 'year': 1999},
    ])

    response = client.post('/admin/upload/', {
        'course': course.id,
        'year': 2022,
        'exam_type': 'Mid',
        'document_text': document,
    })

    assert response.status_code == 200
    result = response.context['result']
    assert (result.created, result.failed) == (2, 0)
    assert set(Question.objects.values_list('course_id', 'year', 'exam_type')) == {(course.id, 2022, 'Mid')}


def test_question_upload_reports_bad_document(client, course):
    response = client.post('/admin/upload/', {
        'course': course.id, 'year': 2022, 'exam_type': 'Final', 'document_text': '{"questions": []}',
    })
    assert response.status_code == 200
    assert response.context['result'] is None
    assert 'Questions array is empty' in response.context['form'].non_field_errors()


def test_course_import_from_csv_file(client, department):
    upload = SimpleUploadedFile('courses.csv', b'code,name,semester\nCSE101,Intro,1-1\nCSE101,Intro,1-1\n')

    response = client.post('/admin/courses/import/', {'department': department.id, 'document_file': upload})

    result = response.context['result']
    assert (result.created, result.failed) == (1, 1)
    assert b'Course already exists' in response.content
    assert Course.objects.get(department=department).semester == 1


def test_document_defaults_fill_below_selected_department(client, department):
    document = json.dumps({
        'departmentId': 999,
        'semester': 5,
        'credits': 3,
        'courses': [{'code': 'CSE311', 'name': 'Databases'}, {'code': 'CSE312', 'name': 'Databases Lab', 'credits': 1.5}],
    })

    response = client.post('/admin/courses/import/', {'department': department.id, 'document_text': document})

    assert response.context['result'].failed == 0
    assert list(Course.objects.order_by('code').values_list('department_id', 'semester', 'credits')) == [
        (department.id, 5, 3.0),
        (department.id, 5, 1.5),
    ]


def test_question_document_defaults(client, course):
    document = json.dumps({'marks': 10, 'questions': [{'content': 'Q1'}, {'content': 'Q2', 'marks': 4}]})

    client.post('/admin/upload/', {
        'course': course.id, 'year': 2022, 'exam_type': 'Final', 'document_text': document,
    })

    assert list(Question.objects.order_by('question_no').values_list('marks', flat=True)) == [10, 4]
