import json
from unittest import mock

import pytest
from django.db import DatabaseError

from archive.importing import (Err, ImportDocumentError, Ok, apply_defaults, import_courses, import_questions,
                               parse_document, run_import)
from archive.models import Answer, Course, Question


def test_run_import_keeps_input_order_and_counts():
    def process(position, record):
        if record % 2:
            return Ok(record)
        return Err({'index': position}, 'even')

    result = run_import([1, 2, 3, 4, 5], process)

    assert (result.created, result.failed, result.total) == (3, 2, 5)
    assert result.records == [1, 3, 5]
    assert result.errors == [{'index': 2, 'error': 'even'}, {'index': 4, 'error': 'even'}]


def test_apply_defaults_only_fills_missing_or_null_fields():
    merged = apply_defaults({'year': 2021, 'examType': None}, {'year': 2023, 'examType': 'Mid', 'courseId': 4})
    assert merged == {'year': 2021, 'examType': 'Mid', 'courseId': 4}


@pytest.mark.django_db
class TestImportQuestions:

    def test_creates_questions_with_answers(self, course):
        result = import_questions([
            {'courseId': course.id, 'year': 2023, 'content': 'Q1', 'answer': {'content': 'A1', 'source': 'Book'}},
            {'courseId': course.id, 'year': 2023, 'content': 'Q2', 'examType': 'Mid'},
        ])

        assert (result.created, result.failed) == (2, 0)
        first, second = result.records
        assert first.exam_type == 'Final'
        assert first.question_no == 1
        assert first.answer.source == 'Book'
        assert second.exam_type == 'Mid'
        assert second.question_no == 2
        assert not Answer.objects.filter(question=second).exists()

    def test_missing_year_is_reported_at_its_position(self, course):
        result = import_questions([
            {'courseId': course.id, 'year': 2023, 'content': 'first'},
            {'courseId': course.id, 'content': 'second'},
            {'courseId': course.id, 'year': 2022, 'content': 'third'},
        ])

        assert (result.created, result.failed) == (2, 1)
        assert result.total == 3
        [error] = result.errors
        assert error['index'] == 2
        assert error['questionNo'] == 2
        assert 'year' in error['error']
        assert Question.objects.count() == 2

    def test_batch_defaults_fill_records(self, course):
        result = import_questions(
            [{'content': 'uses defaults'}, {'content': 'own year', 'year': 2019, 'questionNo': 7}],
            defaults={'courseId': course.id, 'year': 2024, 'examType': 'Term Test'},
        )

        assert result.failed == 0
        assert [(q.year, q.exam_type, q.question_no) for q in result.records] == [
            (2024, 'Term Test', 1),
            (2019, 'Term Test', 7),
        ]

    def test_unknown_course_fails_only_that_record(self, course):
        result = import_questions([
            {'courseId': 999999, 'year': 2023, 'content': 'nowhere'},
            {'courseId': course.id, 'year': 2023, 'content': 'here'},
        ])

        assert (result.created, result.failed) == (1, 1)
        assert result.errors[0]['index'] == 1
        assert 'courseId' in result.errors[0]['error']

    def test_non_object_record_is_a_failure(self, course):
        result = import_questions(['just text', {'courseId': course.id, 'year': 2023, 'content': 'ok'}])
        assert (result.created, result.failed) == (1, 1)

    def test_rejects_empty_and_non_list_documents(self, db):
        with pytest.raises(ImportDocumentError):
            import_questions([])
        with pytest.raises(ImportDocumentError):
            import_questions({'content': 'not a list'})

    def test_storage_failure_rolls_back_question_and_answer(self, course):
        records = [
            {'courseId': course.id, 'year': 2023, 'content': 'with answer', 'answer': {'content': 'A'}},
            {'courseId': course.id, 'year': 2023, 'content': 'no answer'},
        ]

        with mock.patch('archive.serializers.Answer.objects.create', side_effect=DatabaseError('disk I/O error')):
            result = import_questions(records)

        assert (result.created, result.failed) == (1, 1)
        assert result.errors == [{'index': 1, 'questionNo': 1, 'error': 'disk I/O error'}]
        assert list(Question.objects.values_list('content', flat=True)) == ['no answer']

    def test_answer_that_is_not_an_object(self, course):
        result = import_questions([{'courseId': course.id, 'year': 2023, 'content': 'Q', 'answer': 'text'}])

        [error] = result.errors
        assert error['error'].startswith('invalid `answer`: ')
        assert 'non_field_errors' not in error['error']

    def test_blank_optional_numbers_are_absent(self, course):
        result = import_questions([
            {'courseId': course.id, 'year': 2023, 'content': 'Q', 'marks': '', 'questionNo': ' ', 'examType': None},
        ])

        assert result.failed == 0
        [question] = result.records
        assert (question.marks, question.question_no, question.exam_type) == (None, 1, 'Final')


@pytest.mark.django_db
class TestImportCourses:

    def test_slug_is_derived_from_code(self, department):
        result = import_courses([{'code': 'CSE101', 'name': 'Intro', 'departmentId': department.id}])

        assert (result.created, result.failed, result.errors) == (1, 0, [])
        assert Course.objects.get(code='CSE101').slug == 'cse101'

    def test_second_import_of_same_course_fails(self, department):
        records = [{'code': 'CSE101', 'name': 'Intro', 'departmentId': department.id}]
        import_courses(records)
        result = import_courses(records)

        assert (result.created, result.failed) == (0, 1)
        assert result.errors == [{'code': 'CSE101', 'error': 'Course already exists'}]
        assert Course.objects.filter(code='CSE101').count() == 1

    def test_missing_code_is_reported_as_unknown(self, department):
        result = import_courses([{'name': 'No code', 'departmentId': department.id}])
        assert result.errors[0]['code'] == 'UNKNOWN'
        assert 'code' in result.errors[0]['error']

    def test_year_term_semester(self, department):
        result = import_courses(
            [{'code': 'CSE221', 'name': 'Algorithms', 'semester': '2-1'}],
            defaults={'departmentId': department.id},
        )
        assert result.records[0].semester == 3

    def test_blank_semester_and_credits(self, department):
        result = import_courses([{'code': 'CSE222', 'name': 'Lab', 'departmentId': department.id,
                                  'semester': '', 'credits': ''}])

        assert result.failed == 0
        assert (result.records[0].semester, result.records[0].credits) == (None, None)

    def test_slug_clash_fails_that_course_only(self, department):
        Course.objects.create(code='CSE-101', name='Intro', slug='cse-101', department=department)

        result = import_courses([
            {'code': 'CSE 101', 'name': 'Intro again', 'departmentId': department.id},
            {'code': 'CSE102', 'name': 'Lab', 'departmentId': department.id},
        ])

        assert (result.created, result.failed) == (1, 1)
        [error] = result.errors
        assert error['code'] == 'CSE 101'
        assert 'slug' in error['error']
        assert [c.code for c in result.records] == ['CSE102']
        assert Course.objects.filter(department=department).count() == 2


class TestParseDocument:

    def test_json_list(self):
        records, defaults = parse_document('[{"content": "Q"}]', 'questions')
        assert records == [{'content': 'Q'}]
        assert defaults == {}

    def test_json_object_with_batch_defaults(self):
        text = json.dumps({'courseId': 3, 'year': 2023, 'questions': [{'content': 'Q'}]})
        records, defaults = parse_document(text.encode(), 'questions')
        assert records == [{'content': 'Q'}]
        assert defaults == {'courseId': 3, 'year': 2023}

    def test_csv_courses(self):
        text = 'Code,Name,Semester,Credits\nCSE101, Intro to Computing ,1-1,3\nCSE102,Lab,,\n'
        records, _ = parse_document(text, 'courses')
        assert records == [
            {'code': 'CSE101', 'name': 'Intro to Computing', 'semester': '1-1', 'credits': '3'},
            {'code': 'CSE102', 'name': 'Lab'},
        ]

    def test_csv_answer_columns_become_nested_answer(self):
        text = 'questionNo,content,answer,source\n1,What is a heap?,A tree,CLRS\n'
        records, _ = parse_document(text, 'questions')
        assert records == [{
            'questionNo': '1',
            'content': 'What is a heap?',
            'answer': {'content': 'A tree', 'source': 'CLRS'},
        }]

    def test_csv_without_required_columns(self):
        with pytest.raises(ImportDocumentError, match='"code"'):
            parse_document('name\nIntro\n', 'courses')

    @pytest.mark.parametrize('text', ['', '   ', '{"questions": []}', '{"questions": "x"}', '[1, 2'])
    def test_invalid_documents(self, text):
        with pytest.raises(ImportDocumentError):
            parse_document(text, 'questions')
