"""
Bulk import of questions and courses.

Every record is validated and inserted on its own; a failing record is
reported and the batch moves on. Only a document that is not a list of
records at all (or an empty one) is rejected as a whole.

    result = import_questions(records, defaults={'courseId': 3, 'year': 2023})
    result.created, result.failed, result.errors

Course duplicates are detected with a lookup before the insert. Two
concurrent imports of the same (code, department) can both pass that
lookup; the database constraint then fails the second insert, which is
reported like any other storage failure.
"""
import csv
import functools
import io
import json
import logging
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from django.conf import settings
from django.db import transaction
from rest_framework.settings import api_settings

from .models import Course
from .serializers import CourseImportSerializer, QuestionWriteSerializer

logger = logging.getLogger(__name__)


class ImportDocumentError(Exception):
    """The uploaded document cannot be turned into a list of records."""


class Ok(NamedTuple):
    record: Any


class Err(NamedTuple):
    key: dict
    reason: str


@dataclass
class ImportResult:
    created: int = 0
    failed: int = 0
    records: list = field(default_factory=list)
    errors: list = field(default_factory=list)

    @property
    def total(self):
        return self.created + self.failed


def _accumulate(result, outcome):
    if isinstance(outcome, Ok):
        result.created += 1
        result.records.append(outcome.record)
    else:
        result.failed += 1
        result.errors.append({**outcome.key, 'error': outcome.reason})
    return result


def run_import(records, process):
    """Fold `process(position, record)` outcomes over `records` in input order."""
    outcomes = (process(position, record) for position, record in enumerate(records, start=1))
    return functools.reduce(_accumulate, outcomes, ImportResult())


# ============================================
# RECORD HELPERS
# ============================================

MISSING_CODES = {'required', 'null', 'blank'}
NON_FIELD_ERRORS = api_settings.NON_FIELD_ERRORS_KEY


def require_records(records, collection):
    if not isinstance(records, list):
        raise ImportDocumentError(f'Expected an array of {collection}')
    if not records:
        raise ImportDocumentError(f'{collection.capitalize()} array is empty')
    return records


def apply_defaults(record, defaults):
    """Copy of `record` with absent or null fields taken from `defaults`."""
    merged = dict(record)
    for name, value in (defaults or {}).items():
        if merged.get(name) is None and value is not None:
            merged[name] = value
    return merged


def _first_error(errors, prefix=''):
    name, details = next(iter(errors.items()))
    path = f'{prefix}{name}'
    if isinstance(details, dict):
        return _first_error(details, prefix=f'{path}.')
    return path, details[0]


def describe_errors(errors):
    """One reason string for a serializer's errors, naming the first bad field."""
    path, detail = _first_error(errors)
    if path == NON_FIELD_ERRORS:
        return str(detail)
    # a nested record that is not an object reports against the record itself
    path = path.removesuffix(f'.{NON_FIELD_ERRORS}')
    if getattr(detail, 'code', None) in MISSING_CODES:
        return f'missing required field `{path}`'
    return f'invalid `{path}`: {detail}'


def _insert(serializer, key):
    try:
        with transaction.atomic():
            instance = serializer.save()
    except Exception as exc:
        logger.warning('Import insert failed for %s: %s', key, exc, exc_info=True)
        return Err(key, str(exc))
    return Ok(instance)


# ============================================
# QUESTIONS
# ============================================

def _import_question(defaults, position, raw):
    if not isinstance(raw, dict):
        return Err({'index': position, 'questionNo': position}, 'record must be an object')

    record = apply_defaults(raw, defaults)
    if not str(record.get('questionNo') or '').strip():
        record['questionNo'] = position
    key = {'index': position, 'questionNo': record['questionNo']}

    serializer = QuestionWriteSerializer(data=record)
    if not serializer.is_valid():
        reason = describe_errors(serializer.errors)
        logger.warning('Question %s rejected: %s', position, reason)
        return Err(key, reason)

    outcome = _insert(serializer, key)
    if isinstance(outcome, Ok):
        logger.info('Created question %s (id=%s)', outcome.record.question_no, outcome.record.id)
    return outcome


def import_questions(records, defaults=None):
    """
    Insert each question (with its nested answer) independently.
    Errors are {index, questionNo, error} with a 1-based index.
    """
    require_records(records, 'questions')
    batch_defaults = {'examType': getattr(settings, 'ARCHIVE_DEFAULT_EXAM_TYPE', 'Final')}
    batch_defaults.update({k: v for k, v in (defaults or {}).items() if v not in (None, '')})

    logger.info('Processing %s questions', len(records))
    result = run_import(records, functools.partial(_import_question, batch_defaults))
    logger.info('Bulk upload complete: %s created, %s failed', result.created, result.failed)
    return result


# ============================================
# COURSES
# ============================================

def _import_course(defaults, position, raw):
    if not isinstance(raw, dict):
        return Err({'code': 'UNKNOWN'}, 'record must be an object')

    record = apply_defaults(raw, defaults)
    key = {'code': record.get('code') or 'UNKNOWN'}

    serializer = CourseImportSerializer(data=record)
    if not serializer.is_valid():
        reason = describe_errors(serializer.errors)
        logger.warning('Course %s rejected: %s', key['code'], reason)
        return Err(key, reason)

    data = serializer.validated_data
    if Course.objects.filter(code=data['code'], department=data['department']).exists():
        return Err(key, 'Course already exists')

    outcome = _insert(serializer, key)
    if isinstance(outcome, Ok):
        logger.info('Created course: %s', outcome.record.code)
    return outcome


def import_courses(records, defaults=None):
    """
    Insert each course independently, skipping codes that already exist in
    the department. Errors are {code, error}.
    """
    require_records(records, 'courses')
    batch_defaults = {k: v for k, v in (defaults or {}).items() if v not in (None, '')}

    result = run_import(records, functools.partial(_import_course, batch_defaults))
    logger.info('Course import complete: %s created, %s failed', result.created, result.failed)
    return result


# ============================================
# DOCUMENT PARSING (JSON / CSV uploads)
# ============================================

CSV_COLUMNS = {
    'code': 'code',
    'name': 'name',
    'slug': 'slug',
    'semester': 'semester',
    'credits': 'credits',
    'departmentid': 'departmentId',
    'courseid': 'courseId',
    'year': 'year',
    'examtype': 'examType',
    'questionno': 'questionNo',
    'marks': 'marks',
    'content': 'content',
    'answer': 'answer',
    'source': 'source',
    'contributor': 'contributor',
}

# Columns folded into the nested answer record
ANSWER_COLUMNS = {'answer': 'content', 'source': 'source', 'contributor': 'contributor'}

REQUIRED_CSV_COLUMNS = {
    'courses': ('code', 'name'),
    'questions': ('content',),
}


def _column_key(header):
    return header.strip().lower().replace('_', '').replace(' ', '')


def _parse_csv(text, collection):
    try:
        reader = csv.DictReader(io.StringIO(text), skipinitialspace=True)
        if not reader.fieldnames:
            raise ImportDocumentError('CSV has no header row')
        columns = {header: CSV_COLUMNS.get(_column_key(header), header.strip())
                   for header in reader.fieldnames if header}
        missing = [name for name in REQUIRED_CSV_COLUMNS.get(collection, ()) if name not in columns.values()]
        if missing:
            raise ImportDocumentError(
                'CSV must have %s columns' % ' and '.join(f'"{name}"' for name in missing)
            )

        records = []
        for row in reader:
            record = {}
            answer = {}
            for header, value in row.items():
                if header is None or header not in columns or value is None:
                    continue
                value = value.strip()
                if not value:
                    continue
                name = columns[header]
                if name in ANSWER_COLUMNS:
                    answer[ANSWER_COLUMNS[name]] = value
                else:
                    record[name] = value
            if answer:
                record['answer'] = answer
            if record:
                records.append(record)
        return records
    except csv.Error as exc:
        raise ImportDocumentError(f'CSV parsing error: {exc}') from exc


def parse_document(content, collection):
    """
    Decode an uploaded JSON or CSV document into (records, defaults).

    JSON may be a list of records, or an object with the records under
    `collection` ("questions" / "courses") and batch defaults such as
    courseId, year or examType alongside.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8-sig')
        except UnicodeDecodeError as exc:
            raise ImportDocumentError(f'Document is not UTF-8 text: {exc}') from exc

    text = (content or '').strip()
    if not text:
        raise ImportDocumentError('Document is empty')

    if text[0] not in '[{':
        return require_records(_parse_csv(text, collection), collection), {}

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ImportDocumentError(f'Invalid JSON: {exc}') from exc

    if isinstance(payload, list):
        return require_records(payload, collection), {}

    records = require_records(payload.get(collection), collection)
    defaults = {name: value for name, value in payload.items()
                if name != collection and not isinstance(value, (list, dict))}
    return records, defaults
