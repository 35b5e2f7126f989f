"""Upload pages for the bulk importers (question upload, course import)."""

import logging

from django.shortcuts import render

from archive.forms import BulkCourseImportForm, BulkQuestionUploadForm
from archive.importing import import_courses, import_questions

logger = logging.getLogger(__name__)


def question_upload(request):
    """
    Upload a JSON/CSV batch of questions for one course, year and exam type.
    The selected course, year and exam type apply to every record; other
    batch-level fields in a JSON document fill records that leave them out.
    """
    result = None
    if request.method == 'POST':
        form = BulkQuestionUploadForm(request.POST, request.FILES)
        if form.is_valid():
            data = form.cleaned_data
            records = [
                {**record, 'courseId': data['course'].id, 'year': data['year'], 'examType': data['exam_type']}
                if isinstance(record, dict) else record
                for record in data['records']
            ]
            result = import_questions(records, defaults=data['defaults'])
            logger.info('Question upload for %s %s: %s created, %s failed',
                        data['course'], data['year'], result.created, result.failed)
    else:
        form = BulkQuestionUploadForm()

    return render(request, 'manager/question_upload.html', {'form': form, 'result': result})


def course_import(request):
    """Import a JSON/CSV list of courses into the selected department."""
    result = None
    if request.method == 'POST':
        form = BulkCourseImportForm(request.POST, request.FILES)
        if form.is_valid():
            department = form.cleaned_data['department']
            records = [
                {**record, 'departmentId': department.id} if isinstance(record, dict) else record
                for record in form.cleaned_data['records']
            ]
            result = import_courses(records, defaults=form.cleaned_data['defaults'])
    else:
        form = BulkCourseImportForm()

    return render(request, 'manager/course_import.html', {'form': form, 'result': result})
