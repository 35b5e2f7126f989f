"""
Bulk-import questions from a JSON or CSV file.

Run: python manage.py import_questions questions.json --course 3 --year 2023

Options fill in fields a record leaves out; values in the file win.
"""

from archive.importing import import_questions

from ._importing import ImportCommand


class Command(ImportCommand):
    help = 'Import questions (with optional answers) from a JSON or CSV file'
    collection = 'questions'

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument('--course', type=int, help='Course id for records without courseId')
        parser.add_argument('--year', type=int, help='Exam year for records without year')
        parser.add_argument('--exam-type', help='Exam type for records without examType (default: Final)')

    def handle(self, *args, **options):
        records, defaults = self.read_document(options['path'])
        overrides = {
            'courseId': options['course'],
            'year': options['year'],
            'examType': options['exam_type'],
        }
        defaults.update({k: v for k, v in overrides.items() if v is not None})
        self.report(import_questions(records, defaults=defaults))
