from archive.importing import import_courses

from ._importing import ImportCommand


class Command(ImportCommand):
    help = 'Import courses from a JSON or CSV file, skipping codes that already exist'
    collection = 'courses'

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument('--department', type=int, help='Department id for records without departmentId')

    def handle(self, *args, **options):
        records, defaults = self.read_document(options['path'])
        if options['department'] is not None:
            defaults['departmentId'] = options['department']
        self.report(import_courses(records, defaults=defaults))
