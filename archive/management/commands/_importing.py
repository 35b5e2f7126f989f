from django.core.management.base import BaseCommand, CommandError

from archive.importing import ImportDocumentError, parse_document


class ImportCommand(BaseCommand):
    """Shared file reading and summary output for the import commands."""
    collection = None

    def add_arguments(self, parser):
        parser.add_argument('path', help=f'JSON or CSV file of {self.collection}')

    def read_document(self, path):
        try:
            with open(path, 'rb') as handle:
                content = handle.read()
        except OSError as exc:
            raise CommandError(f'Cannot read {path}: {exc}') from exc
        try:
            return parse_document(content, self.collection)
        except ImportDocumentError as exc:
            raise CommandError(str(exc)) from exc

    def report(self, result):
        for error in result.errors:
            details = ', '.join(f'{k}={v}' for k, v in error.items() if k != 'error')
            self.stdout.write(self.style.WARNING(f'  Failed ({details}): {error["error"]}'))
        self.stdout.write(self.style.SUCCESS(
            f'\nImported {result.created} of {result.total} {self.collection} ({result.failed} failed).'
        ))
