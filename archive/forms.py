from django import forms

from .importing import ImportDocumentError, parse_document
from .models import Course, Department


class ImportDocumentForm(forms.Form):
    """Pasted text or an uploaded file, decoded into (records, defaults) on clean."""
    collection = None

    document_text = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'rows': 12}),
    )
    document_file = forms.FileField(
        required=False,
        widget=forms.FileInput(attrs={'accept': '.json,.csv'}),
    )

    def clean(self):
        cleaned_data = super().clean()
        upload = cleaned_data.get('document_file')
        content = upload.read() if upload else cleaned_data.get('document_text')
        if not content:
            raise forms.ValidationError('Paste a document or choose a file to upload.')
        try:
            cleaned_data['records'], cleaned_data['defaults'] = parse_document(content, self.collection)
        except ImportDocumentError as exc:
            raise forms.ValidationError(str(exc))
        return cleaned_data


class BulkQuestionUploadForm(ImportDocumentForm):
    collection = 'questions'

    course = forms.ModelChoiceField(queryset=Course.objects.select_related('department__university'))
    year = forms.IntegerField(min_value=1900, max_value=2100)
    exam_type = forms.CharField(max_length=50, initial='Final')

    field_order = ['course', 'year', 'exam_type', 'document_text', 'document_file']


class BulkCourseImportForm(ImportDocumentForm):
    collection = 'courses'

    department = forms.ModelChoiceField(queryset=Department.objects.select_related('university'))

    field_order = ['department', 'document_text', 'document_file']
