from django.conf import settings
from django.db import transaction
from rest_framework import serializers

from .models import Answer, Course, Department, Question, University
from .utils import derive_slug


class BlankAsNullMixin:
    """An empty or whitespace-only string counts as null."""

    def validate_empty_values(self, data):
        if isinstance(data, str) and not data.strip():
            data = None
        return super().validate_empty_values(data)


class OptionalIntegerField(BlankAsNullMixin, serializers.IntegerField):
    pass


class OptionalFloatField(BlankAsNullMixin, serializers.FloatField):
    pass


# ============================================
# READ SERIALIZERS (camelCase JSON)
# ============================================

class UniversitySerializer(serializers.ModelSerializer):
    class Meta:
        model = University
        fields = ['id', 'name', 'slug']


class DepartmentSerializer(serializers.ModelSerializer):
    universityId = serializers.IntegerField(source='university_id', read_only=True)

    class Meta:
        model = Department
        fields = ['id', 'name', 'slug', 'universityId']


class DepartmentWithUniversitySerializer(DepartmentSerializer):
    university = UniversitySerializer(read_only=True)

    class Meta(DepartmentSerializer.Meta):
        fields = DepartmentSerializer.Meta.fields + ['university']


class CourseSerializer(serializers.ModelSerializer):
    departmentId = serializers.IntegerField(source='department_id', read_only=True)

    class Meta:
        model = Course
        fields = ['id', 'code', 'name', 'slug', 'departmentId', 'credits', 'semester']


class CourseDetailSerializer(CourseSerializer):
    department = DepartmentWithUniversitySerializer(read_only=True)

    class Meta(CourseSerializer.Meta):
        fields = CourseSerializer.Meta.fields + ['department']


class AnswerSerializer(serializers.ModelSerializer):
    questionId = serializers.IntegerField(source='question_id', read_only=True)

    class Meta:
        model = Answer
        fields = ['id', 'questionId', 'content', 'source', 'contributor']


class QuestionSerializer(serializers.ModelSerializer):
    courseId = serializers.IntegerField(source='course_id', read_only=True)
    examType = serializers.CharField(source='exam_type', read_only=True)
    questionNo = OptionalIntegerField(source='question_no', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    answer = AnswerSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Question
        fields = [
            'id', 'courseId', 'year', 'examType', 'questionNo', 'marks',
            'content', 'createdAt', 'answer',
        ]


class QuestionWithCourseSerializer(QuestionSerializer):
    course = CourseDetailSerializer(read_only=True)

    class Meta(QuestionSerializer.Meta):
        fields = QuestionSerializer.Meta.fields + ['course']


class CourseSearchResultSerializer(CourseDetailSerializer):
    questionCount = serializers.IntegerField(source='question_count', read_only=True)
    years = serializers.SerializerMethodField()
    examTypes = serializers.SerializerMethodField()

    class Meta(CourseDetailSerializer.Meta):
        fields = CourseDetailSerializer.Meta.fields + ['questionCount', 'years', 'examTypes']

    def get_years(self, obj):
        return list(obj.questions.order_by('-year').values_list('year', flat=True).distinct())

    def get_examTypes(self, obj):
        return list(obj.questions.order_by('exam_type').values_list('exam_type', flat=True).distinct())


# ============================================
# WRITE SERIALIZERS (single create and bulk import)
# ============================================
# Mandatory fields are declared first: the first reported error names the
# first missing field.

class SemesterField(OptionalIntegerField):
    """Semester number; also accepts the year-term form "2-1" (= semester 3)."""

    def to_internal_value(self, data):
        if isinstance(data, str) and '-' in data.strip('-'):
            year, _, term = data.partition('-')
            try:
                return (int(year) - 1) * 2 + int(term)
            except ValueError:
                self.fail('invalid')
        return super().to_internal_value(data)


class AnswerWriteSerializer(serializers.Serializer):
    content = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='', trim_whitespace=False)
    source = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    contributor = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)

    def validate_content(self, value):
        return value or ''

    def validate_source(self, value):
        return value or None

    def validate_contributor(self, value):
        return value or None


class QuestionWriteSerializer(serializers.Serializer):
    courseId = serializers.PrimaryKeyRelatedField(source='course', queryset=Course.objects.all())
    year = serializers.IntegerField(min_value=1)
    content = serializers.CharField(trim_whitespace=False)
    examType = serializers.CharField(source='exam_type', required=False, allow_blank=True, allow_null=True, max_length=50)
    questionNo = OptionalIntegerField(source='question_no', required=False, allow_null=True, min_value=0)
    marks = OptionalIntegerField(required=False, allow_null=True, min_value=0)
    answer = AnswerWriteSerializer(required=False, allow_null=True)

    def validate_examType(self, value):
        return value or getattr(settings, 'ARCHIVE_DEFAULT_EXAM_TYPE', 'Final')

    @transaction.atomic
    def create(self, validated_data):
        answer_data = validated_data.pop('answer', None)
        validated_data.setdefault('exam_type', getattr(settings, 'ARCHIVE_DEFAULT_EXAM_TYPE', 'Final'))
        question = Question.objects.create(**validated_data)
        if answer_data is not None:
            Answer.objects.create(question=question, **answer_data)
        return question


class CourseImportSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50)
    name = serializers.CharField(max_length=255)
    departmentId = serializers.PrimaryKeyRelatedField(source='department', queryset=Department.objects.all())
    credits = OptionalFloatField(required=False, allow_null=True, min_value=0)
    semester = SemesterField(required=False, allow_null=True, min_value=1)
    slug = serializers.CharField(required=False, allow_blank=True, max_length=100)

    def create(self, validated_data):
        if not validated_data.get('slug'):
            validated_data['slug'] = derive_slug(validated_data['code'])
        return Course.objects.create(**validated_data)


# ============================================
# BULK REQUEST BODIES
# ============================================

class BulkQuestionRequestSerializer(serializers.Serializer):
    questions = serializers.ListField(
        allow_empty=False,
        error_messages={
            'required': 'Expected an array of questions in the request body',
            'null': 'Expected an array of questions in the request body',
            'not_a_list': 'Expected an array of questions in the request body',
            'empty': 'Questions array is empty',
        },
    )
    # Batch-level defaults for records that omit them
    courseId = serializers.IntegerField(required=False)
    year = serializers.IntegerField(required=False)
    examType = serializers.CharField(required=False, allow_blank=True)


class BulkCourseRequestSerializer(serializers.Serializer):
    courses = serializers.ListField(
        allow_empty=False,
        error_messages={
            'required': 'Invalid request: courses array required',
            'null': 'Invalid request: courses array required',
            'not_a_list': 'Invalid request: courses array required',
            'empty': 'Courses array is empty',
        },
    )
    departmentId = serializers.IntegerField(required=False)
