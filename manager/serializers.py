from rest_framework import serializers

from archive.exceptions import AlreadyExists
from archive.models import Course, Department, University
from archive.serializers import (CourseDetailSerializer, CourseImportSerializer,
                                 DepartmentWithUniversitySerializer, UniversitySerializer)
from archive.utils import derive_slug


def _current(serializer, attrs, name):
    """Value of `name` after this (possibly partial) write."""
    if name in attrs:
        return attrs[name]
    return getattr(serializer.instance, name, None)


class UniversityListSerializer(UniversitySerializer):
    departmentCount = serializers.IntegerField(source='department_count', read_only=True)

    class Meta(UniversitySerializer.Meta):
        fields = UniversitySerializer.Meta.fields + ['departmentCount']


class UniversityWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = University
        fields = ['name', 'slug']
        # uniqueness is reported as {"detail": ...} by validate_slug
        extra_kwargs = {'slug': {'validators': []}}

    def validate_slug(self, value):
        qs = University.objects.filter(slug=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise AlreadyExists('A university with this slug already exists')
        return value


class DepartmentListSerializer(DepartmentWithUniversitySerializer):
    courseCount = serializers.IntegerField(source='course_count', read_only=True)

    class Meta(DepartmentWithUniversitySerializer.Meta):
        fields = DepartmentWithUniversitySerializer.Meta.fields + ['courseCount']


class DepartmentWriteSerializer(serializers.ModelSerializer):
    universityId = serializers.PrimaryKeyRelatedField(source='university', queryset=University.objects.all())

    class Meta:
        model = Department
        fields = ['name', 'slug', 'universityId']
        validators = []

    def validate(self, attrs):
        university = _current(self, attrs, 'university')
        slug = _current(self, attrs, 'slug')
        qs = Department.objects.filter(university=university, slug=slug)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise AlreadyExists('A department with this slug already exists in this university')
        return attrs


class CourseListSerializer(CourseDetailSerializer):
    questionCount = serializers.IntegerField(source='question_count', read_only=True)

    class Meta(CourseDetailSerializer.Meta):
        fields = CourseDetailSerializer.Meta.fields + ['questionCount']


class CourseWriteSerializer(CourseImportSerializer):
    """Single course create/update; the slug follows the code when not given."""

    def validate(self, attrs):
        department = _current(self, attrs, 'department')
        code = _current(self, attrs, 'code')
        if not _current(self, attrs, 'slug'):
            attrs['slug'] = derive_slug(code)

        siblings = Course.objects.filter(department=department)
        if self.instance is not None:
            siblings = siblings.exclude(pk=self.instance.pk)
        if siblings.filter(code=code).exists():
            raise AlreadyExists('A course with this code already exists in this department')
        slug = _current(self, attrs, 'slug')
        if siblings.filter(slug=slug).exists():
            raise AlreadyExists('A course with this slug already exists in this department')
        return attrs

    def update(self, instance, validated_data):
        for name, value in validated_data.items():
            setattr(instance, name, value)
        instance.save()
        return instance
