from django.db.models import Count
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from archive.importing import import_courses
from archive.models import Course, Department, University
from archive.serializers import BulkCourseRequestSerializer, CourseDetailSerializer, DepartmentWithUniversitySerializer, UniversitySerializer

from .serializers import (CourseListSerializer, CourseWriteSerializer, DepartmentListSerializer,
                          DepartmentWriteSerializer, UniversityListSerializer, UniversityWriteSerializer)


class AdminListCreateView(APIView):
    """GET lists every row with its child count; POST creates one row (201)."""
    list_serializer_class = None
    write_serializer_class = None
    detail_serializer_class = None

    def get_queryset(self):
        raise NotImplementedError

    def get(self, request):
        return Response(self.list_serializer_class(self.get_queryset(), many=True).data)

    def post(self, request):
        serializer = self.write_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        instance = serializer.save()
        return Response(self.detail_serializer_class(instance).data, status=status.HTTP_201_CREATED)


class AdminDetailView(APIView):
    """PUT updates the given fields only; DELETE cascades to everything below the row."""
    model = None
    write_serializer_class = None
    detail_serializer_class = None

    def get_object(self, pk):
        try:
            return self.model.objects.get(pk=pk)
        except self.model.DoesNotExist:
            return None

    def not_found(self):
        return Response(
            {'detail': f'{self.model._meta.verbose_name.capitalize()} not found.'},
            status=status.HTTP_404_NOT_FOUND,
        )

    def put(self, request, pk):
        instance = self.get_object(pk)
        if instance is None:
            return self.not_found()
        serializer = self.write_serializer_class(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(self.detail_serializer_class(instance).data)

    def delete(self, request, pk):
        instance = self.get_object(pk)
        if instance is None:
            return self.not_found()
        instance.delete()
        return Response({'success': True})


class UniversityListCreateView(AdminListCreateView):
    """GET/POST /api/admin/universities"""
    list_serializer_class = UniversityListSerializer
    write_serializer_class = UniversityWriteSerializer
    detail_serializer_class = UniversitySerializer

    def get_queryset(self):
        return University.objects.annotate(department_count=Count('departments')).order_by('name')


class UniversityDetailView(AdminDetailView):
    """PUT/DELETE /api/admin/universities/<id>"""
    model = University
    write_serializer_class = UniversityWriteSerializer
    detail_serializer_class = UniversitySerializer


class DepartmentListCreateView(AdminListCreateView):
    """GET/POST /api/admin/departments"""
    list_serializer_class = DepartmentListSerializer
    write_serializer_class = DepartmentWriteSerializer
    detail_serializer_class = DepartmentWithUniversitySerializer

    def get_queryset(self):
        return (
            Department.objects.select_related('university')
            .annotate(course_count=Count('courses'))
            .order_by('university__name', 'name')
        )


class DepartmentDetailView(AdminDetailView):
    """PUT/DELETE /api/admin/departments/<id>"""
    model = Department
    write_serializer_class = DepartmentWriteSerializer
    detail_serializer_class = DepartmentWithUniversitySerializer


class CourseListCreateView(AdminListCreateView):
    """GET/POST /api/admin/courses"""
    list_serializer_class = CourseListSerializer
    write_serializer_class = CourseWriteSerializer
    detail_serializer_class = CourseDetailSerializer

    def get_queryset(self):
        return (
            Course.objects.select_related('department__university')
            .annotate(question_count=Count('questions'))
            .order_by('department__university__name', 'department__name', 'semester', 'code')
        )


class CourseDetailView(AdminDetailView):
    """PUT/DELETE /api/admin/courses/<id>"""
    model = Course
    write_serializer_class = CourseWriteSerializer
    detail_serializer_class = CourseDetailSerializer


class CourseBulkImportView(APIView):
    """
    POST /api/admin/courses/bulk: {courses: [...], departmentId?}

    Courses whose code already exists in the department are reported as
    failed; the rest are created.
    """

    def post(self, request):
        body = BulkCourseRequestSerializer(data=request.data)
        body.is_valid(raise_exception=True)

        result = import_courses(
            body.validated_data['courses'],
            defaults={'departmentId': body.validated_data.get('departmentId')},
        )
        return Response({
            'created': result.created,
            'failed': result.failed,
            'errors': result.errors,
        })
