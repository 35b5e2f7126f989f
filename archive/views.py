from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .importing import import_questions
from .models import Question
from .search import course_filter_options, question_filter_options, search_courses, search_questions
from .serializers import (BulkQuestionRequestSerializer, CourseSearchResultSerializer, CourseSerializer,
                          DepartmentSerializer, QuestionSerializer, QuestionWithCourseSerializer,
                          QuestionWriteSerializer, UniversitySerializer)
from .utils import parse_int


class QuestionListCreateView(APIView):
    """/api/questions: GET lists questions by courseId and year, POST creates one."""

    def get(self, request):
        qs = Question.objects.select_related('answer', 'course__department__university')

        course_id = request.query_params.get('courseId')
        if course_id:
            qs = qs.filter(course_id=parse_int(course_id))

        year = parse_int(request.query_params.get('year'))
        if year is not None:
            qs = qs.filter(year=year)

        qs = qs.order_by('-year', 'exam_type', 'question_no')
        return Response({'questions': QuestionWithCourseSerializer(qs, many=True).data})

    def post(self, request):
        serializer = QuestionWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        question = serializer.save()
        return Response(
            {'success': True, 'question': QuestionSerializer(question).data},
            status=status.HTTP_201_CREATED,
        )


class BulkQuestionUploadView(APIView):
    """
    POST /api/questions/bulk: {questions: [...], courseId?, year?, examType?}

    Always 200 once the body is a non-empty list; per-question failures are
    reported in `errors` as {index, questionNo, error}.
    """

    def post(self, request):
        body = BulkQuestionRequestSerializer(data=request.data)
        body.is_valid(raise_exception=True)

        defaults = {name: body.validated_data.get(name) for name in ('courseId', 'year', 'examType')}
        result = import_questions(body.validated_data['questions'], defaults=defaults)

        return Response({
            'success': True,
            'created': result.created,
            'failed': result.failed,
            'results': QuestionSerializer(result.records, many=True).data,
            'errors': result.errors,
        })


class QuestionSearchView(APIView):
    """GET /api/search: free text over questions and answers plus hierarchy filters."""

    def get(self, request):
        results = search_questions(request.query_params)
        return Response({'results': QuestionWithCourseSerializer(results, many=True).data})


class CourseSearchView(APIView):
    """GET /api/search/courses: code or name search scoped by department or university."""

    def get(self, request):
        results = search_courses(request.query_params)
        return Response({'results': CourseSearchResultSerializer(results, many=True).data})


class SearchFiltersView(APIView):
    """GET /api/search/filters: choices for the question search form."""

    def get(self, request):
        options = question_filter_options()
        return Response({
            'universities': UniversitySerializer(options['universities'], many=True).data,
            'departments': DepartmentSerializer(options['departments'], many=True).data,
            'courses': CourseSerializer(options['courses'], many=True).data,
            'years': options['years'],
            'examTypes': options['exam_types'],
        })


class CourseFiltersView(APIView):
    """GET /api/search/course-filters: choices for the course search form."""

    def get(self, request):
        options = course_filter_options()
        return Response({
            'universities': options['universities'],
            'departments': [
                {'id': d['id'], 'name': d['name'], 'universityId': d['university_id']}
                for d in options['departments']
            ],
            'semesters': options['semesters'],
        })
