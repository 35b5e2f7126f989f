from django.urls import path

from .views import (
    BulkQuestionUploadView,
    CourseFiltersView,
    CourseSearchView,
    QuestionListCreateView,
    QuestionSearchView,
    SearchFiltersView,
)

urlpatterns = [
    path('questions', QuestionListCreateView.as_view(), name='question-list'),
    # Many questions (with answers) in one request
    path('questions/bulk', BulkQuestionUploadView.as_view(), name='question-bulk'),
    path('search', QuestionSearchView.as_view(), name='question-search'),
    path('search/courses', CourseSearchView.as_view(), name='course-search'),
    path('search/filters', SearchFiltersView.as_view(), name='search-filters'),
    path('search/course-filters', CourseFiltersView.as_view(), name='course-search-filters'),
]
