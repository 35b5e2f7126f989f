from django.urls import path

from . import pages

urlpatterns = [
    path('upload/', pages.question_upload, name='question-upload'),
    path('courses/import/', pages.course_import, name='course-import'),
]
