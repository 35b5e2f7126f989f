from django.urls import path

from . import pages

urlpatterns = [
    path('', pages.home, name='home'),
    path('search/', pages.search, name='search'),
    path('<str:university>/', pages.university_detail, name='university-detail'),
    path('<str:university>/<str:department>/', pages.department_detail, name='department-detail'),
    path('<str:university>/<str:department>/<str:course>/', pages.course_detail, name='course-detail'),
    path('<str:university>/<str:department>/<str:course>/<int:year>/', pages.year_questions, name='year-questions'),
]
