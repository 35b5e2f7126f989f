from django.urls import path

from . import views

urlpatterns = [
    path('universities', views.UniversityListCreateView.as_view(), name='admin-university-list'),
    path('universities/<int:pk>', views.UniversityDetailView.as_view(), name='admin-university-detail'),
    path('departments', views.DepartmentListCreateView.as_view(), name='admin-department-list'),
    path('departments/<int:pk>', views.DepartmentDetailView.as_view(), name='admin-department-detail'),
    path('courses', views.CourseListCreateView.as_view(), name='admin-course-list'),
    path('courses/bulk', views.CourseBulkImportView.as_view(), name='admin-course-bulk'),
    path('courses/<int:pk>', views.CourseDetailView.as_view(), name='admin-course-detail'),
]
