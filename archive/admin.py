from django.contrib import admin
from django.db.models import Count
from django.urls import reverse
from django.utils.html import format_html

from .models import Answer, Course, Department, Question, University


@admin.register(University)
class UniversityAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'department_count']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_department_count=Count('departments'))

    def department_count(self, obj):
        url = reverse('admin:archive_department_changelist') + f'?university__id__exact={obj.id}'
        return format_html('<a href="{}">{} Departments</a>', url, obj._department_count)
    department_count.short_description = 'Departments'


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'university_link', 'course_count']
    list_filter = ['university']
    search_fields = ['name', 'slug', 'university__name']

    def university_link(self, obj):
        url = reverse('admin:archive_university_change', args=[obj.university_id])
        return format_html('<a href="{}">{}</a>', url, obj.university.name)
    university_link.short_description = 'University'

    def course_count(self, obj):
        count = obj.courses.count()
        url = reverse('admin:archive_course_changelist') + f'?department__id__exact={obj.id}'
        return format_html('<a href="{}">{} Courses</a>', url, count)
    course_count.short_description = 'Courses'


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'department_link', 'semester', 'credits', 'question_count']
    list_filter = ['department__university', 'semester']
    search_fields = ['code', 'name', 'department__name']
    list_select_related = ['department__university']

    def department_link(self, obj):
        url = reverse('admin:archive_department_change', args=[obj.department_id])
        return format_html('<a href="{}">{} ({})</a>', url, obj.department.name, obj.department.university.slug)
    department_link.short_description = 'Department'

    def question_count(self, obj):
        count = obj.questions.count()
        url = reverse('admin:archive_question_changelist') + f'?course__id__exact={obj.id}'
        return format_html('<a href="{}">{} Questions</a>', url, count)
    question_count.short_description = 'Questions'


class AnswerInline(admin.StackedInline):
    model = Answer
    extra = 0
    max_num = 1


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'course', 'year', 'exam_type', 'question_no', 'marks', 'has_answer']
    list_filter = ['year', 'exam_type', 'course__department__university']
    search_fields = ['content', 'course__code', 'course__name']
    list_select_related = ['course']
    inlines = [AnswerInline]
    fieldsets = (
        ('Placement', {
            'fields': ('course', 'year', 'exam_type', 'question_no', 'marks')
        }),
        ('Question', {
            'fields': ('content',)
        }),
    )

    def has_answer(self, obj):
        return hasattr(obj, 'answer')
    has_answer.boolean = True
    has_answer.short_description = 'Answer'
