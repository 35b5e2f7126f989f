from django.db import models


class University(models.Model):
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=100, unique=True)

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'universities'

    def __str__(self):
        return self.name


class Department(models.Model):
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=100)
    university = models.ForeignKey(University, on_delete=models.CASCADE, related_name='departments')

    class Meta:
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(fields=['university', 'slug'], name='unique_department_slug_per_university'),
        ]

    def __str__(self):
        return f"{self.university.name} - {self.name}"


class Course(models.Model):
    code = models.CharField(max_length=50)
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=100)
    department = models.ForeignKey(Department, on_delete=models.CASCADE, related_name='courses')
    credits = models.FloatField(blank=True, null=True)
    semester = models.PositiveSmallIntegerField(blank=True, null=True)

    class Meta:
        ordering = ['code']
        constraints = [
            models.UniqueConstraint(fields=['department', 'code'], name='unique_course_code_per_department'),
            models.UniqueConstraint(fields=['department', 'slug'], name='unique_course_slug_per_department'),
        ]

    def __str__(self):
        return f"{self.code} - {self.name}"


class Question(models.Model):
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='questions')
    year = models.PositiveIntegerField()
    exam_type = models.CharField(max_length=50, default='Final')
    question_no = models.PositiveIntegerField(blank=True, null=True)
    marks = models.PositiveIntegerField(blank=True, null=True)
    content = models.TextField(help_text='Markdown text')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-year', 'exam_type', 'question_no']
        indexes = [
            models.Index(fields=['course', 'year'], name='question_course_year_idx'),
        ]

    def __str__(self):
        number = self.question_no if self.question_no is not None else '?'
        return f"{self.course.code} {self.year} {self.exam_type} Q{number}"


class Answer(models.Model):
    question = models.OneToOneField(Question, on_delete=models.CASCADE, related_name='answer')
    content = models.TextField(blank=True, help_text='Markdown text')
    source = models.CharField(max_length=255, blank=True, null=True)
    contributor = models.CharField(max_length=255, blank=True, null=True)

    def __str__(self):
        return f"Answer to {self.question}"
