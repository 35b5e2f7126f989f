from django import template

from archive.utils import short_form as _short_form

register = template.Library()


@register.filter
def short_form(name):
    """KUET for "Khulna University of Engineering & Technology"."""
    return _short_form(name)


@register.simple_tag
def question_total():
    """Number of questions in the whole archive (page header)."""
    from archive.models import Question
    return Question.objects.count()
