"""
Seed the archive with the reference universities and their departments,
ten sample courses for every CSE department and one answered sample
question (CSE135 Data Structures, 2023 Final).

Run: python manage.py seed_archive

Rows that already exist (same slug / course code) are left untouched, so
the command can be run again safely.
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, transaction

from archive.models import Answer, Course, Department, Question, University

UNIVERSITIES = [
    ('Khulna University of Engineering & Technology', 'kuet', [
        ('Computer Science & Engineering', 'cse'),
        ('Electrical & Electronic Engineering', 'eee'),
        ('Electronics & Communication Engineering', 'ece'),
        ('Civil Engineering', 'ce'),
        ('Mechanical Engineering', 'me'),
        ('Industrial Engineering & Management', 'iem'),
        ('Leather Engineering', 'le'),
        ('Textile Engineering', 'te'),
        ('Urban & Regional Planning', 'urp'),
        ('Building Engineering & Construction Management', 'becm'),
        ('Architecture', 'arch'),
        ('Mathematics', 'math'),
        ('Chemistry', 'chem'),
        ('Physics', 'phy'),
    ]),
    ('Bangladesh University of Engineering & Technology', 'buet', [
        ('Computer Science & Engineering', 'cse'),
        ('Electrical & Electronic Engineering', 'eee'),
        ('Civil Engineering', 'ce'),
        ('Mechanical Engineering', 'me'),
        ('Chemical Engineering', 'che'),
        ('Materials & Metallurgical Engineering', 'mme'),
        ('Water Resources Engineering', 'wre'),
        ('Industrial & Production Engineering', 'ipe'),
        ('Naval Architecture & Marine Engineering', 'name'),
        ('Architecture', 'arch'),
        ('Urban & Regional Planning', 'urp'),
    ]),
    ('Chittagong University of Engineering & Technology', 'cuet', [
        ('Computer Science & Engineering', 'cse'),
        ('Electrical & Electronic Engineering', 'eee'),
        ('Electronics & Telecommunication Engineering', 'ete'),
        ('Civil Engineering', 'ce'),
        ('Mechanical Engineering', 'me'),
        ('Petroleum & Mining Engineering', 'pme'),
        ('Architecture', 'arch'),
    ]),
    ('Rajshahi University of Engineering & Technology', 'ruet', [
        ('Computer Science & Engineering', 'cse'),
        ('Electrical & Electronic Engineering', 'eee'),
        ('Electronics & Telecommunication Engineering', 'ete'),
        ('Civil Engineering', 'ce'),
        ('Mechanical Engineering', 'me'),
        ('Industrial & Production Engineering', 'ipe'),
        ('Glass & Ceramic Engineering', 'gce'),
        ('Urban & Regional Planning', 'urp'),
    ]),
    ('University of Dhaka', 'du', [
        ('Computer Science & Engineering', 'cse'),
        ('Electrical & Electronic Engineering', 'eee'),
        ('Applied Physics & Electronic Engineering', 'apee'),
        ('Mathematics', 'math'),
        ('Physics', 'physics'),
        ('Chemistry', 'chemistry'),
        ('Statistics', 'stat'),
        ('Theoretical Physics', 'tp'),
    ]),
    ('Jahangirnagar University', 'ju', [
        ('Computer Science & Engineering', 'cse'),
        ('Mathematics', 'math'),
        ('Physics', 'physics'),
        ('Chemistry', 'chemistry'),
        ('Environmental Sciences', 'es'),
        ('Statistics', 'stat'),
    ]),
    ('Shahjalal University of Science & Technology', 'sust', [
        ('Computer Science & Engineering', 'cse'),
        ('Electrical & Electronic Engineering', 'eee'),
        ('Industrial & Production Engineering', 'ipe'),
        ('Mechanical Engineering', 'me'),
        ('Civil & Environmental Engineering', 'cee'),
        ('Petroleum & Mining Engineering', 'pme'),
        ('Chemical Engineering & Polymer Science', 'cep'),
        ('Mathematics', 'math'),
        ('Physics', 'phy'),
        ('Chemistry', 'che'),
        ('Statistics', 'sta'),
    ]),
]

CSE_COURSES = [
    ('CSE133', 'Structured Programming Language'),
    ('CSE135', 'Data Structures'),
    ('CSE213', 'Object Oriented Programming'),
    ('CSE221', 'Algorithms'),
    ('CSE311', 'Database Management Systems'),
    ('CSE313', 'Operating Systems'),
    ('CSE315', 'Computer Networks'),
    ('CSE317', 'Software Engineering'),
    ('CSE411', 'Artificial Intelligence'),
    ('CSE413', 'Machine Learning'),
]

SAMPLE_QUESTION = """## Question 1: Binary Search Tree

Implement a function to check if a binary tree is a valid binary search tree.

```c
struct Node {
    int data;
    struct Node* left;
    struct Node* right;
};

bool isBST(struct Node* root) {
    // Write your code here
}
```

Explain the time complexity of your solution."""

SAMPLE_ANSWER = """## Solution:

We can solve this by checking if each node satisfies the BST property with proper bounds:

```c
#include <limits.h>
#include <stdbool.h>

bool isBSTUtil(struct Node* node, int min, int max) {
    // An empty tree is BST
    if (node == NULL)
        return true;

    // False if this node violates the min/max constraint
    if (node->data < min || node->data > max)
        return false;

    // Otherwise check the subtrees recursively
    // tightening the min or max constraint
    return isBSTUtil(node->left, min, node->data - 1) &&
           isBSTUtil(node->right, node->data + 1, max);
}

bool isBST(struct Node* root) {
    return isBSTUtil(root, INT_MIN, INT_MAX);
}
```

**Time Complexity:** $O(n)$ where $n$ is the number of nodes in the tree, as we visit each node exactly once.

**Space Complexity:** $O(h)$ where $h$ is the height of the tree, due to the recursive call stack."""


class Command(BaseCommand):
    help = 'Seed reference universities, departments, sample CSE courses and one sample question'

    def handle(self, *args, **options):
        try:
            with transaction.atomic():
                self._seed_universities()
                self._seed_cse_courses()
                self._seed_sample_question()
        except DatabaseError as exc:
            raise CommandError(f'Error during seeding: {exc}') from exc

        self.stdout.write(self.style.SUCCESS('\nSeeding completed!'))

    def _seed_universities(self):
        self.stdout.write('Seeding universities...')
        for name, slug, departments in UNIVERSITIES:
            university, created = University.objects.get_or_create(slug=slug, defaults={'name': name})
            added = 0
            for dept_name, dept_slug in departments:
                _, dept_created = Department.objects.get_or_create(
                    university=university,
                    slug=dept_slug,
                    defaults={'name': dept_name},
                )
                added += dept_created
            label = 'Created' if created else 'Exists'
            self.stdout.write(f'  {label}: {university.name} ({added} new departments)')

    def _seed_cse_courses(self):
        for dept in Department.objects.filter(slug='cse').select_related('university'):
            added = 0
            for code, name in CSE_COURSES:
                _, created = Course.objects.get_or_create(
                    department=dept,
                    code=code,
                    defaults={'name': name, 'slug': code.lower()},
                )
                added += created
            self.stdout.write(f'  Added {added} courses for CSE department at {dept.university.name}')

    def _seed_sample_question(self):
        course = Course.objects.filter(code='CSE135').order_by('id').first()
        if course is None:
            self.stdout.write(self.style.WARNING('  Skip: no CSE135 course for the sample question'))
            return

        question, created = Question.objects.get_or_create(
            course=course,
            year=2023,
            exam_type='Final',
            question_no=1,
            defaults={'marks': 10, 'content': SAMPLE_QUESTION},
        )
        if not created:
            self.stdout.write(f'  Skip: sample question already exists (id={question.id})')
            return

        Answer.objects.create(
            question=question,
            content=SAMPLE_ANSWER,
            source='Introduction to Algorithms by Cormen, 3rd Edition, Chapter 12',
            contributor='Prof. Dr. Mohammad Kaykobad, CSE Department',
        )
        self.stdout.write(self.style.SUCCESS(f'  Added sample question with answer to {course}'))
