import pytest

from archive.models import Course, Department, Question, University

pytestmark = pytest.mark.django_db


class TestUniversities:

    def test_list_with_department_count(self, api_client, department):
        University.objects.create(name='Bangladesh University of Engineering & Technology', slug='buet')

        body = api_client.get('/api/admin/universities').json()

        assert [(u['slug'], u['departmentCount']) for u in body] == [('buet', 0), ('kuet', 1)]

    def test_create(self, api_client, db):
        response = api_client.post('/api/admin/universities', {'name': 'University of Dhaka', 'slug': 'du'}, format='json')
        assert response.status_code == 201
        assert response.json()['slug'] == 'du'
        assert University.objects.filter(slug='du').exists()

    def test_create_duplicate_slug(self, api_client, university):
        response = api_client.post('/api/admin/universities', {'name': 'Other', 'slug': 'kuet'}, format='json')
        assert response.status_code == 400
        assert response.json() == {'detail': 'A university with this slug already exists'}
        assert University.objects.count() == 1

    def test_partial_update(self, api_client, university):
        response = api_client.put(f'/api/admin/universities/{university.id}', {'name': 'KUET'}, format='json')
        assert response.status_code == 200
        university.refresh_from_db()
        assert (university.name, university.slug) == ('KUET', 'kuet')

    def test_update_to_taken_slug(self, api_client, university):
        other = University.objects.create(name='University of Dhaka', slug='du')
        response = api_client.put(f'/api/admin/universities/{other.id}', {'slug': 'kuet'}, format='json')
        assert response.status_code == 400

    def test_update_keeping_own_slug(self, api_client, university):
        response = api_client.put(f'/api/admin/universities/{university.id}', {'slug': 'kuet'}, format='json')
        assert response.status_code == 200

    def test_missing_is_404(self, api_client, db):
        assert api_client.put('/api/admin/universities/999', {'name': 'x'}, format='json').status_code == 404
        response = api_client.delete('/api/admin/universities/999')
        assert response.status_code == 404
        assert response.json() == {'detail': 'University not found.'}

    def test_delete_cascades(self, api_client, university, question):
        response = api_client.delete(f'/api/admin/universities/{university.id}')

        assert response.status_code == 200
        assert response.json() == {'success': True}
        assert not Department.objects.exists()
        assert not Course.objects.exists()
        assert not Question.objects.exists()


class TestDepartments:

    def test_list_includes_university_and_course_count(self, api_client, course):
        [item] = api_client.get('/api/admin/departments').json()
        assert item['university']['slug'] == 'kuet'
        assert item['courseCount'] == 1

    def test_slug_unique_within_university(self, api_client, department):
        response = api_client.post('/api/admin/departments', {
            'name': 'CSE again', 'slug': 'cse', 'universityId': department.university_id,
        }, format='json')
        assert response.status_code == 400
        assert response.json() == {'detail': 'A department with this slug already exists in this university'}

    def test_same_slug_in_other_university(self, api_client, department):
        other = University.objects.create(name='University of Dhaka', slug='du')
        response = api_client.post('/api/admin/departments', {
            'name': 'Computer Science & Engineering', 'slug': 'cse', 'universityId': other.id,
        }, format='json')
        assert response.status_code == 201
        assert response.json()['universityId'] == other.id

    def test_unknown_university(self, api_client, db):
        response = api_client.post('/api/admin/departments', {'name': 'X', 'slug': 'x', 'universityId': 42}, format='json')
        assert response.status_code == 400
        assert 'universityId' in response.json()


class TestCourses:

    def test_create_derives_slug(self, api_client, department):
        response = api_client.post('/api/admin/courses', {
            'code': 'CSE 101', 'name': 'Intro', 'departmentId': department.id, 'credits': 3, 'semester': '1-2',
        }, format='json')

        assert response.status_code == 201
        body = response.json()
        assert body['slug'] == 'cse-101'
        assert body['semester'] == 2
        assert body['department']['university']['slug'] == 'kuet'

    def test_code_unique_within_department(self, api_client, course):
        response = api_client.post('/api/admin/courses', {
            'code': 'CSE135', 'name': 'Dup', 'departmentId': course.department_id,
        }, format='json')
        assert response.status_code == 400
        assert response.json() == {'detail': 'A course with this code already exists in this department'}

    def test_list_order_and_question_count(self, api_client, department, course, question):
        Course.objects.create(code='CSE101', name='Intro', slug='cse101', department=department, semester=1)
        body = api_client.get('/api/admin/courses').json()
        assert [c['code'] for c in body] == ['CSE101', 'CSE135']
        assert body[1]['questionCount'] == 1

    def test_partial_update_and_delete(self, api_client, course, question):
        response = api_client.put(f'/api/admin/courses/{course.id}', {'name': 'DS', 'credits': 3.0}, format='json')
        assert response.status_code == 200
        assert response.json()['name'] == 'DS'
        assert response.json()['code'] == 'CSE135'

        assert api_client.delete(f'/api/admin/courses/{course.id}').json() == {'success': True}
        assert not Question.objects.exists()


class TestCourseBulkImport:

    def test_creates_course_with_derived_slug(self, api_client, department):
        response = api_client.post('/api/admin/courses/bulk', {
            'courses': [{'code': 'CSE101', 'name': 'Intro', 'departmentId': department.id}],
        }, format='json')

        assert response.status_code == 200
        assert response.json() == {'created': 1, 'failed': 0, 'errors': []}
        assert Course.objects.get(code='CSE101').slug == 'cse101'

    def test_importing_twice(self, api_client, department):
        payload = {'departmentId': department.id, 'courses': [
            {'code': 'CSE101', 'name': 'Intro'},
            {'code': 'CSE102', 'name': 'Lab'},
        ]}
        api_client.post('/api/admin/courses/bulk', payload, format='json')
        body = api_client.post('/api/admin/courses/bulk', {
            'departmentId': department.id,
            'courses': [{'code': 'CSE101', 'name': 'Intro'}, {'code': 'CSE201', 'name': 'New'}],
        }, format='json').json()

        assert (body['created'], body['failed']) == (1, 1)
        assert body['errors'] == [{'code': 'CSE101', 'error': 'Course already exists'}]

    @pytest.mark.parametrize('payload', [{}, {'courses': 'CSE101'}, {'courses': []}])
    def test_rejects_missing_or_empty_courses(self, api_client, db, payload):
        response = api_client.post('/api/admin/courses/bulk', payload, format='json')
        assert response.status_code == 400
        assert 'courses' in response.json()
        assert not Course.objects.exists()
