import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlmodel import Session
from urllib3.exceptions import ProtocolError

from db_utils import PASSWORD, make_engine
from school_records.configs import storage
from school_records.configs.database import get_db
from school_records.main import app


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.engine = make_engine()
        self.db = Session(self.engine)
        app.dependency_overrides[get_db] = lambda: self.db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.db.close()
        self.engine.dispose()

    def signup(self, email, role="student", **extra):
        body = dict(username=email.split("@")[0], email=email, password=PASSWORD, confirm_password=PASSWORD,
                    role=role, **extra)
        response = self.client.post("/auth/signup", json=body)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def login(self, email):
        response = self.client.post("/auth/login", json={"email": email, "password": PASSWORD})
        self.assertEqual(response.status_code, 200, response.text)
        return {"Authorization": f"Bearer {response.json()['access_token']}"}


class TestAuthApi(ApiTestCase):

    def test_signup_login_and_session(self):
        user = self.signup("teacher@school.edu", role="teacher")
        self.assertEqual(user["role"], "teacher")
        self.assertNotIn("password", user)

        headers = self.login("teacher@school.edu")
        session = self.client.get("/auth/session", headers=headers).json()
        self.assertEqual(session["state"], "authenticated_teacher")
        self.assertEqual(session["user"]["email"], "teacher@school.edu")

        me = self.client.get("/users/me", headers=headers).json()
        self.assertEqual(me["id"], user["id"])

    def test_signup_errors(self):
        self.signup("ana@school.edu")
        duplicate = self.client.post("/auth/signup", json=dict(
            username="ana", email="ana@school.edu", password=PASSWORD, confirm_password=PASSWORD))
        self.assertEqual(duplicate.status_code, 401)
        self.assertEqual(duplicate.json()["detail"], "User already registered")

        mismatch = self.client.post("/auth/signup", json=dict(
            username="ben", email="ben@school.edu", password=PASSWORD, confirm_password="nope12345"))
        self.assertEqual(mismatch.status_code, 422)

    def test_bad_credentials(self):
        self.signup("ana@school.edu")
        response = self.client.post("/auth/login", json={"email": "ana@school.edu", "password": "wrong-pass"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Invalid login credentials")

    def test_refresh(self):
        self.signup("ana@school.edu")
        tokens = self.client.post("/auth/login", json={"email": "ana@school.edu", "password": PASSWORD}).json()
        response = self.client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
        self.assertEqual(response.status_code, 200)
        self.assertIn("access_token", response.json())

    def test_requires_token(self):
        self.assertEqual(self.client.get("/students/").status_code, 401)
        response = self.client.get("/students/", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(response.status_code, 401)


class TestRecordsApi(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.signup("teacher@school.edu", role="teacher")
        self.teacher = self.login("teacher@school.edu")
        self.subject = self.client.post("/subjects/", headers=self.teacher, json={
            "name": "Algebra", "semester": "1st", "school_year": "2025-2026",
        }).json()
        response = self.client.post("/students/", headers=self.teacher, json={
            "full_name": "Ana Cruz", "student_number": "2025-0001", "email": "ana@school.edu", "password": PASSWORD,
        })
        self.assertEqual(response.status_code, 200, response.text)
        self.ana = response.json()
        self.student = self.login("ana@school.edu")

    def grades_url(self, student_id=None):
        url = f"/subjects/{self.subject['id']}/grades"
        return f"{url}/{student_id}" if student_id is not None else url

    def test_teacher_grades_flow(self):
        response = self.client.put(self.grades_url(self.ana["id"]), headers=self.teacher,
                                   json={"term": "prelim", "value": 2.0})
        self.assertEqual(response.status_code, 200, response.text)
        self.client.put(self.grades_url(self.ana["id"]), headers=self.teacher, json={"term": "midterm", "value": 3.0})

        rows = self.client.get(self.grades_url(), headers=self.teacher).json()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["student"]["student_number"], "2025-0001")
        self.assertEqual(rows[0]["cumulative"]["midterm"], 2.5)
        self.assertEqual(rows[0]["cumulative"]["status"], "Passed")

    def test_invalid_grade(self):
        invalid = (
            {"term": "prelim", "value": 5.5},
            {"term": "quiz", "value": 2.0},
            # numeric strings are not coerced
            {"term": "prelim", "value": "5.0"},
        )
        for body in invalid:
            with self.subTest(body=body):
                response = self.client.put(self.grades_url(self.ana["id"]), headers=self.teacher, json=body)
                self.assertEqual(response.status_code, 422)

    def test_enroll_with_taken_email_is_a_conflict(self):
        response = self.client.post("/students/", headers=self.teacher, json={
            "full_name": "Ana Twin", "student_number": "2025-0002", "email": "ana@school.edu", "password": PASSWORD,
        })
        self.assertEqual(response.status_code, 409)
        self.assertNotIn("www-authenticate", response.headers)
        self.assertEqual(response.json()["detail"], "User already registered")
        # the teacher is still signed in
        self.assertEqual(self.client.get("/students/", headers=self.teacher).status_code, 200)

    def test_unknown_student(self):
        response = self.client.put(self.grades_url(999), headers=self.teacher, json={"term": "prelim", "value": 2.0})
        self.assertEqual(response.status_code, 404)

    def test_attendance_flow(self):
        url = f"/subjects/{self.subject['id']}/attendance/2025-09-01"
        response = self.client.put(url, headers=self.teacher,
                                   json={"entries": [{"student_id": self.ana["id"], "status": "late"}]})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()[0]["status"], "late")

        bad = self.client.put(url, headers=self.teacher,
                              json={"entries": [{"student_id": self.ana["id"], "status": "sick"}]})
        self.assertEqual(bad.status_code, 422)
        self.assertEqual(self.client.get(url, headers=self.teacher).json()[0]["status"], "late")

    def test_student_is_forbidden_from_teacher_actions(self):
        response = self.client.put(self.grades_url(self.ana["id"]), headers=self.student,
                                   json={"term": "prelim", "value": 1.0})
        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.client.get(self.grades_url(), headers=self.student).status_code, 403)
        self.assertEqual(self.client.get("/students/", headers=self.student).status_code, 403)

    def test_student_reads_own_summary(self):
        self.client.put(self.grades_url(self.ana["id"]), headers=self.teacher, json={"term": "prelim", "value": 1.25})
        summary = self.client.get("/students/me/summary", headers=self.student).json()
        self.assertEqual(summary["student"]["id"], self.ana["id"])
        self.assertEqual(summary["grades"][0]["subject_name"], "Algebra")
        self.assertEqual(summary["grades"][0]["cumulative"]["final"], 1.25)

    def test_teacher_has_no_own_summary(self):
        response = self.client.get("/students/me/summary", headers=self.teacher)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["detail"], "Student record not found")

    @patch("school_records.configs.storage.upload_file")
    def test_photo_upload(self, mock_upload):
        response = self.client.post(f"/students/{self.ana['id']}/photo", headers=self.student,
                                    files={"file": ("me.png", b"\x89PNG", "image/png")})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertIn("/student-photos/", response.json()["photo_url"])
        mock_upload.assert_called_once()

    @patch.object(storage.client, "put_object", side_effect=ProtocolError("Connection aborted"))
    def test_photo_upload_store_down(self, mock_put):
        response = self.client.post(f"/students/{self.ana['id']}/photo", headers=self.student,
                                    files={"file": ("me.png", b"\x89PNG", "image/png")})
        self.assertEqual(response.status_code, 503)
        summary = self.client.get("/students/me/summary", headers=self.student).json()
        self.assertIsNone(summary["student"]["photo_url"])

    def test_delete_subject(self):
        url = f"/subjects/{self.subject['id']}"
        self.assertEqual(self.client.delete(url, headers=self.student).status_code, 403)
        self.assertEqual(self.client.delete(url, headers=self.teacher).status_code, 204)
        self.assertEqual(self.client.get(url, headers=self.teacher).status_code, 404)


if __name__ == '__main__':
    unittest.main()
