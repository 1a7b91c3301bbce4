import unittest

from joblit.database import Database
from joblit.models.application import Application
from joblit.models.job import Job
from joblit.models.user import User, UserType
from joblit.schema.user_schema import RegistrationCandidate
from joblit.services.account_service import AccountService
from joblit.services.application_service import ApplicationService
from joblit.services.job_service import JobService

PASSWORD = "pw1234"


class DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory database and services for every test."""

    def setUp(self):
        self.database = Database("sqlite://")
        self.database.create_all()
        self.accounts = AccountService(self.database)
        self.jobs = JobService(self.database)
        self.applications = ApplicationService(self.database)

    def tearDown(self):
        self.database.close()

    def seeker_candidate(self, username="alice", **overrides):
        data = {
            "username": username,
            "password": PASSWORD,
            "email": f"{username}@x.com",
            "type": UserType.SEEKER,
            "full_name": f"{username.title()} A",
            "skills": "welding, forklift",
        }
        data.update(overrides)
        return RegistrationCandidate(**data)

    def employer_candidate(self, username="acme", **overrides):
        data = {
            "username": username,
            "password": PASSWORD,
            "email": f"{username}@corp.com",
            "type": UserType.EMPLOYER,
            "company_name": username.title(),
        }
        data.update(overrides)
        return RegistrationCandidate(**data)

    def register_seeker(self, username="alice", **overrides):
        self.assertTrue(self.accounts.register(self.seeker_candidate(username, **overrides)))
        return self.accounts.authenticate(username, overrides.get("password", PASSWORD))

    def register_employer(self, username="acme", **overrides):
        self.assertTrue(self.accounts.register(self.employer_candidate(username, **overrides)))
        return self.accounts.authenticate(username, overrides.get("password", PASSWORD))

    def post_job(self, employer, title="Welder", description="Weld things", location="NYC", salary=50000):
        job = self.jobs.post_job(
            employer_id=employer.id,
            title=title,
            description=description,
            location=location,
            salary=salary,
            company_name=employer.profile.company_name,
        )
        self.assertIsNotNone(job)
        return job

    def count_rows(self, model):
        with self.database.session() as db:
            return db.query(model).count()

    def count_users(self):
        return self.count_rows(User)

    def count_jobs(self):
        return self.count_rows(Job)

    def count_applications(self):
        return self.count_rows(Application)
