"""
Seed database with demo data
Run: python -m joblit.seed_data
"""

import logging

from joblit.database import Database
from joblit.models.user import UserType
from joblit.schema.user_schema import RegistrationCandidate
from joblit.services.account_service import AccountService
from joblit.services.application_service import ApplicationService
from joblit.services.job_service import JobService

logger = logging.getLogger(__name__)

EMPLOYERS = [
    {"username": "acme", "email": "hr@acme-mfg.com", "company_name": "Acme Manufacturing"},
    {"username": "northwind", "email": "jobs@northwind-traders.com", "company_name": "Northwind Traders"},
]

SEEKERS = [
    {
        "username": "alice",
        "email": "alice.archer@mailbox.org",
        "full_name": "Alice Archer",
        "skills": "welding, blueprint reading, forklift",
        "resume_info": "Six years of MIG and TIG welding in structural steel.",
    },
    {
        "username": "bob",
        "email": "bob.brewer@mailbox.org",
        "full_name": "Bob Brewer",
        "skills": "python, sql, excel",
        "resume_info": "Data analyst, previously in logistics.",
    },
]

JOBS = [
    ("acme", "Welder", "MIG/TIG welding on the structural line", "New York, NY", 52000),
    ("acme", "Maintenance Technician", "Keep the presses running, night shift", "Newark, NJ", 48000),
    ("northwind", "Data Analyst", "Build weekly sales reports in SQL", "Remote", 65000),
    ("northwind", "Warehouse Associate", "Picking and packing, forklift a plus", "Seattle, WA", None),
]

DEMO_PASSWORD = "pw1234"


def seed_database(database: Database) -> None:
    accounts = AccountService(database)
    jobs = JobService(database)
    applications = ApplicationService(database)

    database.create_all()

    for data in EMPLOYERS:
        accounts.register(RegistrationCandidate(password=DEMO_PASSWORD, type=UserType.EMPLOYER, **data))
    for data in SEEKERS:
        accounts.register(RegistrationCandidate(password=DEMO_PASSWORD, type=UserType.SEEKER, **data))

    users = {
        data["username"]: accounts.authenticate(data["username"], DEMO_PASSWORD)
        for data in EMPLOYERS + SEEKERS
    }
    if not all(users.values()):
        logger.error("Demo accounts could not be loaded, is the database already seeded with other passwords?")
        return

    posted = []
    for owner, title, description, location, salary in JOBS:
        employer = users[owner]
        job = jobs.post_job(
            employer_id=employer.id,
            title=title,
            description=description,
            location=location,
            salary=salary,
            company_name=employer.profile.company_name,
        )
        if job:
            posted.append(job)

    # alice goes for the welding jobs, bob for everything at northwind
    for job in posted:
        if job.employer_id == users["acme"].id:
            applications.apply(users["alice"].id, job.id)
        else:
            applications.apply(users["bob"].id, job.id)

    logger.info(
        "Seeded %d employers, %d seekers and %d jobs (password for all: %s)",
        len(EMPLOYERS), len(SEEKERS), len(posted), DEMO_PASSWORD
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    database = Database()
    try:
        seed_database(database)
    finally:
        database.close()
