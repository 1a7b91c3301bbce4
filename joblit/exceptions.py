class JobLitError(Exception):
    """Base class for errors raised by the JobLit data layer."""


class InvalidInputError(JobLitError, ValueError):
    """Input rejected before anything was written."""


class DuplicateUserError(JobLitError, ValueError):
    """Username or email already belongs to another account."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"That {field} is already taken")


class AlreadyAppliedError(JobLitError, ValueError):
    def __init__(self, seeker_id: int, job_id: int):
        self.seeker_id = seeker_id
        self.job_id = job_id
        super().__init__(f"User {seeker_id} has already applied for job {job_id}")
