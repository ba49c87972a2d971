from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    """Authenticated actor for the duration of one request."""
    subject_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
