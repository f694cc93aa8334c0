"""Teacher data domains and the identity that gates loading them."""

from dataclasses import dataclass
from enum import Enum


class DomainKey(str, Enum):
    """Independently cacheable teacher data resources."""

    CLASSES = "classes"
    STUDENTS = "students"
    CLASSES_WITH_STUDENTS = "classesWithStudents"
    DASHBOARD = "dashboard"
    PROFILE = "profile"

    @property
    def storage_key(self) -> str:
        return STORAGE_KEYS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


STORAGE_KEYS: dict[DomainKey, str] = {
    DomainKey.CLASSES: "teacher_classes",
    DomainKey.STUDENTS: "teacher_students",
    DomainKey.CLASSES_WITH_STUDENTS: "teacher_classes_with_students",
    DomainKey.DASHBOARD: "teacher_dashboard_data",
    DomainKey.PROFILE: "teacher_profile",
}

_LABELS: dict[DomainKey, str] = {
    DomainKey.CLASSES: "classes",
    DomainKey.STUDENTS: "students",
    DomainKey.CLASSES_WITH_STUDENTS: "classes with students",
    DomainKey.DASHBOARD: "dashboard",
    DomainKey.PROFILE: "profile",
}

# Domains backed directly by a remote endpoint
BASE_DOMAINS = (DomainKey.CLASSES, DomainKey.STUDENTS, DomainKey.DASHBOARD, DomainKey.PROFILE)


class Role(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    PARENT = "parent"


@dataclass(frozen=True)
class Identity:
    """Authentication state as seen by the data layer."""

    is_authenticated: bool = False
    role: Role | None = None

    def has_role(self, role: Role) -> bool:
        return self.is_authenticated and self.role == role


ANONYMOUS = Identity()
