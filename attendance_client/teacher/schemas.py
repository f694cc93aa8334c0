"""Teacher API schemas - assigned classes."""

from pydantic import AliasChoices, BaseModel, Field


class ClassSchema(BaseModel):
    """Class assigned to the signed-in teacher."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    grade: str | None = None
    section: str | None = None
    subject: str | None = None
    student_count: int = Field(alias="studentCount", default=0)
    student_ids: list[str] = Field(alias="studentIds", default_factory=list)
    teacher_ids: list[str] = Field(alias="teacherIds", default_factory=list)
    school_id: str | None = Field(alias="schoolId", default=None)

    class Config:
        populate_by_name = True
        extra = "allow"
