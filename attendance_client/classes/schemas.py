"""Classes API schemas - class rosters."""

from pydantic import AliasChoices, BaseModel, Field


class StudentSchema(BaseModel):
    """Student in a class roster."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str = "Unknown Student"
    admission_number: str | None = Field(alias="admissionNumber", default=None)
    class_id: str | None = Field(alias="classId", default=None)
    email: str = ""
    phone: str = ""
    is_active: bool = Field(alias="isActive", default=True)

    class Config:
        populate_by_name = True
        extra = "allow"
