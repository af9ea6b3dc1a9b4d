"""Registration form record and the partial updates extracted from a résumé."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

EmploymentStatus = Literal["Employed", "Unemployed"]
EMPLOYMENT_STATUS_VALUES = ("Employed", "Unemployed")


def dedupe_preserving_order(items: List[str]) -> List[str]:
    """Drop repeated items, keeping the first occurrence of each."""
    return list(dict.fromkeys(items))


class FormRecord(BaseModel):
    """Full registration form state. Wire/UI names are the camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(default="", alias="firstName", description="Given name")
    middle_name: str = Field(default="", alias="middleName", description="Middle name, optional")
    last_name: str = Field(default="", alias="lastName", description="Family name")
    email: str = Field(default="", alias="email", description="Contact email")
    phone: str = Field(default="", alias="phone", description="Contact phone number")
    date_of_birth: str = Field(default="", alias="dateOfBirth", description="Date of birth as written")
    qualification: str = Field(default="", alias="qualification", description="Highest qualification")
    years_of_experience: str = Field(
        default="", alias="yearsOfExperience", description="Years of experience (e.g. '5', '2-3')"
    )
    employment_status: Literal["Employed", "Unemployed", ""] = Field(
        default="", alias="employmentStatus", description="Current employment status"
    )
    certifications: str = Field(default="", alias="certifications", description="Certifications, free text")
    skills: List[str] = Field(default_factory=list, alias="skills", description="Ordered, deduplicated skills")
    languages: str = Field(default="", alias="languages", description="Primary language")

    @field_validator("skills")
    @classmethod
    def _dedupe_skills(cls, value: List[str]) -> List[str]:
        return dedupe_preserving_order(value)


class FormUpdate(BaseModel):
    """Partial FormRecord. Only fields in ``model_fields_set`` are applied."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(default=None, alias="firstName")
    middle_name: Optional[str] = Field(default=None, alias="middleName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = Field(default=None, alias="email")
    phone: Optional[str] = Field(default=None, alias="phone")
    date_of_birth: Optional[str] = Field(default=None, alias="dateOfBirth")
    qualification: Optional[str] = Field(default=None, alias="qualification")
    years_of_experience: Optional[str] = Field(default=None, alias="yearsOfExperience")
    employment_status: Optional[EmploymentStatus] = Field(default=None, alias="employmentStatus")
    certifications: Optional[str] = Field(default=None, alias="certifications")
    skills: Optional[List[str]] = Field(default=None, alias="skills")
    languages: Optional[str] = Field(default=None, alias="languages")

    def changes(self) -> Dict[str, object]:
        """Attribute name -> value for the fields this update actually carries."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


# Wire key (e.g. "firstName") -> FormRecord attribute (e.g. "first_name")
FORM_FIELD_KEYS: Dict[str, str] = {
    field.alias or name: name for name, field in FormRecord.model_fields.items()
}
