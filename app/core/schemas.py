from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional


SkillLevel = Literal["beginner", "intermediate", "advanced", "expert"]


class PortfolioModel(BaseModel):
    """Base for every portfolio record: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WorkExperience(PortfolioModel):
    id: str = ""  # exp_<n>
    company: str = ""
    position: str = ""
    start_date: str = ""  # free-form, e.g. "March 2020"
    end_date: str = ""  # empty when current
    current: bool = False
    description: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    website: Optional[str] = None


class Education(PortfolioModel):
    id: str = ""  # edu_<n>
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""
    honors: List[str] = Field(default_factory=list)
    coursework: List[str] = Field(default_factory=list)
    website: Optional[str] = None


class Skill(PortfolioModel):
    name: str
    category: str = "technical"  # slug of the label before the colon
    display_category: str = ""  # label as written in the resume
    level: Optional[SkillLevel] = None


class Project(PortfolioModel):
    id: str = ""
    name: str = ""
    description: str = ""
    technologies: List[str] = Field(default_factory=list)
    url: Optional[str] = None
    github: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class PersonalInfo(PortfolioModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""
    website: str = ""
    summary: str = ""
    profile_photo: Optional[str] = None


class ParsedResume(PortfolioModel):
    """Output of the extraction engine. Sequence fields are always present."""
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    work_experience: List[WorkExperience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)


class Portfolio(ParsedResume):
    last_updated: str = Field(..., description="ISO-8601 UTC timestamp of the last merge")
