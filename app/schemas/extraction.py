from pydantic import BaseModel, ConfigDict


class NormalizedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    text: str


class PhoneMatch(BaseModel):
    number: str  # canonical "+<cc> <groups>"
    country: str  # HU, SK, CZ or EU member code


class PhoneBreakdown(BaseModel):
    all: list[PhoneMatch] = []
    hu: list[PhoneMatch] = []
    sk: list[PhoneMatch] = []
    cz: list[PhoneMatch] = []
    eu: list[PhoneMatch] = []


class Link(BaseModel):
    text: str
    url: str


class ScoredLink(BaseModel):
    link: Link
    score: int
    reasons: list[str] = []
