from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from symptom_map.domain.geometry import RegionBox


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


class SymptomRowDto(BaseModel):
    """Row contract of the authoritative symptom source.

    Accepts ORM objects (snake_case attributes) as well as raw mappings that use
    the column captions of the imported master sheet.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    body_part: str = Field(
        default="",
        validation_alias=AliasChoices("body_part", "Part of body_and general full body symptom"),
    )
    symptoms: str = Field(default="", validation_alias=AliasChoices("symptoms", "Symptoms"))
    short_summary: str = Field(default="", validation_alias=AliasChoices("short_summary", "Short Summary"))
    probable_diagnosis: str = Field(
        default="",
        validation_alias=AliasChoices("probable_diagnosis", "Probable Diagnosis"),
    )

    @field_validator("body_part", "symptoms", "short_summary", "probable_diagnosis", mode="before")
    @classmethod
    def _normalize_text(cls, value: object) -> str:
        return _text(value)


class RegionCoordinatesDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    x_pct: float = Field(alias="xPct", ge=0.0, le=100.0)
    y_pct: float = Field(alias="yPct", ge=0.0, le=100.0)
    w_pct: float = Field(alias="wPct", ge=0.0, le=100.0)
    h_pct: float = Field(alias="hPct", ge=0.0, le=100.0)

    @classmethod
    def from_box(cls, box: RegionBox) -> RegionCoordinatesDto:
        return cls(x_pct=box.x_pct, y_pct=box.y_pct, w_pct=box.w_pct, h_pct=box.h_pct)


class SymptomRegionDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str = Field(min_length=1)
    diagnosis: str = ""
    summary: str = ""
    coordinates: RegionCoordinatesDto


class FallbackSymptomDto(BaseModel):
    id: str
    text: str


class SymptomContentDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    regions: list[SymptomRegionDto] = Field(default_factory=list)
    fallback_symptoms: list[FallbackSymptomDto] = Field(default_factory=list, alias="fallbackSymptoms")

    def is_empty(self) -> bool:
        return not self.regions and not self.fallback_symptoms
