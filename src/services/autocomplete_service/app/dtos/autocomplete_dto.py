from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QualitySuggestion(BaseModel):
    code: str = Field(..., min_length=1, description="Quality code as stored in the catalog.")
    aliases: list[str] = Field(
        default_factory=list,
        description="Free-text synonyms for the code; empty when the catalog has none.",
    )

    model_config = ConfigDict(from_attributes=True)

    @field_validator("aliases", mode="before")
    @classmethod
    def _null_aliases_to_empty(cls, value):
        return [] if value is None else value


class ColorSuggestion(BaseModel):
    quality_code: str = Field(..., description="Quality the color belongs to.")
    color_label: str = Field(..., description="Display label matched against the query.")
    color_code: Optional[str] = Field(
        default=None, description="Secondary catalog identifier; returned, never matched."
    )

    model_config = ConfigDict(from_attributes=True)


class AutocompleteRequest(BaseModel):
    """JSON body accepted by the POST form of both autocomplete endpoints."""

    query: Optional[str] = Field(default="", description="Text typed by the user.")
    quality: Optional[str] = Field(
        default=None, description="Optional quality code scoping a color lookup."
    )

    model_config = ConfigDict(extra="ignore")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Message of the failure that aborted the lookup.")
