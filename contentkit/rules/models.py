from pydantic import BaseModel, Field, field_validator


class SanitizerRules(BaseModel):
    allowed_tags: list[str] = Field(default_factory=list)
    allowed_attributes: dict[str, list[str]] = Field(default_factory=dict)
    allowed_css_properties: list[str] = Field(default_factory=list)
    origin: str | None = None

    @field_validator("allowed_tags", "allowed_css_properties")
    @classmethod
    def _lowercase(cls, values: list[str]) -> list[str]:
        return [v.strip().lower() for v in values if v.strip()]

    @field_validator("allowed_attributes")
    @classmethod
    def _lowercase_attrs(cls, values: dict[str, list[str]]) -> dict[str, list[str]]:
        return {tag.lower(): [a.lower() for a in attrs] for tag, attrs in values.items()}


class MarkupRules(BaseModel):
    max_depth: int = Field(default=200, ge=1, le=250)


class ContentRules(BaseModel):
    rules_version: str
    sanitizer: SanitizerRules = Field(default_factory=SanitizerRules)
    markup: MarkupRules = Field(default_factory=MarkupRules)
