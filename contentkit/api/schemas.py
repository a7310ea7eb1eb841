from pydantic import BaseModel, Field

# Upper bound on request payloads, in characters
MAX_CONTENT_CHARS = 1_000_000


# --- Sanitize ---
class SanitizeRequest(BaseModel):
    html: str = Field(..., max_length=MAX_CONTENT_CHARS, description="Markup to sanitize")
    allowed_tags: list[str] = Field(
        default_factory=list, description="Tags to keep; empty selects the configured default"
    )


class SanitizationNoticeModel(BaseModel):
    code: str
    message: str
    path: str | None = None


class SanitizeResponse(BaseModel):
    html: str
    notices: list[SanitizationNoticeModel] = []


# --- Markdown Export ---
class ExportMarkdownRequest(BaseModel):
    html: str = Field(..., max_length=MAX_CONTENT_CHARS, description="Editor markup")


class ExportMarkdownResponse(BaseModel):
    markdown: str


# --- Markdown Import ---
class ImportMarkdownRequest(BaseModel):
    markdown: str = Field(..., max_length=MAX_CONTENT_CHARS, description="Markdown document")
    sanitize: bool = Field(default=False, description="Sanitize the converted markup")


class ImportMarkdownResponse(BaseModel):
    html: str
