from pydantic import BaseModel, ConfigDict, Field, field_validator


class PresignRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    bucket: str = ""
    folder: str = ""
    key: str = ""
    days: int = 0
    hours: int = 0
    minutes: int = 0

    @field_validator("bucket", "folder", "key", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("days", "hours", "minutes", mode="before")
    @classmethod
    def _null_as_zero(cls, value):
        return 0 if value is None else value


class PresignResponse(BaseModel):
    url: str
    object: str
    bucket: str
    expires_in: str = Field(..., description="Composite mc duration, e.g. 2d3h15m")


class ErrorResponse(BaseModel):
    error: str
