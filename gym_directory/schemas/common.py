# gym_directory/schemas/common.py
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    detail: str = Field(description="エラーメッセージ")

    model_config = {"json_schema_extra": {"examples": [{"detail": "gym not found"}]}}


class ValidationErrorResponse(ErrorResponse):
    messages: list[str] = Field(default_factory=list, description="違反したフィールドごとのメッセージ")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "detail": "Validation Error",
                    "messages": ["name: String should have at least 2 characters"],
                }
            ]
        }
    }


class OkResponse(BaseModel):
    ok: bool = Field(description="成功可否（true 固定）")

    model_config = {"json_schema_extra": {"examples": [{"ok": True}]}}


class ReadyResponse(OkResponse):
    backend: str = Field(description="稼働中のストア（sql / memory）")
