"""thread_schemas: 스레드 관련 Pydantic 모델 모듈."""

from pydantic import BaseModel, Field, field_validator


class SendMessageRequest(BaseModel):
    """스레드 메시지 작성 요청 모델."""

    body: str = Field(..., max_length=65536, description="메시지 내용")

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("메시지 내용이 비어 있습니다.")
        return v
