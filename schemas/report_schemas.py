"""report_schemas: 신고 관련 Pydantic 모델 모듈.

item_type과 report_type은 문자열로 받고 서비스 계층에서 검증합니다
(알 수 없는 값은 422가 아닌 400으로 응답).
"""

from pydantic import BaseModel, Field


# report.body 컬럼은 MEDIUMTEXT (utf8mb4 4바이트 문자 기준으로도 상한 길이 수용)
REPORT_BODY_MAX_LENGTH = 65536


class CreateReportRequest(BaseModel):
    """신고 생성 요청 모델."""

    report_type: str = Field(..., min_length=1, description="신고 유형 이름")
    item_id: str = Field(..., description="신고 대상 ID (base62)")
    item_type: str = Field(..., description="신고 대상 종류 (project, version, user)")
    body: str = Field(..., max_length=REPORT_BODY_MAX_LENGTH, description="신고 내용")


class EditReportRequest(BaseModel):
    """신고 수정 요청 모델. None인 필드는 변경하지 않습니다."""

    body: str | None = Field(None, max_length=REPORT_BODY_MAX_LENGTH, description="새 신고 내용")
    closed: bool | None = Field(None, description="종료 여부 (모더레이터 전용)")
