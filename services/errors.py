"""
services/errors.py

성적 통계 계산 과정에서 발생하는 도메인 에러 모음.
- 라우터에서는 잡지 않고 그대로 올려보내며,
  middlewares/error_handler.py 에서 HTTP 응답으로 변환합니다.
"""

from typing import List, Optional


class GradeStatsError(Exception):
    """성적 통계 에러 공통 부모"""
    code = "GRADE_STATS_ERROR"


class EmptyResultError(GradeStatsError):
    """
    집계 대상이 0건이라 비율(ratio)을 정의할 수 없음
    - 예: total == 0 인 상태에서 나눗셈 시도
    - NaN / Infinity 로 흘려보내지 않고 반드시 이 에러로 알린다
    """
    code = "EMPTY_RESULT"


class SourceUnavailableError(GradeStatsError):
    """레코드 소스(DB) 조회 실패 (연결 끊김, 타임아웃 등)"""
    code = "SOURCE_UNAVAILABLE"


class MalformedRecordError(GradeStatsError):
    """
    스키마 규칙 위반 레코드 (권고용)
    - 통계 계산에서는 절대 발생시키지 않음 → 미분류 점수는 버킷에서 제외만 한다
    - 가져오기 스크립트의 --strict 모드에서만 사용
    """
    code = "MALFORMED_RECORD"

    def __init__(self, message: str, violations: Optional[List] = None):
        super().__init__(message)
        self.violations = list(violations or [])
