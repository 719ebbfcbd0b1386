from pydantic import BaseModel, Field
from typing import List, Literal

ScoreType = Literal["quiz", "exam", "homework"]

# ==========================================================
# [저장용] 타입만 맞으면 그대로 받는 모델
# ==========================================================

# ✅ 개별 점수 (type 은 quiz / exam / homework 외 값도 허용 → 집계에서만 제외)
class ScoreIn(BaseModel):
    type: str                                # 점수 종류
    score: float                             # 점수

# ✅ 가져오기(import)용 성적 문서
class GradeRecordIn(BaseModel):
    class_id: int                            # 학급 ID
    learner_id: int                          # 학습자 ID
    scores: List[ScoreIn] = []               # 점수 목록 (입력 순서 유지)

# ✅ CSV 1행 = 점수 1개
class GradeScoreRow(BaseModel):
    class_id: int
    learner_id: int
    type: str
    score: float

# ==========================================================
# [규칙] 권고용 검증 기준 (services/validation.py 에서 사용)
# ==========================================================

class ScoreRule(BaseModel):
    type: ScoreType = Field(..., description="점수 종류 (quiz / exam / homework)")
    score: float = Field(..., description="점수")

class GradeRecordRule(BaseModel):
    class_id: int = Field(..., ge=0, le=300, description="class_id must be an integer between 0 and 300")
    learner_id: int = Field(..., ge=0, description="learner_id must be an integer greater than or equal to 0")
    scores: List[ScoreRule] = []
