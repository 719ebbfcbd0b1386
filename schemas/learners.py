from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional

Campus = Literal["Remote", "Boston", "New York", "Denver", "Los Angeles", "Seattle", "Dallas"]

# ✅ 가져오기(import)용 학습자 정보 - 타입만 맞으면 규칙 위반 값도 그대로 받음
class LearnerIn(BaseModel):
    id: Optional[int] = None                 # 학습자 ID (없으면 DB 자동 생성)
    name: Optional[str] = None               # 이름
    enrolled: Optional[bool] = None          # 재학 여부
    year: Optional[int] = None               # 입학 연도
    avg: Optional[float] = None              # 평균 점수
    campus: Optional[str] = None             # 캠퍼스

# ✅ 학습자 규칙 (권고용) - services/validation.py 에서 사용
class LearnerRule(BaseModel):
    name: str = Field(..., description="'name' is required, and must be a string")
    enrolled: bool = Field(..., description="'enrolled' status is required and must be a boolean")
    year: int = Field(..., ge=1995, description="'year' is required and must be an integer greater than 1995")
    avg: Optional[float] = Field(None, description="'avg' must be a double")
    campus: Campus = Field(..., description="Invalid campus location")

    model_config = ConfigDict(extra="ignore")
