from fastapi import APIRouter, Depends

from dependencies.record_source import get_record_source
from services.record_source import RecordSource

router = APIRouter(tags=["learners"])

# ✅ [READ] 학습자 규칙(이름/재학 여부/입학 연도/캠퍼스)을 만족하지 않는 행 목록
@router.get("/")
def list_non_conforming_learners(source: RecordSource = Depends(get_record_source)):
    learners = source.find_non_conforming_learners()
    return {"success": True, "data": learners}
