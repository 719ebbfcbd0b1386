from fastapi import APIRouter, Depends

from dependencies.record_source import get_record_source
from services.grade_stats import (
    build_class_ratio,
    build_class_statistics,
    build_enrollment_statistics,
)
from services.record_source import RecordSource

router = APIRouter(prefix="/grades", tags=["grades"])

# ==========================================================
# [1단계] 학급 통계 (기준점 60, 가중 평균)
# ==========================================================

# ✅ [STATS] 전체 레코드 기준 학급 통계
# - 학습자 ID 기준으로 묶으므로 여러 학급 수강생은 한 명으로 집계됨
@router.get("/stats")
def get_class_stats(source: RecordSource = Depends(get_record_source)):
    stats = build_class_statistics(source.fetch_records())
    return {
        "success": True,
        "data": {
            "totalStudents": stats.total_students,
            "above60Students": stats.above_threshold,
            "ratio": stats.ratio,
            "classIds": stats.class_ids,
        }
    }

# ✅ [STATS] 특정 학급 비율
@router.get("/stats/{class_id}")
def get_class_stats_by_id(class_id: int, source: RecordSource = Depends(get_record_source)):
    ratio = build_class_ratio(source.fetch_records(class_id=class_id))
    return {"success": True, "data": {"ratio": ratio}}

# ==========================================================
# [2단계] 수강 통계 (기준점 70, 단순 평균)
# ==========================================================

# ✅ [ENROLLMENT] 전체 수강 건수 대비 70점 초과 비율 (전체 / 초과 순서 유지)
@router.get("")
def get_enrollment_stats(source: RecordSource = Depends(get_record_source)):
    stats = build_enrollment_statistics(source.fetch_records())
    return {
        "success": True,
        "data": {
            "totalLearners": stats.total_learners,
            "learnersAvgAbove70": stats.learners_above_threshold,
            "ratioOfStudentsAbove70": stats.ratio,
        }
    }
