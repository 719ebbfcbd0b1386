"""
services/record_source.py

통계 계산에 필요한 성적 레코드를 읽어오는 레코드 소스
- 읽기 전용 (쓰기 없음)
- DB 예외는 SourceUnavailableError 로 감싸서 올려보냄
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from models.grades import Grade as GradeModel
from models.learners import Learner as LearnerModel
from services.errors import SourceUnavailableError
from services.grade_stats import GradeRecord, ScoreEntry
from services.validation import validate_learner

logger = logging.getLogger(__name__)


class RecordSource(Protocol):
    def fetch_records(self, class_id: Optional[int] = None) -> List[GradeRecord]:
        ...

    def find_non_conforming_learners(self) -> List[Dict[str, Any]]:
        ...


def _to_record(grade: GradeModel) -> GradeRecord:
    return GradeRecord(
        class_id=grade.class_id,
        learner_id=grade.learner_id,
        scores=[ScoreEntry(category=s.type, value=s.score) for s in grade.scores],
    )


def _learner_to_dict(learner: LearnerModel) -> Dict[str, Any]:
    return {
        "id": learner.id,
        "name": learner.name,
        "enrolled": learner.enrolled,
        "year": learner.year,
        "avg": learner.avg,
        "campus": learner.campus,
    }


class SqlRecordSource:
    def __init__(self, db: Session):
        self.db = db

    def fetch_records(self, class_id: Optional[int] = None) -> List[GradeRecord]:
        """class_id 가 주어지면 해당 학급 레코드만 조회"""
        try:
            query = self.db.query(GradeModel).options(selectinload(GradeModel.scores))
            if class_id is not None:
                query = query.filter(GradeModel.class_id == class_id)
            grades = query.order_by(GradeModel.id).all()
        except SQLAlchemyError as e:
            logger.error(f"성적 레코드 조회 실패: class_id={class_id}, error={e}")
            raise SourceUnavailableError("grade records could not be fetched") from e

        return [_to_record(g) for g in grades]

    def find_non_conforming_learners(self) -> List[Dict[str, Any]]:
        """학습자 규칙을 만족하지 않는 행 목록 (위반 내역 포함)"""
        try:
            learners = self.db.query(LearnerModel).order_by(LearnerModel.id).all()
        except SQLAlchemyError as e:
            logger.error(f"학습자 조회 실패: {e}")
            raise SourceUnavailableError("learners could not be fetched") from e

        result = []
        for learner in learners:
            doc = _learner_to_dict(learner)
            violations = validate_learner(doc)
            if violations:
                doc["violations"] = [{"field": v.field, "message": v.message} for v in violations]
                result.append(doc)
        return result
