"""
services/grade_stats.py

성적 레코드 → 통계 리포트 계산 (순수 함수 모음, DB/HTTP 의존 없음)

흐름 (단방향)
  레코드 소스 → group_scores → weighted_average → aggregate_threshold → build_* 리포트

- 가중치: 시험(exam) 0.5 / 퀴즈(quiz) 0.3 / 과제(homework) 0.2 (고정 상수)
- 기준점: 학급 통계 60점, 수강(등록) 통계 70점 (고정 상수)
- 빈 버킷 처리 규칙
  · 해당 카테고리 평균은 None (0으로 바꾸지 않음)
  · 세 평균 중 하나라도 None 이면 weighted_avg 도 None
  · weighted_avg 가 None 인 학생은 학급 집계의 total 에서 제외
"""

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Dict, Iterable, List, Optional

from services.errors import EmptyResultError

logger = logging.getLogger(__name__)


class Category(str, Enum):
    QUIZ = "quiz"
    EXAM = "exam"
    HOMEWORK = "homework"


WEIGHTS = {
    Category.EXAM: 0.5,
    Category.QUIZ: 0.3,
    Category.HOMEWORK: 0.2,
}

CLASS_PASS_THRESHOLD = 60
ENROLLMENT_PASS_THRESHOLD = 70

_CATEGORY_VALUES = {c.value for c in Category}


# ==========================================================
# [데이터 모델]
# ==========================================================

@dataclass(frozen=True)
class ScoreEntry:
    category: str                 # quiz / exam / homework (그 외 값은 미분류)
    value: float


@dataclass(frozen=True)
class GradeRecord:
    """학생 1명의 1개 학급 수강(등록) 단위 성적 문서"""
    class_id: int
    learner_id: int
    scores: List[ScoreEntry] = field(default_factory=list)


@dataclass
class StudentBuckets:
    quiz: List[float] = field(default_factory=list)
    exam: List[float] = field(default_factory=list)
    homework: List[float] = field(default_factory=list)

    def bucket(self, category: Category) -> List[float]:
        return getattr(self, category.value)

    def count(self) -> int:
        return len(self.quiz) + len(self.exam) + len(self.homework)


@dataclass(frozen=True)
class WeightedAverage:
    exam_avg: Optional[float]
    quiz_avg: Optional[float]
    homework_avg: Optional[float]
    weighted_avg: Optional[float]


@dataclass(frozen=True)
class ThresholdSummary:
    total: int
    above_threshold: int
    ratio: float


@dataclass(frozen=True)
class ClassStatistics:
    total_students: int
    above_threshold: int
    ratio: float
    class_ids: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class EnrollmentStatistics:
    total_learners: int
    learners_above_threshold: int
    ratio: float                  # total_learners / learners_above_threshold (역방향 비율)


# ==========================================================
# [1단계] 학생별 점수 그룹핑
# ==========================================================

def group_scores(records: Iterable[GradeRecord]) -> Dict[int, StudentBuckets]:
    """
    모든 레코드의 scores 를 펼쳐(learner_id, 점수) 쌍으로 만든 뒤 학생별로 묶는다.
    - learner_id 만 키로 사용 → 여러 학급을 듣는 학생은 한 줄로 합쳐짐
    - 미분류 카테고리 점수는 어떤 버킷에도 넣지 않음
    """
    grouped: Dict[int, StudentBuckets] = {}
    for record in records:
        buckets = grouped.setdefault(record.learner_id, StudentBuckets())
        for entry in record.scores:
            if entry.category not in _CATEGORY_VALUES:
                continue
            buckets.bucket(Category(entry.category)).append(entry.value)
    return grouped


# ==========================================================
# [2단계] 가중 평균
# ==========================================================

def _mean(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def weighted_average(buckets: StudentBuckets) -> WeightedAverage:
    exam_avg = _mean(buckets.exam)
    quiz_avg = _mean(buckets.quiz)
    homework_avg = _mean(buckets.homework)

    if exam_avg is None or quiz_avg is None or homework_avg is None:
        weighted = None
    else:
        weighted = (
            WEIGHTS[Category.EXAM] * exam_avg
            + WEIGHTS[Category.QUIZ] * quiz_avg
            + WEIGHTS[Category.HOMEWORK] * homework_avg
        )

    return WeightedAverage(
        exam_avg=exam_avg,
        quiz_avg=quiz_avg,
        homework_avg=homework_avg,
        weighted_avg=weighted,
    )


def flat_average(record: GradeRecord) -> Optional[float]:
    """카테고리 구분 없이 레코드의 모든 점수 평균 (점수가 없으면 None)"""
    return _mean([entry.value for entry in record.scores])


# ==========================================================
# [3단계] 기준점 집계
# ==========================================================

def aggregate_threshold(values: Iterable[Optional[float]], threshold: float) -> ThresholdSummary:
    """
    기준점 초과(>) 인원과 비율 계산
    - None 값은 분류 불가 → total 에서 제외
    - total == 0 이면 EmptyResultError
    """
    considered = [v for v in values if v is not None]
    total = len(considered)
    if total == 0:
        raise EmptyResultError("집계할 학생이 없어 비율을 계산할 수 없습니다.")

    above = sum(1 for v in considered if v > threshold)
    return ThresholdSummary(total=total, above_threshold=above, ratio=above / total)


# ==========================================================
# [4단계] 리포트 빌더
# ==========================================================

def _weighted_values(records: List[GradeRecord]) -> List[Optional[float]]:
    grouped = group_scores(records)
    return [weighted_average(b).weighted_avg for b in grouped.values()]


def build_class_statistics(records: Iterable[GradeRecord]) -> ClassStatistics:
    """전체 레코드 기준 학급 통계 (기준점 60, 학생 단위 가중 평균)"""
    records = list(records)
    summary = aggregate_threshold(_weighted_values(records), CLASS_PASS_THRESHOLD)

    class_ids: List[int] = []
    for record in records:
        if record.class_id not in class_ids:
            class_ids.append(record.class_id)

    logger.debug(
        f"학급 통계 계산 완료: total={summary.total}, above={summary.above_threshold}, "
        f"classes={len(class_ids)}"
    )
    return ClassStatistics(
        total_students=summary.total,
        above_threshold=summary.above_threshold,
        ratio=summary.ratio,
        class_ids=class_ids,
    )


def build_class_ratio(records: Iterable[GradeRecord]) -> float:
    """특정 학급 비율 (레코드는 호출 측에서 class_id 로 미리 필터링)"""
    summary = aggregate_threshold(_weighted_values(list(records)), CLASS_PASS_THRESHOLD)
    return summary.ratio


def build_enrollment_statistics(records: Iterable[GradeRecord]) -> EnrollmentStatistics:
    """
    수강(등록) 통계 (기준점 70, 레코드 단위 단순 평균)
    - total_learners: 레코드 수 (학생 중복 제거 안 함)
    - ratio: total_learners / learners_above_threshold
    """
    records = list(records)
    total = len(records)
    if total == 0:
        raise EmptyResultError("성적 레코드가 없습니다.")

    above = 0
    for record in records:
        avg = flat_average(record)
        if avg is not None and avg > ENROLLMENT_PASS_THRESHOLD:
            above += 1

    if above == 0:
        raise EmptyResultError(
            f"평균 {ENROLLMENT_PASS_THRESHOLD}점 초과 레코드가 없어 비율을 계산할 수 없습니다."
        )

    logger.debug(f"수강 통계 계산 완료: total={total}, above={above}")
    return EnrollmentStatistics(
        total_learners=total,
        learners_above_threshold=above,
        ratio=total / above,
    )
