"""
services/validation.py

권고용(advisory) 스키마 검증
- 규칙은 schemas/ 의 pydantic 모델(GradeRecordRule, LearnerRule)에 정의
- 위반 목록(List[Violation])만 돌려주고 저장/집계는 막지 않는다
- strict=True (기본): DB 행처럼 이미 타입이 정해진 문서 → 문자열 "12" 도 int 위반
  strict=False: CSV 처럼 문자열로 들어온 값 → 변환 가능하면 통과
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Type

from pydantic import BaseModel, ValidationError

from schemas.grades import GradeRecordRule
from schemas.learners import LearnerRule
from services.errors import MalformedRecordError


@dataclass(frozen=True)
class Violation:
    field: str
    message: str


def _field_path(loc) -> str:
    # ("scores", 1, "type") → "scores[1].type"
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def violations_from_error(exc: ValidationError) -> List[Violation]:
    return [Violation(_field_path(err["loc"]), err["msg"]) for err in exc.errors()]


def _check(model: Type[BaseModel], doc: Mapping[str, Any], strict: bool) -> List[Violation]:
    # 값이 None 인 필드는 "없음"으로 취급 → 필수 필드면 Field required
    present = {k: v for k, v in doc.items() if v is not None}
    try:
        model.model_validate(present, strict=strict)
    except ValidationError as e:
        return violations_from_error(e)
    return []


def validate_grade_record(doc: Mapping[str, Any], strict: bool = True) -> List[Violation]:
    return _check(GradeRecordRule, doc, strict)


def ensure_valid_grade_record(doc: Mapping[str, Any], strict: bool = True) -> None:
    """엄격 모드: 위반이 하나라도 있으면 MalformedRecordError"""
    violations = validate_grade_record(doc, strict=strict)
    if violations:
        raise MalformedRecordError(
            f"grade record (class_id={doc.get('class_id')}, learner_id={doc.get('learner_id')}) "
            f"has {len(violations)} violation(s)",
            violations,
        )


def validate_learner(doc: Mapping[str, Any], strict: bool = True) -> List[Violation]:
    return _check(LearnerRule, doc, strict)
