import argparse
import csv
import logging
from pydantic import ValidationError
from sqlalchemy.orm import Session
from database.db import SessionLocal, init_db
from models.grades import Grade as GradeModel, GradeScore as GradeScoreModel  # ✅ 모델 import
from schemas.grades import GradeRecordIn, GradeScoreRow
from services.errors import MalformedRecordError
from services.validation import ensure_valid_grade_record, validate_grade_record, violations_from_error

logger = logging.getLogger(__name__)

CSV_PATH = "data/grades.csv"  # ✅ 파일 경로 (컬럼: class_id, learner_id, type, score)

def read_grade_records(path, strict=False):
    """
    점수 1개당 1행인 CSV → (class_id, learner_id) 단위 성적 문서 목록
    - 문서 순서와 문서 안 점수 순서는 파일 순서를 따름
    - 숫자로 변환할 수 없는 행은 경고 후 건너뜀 (strict 이면 MalformedRecordError)
    """
    docs = {}
    with open(path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for row in reader:
            try:
                parsed = GradeScoreRow.model_validate(row)
            except ValidationError as e:
                violations = violations_from_error(e)
                if strict:
                    raise MalformedRecordError(f"grades CSV line {reader.line_num} is malformed", violations) from e
                details = ", ".join(f"{v.field} - {v.message}" for v in violations)
                logger.warning(f"성적 CSV {reader.line_num}행 건너뜀: {details}")
                continue

            key = (parsed.class_id, parsed.learner_id)
            doc = docs.setdefault(key, {"class_id": key[0], "learner_id": key[1], "scores": []})
            doc["scores"].append({"type": parsed.type.strip(), "score": parsed.score})
    return [GradeRecordIn(**doc) for doc in docs.values()]

def migrate_grades(path=CSV_PATH, strict=False):
    records = read_grade_records(path, strict=strict)
    db: Session = SessionLocal()

    try:
        for record in records:
            doc = record.model_dump()
            if strict:
                ensure_valid_grade_record(doc)
            else:
                # 규칙 위반은 경고만 남기고 그대로 저장
                for v in validate_grade_record(doc):
                    logger.warning(
                        f"성적 규칙 위반: class_id={record.class_id}, learner_id={record.learner_id}, "
                        f"{v.field} - {v.message}"
                    )

            grade = GradeModel(
                class_id=record.class_id,                       # 학급 ID
                learner_id=record.learner_id,                   # 학습자 ID
                scores=[
                    GradeScoreModel(position=idx, type=s.type, score=s.score)
                    for idx, s in enumerate(record.scores)
                ],
            )
            db.add(grade)

        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

    logger.info(f"✅ 성적 CSV → DB 마이그레이션 완료 ({len(records)}건)")
    return len(records)

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="성적 CSV 가져오기")
    parser.add_argument("path", nargs="?", default=CSV_PATH)
    parser.add_argument("--strict", action="store_true", help="규칙 위반 레코드가 있으면 중단")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    init_db()
    migrate_grades(args.path, strict=args.strict)
