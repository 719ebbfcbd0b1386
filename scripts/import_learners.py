import csv
import logging
from pydantic import ValidationError
from sqlalchemy.orm import Session
from database.db import SessionLocal, init_db
from models.learners import Learner as LearnerModel  # ✅ 모델 import
from schemas.learners import LearnerIn
from services.validation import validate_learner, violations_from_error

logger = logging.getLogger(__name__)

CSV_PATH = "data/learners.csv"  # ✅ 파일 경로 (컬럼: id, name, enrolled, year, avg, campus)

def _blank_to_none(row):
    return {k: (v.strip() if v and v.strip() else None) for k, v in row.items()}

def _describe(violations):
    return ", ".join(f"{v.field} - {v.message}" for v in violations)

def migrate_learners(path=CSV_PATH):
    db: Session = SessionLocal()
    count = 0

    try:
        with open(path, newline="", encoding="utf-8-sig") as csvfile:
            reader = csv.DictReader(csvfile)
            for row in reader:
                doc = _blank_to_none(row)

                # 컬럼 타입으로 변환할 수 없는 행은 저장하지 않고 경고만 남김
                try:
                    learner = LearnerIn.model_validate(doc)
                except ValidationError as e:
                    logger.warning(
                        f"학습자 CSV {reader.line_num}행 건너뜀: {_describe(violations_from_error(e))}"
                    )
                    continue

                # 규칙 위반은 경고만 남기고 그대로 저장
                violations = validate_learner(doc, strict=False)
                if violations:
                    logger.warning(f"학습자 규칙 위반: id={learner.id}, {_describe(violations)}")

                db.add(LearnerModel(**learner.model_dump()))
                count += 1

        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

    logger.info(f"✅ 학습자 CSV → DB 마이그레이션 완료 ({count}건)")
    return count

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    migrate_learners()
