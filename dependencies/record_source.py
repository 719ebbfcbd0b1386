from fastapi import Depends
from sqlalchemy.orm import Session

from database.db import get_db
from services.record_source import SqlRecordSource

# ✅ 요청마다 새 세션으로 레코드 소스 생성 (요청 간 상태 공유 없음)
def get_record_source(db: Session = Depends(get_db)) -> SqlRecordSource:
    return SqlRecordSource(db)
