import logging

from sqlalchemy import create_engine               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.declarative import declarative_base  # 모델의 Base 클래스
from sqlalchemy.orm import sessionmaker            # 세션 팩토리 함수
from sqlalchemy.pool import StaticPool

from config.settings import settings               # ✅ 환경변수 설정 파일 불러오기

logger = logging.getLogger(__name__)

# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성
#    - sqlite 메모리 DB(테스트)는 모든 세션이 같은 연결을 공유해야 함
if settings.DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        settings.DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


# ==========================================================
# [공통] DB 세션 관리
# ==========================================================
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ==========================================================
# [초기화] 테이블 / 인덱스 생성 (여러 번 호출해도 안전)
# ==========================================================
def init_db(bind=None):
    # 모델 모듈을 import 해야 Base.metadata 에 테이블이 등록됨
    from models import grades, learners  # noqa: F401

    try:
        Base.metadata.create_all(bind=bind or engine, checkfirst=True)
        logger.info("Indexes created successfully")
    except SQLAlchemyError:
        # 실패 시 기록만 남기고 계속 진행
        logger.exception("Error creating indexes")
