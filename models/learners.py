from sqlalchemy import Column, Integer, Float, String, Boolean
from database.db import Base

class Learner(Base):
    __tablename__ = "learners"  # 학습자 기본 정보 (규칙 위반 행도 저장 가능하도록 전부 nullable)

    id = Column(Integer, primary_key=True, index=True)     # 학습자 고유 ID
    name = Column(String(100))                             # 이름
    enrolled = Column(Boolean)                             # 재학 여부
    year = Column(Integer)                                 # 입학 연도 (1995 이상)
    avg = Column(Float)                                    # 평균 점수 (선택)
    campus = Column(String(50))                            # 캠퍼스 (Remote, Boston, ...)
