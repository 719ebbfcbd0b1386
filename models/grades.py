from sqlalchemy import Column, Integer, Float, String, ForeignKey, Index
from sqlalchemy.orm import relationship
from database.db import Base

class Grade(Base):
    __tablename__ = "grades"  # 학생 1명의 학급 1개 수강 단위 성적 문서

    id = Column(Integer, primary_key=True, index=True)     # 성적 고유 ID (Primary Key)
    class_id = Column(Integer, nullable=False)             # 학급 ID (0 ~ 300)
    learner_id = Column(Integer, nullable=False)           # 학습자 ID (0 이상)

    # ✅ 점수 목록 (1:N) - 입력 순서(position) 유지
    scores = relationship(
        "GradeScore",
        back_populates="grade",
        order_by="GradeScore.position",
        cascade="all, delete-orphan",
    )

    # ✅ 조회 패턴별 인덱스 (학급 필터 / 학습자 / 학습자+학급)
    __table_args__ = (
        Index("ix_grades_class_id", "class_id"),
        Index("ix_grades_learner_id", "learner_id"),
        Index("ix_grades_learner_id_class_id", "learner_id", "class_id"),
    )


class GradeScore(Base):
    __tablename__ = "grade_scores"  # 성적 문서에 딸린 개별 점수

    id = Column(Integer, primary_key=True, index=True)
    grade_id = Column(Integer, ForeignKey("grades.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)  # 문서 내 점수 순서
    type = Column(String(30), nullable=False)              # 점수 종류 (quiz / exam / homework / 기타)
    score = Column(Float, nullable=False)                  # 점수

    grade = relationship("Grade", back_populates="scores")
