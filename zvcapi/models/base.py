from sqlalchemy import Column, DateTime, func
from sqlalchemy.orm import declarative_base, declared_attr

Base = declarative_base()


class CreatedAtMixin:
    @declared_attr
    def created_at(cls):
        return Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class TimestampMixin(CreatedAtMixin):
    """생성/수정 시각 (상태가 바뀌는 행)"""

    @declared_attr
    def updated_at(cls):
        return Column(
            DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
        )


class BaseModel(Base, TimestampMixin):
    """계정, 게임 세션처럼 갱신되는 테이블의 베이스 클래스"""

    __abstract__ = True


class AppendOnlyModel(Base, CreatedAtMixin):
    """한 번 기록되면 수정하지 않는 테이블 (원장)"""

    __abstract__ = True
