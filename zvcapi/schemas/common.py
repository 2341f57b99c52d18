from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# BIGINT 컬럼에 저장 가능한 최대값 (id 경로 파라미터 상한)
MAX_BIGINT = 2**63 - 1


class ApiSchema(BaseModel):
    """JSON은 camelCase, 파이썬 코드에서는 snake_case"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class WagerResult(ApiSchema):
    """단발성 배팅 공통 응답 필드"""

    won: bool
    payout: int = Field(..., description="지급액 (0이면 지급 없음)")
    bet_amount: int
    net_change: int = Field(..., description="payout - bet")
    new_balance: int
    message: str = ""
