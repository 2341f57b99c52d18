from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class WagerOutcome:
    """단일 배팅 결과 (응답에만 쓰이고 저장되지 않음)

    payout은 정산 시점에 한 번만 계산되며, details의 값으로 다시 계산하지 않습니다.
    """

    won: bool
    payout: int
    details: Dict[str, Any] = field(default_factory=dict)
