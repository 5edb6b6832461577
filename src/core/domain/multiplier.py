"""
Multiplier — Модели multipliers и записей токенов

Immutable Pydantic модель Multiplier и per-token запись TokenVotingRecord,
владеющая собственной append-only последовательностью multipliers.
"""

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, Field, field_validator

from src.core.math.compounding import compound_weight_trajectory
from src.core.math.numerical_safeguards import checked_add


# =============================================================================
# MULTIPLIER
# =============================================================================


class Multiplier(BaseModel):
    """
    Именованный процентный модификатор веса токена.

    percentage — целые проценты (20 == +20%), НЕ basis points.
    Применяется к текущему (накопленному) весу, не к исходному base.
    """

    name: str = Field(..., min_length=1, max_length=64, description="Имя multiplier (например, 'early_adopter')")
    percentage: int = Field(..., ge=0, description="Процент в целых единицах (неотрицательный)")

    model_config = {"frozen": True, "strict": True}

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Имя из одних пробелов бессмысленно в аудит-логах."""
        if not v.strip():
            raise ValueError("multiplier name must not be blank")
        return v

    def to_contract(self) -> Dict[str, Any]:
        """Представление для JSON контракта multiplier.json."""
        return {"name": self.name, "percentage": self.percentage}


# =============================================================================
# TOKEN VOTING RECORD
# =============================================================================


class TokenVotingRecord(BaseModel):
    """
    Запись токена в arena Multiplier Store.

    Владеет собственной последовательностью multipliers (insertion order).
    Публичная поверхность — только append; удаление отсутствует.
    """

    token_id: int = Field(..., ge=0, description="Идентификатор токена")
    multipliers: List[Multiplier] = Field(default_factory=list)

    def append(self, multiplier: Multiplier) -> None:
        self.multipliers.append(multiplier)

    def snapshot(self) -> Tuple[Multiplier, ...]:
        """Неизменяемая копия последовательности (Multiplier сам frozen)."""
        return tuple(self.multipliers)

    def percentages(self) -> List[int]:
        return [m.percentage for m in self.multipliers]

    def __len__(self) -> int:
        return len(self.multipliers)

    def to_contract(self) -> Dict[str, Any]:
        """Представление для JSON контракта token_voting_record.json."""
        return {
            "token_id": self.token_id,
            "multipliers": [m.to_contract() for m in self.multipliers],
        }


# =============================================================================
# WEIGHT BREAKDOWN
# =============================================================================


class WeightBreakdown(BaseModel):
    """
    Разложение веса токена для диагностики и аудита.

    trajectory[0] == base, trajectory[-1] == compounded weight
    (без attestation бонуса). final_weight == trajectory[-1] + attestation_bonus.
    """

    token_id: int = Field(..., ge=0)
    base: int = Field(..., ge=0)
    multipliers: Tuple[Multiplier, ...] = Field(default_factory=tuple)
    trajectory: Tuple[int, ...] = Field(..., min_length=1)
    attestation_bonus: int = Field(0, ge=0)
    final_weight: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @classmethod
    def build(
        cls,
        token_id: int,
        base: int,
        multipliers: Tuple[Multiplier, ...],
        attestation_bonus: int = 0,
    ) -> "WeightBreakdown":
        trajectory = compound_weight_trajectory(base, [m.percentage for m in multipliers])
        return cls(
            token_id=token_id,
            base=base,
            multipliers=multipliers,
            trajectory=tuple(trajectory),
            attestation_bonus=attestation_bonus,
            final_weight=checked_add(trajectory[-1], attestation_bonus),
        )
