"""
VotingUnitTransfer — Результат transfer hook

Явное значение вместо emitted event: transfer hook возвращает, сколько
voting units перемещено от from_account к to_account, а orchestrator
решает, что с этим делать (лог, аудит, контракт).

None в from_account — mint, None в to_account — burn.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class DeltaPolicy(str, Enum):
    """
    Политика вычисления delta для уникальных токенов.

    LITERAL: delta = пересчитанные (после transfer) voting units предыдущего
             owner целиком. Паритет с исходным поведением; корректно только
             когда у owner ровно один токен или все токены одного веса.
    TOKEN_WEIGHT: delta = вес перемещённого токена
                  (old_units(from) - new_units(from)).
    """

    LITERAL = "literal"
    TOKEN_WEIGHT = "token_weight"


class TransferKind(str, Enum):
    MINT = "mint"
    BURN = "burn"
    TRANSFER = "transfer"


# =============================================================================
# TRANSFER RESULT
# =============================================================================


class VotingUnitTransfer(BaseModel):
    """Перемещение voting units, переданное в Vote Ledger."""

    from_account: Optional[str] = Field(None, description="Источник (None — mint)")
    to_account: Optional[str] = Field(None, description="Получатель (None — burn)")
    amount: int = Field(..., ge=0, description="Scaled voting units")

    # Ровно одно из двух: уникальный токен или класс fungible токена
    token_id: Optional[int] = Field(None, ge=0)
    token_class_id: Optional[int] = Field(None, ge=0)

    policy: Optional[DeltaPolicy] = Field(None, description="Только для уникальных токенов")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_subject(self) -> "VotingUnitTransfer":
        if (self.token_id is None) == (self.token_class_id is None):
            raise ValueError("exactly one of token_id / token_class_id must be set")
        if self.from_account is None and self.to_account is None:
            raise ValueError("mint and burn at the same time (both accounts are null)")
        return self

    @property
    def kind(self) -> TransferKind:
        if self.from_account is None:
            return TransferKind.MINT
        if self.to_account is None:
            return TransferKind.BURN
        return TransferKind.TRANSFER

    def to_contract(self) -> Dict[str, Any]:
        """Представление для JSON контракта voting_unit_transfer.json."""
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "from_account": self.from_account,
            "to_account": self.to_account,
            "amount": str(self.amount),
        }
        if self.token_id is not None:
            data["token_id"] = self.token_id
        if self.token_class_id is not None:
            data["token_class_id"] = self.token_class_id
        if self.policy is not None:
            data["policy"] = self.policy.value
        return data
