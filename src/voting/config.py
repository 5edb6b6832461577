"""Конфигурация движка voting power.

Frozen dataclass с дефолтами из module-level констант. from_mapping()
валидирует plain dict против JSON контракта voting_config.json.
"""

from dataclasses import dataclass
from typing import Any, Final, Mapping, Optional

from src.core.contracts import validate_voting_config
from src.core.domain.units import BASE_VOTING_POWER_DEFAULT
from src.core.domain.voting_transfer import DeltaPolicy
from src.core.math.numerical_safeguards import MAX_UINT256, validate_uint

# Дефолтная политика delta для уникальных токенов: вес перемещённого токена
DELTA_POLICY_DEFAULT: Final[DeltaPolicy] = DeltaPolicy.TOKEN_WEIGHT

# Без лимита multipliers на токен
MAX_MULTIPLIERS_PER_TOKEN_DEFAULT: Final[Optional[int]] = None

# Orphaned multipliers сожжённых токенов сохраняются
PURGE_MULTIPLIERS_ON_BURN_DEFAULT: Final[bool] = False


@dataclass(frozen=True)
class VotingConfig:
    """Конфигурация движка.

    - base_voting_power: базовый вес уникального токена (scaled int, 0.2 unit)
    - delta_policy: LITERAL (паритет) / TOKEN_WEIGHT (исправленная)
    - max_multipliers_per_token: лимит последовательности (None — без лимита)
    - purge_multipliers_on_burn: удалять запись токена при burn
    - attestation_endpoint: ссылка на внешний attestation источник (stub, вклад 0)
    """

    base_voting_power: int = BASE_VOTING_POWER_DEFAULT
    delta_policy: DeltaPolicy = DELTA_POLICY_DEFAULT
    max_multipliers_per_token: Optional[int] = MAX_MULTIPLIERS_PER_TOKEN_DEFAULT
    purge_multipliers_on_burn: bool = PURGE_MULTIPLIERS_ON_BURN_DEFAULT
    attestation_endpoint: Optional[str] = None

    def __post_init__(self):
        validate_uint(self.base_voting_power, "base_voting_power", MAX_UINT256)
        if not isinstance(self.delta_policy, DeltaPolicy):
            raise TypeError(f"delta_policy must be DeltaPolicy, got {self.delta_policy!r}")
        if self.max_multipliers_per_token is not None and self.max_multipliers_per_token < 1:
            raise ValueError(
                f"max_multipliers_per_token must be >= 1 or None, got {self.max_multipliers_per_token}"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VotingConfig":
        """
        Конфигурация из plain mapping (например, загруженного JSON/YAML).

        Raises:
            jsonschema.ValidationError: mapping не соответствует voting_config.json
        """
        raw = dict(data)
        validate_voting_config(raw)

        kwargs: dict = {}
        if "base_voting_power" in raw:
            kwargs["base_voting_power"] = int(raw["base_voting_power"])
        if "delta_policy" in raw:
            kwargs["delta_policy"] = DeltaPolicy(raw["delta_policy"])
        for key in ("max_multipliers_per_token", "purge_multipliers_on_burn", "attestation_endpoint"):
            if key in raw:
                kwargs[key] = raw[key]
        return cls(**kwargs)
