"""
JSON Schema Contract Validators

Валидация plain dict-ов (конфигурация, to_contract() доменных моделей)
против JSON Schema контрактов из contracts/schema/:
- multiplier.json — один multiplier
- token_voting_record.json — последовательность multipliers токена
- voting_unit_transfer.json — результат transfer hook (amount — десятичная строка)
- voting_config.json — конфигурация движка
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match

# contracts/schema/ в корне репозитория
DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение и meta-validation схем контрактов (кэш по имени контракта)."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def contract_names(self) -> Tuple[str, ...]:
        return tuple(sorted(path.stem for path in self._schema_dir.glob("*.json")))

    def load_schema(self, contract: str) -> Dict[str, Any]:
        """
        Схема контракта по имени без расширения ('voting_config').

        Raises:
            FileNotFoundError: нет файла контракта
            ValueError: файл не является валидной Draft 2020-12 схемой
        """
        cached = self._cache.get(contract)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{contract}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as exc:
            raise ValueError(f"Contract {contract!r} is not a valid Draft 2020-12 schema: {exc.message}") from exc

        self._cache[contract] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор одного контракта; подклассы задают schema_name."""

    schema_name: str = ""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        self.schema = (loader or _SCHEMA_LOADER).load_schema(self.schema_name)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """Raises: ValidationError (первая по relevance ошибка)."""
        error = best_match(self._validator.iter_errors(data))
        if error is not None:
            raise error

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self._validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self._validator.iter_errors(data)


class MultiplierValidator(ContractValidator):
    schema_name = "multiplier"


class TokenVotingRecordValidator(ContractValidator):
    schema_name = "token_voting_record"


class VotingUnitTransferValidator(ContractValidator):
    schema_name = "voting_unit_transfer"


class VotingConfigValidator(ContractValidator):
    schema_name = "voting_config"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_multiplier(data: Dict[str, Any]) -> None:
    MultiplierValidator().validate(data)


def validate_token_voting_record(data: Dict[str, Any]) -> None:
    TokenVotingRecordValidator().validate(data)


def validate_voting_unit_transfer(data: Dict[str, Any]) -> None:
    VotingUnitTransferValidator().validate(data)


def validate_voting_config(data: Dict[str, Any]) -> None:
    """Raises: ValidationError — mapping не соответствует voting_config.json."""
    VotingConfigValidator().validate(data)


__all__ = [
    "ValidationError",
    "SchemaLoader",
    "ContractValidator",
    "MultiplierValidator",
    "TokenVotingRecordValidator",
    "VotingUnitTransferValidator",
    "VotingConfigValidator",
    "validate_multiplier",
    "validate_token_voting_record",
    "validate_voting_unit_transfer",
    "validate_voting_config",
]
