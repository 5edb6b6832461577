"""Multiplier Store — per-token append-only последовательности multipliers.

Arena записей TokenVotingRecord, индексированная token id. Каждая запись
владеет собственной последовательностью; read() отдаёт неизменяемую копию.

Авторизация attach — через predicate host ledger (owner или approved).
"""

import copy
import logging
from typing import Dict, Optional, Tuple

from src.core.errors import MultiplierLimitExceeded, Unauthorized
from src.core.domain.multiplier import Multiplier, TokenVotingRecord
from src.ledger.interfaces import Account, OwnershipAuthority

logger = logging.getLogger(__name__)


class MultiplierStore:
    """Хранилище multipliers по token id."""

    def __init__(
        self,
        authority: OwnershipAuthority,
        max_multipliers_per_token: Optional[int] = None,
    ):
        self._authority = authority
        self._max_per_token = max_multipliers_per_token
        self._records: Dict[int, TokenVotingRecord] = {}

    def attach(self, caller: Account, token_id: int, name: str, percentage: int) -> Multiplier:
        """
        Добавление multiplier в конец последовательности токена.

        Все проверки выполняются до изменения состояния.

        Raises:
            Unauthorized: caller не owner и не approved для token_id
            MultiplierLimitExceeded: достигнут сконфигурированный лимит
            pydantic.ValidationError: невалидные name/percentage
        """
        if not self._authority.is_approved_or_owner(caller, token_id):
            logger.warning("attach rejected: caller=%s token=%s", caller, token_id)
            raise Unauthorized(caller, token_id)

        multiplier = Multiplier(name=name, percentage=percentage)

        record = self._records.get(token_id)
        current = len(record) if record is not None else 0
        if self._max_per_token is not None and current >= self._max_per_token:
            raise MultiplierLimitExceeded(token_id, self._max_per_token)

        if record is None:
            record = TokenVotingRecord(token_id=token_id)
            self._records[token_id] = record
        record.append(multiplier)

        logger.info(
            "multiplier attached: token=%s name=%s pct=%s (#%s) by=%s",
            token_id, name, percentage, len(record), caller,
        )
        return multiplier

    def read(self, token_id: int) -> Tuple[Multiplier, ...]:
        """Полная упорядоченная последовательность; unknown token → ()."""
        record = self._records.get(token_id)
        return record.snapshot() if record is not None else ()

    def record(self, token_id: int) -> Optional[TokenVotingRecord]:
        """Копия записи токена (для контрактов/аудита) либо None."""
        record = self._records.get(token_id)
        return record.model_copy(deep=True) if record is not None else None

    def multiplier_count(self, token_id: int) -> int:
        record = self._records.get(token_id)
        return len(record) if record is not None else 0

    def known_token_ids(self) -> Tuple[int, ...]:
        return tuple(sorted(self._records))

    def purge(self, token_id: int) -> int:
        """
        Удаление записи токена. Вызывается только burn transition-ом
        при purge_multipliers_on_burn=True.

        Returns:
            Количество удалённых multipliers
        """
        record = self._records.pop(token_id, None)
        removed = len(record) if record is not None else 0
        if removed:
            logger.info("multipliers purged on burn: token=%s count=%s", token_id, removed)
        return removed

    def snapshot(self) -> dict:
        return {"records": copy.deepcopy(self._records)}

    def restore(self, state: dict) -> None:
        self._records = copy.deepcopy(state["records"])
