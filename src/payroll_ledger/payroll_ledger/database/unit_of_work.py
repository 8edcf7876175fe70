from __future__ import annotations

from typing import Any, ContextManager, Protocol


class TransactionManager(Protocol):
    """Anything that can group repository writes into one atomic unit.

    Implemented by ``DatabaseConnection`` (MySQL) and ``InMemoryStore``.
    """

    def transaction(self) -> ContextManager[Any]:
        raise NotImplementedError
