from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from core.gateways.types import StandardErrorKind


class ErrorClassifier:
    """Maps a gateway's own error codes onto ``StandardErrorKind``.

    Codes are compared by their string form, so ``101`` and ``"101"`` hit the
    same entry. Unknown or missing codes classify to ``None``.
    """

    def __init__(self, table: Mapping[Any, StandardErrorKind]) -> None:
        self._table = MappingProxyType({str(code): kind for code, kind in table.items()})

    @property
    def table(self) -> Mapping[str, StandardErrorKind]:
        return self._table

    def classify(self, code: Any) -> StandardErrorKind | None:
        if code is None:
            return None
        return self._table.get(str(code).strip())
