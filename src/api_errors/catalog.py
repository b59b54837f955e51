"""Message-catalog helpers that format error entries.

Routes use these to pre-build the entries attached to a ``BusinessError``;
the translator uses them for every other kind.
"""

from api_errors.messages import MessageKey
from api_errors.schemas.error import ErrorEntry

HTTP_400 = 400
HTTP_408 = 408
HTTP_500 = 500


class ErrorCatalog:
    """Pure formatting helpers. Holds no state, safe to share across requests."""

    def build_error(self, status: int, key: MessageKey | str, detail: str) -> ErrorEntry:
        return ErrorEntry(status=status, key=str(key), detail=detail)

    def build_400_error_list(self, key: MessageKey | str, detail: str) -> list[ErrorEntry]:
        return [self.build_error(HTTP_400, key, detail)]

    def build_500_error_list(self, key: MessageKey | str, detail: str) -> list[ErrorEntry]:
        return [self.build_error(HTTP_500, key, detail)]

    def build_408_error_list(self, key: MessageKey | str, detail: str) -> list[ErrorEntry]:
        return [self.build_error(HTTP_408, key, detail)]
