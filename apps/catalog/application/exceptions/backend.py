"""저장소/외부 소스 관련 예외."""

from catalog.application.exceptions.base import ApplicationError


class BackendExecutionError(ApplicationError):
    """저장소 쿼리 실행 실패.

    원인 드라이버 예외는 __cause__로 연결됨. 재시도하지 않음.
    """

    def __init__(self, backend: str, operation: str, detail: str | None = None) -> None:
        self.backend = backend
        self.operation = operation
        message = f"{backend} query failed during {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ExternalSourceError(ApplicationError):
    """외부 카테고리 소스 조회 실패 (캐시에 기록하지 않음)."""

    def __init__(self, source: str, region_code: str, detail: str | None = None) -> None:
        self.source = source
        self.region_code = region_code
        message = f"Category source '{source}' failed for region '{region_code}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnsupportedBackendError(ApplicationError):
    """설정된 저장소 백엔드를 지원하지 않음."""

    def __init__(self, name: str, supported: list[str]) -> None:
        super().__init__(f"Unsupported backend '{name}'. Must be one of: {supported}")
