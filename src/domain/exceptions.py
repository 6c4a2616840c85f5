"""도메인 레이어 예외 정의."""


class DomainError(Exception):
    """도메인 레이어 최상위 예외."""


class CollectionError(DomainError):
    """수집 중 발생한 오류."""


class LoginWallError(CollectionError):
    """프로필/게시물 페이지가 로그인 화면으로 막혔을 때."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"{username}: 로그인 화면이 표시되었습니다. 수동 로그인이 필요합니다.")


class ProcessingError(DomainError):
    """비전 모델 호출이 재시도 끝에 실패했을 때."""


class AnalysisError(DomainError):
    """콜라주 생성 등 프로필 분석 준비 단계의 오류."""


class ExportFormatError(DomainError):
    """팔로워 내보내기 파일을 해석할 수 없을 때."""
