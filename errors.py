"""스냅샷 파이프라인 예외 모듈."""


class FrameError(Exception):
    """파이프라인 예외의 공통 부모."""


class InvalidInput(FrameError):
    """크기가 0인 이미지, 누락된 인자 등 잘못된 입력."""


class OutOfBounds(FrameError):
    """오버레이가 대상 이미지 범위를 벗어남."""


class GeometryMismatch(FrameError):
    """바이트 길이나 크기가 장치/대상 geometry와 다름."""


class ExternalToolFailure(FrameError):
    """외부 도구(fbi 등)가 실패 상태를 반환함."""


class MissingSnapshot(FrameError):
    """복원 시점에 스냅샷 파일이 없음."""


class SnapshotCorrupt(FrameError):
    """스냅샷 압축 스트림이 손상됨."""


class ArtifactWriteFailure(FrameError):
    """산출물(마스크, 중간 이미지)을 최종 위치에 쓰지 못함."""
