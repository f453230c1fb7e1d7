"""플레이스홀더 화면 복원 모듈 — 부팅 시 표시, 종료 시 복원."""

import enum
import logging
import threading
from pathlib import Path

from framebuffer.device import FramebufferDevice
from framebuffer.snapshot import load_snapshot

logger = logging.getLogger(__name__)


class RestoreState(enum.Enum):
    IDLE = "idle"
    PRESENTING = "presenting"
    TERMINATING = "terminating"
    RESTORED = "restored"


class RestoreController:
    """저장된 스냅샷을 장치에 다시 쓰는 상태 머신.

    IDLE -> PRESENTING -> TERMINATING -> RESTORED
    """

    def __init__(self, device: FramebufferDevice, snapshot: str | Path):
        self._device = device
        self._snapshot = Path(snapshot)
        self._state = RestoreState.IDLE
        self._termination_requested = False
        self._restore_lock = threading.Lock()
        # present()에서 읽은 프레임. 종료 시 파일을 다시 읽지 않는다
        self._frame: bytes | None = None

    @property
    def state(self) -> RestoreState:
        return self._state

    @property
    def termination_requested(self) -> bool:
        return self._termination_requested

    def _write_snapshot(self) -> None:
        if self._frame is None:
            self._frame = load_snapshot(self._snapshot, expected_size=self._device.frame_size)
        self._device.write(self._frame)

    def present(self) -> None:
        """부팅 플레이스홀더를 표시한다. 스냅샷이 없으면 MissingSnapshot."""
        if self._state is not RestoreState.IDLE:
            raise RuntimeError(f"present()는 IDLE 상태에서만 가능: {self._state.value}")
        self._write_snapshot()
        self._state = RestoreState.PRESENTING
        logger.info("플레이스홀더 표시: %s", self._snapshot)

    def request_termination(self) -> bool:
        """종료 요청을 기록한다 (시그널 핸들러용). 첫 요청이면 True."""
        first = not self._termination_requested
        self._termination_requested = True
        if not first:
            logger.info("중복 종료 요청 무시")
        return first

    def terminate(self) -> bool:
        """스냅샷을 다시 써서 화면을 복원한다.

        여러 번 호출해도 같은 바이트를 다시 쓸 뿐이다. 복원이 진행 중일 때
        들어온 호출은 무시하고 False를 반환한다.
        """
        if self._state is RestoreState.IDLE:
            raise RuntimeError("표시 전에는 복원할 수 없음")
        if not self._restore_lock.acquire(blocking=False):
            logger.info("복원 진행 중, 요청 무시")
            return False
        try:
            self._state = RestoreState.TERMINATING
            self._write_snapshot()
            self._state = RestoreState.RESTORED
            logger.info("플레이스홀더 복원 완료: %s", self._snapshot)
            return True
        finally:
            self._restore_lock.release()
