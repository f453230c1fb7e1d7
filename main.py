"""디스플레이 서비스 — 부팅 플레이스홀더 표시, 뷰어 실행, 종료 시 화면 복원."""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

from config import load_config
from errors import FrameError
from framebuffer.device import FramebufferDevice
from restore import RestoreController

logger = logging.getLogger("service")


async def _stop_viewer(viewer: asyncio.subprocess.Process, timeout: float) -> None:
    """뷰어에 SIGTERM을 보내고 timeout 안에 끝나지 않으면 강제 종료한다."""
    if viewer.returncode is not None:
        return
    try:
        viewer.terminate()
    except ProcessLookupError:
        # 같은 프로세스 그룹 시그널로 이미 종료됨
        await viewer.wait()
        return
    try:
        await asyncio.wait_for(viewer.wait(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("뷰어가 %ss 안에 종료되지 않아 강제 종료", timeout)
        viewer.kill()
        await viewer.wait()


async def run_service(config: dict, stop: asyncio.Event | None = None) -> int:
    """서비스를 실행하고 종료 코드를 반환한다.

    시그널로 멈추면 0, 뷰어가 스스로 끝나면 뷰어의 종료 코드를 반환한다.
    어느 경우든 마지막에 플레이스홀더를 한 번 복원한다.
    """
    service_cfg = config["service"]
    device = FramebufferDevice.from_config(config["framebuffer"], config["display"])
    controller = RestoreController(device, service_cfg["snapshot"])

    # 스냅샷이 없으면 여기서 MissingSnapshot으로 중단
    controller.present()

    loop = asyncio.get_running_loop()
    stop = stop or asyncio.Event()

    def _on_signal(signum: int) -> None:
        logger.info("종료 시그널 수신: %s", signal.Signals(signum).name)
        controller.request_termination()
        stop.set()

    handled = (signal.SIGTERM, signal.SIGINT)
    for sig in handled:
        loop.add_signal_handler(sig, _on_signal, sig)

    try:
        cmd = list(service_cfg.get("viewer_command") or [])
        if service_cfg.get("viewer_config"):
            cmd.append(str(service_cfg["viewer_config"]))

        if not cmd:
            logger.info("뷰어 없음, 종료 시그널 대기")
            await stop.wait()
            exit_code = 0
        else:
            logger.info("뷰어 실행: %s", " ".join(cmd))
            viewer = await asyncio.create_subprocess_exec(*cmd)
            viewer_done = asyncio.create_task(viewer.wait())
            stop_requested = asyncio.create_task(stop.wait())
            await asyncio.wait(
                {viewer_done, stop_requested}, return_when=asyncio.FIRST_COMPLETED,
            )
            stop_requested.cancel()
            # 그룹 시그널이면 뷰어도 같이 죽으므로 어느 쪽이 먼저 끝났는지가 아니라
            # 종료 요청 여부로 판단한다
            if stop.is_set() or controller.termination_requested:
                await _stop_viewer(viewer, service_cfg.get("stop_timeout_sec", 5))
                exit_code = 0
            else:
                exit_code = viewer.returncode
                if exit_code < 0:
                    # 시그널로 죽은 경우 셸 관례(128 + 시그널 번호)를 따른다
                    exit_code = 128 - exit_code
                logger.warning("뷰어 종료 (exit %d)", exit_code)

        # 뷰어가 멈춘 뒤 마지막으로 쓰므로 복원이 항상 이긴다
        controller.terminate()
        return exit_code
    finally:
        for sig in handled:
            loop.remove_signal_handler(sig)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="프레임버퍼 디스플레이 서비스")
    parser.add_argument("--config", type=Path, default=None, help="설정 파일 (JSON)")
    parser.add_argument("-v", "--verbose", action="store_true", help="디버그 로그 출력")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(message)s",
    )

    try:
        return asyncio.run(run_service(load_config(args.config)))
    except FrameError as e:
        logger.error("서비스 실패: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
