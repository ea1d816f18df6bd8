"""WebRTC 통화 시그널링 WebSocket 라우터.

클라이언트마다 하나의 WebSocket 연결을 유지하며, 핸드셰이크 시 쿼리
파라미터 uid로 사용자를 식별합니다.

연결 생명주기:
    1. 수락 → 연결 핸들 생성, 연결 집합에 추가, writer 태스크 시작
    2. uid가 있으면 레지스트리에 등록 (접속자 목록 브로드캐스트)
    3. 수신 프레임 {"type", "data"}를 시그널링 라우터로 전달
    4. 종료 → 연결 집합에서 제거, 동일 핸들일 때만 등록 해제, writer 정지
       (클라이언트가 끊거나 writer가 전송에 실패하면 종료)

처리하는 메시지 타입:
    - callUser: {userToCall, signalData, from, name}
    - acceptCall: {to, signal}
    - declineCall: {to}
    - iceCandidate: {to, candidate}
    - endCall: {to}
"""

import asyncio
import json
import logging
from contextlib import suppress
from typing import Optional

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from talksync import ClientConnection

from .deps import (
    get_app_settings,
    get_broadcaster,
    get_hub,
    get_registry,
    get_signaling_router,
    verify_ws_token,
)

logger = logging.getLogger(__name__)


def parse_frame(raw: Optional[str]) -> Optional[dict]:
    """수신한 텍스트 프레임을 {"type", "data"} dict로 변환합니다.

    JSON이 아니거나 object가 아니거나 type이 문자열이 아니면 None을 반환합니다.
    """
    if raw is None:
        return None
    try:
        frame = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(frame, dict) or not isinstance(frame.get("type"), str):
        return None
    return frame


async def receive_frames(websocket: WebSocket, connection: ClientConnection, signaling_router) -> None:
    """연결이 끊길 때까지 수신 프레임을 시그널링 라우터로 전달합니다.

    Raises:
        WebSocketDisconnect: 클라이언트가 연결을 끊은 경우
    """
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(message.get("code", 1000))

        frame = parse_frame(message.get("text"))
        if frame is None:
            logger.warning(f"잘못된 프레임 무시 - {connection!r}")
            continue

        signaling_router.dispatch(frame["type"], frame.get("data"), sender=connection)


async def websocket_endpoint(
    websocket: WebSocket,
    uid: Optional[str] = Query(None),
    token: Optional[str] = Query(None),
):
    """통화 시그널링과 접속자 알림을 위한 WebSocket 엔드포인트.

    수신 루프와 writer 태스크 중 먼저 끝나는 쪽이 연결을 종료합니다.
    writer가 먼저 끝나면 소켓을 닫고(전송 실패 1011, 서버 종료 1001)
    등록을 해제합니다.

    Args:
        websocket: FastAPI WebSocket 연결 객체
        uid: 사용자 ID (쿼리 파라미터, 없으면 익명 연결)
        token: 인증 토큰 (쿼리 파라미터)
    """
    settings = get_app_settings(websocket)

    # 연결 수락 전 토큰 검증
    if not verify_ws_token(token, settings.ACCESS_PASSWORD):
        await websocket.close(code=4001, reason="Unauthorized")
        return

    await websocket.accept()

    hub = get_hub(websocket)
    registry = get_registry(websocket)
    broadcaster = get_broadcaster(websocket)
    signaling_router = get_signaling_router(websocket)

    user_id = (uid or "").strip() or None
    connection = ClientConnection(
        websocket,
        user_id=user_id,
        max_queue=settings.OUTBOX_MAX_SIZE,
        send_timeout=settings.SEND_TIMEOUT_SECONDS,
    )
    writer = asyncio.create_task(connection.run_writer())

    hub.add(connection)
    logger.info(f"연결 수립 - {connection!r}, 전체 연결 {len(hub)}개")

    if user_id:
        registry.register(user_id, connection)
    else:
        broadcaster.announce(registry.snapshot())

    receiver = asyncio.create_task(receive_frames(websocket, connection, signaling_router))
    try:
        done, _ = await asyncio.wait({receiver, writer}, return_when=asyncio.FIRST_COMPLETED)

        if receiver in done:
            receiver.result()
        else:
            if writer.result():
                logger.info(f"서버 측 연결 종료 - {connection!r}")
                close_code = 1001
            else:
                logger.warning(f"전송 실패로 연결 종료 - {connection!r}")
                close_code = 1011
            try:
                await websocket.close(code=close_code)
            except Exception as e:
                logger.debug(f"{connection!r} 소켓 닫기 실패: {e}")

    except WebSocketDisconnect:
        logger.info(f"연결 끊김 - {connection!r}")
    except Exception as e:
        logger.error(f"{connection!r}의 WebSocket 연결 중 오류: {e}")
    finally:
        hub.discard(connection)
        if user_id:
            registry.unregister(user_id, connection)
        else:
            broadcaster.announce(registry.snapshot())

        if connection.pending:
            logger.info(f"미전송 프레임 {connection.pending}개 폐기 - {connection!r}")
        connection.close()
        for task in (receiver, writer):
            if task.done():
                continue
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
        logger.info(f"연결 정리 완료 - {connection!r}, 전체 연결 {len(hub)}개")


def create_router(ws_path: str = "/ws") -> APIRouter:
    """설정된 경로에 WebSocket 엔드포인트를 등록한 라우터를 만듭니다."""
    router = APIRouter()
    router.add_api_websocket_route(ws_path, websocket_endpoint)
    return router
