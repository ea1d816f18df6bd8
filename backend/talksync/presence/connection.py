"""클라이언트 연결 핸들 모듈.

WebSocket 연결 하나를 감싸는 ClientConnection과, 현재 살아있는 모든 연결을
추적하는 ConnectionHub를 제공합니다.

ClientConnection.send()는 동기 함수이며 블로킹하지 않습니다. 프레임은 연결별
송신 대기열(asyncio.Queue)에 들어가고, run_writer() 태스크가 순서대로
소켓에 기록합니다. 따라서 느리거나 끊긴 클라이언트가 다른 연결로의 전송을
막지 않으며, 한 연결에 대한 전송 순서는 FIFO로 유지됩니다.

Frame format:
    {"type": <event name>, "data": <payload>}

Examples:
    >>> connection = ClientConnection(websocket, user_id="u1")
    >>> writer = asyncio.create_task(connection.run_writer())
    >>> connection.send("getOnlineUsers", ["u1"])
    True
"""

import asyncio
import logging
import uuid
from typing import Any, Dict, Iterator, Optional, Protocol

from fastapi import WebSocket

logger = logging.getLogger(__name__)

_CLOSE = object()


class ConnectionHandle(Protocol):
    """레지스트리와 라우터가 의존하는 연결 핸들 인터페이스."""

    user_id: Optional[str]

    def send(self, event: str, data: Any = None) -> bool:
        ...


class ClientConnection:
    """WebSocket 연결 하나에 대한 핸들.

    연결이 살아있는 동안에만 유효하며, 동일성(identity)으로 비교됩니다.
    같은 user_id로 재접속하면 새로운 핸들이 만들어집니다.

    Attributes:
        connection_id (str): 연결 고유 식별자 (UUID)
        websocket (WebSocket): 수락된 WebSocket 연결 객체
        user_id (Optional[str]): 핸드셰이크 시 전달된 사용자 ID
        send_timeout (float): 프레임 하나를 기록할 때의 최대 대기 시간 (초)
    """

    def __init__(
        self,
        websocket: WebSocket,
        user_id: Optional[str] = None,
        max_queue: int = 256,
        send_timeout: float = 10.0,
    ):
        self.connection_id = str(uuid.uuid4())
        self.websocket = websocket
        self.user_id = user_id or None
        self.send_timeout = send_timeout
        self._outbox: asyncio.Queue = asyncio.Queue(maxsize=max_queue)
        self._closed = False

    def __repr__(self) -> str:
        return f"ClientConnection(id={self.connection_id[:8]}, user_id={self.user_id!r})"

    @property
    def closed(self) -> bool:
        """연결 종료 여부."""
        return self._closed

    @property
    def pending(self) -> int:
        """아직 기록되지 않은 프레임 수."""
        return self._outbox.qsize()

    def send(self, event: str, data: Any = None) -> bool:
        """프레임을 송신 대기열에 넣습니다.

        Args:
            event: 이벤트 이름 (frame의 "type")
            data: 이벤트 페이로드 (frame의 "data")

        Returns:
            bool: 대기열에 들어갔으면 True.
                  연결이 닫혔거나 대기열이 가득 찼으면 프레임을 버리고 False
        """
        if self._closed:
            return False

        try:
            self._outbox.put_nowait({"type": event, "data": data})
        except asyncio.QueueFull:
            logger.warning(f"송신 대기열 가득 참, 프레임 폐기 - {self!r}, event={event}")
            return False
        return True

    async def run_writer(self) -> bool:
        """송신 대기열의 프레임을 순서대로 소켓에 기록합니다.

        close()가 호출되거나 기록에 실패하면 종료합니다. 기록 실패 시
        연결은 닫힌 것으로 표시되고 이후 send()는 False를 반환합니다.

        Returns:
            bool: close()로 정상 종료했으면 True, 기록 실패로 종료했으면 False
        """
        while True:
            frame = await self._outbox.get()
            if frame is _CLOSE:
                return True

            try:
                await asyncio.wait_for(
                    self.websocket.send_json(frame),
                    timeout=self.send_timeout
                )
            except asyncio.TimeoutError:
                logger.warning(f"프레임 전송 타임아웃 ({self.send_timeout}s) - {self!r}")
                self._closed = True
                return False
            except Exception as e:
                logger.warning(f"프레임 전송 실패 - {self!r}: {e}")
                self._closed = True
                return False

    def close(self) -> None:
        """연결을 닫힌 상태로 표시하고 writer를 멈춥니다."""
        if self._closed:
            return
        self._closed = True
        try:
            self._outbox.put_nowait(_CLOSE)
        except asyncio.QueueFull:
            # writer는 호출자가 취소
            pass


class ConnectionHub:
    """현재 살아있는 모든 연결의 집합.

    사용자 ID가 없는 익명 연결도 포함하며, 접속자 목록 브로드캐스트의
    대상 집합으로 사용됩니다. 삽입 순서를 유지합니다.
    """

    def __init__(self):
        self._connections: Dict[int, ConnectionHandle] = {}

    def add(self, connection: ConnectionHandle) -> None:
        """연결을 추가합니다."""
        self._connections[id(connection)] = connection

    def discard(self, connection: ConnectionHandle) -> None:
        """연결을 제거합니다. 없는 연결이면 무시합니다."""
        if self._connections.get(id(connection)) is connection:
            del self._connections[id(connection)]

    def close_all(self) -> int:
        """모든 연결을 닫고 닫은 연결 수를 반환합니다."""
        connections = list(self._connections.values())
        for connection in connections:
            close = getattr(connection, "close", None)
            if close is not None:
                close()
        self._connections.clear()
        return len(connections)

    def __contains__(self, connection: object) -> bool:
        return self._connections.get(id(connection)) is connection

    def __iter__(self) -> Iterator[ConnectionHandle]:
        return iter(list(self._connections.values()))

    def __len__(self) -> int:
        return len(self._connections)
