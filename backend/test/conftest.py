"""공용 테스트 fixture.

RecordingConnection은 실제 WebSocket 대신 전송된 (event, data)를 기록하는
가짜 연결 핸들입니다.
"""

from typing import Any, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from app import create_app
from talksync import (
    CallSignalingRouter,
    ConnectionHub,
    ConnectionRegistry,
    DeliveryBridge,
    PresenceBroadcaster,
    Settings,
)


class RecordingConnection:
    """전송 내역을 기록하는 가짜 연결 핸들."""

    def __init__(self, name: str, user_id: Optional[str] = None):
        self.name = name
        self.user_id = user_id
        self.sent: List[Tuple[str, Any]] = []
        self.closed = False

    def __repr__(self) -> str:
        return f"RecordingConnection({self.name})"

    def send(self, event: str, data: Any = None) -> bool:
        if self.closed:
            return False
        self.sent.append((event, data))
        return True

    def close(self) -> None:
        self.closed = True

    def events(self, event: str) -> List[Any]:
        """특정 이벤트로 전송된 페이로드 목록."""
        return [data for name, data in self.sent if name == event]


@pytest.fixture
def make_connection():
    def _make(name: str, user_id: Optional[str] = None) -> RecordingConnection:
        return RecordingConnection(name, user_id=user_id)
    return _make


@pytest.fixture
def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


@pytest.fixture
def hub() -> ConnectionHub:
    return ConnectionHub()


@pytest.fixture
def broadcaster(hub, registry) -> PresenceBroadcaster:
    broadcaster = PresenceBroadcaster(hub)
    registry.add_listener(broadcaster.announce)
    return broadcaster


@pytest.fixture
def signaling_router(registry) -> CallSignalingRouter:
    return CallSignalingRouter(registry)


@pytest.fixture
def bridge(registry) -> DeliveryBridge:
    return DeliveryBridge(registry)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        LOG_FILE_ENABLED=False,
        LOG_DIR=str(tmp_path / "logs"),
        ACCESS_PASSWORD="",
        WS_PATH="/ws",
    )


@pytest.fixture
def application(settings):
    return create_app(settings)


@pytest.fixture
def client(application):
    with TestClient(application) as test_client:
        yield test_client
