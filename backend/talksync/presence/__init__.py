"""Presence 모듈.

접속자 레지스트리, 연결 핸들, 접속자 목록 브로드캐스트 기능을 제공합니다.

Classes:
    ConnectionRegistry: user_id → 연결 핸들 매핑
    ClientConnection: WebSocket 연결 핸들 (비블로킹 송신 대기열)
    ConnectionHub: 살아있는 모든 연결 집합
    PresenceBroadcaster: getOnlineUsers 브로드캐스트
"""

from .connection import ClientConnection, ConnectionHandle, ConnectionHub
from .registry import ConnectionRegistry, PresenceListener
from .broadcaster import PresenceBroadcaster

__all__ = [
    "ClientConnection",
    "ConnectionHandle",
    "ConnectionHub",
    "ConnectionRegistry",
    "PresenceListener",
    "PresenceBroadcaster",
]
