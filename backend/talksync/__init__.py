"""TalkSync 실시간 시그널링 패키지.

언어 교환 플랫폼의 접속자(presence) 관리와 WebRTC 통화 시그널링 릴레이를 담당합니다.

Modules:
    presence: 접속자 레지스트리, 연결 핸들, 접속자 목록 브로드캐스트
    signaling: 통화 시그널링 라우터, 실시간 이벤트 전달 브리지
    events: wire 이벤트 이름
    config: 환경변수 기반 설정
    logging_config: 로깅 설정
"""

from .presence import (
    ClientConnection,
    ConnectionHandle,
    ConnectionHub,
    ConnectionRegistry,
    PresenceBroadcaster,
)
from .signaling import CallSignalingRouter, DeliveryBridge
from .config import Settings, get_settings

__all__ = [
    # Presence
    "ClientConnection",
    "ConnectionHandle",
    "ConnectionHub",
    "ConnectionRegistry",
    "PresenceBroadcaster",
    # Signaling
    "CallSignalingRouter",
    "DeliveryBridge",
    # Config
    "Settings",
    "get_settings",
]
