"""공유 의존성 모듈.

라우터들이 공통으로 사용하는 의존성을 정의합니다.
앱별 인스턴스(설정, 레지스트리 등)는 app.state에서 가져옵니다.
"""

from typing import Optional

from fastapi import Header, HTTPException
from starlette.requests import HTTPConnection

from talksync import (
    CallSignalingRouter,
    ConnectionHub,
    ConnectionRegistry,
    DeliveryBridge,
    PresenceBroadcaster,
    Settings,
)


def get_app_settings(conn: HTTPConnection) -> Settings:
    """앱에 설정된 Settings를 반환합니다."""
    return conn.app.state.settings


def get_registry(conn: HTTPConnection) -> ConnectionRegistry:
    """앱의 접속자 레지스트리를 반환합니다."""
    return conn.app.state.registry


def get_hub(conn: HTTPConnection) -> ConnectionHub:
    """앱의 연결 집합을 반환합니다."""
    return conn.app.state.hub


def get_broadcaster(conn: HTTPConnection) -> PresenceBroadcaster:
    """앱의 접속자 목록 브로드캐스터를 반환합니다."""
    return conn.app.state.broadcaster


def get_signaling_router(conn: HTTPConnection) -> CallSignalingRouter:
    """앱의 통화 시그널링 라우터를 반환합니다."""
    return conn.app.state.signaling_router


def get_delivery_bridge(conn: HTTPConnection) -> DeliveryBridge:
    """앱의 실시간 이벤트 전달 브리지를 반환합니다."""
    return conn.app.state.bridge


async def verify_auth_header(
    conn: HTTPConnection,
    authorization: Optional[str] = Header(None)
) -> bool:
    """Authorization 헤더를 검증합니다.

    Args:
        conn: 요청 연결 (앱 설정 조회용)
        authorization: Authorization 헤더 값

    Returns:
        bool: 검증 성공 시 True

    Raises:
        HTTPException: 인증 실패 시
    """
    access_password = get_app_settings(conn).ACCESS_PASSWORD
    if not access_password:
        return True
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header required")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid authorization format")
    if parts[1] != access_password:
        raise HTTPException(status_code=401, detail="Invalid password")
    return True


def verify_ws_token(token: Optional[str], access_password: str) -> bool:
    """WebSocket 연결 시 토큰을 검증합니다.

    Args:
        token: WebSocket 쿼리 파라미터로 전달된 토큰
        access_password: 설정된 접근 비밀번호 (비어 있으면 항상 허용)

    Returns:
        bool: 검증 성공 여부
    """
    if not access_password:
        return True
    return token == access_password
