"""Health Check API 라우터.

서비스 상태 확인을 위한 엔드포인트들을 제공합니다.
"""

from fastapi import APIRouter, Depends

from talksync import ConnectionHub, ConnectionRegistry

from .deps import get_hub, get_registry

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check(
    hub: ConnectionHub = Depends(get_hub),
    registry: ConnectionRegistry = Depends(get_registry),
):
    """시그널링 서버 상태를 확인합니다.

    Returns:
        dict: 서비스 상태와 현재 연결 수, 온라인 사용자 수
    """
    return {
        "status": "ok",
        "services": {
            "signaling": "ok",
        },
        "connections": len(hub),
        "online_users": len(registry),
    }
