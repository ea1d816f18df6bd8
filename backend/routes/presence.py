"""접속자 조회 및 실시간 전달 API 라우터.

현재 온라인 사용자 조회와, 다른 서비스가 DeliveryBridge를 HTTP로
사용할 수 있는 전달 엔드포인트를 제공합니다.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from talksync import ConnectionRegistry, DeliveryBridge

from .deps import get_delivery_bridge, get_registry, verify_auth_header

router = APIRouter(prefix="/api/presence", tags=["presence"])

logger = logging.getLogger(__name__)


class DeliveryRequest(BaseModel):
    """실시간 전달 요청."""
    user_id: str = Field(..., min_length=1, description="대상 사용자 ID")
    event: str = Field(..., min_length=1, description="이벤트 이름 (예: newMessage)")
    payload: Any = Field(default=None, description="그대로 전달할 페이로드")


@router.get("/online")
async def get_online_users(registry: ConnectionRegistry = Depends(get_registry)):
    """현재 온라인 사용자 목록을 반환합니다.

    Returns:
        dict: {"online_users": [user_id, ...], "count": int}
    """
    online = registry.snapshot()
    return {"online_users": online, "count": len(online)}


@router.post("/deliver")
async def deliver_event(
    request: DeliveryRequest,
    bridge: DeliveryBridge = Depends(get_delivery_bridge),
    _: bool = Depends(verify_auth_header),
):
    """사용자가 온라인이면 이벤트를 실시간으로 전달합니다.

    오프라인 사용자는 오류가 아니며 delivered=False를 반환합니다.

    Args:
        request: 대상 사용자, 이벤트 이름, 페이로드

    Returns:
        dict: {"delivered": bool}
    """
    delivered = bridge.deliver_if_online(request.user_id, request.event, request.payload)
    logger.info(f"[deliver] {request.event} → {request.user_id}: delivered={delivered}")
    return {"delivered": delivered}


@router.get("/{user_id}")
async def get_user_presence(user_id: str, registry: ConnectionRegistry = Depends(get_registry)):
    """특정 사용자의 온라인 여부를 반환합니다."""
    return {"user_id": user_id, "online": user_id in registry}
