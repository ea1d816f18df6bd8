"""Signaling 모듈.

통화 시그널링 라우터와 실시간 이벤트 전달 브리지를 제공합니다.

Classes:
    CallSignalingRouter: callUser/acceptCall/declineCall/iceCandidate/endCall 1:1 전달
    DeliveryBridge: REST 핸들러용 "온라인이면 전달" 기능
"""

from .router import CallSignalingRouter
from .bridge import DeliveryBridge

__all__ = [
    "CallSignalingRouter",
    "DeliveryBridge",
]
