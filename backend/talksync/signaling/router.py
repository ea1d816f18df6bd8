"""통화 시그널링 라우터.

두 사용자 사이의 통화 설정 메시지(offer/answer/ICE candidate 등)를
레지스트리에서 대상 연결을 찾아 1:1로 전달합니다.

통화 상태(대기/진행/종료)는 서버에 저장하지 않습니다. 상태 머신은 두
클라이언트가 직접 관리하며, 라우터는 호출 사이에 아무 상태도 갖지 않는
조회-전달 함수입니다.

Routing table:
    callUser     → userToCall 에게 incomingCall {from, name, signal}
    acceptCall   → to 에게 callAccepted (signal 그대로)
    declineCall  → to 에게 callDeclined
    iceCandidate → to 에게 iceCandidate (candidate 그대로)
    endCall      → to 에게 endCall

대상이 오프라인이거나 메시지 형식이 잘못되었으면 조용히 버립니다.
발신자에게 실패를 알리지 않으며, 발신 측은 클라이언트 타임아웃으로 처리합니다.
"""

import logging
from typing import Any, Callable, Dict, Optional

from ..events import (
    ACCEPT_CALL,
    CALL_ACCEPTED,
    CALL_DECLINED,
    CALL_USER,
    DECLINE_CALL,
    END_CALL,
    ICE_CANDIDATE,
    INCOMING_CALL,
)
from ..presence.connection import ConnectionHandle
from ..presence.registry import ConnectionRegistry

logger = logging.getLogger(__name__)

EventHandler = Callable[[dict, Optional[ConnectionHandle]], bool]


class CallSignalingRouter:
    """시그널링 메시지를 대상 사용자의 연결로 전달하는 라우터.

    Args:
        registry: 대상 연결 조회에 사용할 접속자 레지스트리

    Examples:
        >>> router = CallSignalingRouter(registry)
        >>> router.dispatch("callUser", {
        ...     "userToCall": "u2", "signalData": {"sdp": "X"},
        ...     "from": "u1", "name": "Alice",
        ... })
        True
    """

    def __init__(self, registry: ConnectionRegistry):
        self._registry = registry
        self._handlers: Dict[str, EventHandler] = {
            CALL_USER: self._on_call_user,
            ACCEPT_CALL: self._on_accept_call,
            DECLINE_CALL: self._on_decline_call,
            ICE_CANDIDATE: self._on_ice_candidate,
            END_CALL: self._on_end_call,
        }

    def dispatch(self, event: str, data: Any, sender: Optional[ConnectionHandle] = None) -> bool:
        """클라이언트에서 받은 이벤트를 처리합니다.

        Args:
            event: 이벤트 이름 (frame의 "type")
            data: 이벤트 페이로드 (frame의 "data")
            sender: 이벤트를 보낸 연결 핸들

        Returns:
            bool: 대상 연결의 송신 대기열에 들어갔으면 True.
                  알 수 없는 이벤트, 잘못된 형식, 오프라인 대상이면 False
        """
        handler = self._handlers.get(event)
        if handler is None:
            logger.warning(f"알 수 없는 메시지 타입: {event}")
            return False

        if not isinstance(data, dict):
            logger.warning(f"잘못된 {event} 페이로드 무시: {type(data).__name__}")
            return False

        return handler(data, sender)

    # ------------------------------------------------------------
    # 통화 이벤트
    # ------------------------------------------------------------

    def call_user(self, user_to_call: str, signal_data: Any, from_id: Optional[str], name: Any = None) -> bool:
        """통화 요청(offer)을 상대에게 전달합니다."""
        return self.forward(user_to_call, INCOMING_CALL, {
            "from": from_id,
            "name": name,
            "signal": signal_data,
        })

    def accept_call(self, to: str, signal: Any) -> bool:
        """통화 수락(answer)을 원래 발신자에게 전달합니다."""
        return self.forward(to, CALL_ACCEPTED, signal)

    def decline_call(self, to: str) -> bool:
        """통화 거절을 원래 발신자에게 알립니다."""
        return self.forward(to, CALL_DECLINED)

    def ice_candidate(self, to: str, candidate: Any) -> bool:
        """ICE candidate를 상대에게 전달합니다."""
        return self.forward(to, ICE_CANDIDATE, candidate)

    def end_call(self, to: str) -> bool:
        """통화 종료를 상대에게 알립니다."""
        return self.forward(to, END_CALL)

    def forward(self, to: Any, event: str, payload: Any = None) -> bool:
        """대상 사용자의 연결로 이벤트를 전달합니다.

        Args:
            to: 대상 사용자 ID
            event: 전달할 이벤트 이름
            payload: 전달할 페이로드 (수정하지 않음)

        Returns:
            bool: 전달 성공 여부. 대상이 없으면 False (오류 아님)
        """
        if not isinstance(to, str) or not to:
            logger.debug(f"{event}: 대상 사용자 ID 없음, 무시")
            return False

        target = self._registry.lookup(to)
        if target is None:
            logger.debug(f"{event}: 사용자 {to} 오프라인, 메시지 폐기")
            return False

        return target.send(event, payload)

    # ------------------------------------------------------------
    # wire 페이로드 → 통화 이벤트
    # ------------------------------------------------------------

    def _on_call_user(self, data: dict, sender: Optional[ConnectionHandle]) -> bool:
        from_id = data.get("from")
        if not from_id and sender is not None:
            from_id = sender.user_id
        return self.call_user(data.get("userToCall"), data.get("signalData"), from_id, data.get("name"))

    def _on_accept_call(self, data: dict, sender: Optional[ConnectionHandle]) -> bool:
        return self.accept_call(data.get("to"), data.get("signal"))

    def _on_decline_call(self, data: dict, sender: Optional[ConnectionHandle]) -> bool:
        return self.decline_call(data.get("to"))

    def _on_ice_candidate(self, data: dict, sender: Optional[ConnectionHandle]) -> bool:
        return self.ice_candidate(data.get("to"), data.get("candidate"))

    def _on_end_call(self, data: dict, sender: Optional[ConnectionHandle]) -> bool:
        return self.end_call(data.get("to"))
