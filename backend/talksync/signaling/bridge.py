"""실시간 이벤트 전달 브리지.

REST 핸들러(채팅 메시지, 세션 요청, 알림 등)가 DB에 저장을 마친 뒤
대상 사용자가 접속 중이면 실시간으로 알려줄 때 사용합니다.
사용자가 오프라인이면 아무 것도 하지 않으며 오류도 아닙니다.
페이로드는 검증하거나 수정하지 않고 그대로 전달합니다.
"""

import logging
from typing import Any

from ..events import NEW_MESSAGE, NOTIFICATION_NEW, SESSION_ACCEPTED, SESSION_REQUESTED
from ..presence.registry import ConnectionRegistry

logger = logging.getLogger(__name__)


class DeliveryBridge:
    """사용자 ID로 이벤트를 best-effort 전달하는 브리지.

    Args:
        registry: 대상 연결 조회에 사용할 접속자 레지스트리

    Examples:
        >>> bridge = DeliveryBridge(registry)
        >>> bridge.deliver_if_online("u2", "newMessage", {"text": "hi"})
        True
        >>> bridge.deliver_if_online("offline-user", "newMessage", {"text": "hi"})
        False
    """

    def __init__(self, registry: ConnectionRegistry):
        self._registry = registry

    def deliver_if_online(self, user_id: str, event: str, payload: Any = None) -> bool:
        """사용자가 온라인이면 이벤트를 전달합니다.

        Args:
            user_id: 대상 사용자 ID
            event: 이벤트 이름
            payload: 전달할 페이로드

        Returns:
            bool: 전달되었으면 True, 오프라인이면 False
        """
        if not isinstance(user_id, str) or not user_id:
            logger.debug(f"{event}: 대상 사용자 ID 없음, 전달 생략")
            return False

        connection = self._registry.lookup(user_id)
        if connection is None:
            logger.debug(f"{event}: 사용자 {user_id} 오프라인, 실시간 전달 생략")
            return False

        delivered = connection.send(event, payload)
        logger.debug(f"{event} → 사용자 {user_id}: delivered={delivered}")
        return delivered

    def notify_new_message(self, receiver_id: str, message: dict) -> bool:
        """새 채팅 메시지를 수신자에게 알립니다."""
        return self.deliver_if_online(receiver_id, NEW_MESSAGE, message)

    def notify_session_requested(self, to_user_id: str, session_id: str, session: dict) -> bool:
        """세션 요청을 받은 사용자에게 알립니다."""
        return self.deliver_if_online(to_user_id, SESSION_REQUESTED, {
            "sessionId": session_id,
            "session": session,
        })

    def notify_session_accepted(self, from_user_id: str, session_id: str, session: dict) -> bool:
        """세션을 요청한 사용자에게 수락 사실을 알립니다."""
        return self.deliver_if_online(from_user_id, SESSION_ACCEPTED, {
            "sessionId": session_id,
            "session": session,
        })

    def notify_notification(self, user_id: str, notification: dict) -> bool:
        """새 알림을 사용자에게 전달합니다."""
        return self.deliver_if_online(user_id, NOTIFICATION_NEW, notification)
