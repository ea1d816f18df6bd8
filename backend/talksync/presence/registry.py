"""접속자 레지스트리 모듈.

사용자 ID → 연결 핸들 매핑을 관리합니다. 이 프로세스에서 "지금 누가
온라인인가"에 대한 유일한 기준입니다.

Invariants:
    - 사용자 ID당 최대 하나의 핸들만 보관 (재접속 시 덮어씀)
    - unregister는 저장된 핸들이 전달된 핸들과 동일 객체일 때만 삭제
      (재접속 이후 도착한 이전 연결의 종료 이벤트가 새 연결을 지우지 않음)
    - register/unregister 호출마다 변경 후 상태로 리스너를 정확히 한 번 호출

Thread Safety:
    - asyncio 이벤트 루프 단일 스레드에서 동기적으로 동작
    - 모든 연산이 await 없이 끝나므로 별도 잠금이 필요 없음

Examples:
    >>> registry = ConnectionRegistry()
    >>> registry.register("u1", c1)
    >>> registry.register("u1", c2)      # 재접속
    >>> registry.unregister("u1", c1)    # 늦게 도착한 이전 연결 종료
    False
    >>> registry.lookup("u1") is c2
    True
"""

import logging
from typing import Callable, Dict, List, Optional, Set

from .connection import ConnectionHandle

logger = logging.getLogger(__name__)

PresenceListener = Callable[[List[str]], None]


class ConnectionRegistry:
    """사용자 ID와 연결 핸들을 매핑하는 레지스트리.

    Attributes:
        _entries (Dict[str, ConnectionHandle]): user_id → 연결 핸들 (등록 순서 유지)
        _listeners (List[PresenceListener]): 변경 시 호출할 콜백 목록
    """

    def __init__(self):
        self._entries: Dict[str, ConnectionHandle] = {}
        self._listeners: List[PresenceListener] = []

    def add_listener(self, listener: PresenceListener) -> None:
        """레지스트리 변경 시 호출될 리스너를 등록합니다.

        리스너는 변경 후의 온라인 사용자 ID 목록(등록 순서)을 인자로 받습니다.
        """
        self._listeners.append(listener)

    def register(self, user_id: str, handle: ConnectionHandle) -> None:
        """사용자 ID에 연결 핸들을 연결합니다.

        기존 매핑이 있으면 무조건 교체합니다. 같은 쌍으로 반복 호출해도
        결과는 같습니다.

        Args:
            user_id: 사용자 ID
            handle: 연결 핸들
        """
        previous = self._entries.get(user_id)
        self._entries[user_id] = handle

        if previous is not None and previous is not handle:
            logger.info(f"사용자 {user_id} 재접속, 이전 연결 교체. 온라인 {len(self._entries)}명")
        else:
            logger.info(f"사용자 {user_id} 등록. 온라인 {len(self._entries)}명")

        self._notify()

    def unregister(self, user_id: str, handle: ConnectionHandle) -> bool:
        """저장된 핸들이 전달된 핸들과 동일할 때만 매핑을 삭제합니다.

        Args:
            user_id: 사용자 ID
            handle: 종료된 연결의 핸들

        Returns:
            bool: 실제로 삭제되었으면 True.
                  다른(새) 핸들이 저장되어 있거나 매핑이 없으면 False
        """
        current = self._entries.get(user_id)
        removed = current is not None and current is handle

        if removed:
            del self._entries[user_id]
            logger.info(f"사용자 {user_id} 해제. 온라인 {len(self._entries)}명")
        elif current is not None:
            logger.debug(f"사용자 {user_id}의 이전 연결 종료 무시 (새 연결 유지)")

        self._notify()
        return removed

    def lookup(self, user_id: str) -> Optional[ConnectionHandle]:
        """사용자의 현재 연결 핸들을 반환합니다. 없으면 None."""
        return self._entries.get(user_id)

    def online_ids(self) -> Set[str]:
        """현재 온라인 사용자 ID 집합의 스냅샷."""
        return set(self._entries)

    def snapshot(self) -> List[str]:
        """현재 온라인 사용자 ID 목록 (등록 순서)."""
        return list(self._entries)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def _notify(self) -> None:
        online = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(online)
            except Exception as e:
                logger.error(f"접속자 리스너 실행 중 오류: {e}", exc_info=True)
