"""접속자 목록 브로드캐스트 모듈."""

import logging
from typing import Iterable

from ..events import GET_ONLINE_USERS
from .connection import ConnectionHub

logger = logging.getLogger(__name__)


class PresenceBroadcaster:
    """온라인 사용자 목록을 모든 연결에 알립니다.

    연결 집합의 스냅샷을 순회하며 각 연결의 송신 대기열에 넣기만 하므로
    느리거나 끊긴 클라이언트가 다른 클라이언트로의 전달을 막지 않습니다.
    개별 연결로의 전달 실패는 오류로 보고하지 않습니다.

    Args:
        hub: 브로드캐스트 대상 연결 집합
    """

    def __init__(self, hub: ConnectionHub):
        self._hub = hub

    def announce(self, online_ids: Iterable[str]) -> int:
        """getOnlineUsers 이벤트를 모든 연결에 전송합니다.

        Args:
            online_ids: 온라인 사용자 ID 목록

        Returns:
            int: 대기열에 정상적으로 들어간 연결 수
        """
        online = list(online_ids)
        queued = 0
        for connection in self._hub:
            if connection.send(GET_ONLINE_USERS, online):
                queued += 1

        logger.debug(f"접속자 목록 브로드캐스트: {len(online)}명 → 연결 {queued}/{len(self._hub)}")
        return queued
