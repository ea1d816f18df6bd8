"""TalkSync 실시간 시그널링 서버 (FastAPI).

언어 교환 플랫폼의 접속자(presence) 관리와 WebRTC 영상 통화 시그널링
릴레이를 제공합니다. 미디어는 클라이언트 간 P2P로 흐르며, 서버는 통화
설정 메타데이터(offer/answer/ICE candidate)만 1:1로 전달합니다.

주요 기능:
    - 사용자별 WebSocket 연결 관리 (핸드셰이크 쿼리 파라미터 uid)
    - 접속자 목록(getOnlineUsers) 실시간 브로드캐스트
    - 통화 시그널링 1:1 릴레이
    - REST 핸들러용 실시간 전달 브리지 (newMessage, sessionRequested 등)

Architecture:
    - ConnectionRegistry: user_id → 연결 핸들 (앱 인스턴스별로 생성)
    - PresenceBroadcaster: 레지스트리 변경 시 모든 연결에 접속자 목록 전송
    - CallSignalingRouter: 상태 없는 조회-전달 라우터
    - DeliveryBridge: "온라인이면 전달" 기능

Limitations:
    - 레지스트리는 프로세스 메모리에만 존재합니다. 여러 프로세스로
      확장하려면 외부 공유 presence 저장소(pub/sub)가 필요합니다.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from talksync import (
    CallSignalingRouter,
    ConnectionHub,
    ConnectionRegistry,
    DeliveryBridge,
    PresenceBroadcaster,
    Settings,
    get_settings,
)
from talksync.logging_config import cleanup_old_logs, setup_logging
from routes import create_signaling_router, health_router, presence_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI 앱의 생명주기를 관리하는 컨텍스트 매니저.

    시작 시 로깅을 설정하고 오래된 로그 파일을 정리합니다.
    종료 시 남아있는 모든 연결을 닫습니다.

    Args:
        app (FastAPI): FastAPI 애플리케이션 인스턴스

    Yields:
        None: 앱이 실행되는 동안 제어를 반환
    """
    settings: Settings = app.state.settings

    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR, settings.LOG_FILE_ENABLED)
    logger.info(f"시그널링 서버 시작 중... env={settings.ENV}, ws_path={settings.WS_PATH}")

    deleted_logs = cleanup_old_logs(settings.LOG_DIR, settings.LOG_RETENTION_DAYS)
    if deleted_logs > 0:
        logger.info(f"오래된 로그 파일 {deleted_logs}개 정리 완료 ({settings.LOG_RETENTION_DAYS}일 이상)")

    yield

    logger.info("서버 종료 중...")
    closed = app.state.hub.close_all()
    logger.info(f"연결 {closed}개 정리 완료")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """시그널링 서버 FastAPI 앱을 생성합니다.

    레지스트리, 연결 집합, 브로드캐스터, 라우터, 브리지를 앱마다 새로 만들어
    app.state에 보관합니다. 테스트마다 독립된 앱을 만들 수 있습니다.

    Args:
        settings: 사용할 설정. None이면 환경변수에서 로딩

    Returns:
        FastAPI: 구성된 애플리케이션
    """
    settings = settings or get_settings()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

    registry = ConnectionRegistry()
    hub = ConnectionHub()
    broadcaster = PresenceBroadcaster(hub)
    registry.add_listener(broadcaster.announce)

    app.state.settings = settings
    app.state.registry = registry
    app.state.hub = hub
    app.state.broadcaster = broadcaster
    app.state.signaling_router = CallSignalingRouter(registry)
    app.state.bridge = DeliveryBridge(registry)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 라우터 등록
    app.include_router(health_router)
    app.include_router(presence_router)
    app.include_router(create_signaling_router(settings.WS_PATH))

    @app.get("/")
    async def root():
        """서버 상태 확인 엔드포인트 (Health check).

        Returns:
            dict: 서버 상태 정보
                - status (str): 서버 상태
                - service (str): 서비스 이름
        """
        return {"status": "ok", "service": settings.APP_NAME}

    return app


app = create_app()


def main() -> None:
    """uvicorn으로 서버를 실행합니다."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
