"""FastAPI 라우터 모듈.

app.py에서 분리된 API 엔드포인트들을 제공합니다.
"""

from .health import router as health_router
from .presence import router as presence_router
from .signaling import create_router as create_signaling_router
from .deps import verify_auth_header, verify_ws_token

__all__ = [
    "health_router",
    "presence_router",
    "create_signaling_router",
    "verify_auth_header",
    "verify_ws_token",
]
