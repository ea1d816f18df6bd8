"""로깅 설정 모듈.

콘솔 출력과 일자별 로그 파일 저장, 오래된 로그 파일 정리를 담당합니다.

사용 예시:
    from talksync.logging_config import setup_logging

    # 애플리케이션 시작 시 호출
    setup_logging("INFO", "logs")
"""

import glob
import logging
import os
import sys
from datetime import datetime, timedelta
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE_PREFIX = "server_"
LOG_FILE_SUFFIX = ".log"


def log_filename(log_dir: str, day: Optional[datetime] = None) -> str:
    """해당 날짜의 서버 로그 파일 경로를 반환합니다."""
    day = day or datetime.now()
    return os.path.join(log_dir, f"{LOG_FILE_PREFIX}{day.strftime('%Y%m%d')}{LOG_FILE_SUFFIX}")


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    file_enabled: bool = True
) -> None:
    """로깅 설정 초기화.

    Args:
        level: 로그 레벨 이름
        log_dir: 로그 파일 디렉토리
        file_enabled: 일자별 파일 핸들러 사용 여부

    Note:
        이 함수는 애플리케이션 시작 시 한 번만 호출해야 합니다.
        다시 호출하면 기존 루트 핸들러를 교체합니다.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    # 콘솔 핸들러
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # 파일 핸들러
    if file_enabled:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_filename(log_dir), encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # 너무 상세한 로그 억제
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("websockets").setLevel(logging.WARNING)

    logging.info(f"로깅 초기화 완료: level={level}, file={'on' if file_enabled else 'off'}")


def cleanup_old_logs(log_dir: str = "logs", retention_days: int = 60) -> int:
    """오래된 로그 파일을 삭제합니다.

    파일명의 날짜(server_YYYYMMDD.log)를 기준으로 보관 기간이 지난 파일을 지웁니다.
    날짜를 해석할 수 없는 파일은 건너뜁니다.

    Args:
        log_dir: 로그 디렉토리 경로
        retention_days: 보관 기간 (일)

    Returns:
        삭제된 파일 수
    """
    if not os.path.exists(log_dir):
        return 0

    cutoff_date = datetime.now() - timedelta(days=retention_days)
    deleted_count = 0

    pattern = os.path.join(log_dir, f"{LOG_FILE_PREFIX}*{LOG_FILE_SUFFIX}")
    for log_file in glob.glob(pattern):
        try:
            filename = os.path.basename(log_file)
            date_str = filename[len(LOG_FILE_PREFIX):-len(LOG_FILE_SUFFIX)]
            file_date = datetime.strptime(date_str, "%Y%m%d")

            if file_date < cutoff_date:
                os.remove(log_file)
                deleted_count += 1
        except (ValueError, OSError):
            continue

    return deleted_count
