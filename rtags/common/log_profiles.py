"""
로그 프로필 시스템

환경별 자동 설정:
- DEV: 콘솔 출력, INFO
- PROD: JSON 출력, INFO
- TEST: ERROR만
- DEBUG: 전체 로깅
"""

import os
from dataclasses import dataclass
from enum import Enum


class LogProfile(str, Enum):
    """로그 프로필"""

    DEV = "dev"
    PROD = "prod"
    TEST = "test"
    DEBUG = "debug"


@dataclass
class LogConfig:
    """로그 설정"""

    level: str
    json_format: bool


PROFILE_CONFIGS = {
    LogProfile.DEV: LogConfig(level="INFO", json_format=False),
    LogProfile.PROD: LogConfig(level="INFO", json_format=True),
    LogProfile.TEST: LogConfig(level="ERROR", json_format=False),
    LogProfile.DEBUG: LogConfig(level="DEBUG", json_format=False),
}


def get_current_profile() -> LogProfile:
    """
    현재 환경의 로그 프로필 결정.

    우선순위:
    1. 환경변수 RTAGS_LOG_PROFILE
    2. 환경변수 ENV (dev/prod/test)
    3. 기본값 (DEV)
    """
    profile_str = os.getenv("RTAGS_LOG_PROFILE", "").lower()
    if profile_str:
        try:
            return LogProfile(profile_str)
        except ValueError:
            pass

    env = os.getenv("ENV", "dev").lower()
    if env in ("production", "prod"):
        return LogProfile.PROD
    elif env == "test":
        return LogProfile.TEST

    return LogProfile.DEV


def get_log_config(profile: LogProfile | None = None) -> LogConfig:
    """프로필별 로그 설정 (None이면 자동 감지)"""
    if profile is None:
        profile = get_current_profile()

    return PROFILE_CONFIGS[profile]


def init_logging(profile: LogProfile | None = None) -> LogConfig:
    """
    로깅 시스템 초기화.

    Args:
        profile: 프로필 (None이면 자동 감지)

    Returns:
        적용된 LogConfig
    """
    from rtags.common.logging_config import configure_logging

    config = get_log_config(profile)
    configure_logging(level=config.level, json_format=config.json_format)
    return config
