# yaopets/core/config.py

import os

def _env_int(name, default):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"환경 변수 {name} 는 정수여야 합니다: {value!r}")

def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # 저장소 백엔드: 'memory' (프로세스 메모리) 또는 'file' (디렉터리)
    STORAGE_BACKEND = os.getenv('YAOPETS_STORAGE_BACKEND', 'file')
    STORAGE_DIR = os.getenv('YAOPETS_STORAGE_DIR', 'yaopets_data')
    # 모든 컬렉션 키의 접두사. 브라우저 프로필(origin) 하나에 해당합니다.
    STORAGE_NAMESPACE = os.getenv('YAOPETS_STORAGE_NAMESPACE', 'yaopets')
    # 브라우저 localStorage 와 같은 5 MiB 기본 한도. 0 이면 무제한.
    STORAGE_QUOTA_BYTES = _env_int('YAOPETS_STORAGE_QUOTA_BYTES', 5 * 1024 * 1024)
    # 게시글이 하나도 없을 때 데모 사용자/게시글을 채울지 여부
    SEED_DEMO_DATA = _env_bool('YAOPETS_SEED_DEMO_DATA', True)
    # 레벨 = 포인트 // LEVEL_POINTS_STEP + 1
    LEVEL_POINTS_STEP = _env_int('YAOPETS_LEVEL_POINTS_STEP', 100)
    LOG_LEVEL = os.getenv('YAOPETS_LOG_LEVEL', 'INFO')
    DEBUG = False

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다. 항상 빈 메모리 저장소에서 시작합니다."""
    TESTING = True
    STORAGE_BACKEND = 'memory'
    SEED_DEMO_DATA = False
    LOG_LEVEL = 'WARNING'

class ProductionConfig(Config):
    """배포 환경 설정입니다."""
    SEED_DEMO_DATA = _env_bool('YAOPETS_SEED_DEMO_DATA', False)

# config_by_name: 문자열 키와 설정 클래스를 매핑하는 딕셔너리입니다.
# create_store 가 YAOPETS_ENV 값에 따라 적절한 설정을 선택하는 데 사용합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
