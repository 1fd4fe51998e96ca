# yaopets/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from typing import Optional

# - 설정
from yaopets.core.config import config_by_name

# - 저장소 계층
from yaopets.services.storage_backend import StorageBackend, get_backend
from yaopets.services.collection_store import CollectionStore
from yaopets.services.relation_index import RelationIndex
from yaopets.services.demo_data import seed_demo_data

# - 엔티티 서비스 및 파사드
from yaopets.api.users.services import UserService
from yaopets.api.posts.services import PostService
from yaopets.api.comments.services import CommentService
from yaopets.api.pets.services import PetService
from yaopets.api.interactions.services import InteractionService

__version__ = "0.1.0"


def create_store(config_name: Optional[str] = None, backend: Optional[StorageBackend] = None) -> InteractionService:
    """
    스토어 팩토리 함수.
    애플리케이션 시작 시 한 번 호출하여 만든 객체를 필요한 곳에 직접 전달합니다.
    테스트에서는 매번 새 인스턴스를 만들어 서로 격리합니다.

    :param config_name: 'development' | 'testing' | 'production' (기본: YAOPETS_ENV)
    :param backend: 이미 만들어 둔 저장소 백엔드 (같은 백엔드 = 같은 브라우저 프로필)
    """
    config_name = config_name or os.getenv('YAOPETS_ENV', 'development')
    if config_name not in config_by_name:
        raise ValueError(f"Unknown config name: {config_name}")
    config = config_by_name[config_name]

    # =====================================================================================
    # 3. 로깅 설정
    # =====================================================================================
    if not config.DEBUG:
        logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')
    else:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s [%(levelname)s] %(message)s')

    # =====================================================================================
    # 4. 저장소 계층 생성 (의존성이 없는 하위 계층부터)
    # =====================================================================================
    if backend is None:
        backend = get_backend(
            config.STORAGE_BACKEND,
            directory=config.STORAGE_DIR,
            quota_bytes=config.STORAGE_QUOTA_BYTES or None,
        )
    collections = CollectionStore(backend, namespace=config.STORAGE_NAMESPACE)
    relations = RelationIndex(collections)

    # =====================================================================================
    # 5. 엔티티 서비스 생성 및 파사드에 주입
    # =====================================================================================
    users = UserService(collections, relations, level_points_step=config.LEVEL_POINTS_STEP)
    store = InteractionService(
        collections=collections,
        relations=relations,
        post_service=PostService(collections, user_service=users),
        comment_service=CommentService(collections),
        user_service=users,
        pet_service=PetService(collections, user_service=users),
    )

    if config.SEED_DEMO_DATA:
        seed_demo_data(store)

    logging.info(f"YaoPets store created for '{config_name}' environment.")
    return store


__all__ = ['create_store', 'InteractionService', '__version__']
