# yaopets/services/storage_backend.py
"""
키/값 저장소 백엔드. 브라우저 localStorage 를 대신하는 최하위 계층.

모든 값은 문자열이며, 용량 한도(quota_bytes)를 넘는 쓰기는
StorageQuotaExceededError 로 거부됩니다. 상위 계층(CollectionStore)이
이 예외를 잡아 로그로 남기며, 스토어 밖으로는 전파되지 않습니다.
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import quote, unquote

logger = logging.getLogger(__name__)


class StorageBackendError(Exception):
    """백엔드 입출력 실패."""


class StorageQuotaExceededError(StorageBackendError):
    """쓰기 후 전체 사용량이 용량 한도를 초과하는 경우."""



class StorageBackend(ABC):
    """
    모든 저장소 백엔드가 구현해야 하는 인터페이스.
    사용량은 이 인스턴스가 기록한 키별 크기의 합계로 추적하므로, 용량 검사 때 값을 다시 읽지 않습니다.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._sizes: Dict[str, int] = {}
        self._usage = 0

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """키에 저장된 값을 반환합니다. 없으면 None."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """값을 저장합니다. 용량 초과 시 StorageQuotaExceededError, 인코딩 불가 시 StorageBackendError."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """키를 삭제합니다. 없는 키는 무시합니다."""

    @abstractmethod
    def keys(self) -> List[str]:
        """저장된 모든 키."""

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)

    def usage_bytes(self) -> int:
        """현재 사용량 (키 + 값의 UTF-8 바이트 수)."""
        return self._usage

    def _check_quota(self, key: str, value: str) -> int:
        """쓰기 후 사용량을 계산해 한도를 검사하고, 새 항목의 크기를 반환합니다."""
        size = _entry_size(key, value)
        projected = self._usage - self._sizes.get(key, 0) + size
        if self.quota_bytes is not None and projected > self.quota_bytes:
            raise StorageQuotaExceededError(
                f"'{key}' 쓰기 시 사용량 {projected} bytes 가 한도 {self.quota_bytes} bytes 를 초과합니다."
            )
        return size

    def _track(self, key: str, size: Optional[int]) -> None:
        """키의 크기 기록을 갱신합니다. size 가 None 이면 삭제된 키입니다."""
        self._usage -= self._sizes.pop(key, 0)
        if size is not None:
            self._sizes[key] = size
            self._usage += size


def _entry_size(key: str, value: str) -> int:
    try:
        return len(key.encode("utf-8")) + len(value.encode("utf-8"))
    except UnicodeEncodeError as e:
        raise StorageBackendError(f"'{key}' 값을 UTF-8 로 저장할 수 없습니다: {e}") from e


class MemoryBackend(StorageBackend):
    """프로세스 메모리 저장소. 테스트와 단일 세션 실행에 사용합니다."""

    def __init__(self, quota_bytes: Optional[int] = None):
        super().__init__(quota_bytes)
        self._data: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        size = self._check_quota(key, value)
        self._data[key] = value
        self._track(key, size)

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)
        self._track(key, None)

    def keys(self) -> List[str]:
        return list(self._data.keys())


class FileBackend(StorageBackend):
    """
    디렉터리 저장소. 키 하나당 `<키>.json` 파일 하나를 사용하며,
    임시 파일에 쓴 뒤 교체하므로 쓰기 도중 중단되어도 이전 값이 남습니다.
    사용량은 생성 시 파일 크기로 한 번 계산한 뒤 이 인스턴스의 쓰기로 갱신합니다.
    """

    SUFFIX = ".json"

    def __init__(self, directory: str = "yaopets_data", quota_bytes: Optional[int] = None):
        super().__init__(quota_bytes)
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        for key in self.keys():
            try:
                self._track(key, len(key.encode("utf-8")) + self._path(key).stat().st_size)
            except OSError as e:
                logger.warning(f"'{key}' 크기를 확인할 수 없습니다: {e}")
        logger.info(f"File storage: {self.directory} ({self._usage} bytes)")

    def _path(self, key: str) -> Path:
        return self.directory / (quote(key, safe="") + self.SUFFIX)

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"'{key}' 읽기 실패: {e}")
            return None

    def set_item(self, key: str, value: str) -> None:
        size = self._check_quota(key, value)
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, self._path(key))
        except (OSError, UnicodeError) as e:
            raise StorageBackendError(f"'{key}' 쓰기 실패: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
        self._track(key, size)

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
        self._track(key, None)

    def keys(self) -> List[str]:
        return sorted(
            unquote(p.name[: -len(self.SUFFIX)])
            for p in self.directory.glob("*" + self.SUFFIX)
        )


def get_backend(backend: str = "memory", **kwargs) -> StorageBackend:
    """Factory to get the right storage backend.

    Args:
        backend: One of 'memory', 'file'.
        **kwargs: Backend-specific config (quota_bytes, directory).

    Returns:
        StorageBackend instance.
    """
    if backend == "memory":
        return MemoryBackend(quota_bytes=kwargs.get("quota_bytes"))
    elif backend == "file":
        return FileBackend(
            directory=kwargs.get("directory", "yaopets_data"),
            quota_bytes=kwargs.get("quota_bytes"),
        )
    else:
        raise ValueError(f"Unknown storage backend: {backend}")
