# yaopets/api/pets/services.py
import logging
from typing import Optional, Dict, Any, List

from yaopets.api.base import BaseEntityService
from yaopets.api.users.services import UserService
from yaopets.models.pet import Pet
from yaopets.services.collection_store import CollectionStore

# 소유자가 수정할 수 있는 필드
PET_FIELDS = ('name', 'breed', 'photos')

class PetService(BaseEntityService):
    """반려동물 프로필 관리를 전담하는 서비스. 모든 변경은 소유자만 할 수 있습니다."""
    collection_name = 'pets'

    def __init__(self, collections: CollectionStore, user_service: UserService):
        super().__init__(collections)
        self.user_service = user_service

    def create_pet(self, owner_id: Optional[int], name: str, breed: str = "",
                   photos: Optional[List[str]] = None) -> Optional[Pet]:
        """반려동물을 등록합니다. 소유자가 존재하지 않거나 이름이 비어 있으면 None."""
        name = (name or "").strip()
        if owner_id is None or not name:
            return None
        if self.user_service.get_user_by_id(owner_id) is None:
            logging.warning(f"반려동물 등록 실패: 소유자를 찾을 수 없음 (owner_id: {owner_id})")
            return None

        pets = self.load_all()
        new_pet = Pet(
            pet_id=self.next_id(pets),
            owner_id=owner_id,
            name=name,
            breed=(breed or "").strip(),
            photos=[url for url in (photos or []) if url],
        )
        pets.append(new_pet)
        if not self.save_all_records(pets):
            return None
        return new_pet

    def get_pet_by_id(self, pet_id: int) -> Optional[Pet]:
        return self.get_by_id(pet_id)

    def get_user_pets(self, owner_id: int) -> List[Pet]:
        """소유자의 반려동물 목록을 등록 순서대로 반환합니다."""
        return [p for p in self.load_all() if p.owner_id == owner_id]

    def update_pet(self, pet_id: int, owner_id: Optional[int], update_data: Dict[str, Any]) -> Optional[Pet]:
        """반려동물 프로필을 부분 수정합니다. 소유자가 아니면 None. PET_FIELDS 밖의 필드(소유자, id)는 무시합니다."""
        pets = self.load_all()
        pet = self._owned_pet(pets, pet_id, owner_id)
        if pet is None:
            return None

        normalized: Dict[str, Any] = {}
        for field_name, value in (update_data or {}).items():
            if field_name == 'photos':
                normalized[field_name] = [url for url in (value or []) if url]
            else:
                normalized[field_name] = "" if value is None else str(value).strip()
        if 'name' in normalized and not normalized['name']:
            return None

        applied = self._apply_changes(pet, normalized, PET_FIELDS)
        if not applied:
            return pet
        if not self.save_all_records(pets):
            return None
        logging.info(f"Pet profile updated for {pet_id} with fields: {applied}")
        return pet

    def add_pet_photo(self, pet_id: int, owner_id: Optional[int], photo_url: str) -> Optional[Pet]:
        if not photo_url:
            return None
        pets = self.load_all()
        pet = self._owned_pet(pets, pet_id, owner_id)
        if pet is None:
            return None

        pet.photos.append(photo_url)
        if not self.save_all_records(pets):
            return None
        return pet

    def _owned_pet(self, pets: List[Pet], pet_id: int, owner_id: Optional[int]) -> Optional[Pet]:
        pet = self.find(pets, pet_id)
        if pet is None or owner_id is None or pet.owner_id != owner_id:
            return None
        return pet
