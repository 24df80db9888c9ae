"""Field Map.

논리 필드명(API) ↔ 저장소 필드명 변환과 projection 계산.

- 논리 필드명: snake_case (예: published_at)
- Cassandra 컬럼: camelCase 소문자 (예: publishedat)
- MongoDB 필드: camelCase (예: publishedAt), id → _id
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from catalog.domain.constants import ID_FIELD

E = TypeVar("E")


def to_camel(name: str) -> str:
    """snake_case → camelCase."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def entity_fields(entity_cls: type) -> tuple[str, ...]:
    """엔티티의 논리 필드 목록 (기본 필드 집합이자 허용 어휘)."""
    return tuple(f.name for f in dataclasses.fields(entity_cls))


class FieldMap:
    """논리 필드명 → 저장소 필드명 매핑.

    완전하거나 대칭일 필요 없음. 매핑이 없는 이름은 그대로 통과.
    생성 후 변경하지 않음.
    """

    def __init__(self, mapping: Mapping[str, str] | None = None) -> None:
        self._to_storage: dict[str, str] = dict(mapping or {})
        self._to_logical: dict[str, str] = {}
        for logical, storage in self._to_storage.items():
            # 같은 저장소 필드를 여러 논리 필드가 가리키면 먼저 등록된 쪽 우선
            self._to_logical.setdefault(storage, logical)

    @classmethod
    def for_entity(
        cls,
        entity_cls: type,
        naming: Callable[[str], str],
        overrides: Mapping[str, str] | None = None,
    ) -> FieldMap:
        """엔티티 필드 전체에 naming 규칙을 적용한 FieldMap 생성.

        Args:
            entity_cls: 엔티티 dataclass
            naming: 논리 필드명 → 저장소 필드명 변환 함수
            overrides: 규칙 대신 사용할 개별 매핑
        """
        overrides = overrides or {}
        mapping = {
            name: overrides.get(name, naming(name)) for name in entity_fields(entity_cls)
        }
        return cls(mapping)

    def to_storage(self, name: str) -> str:
        return self._to_storage.get(name, name)

    def to_logical(self, name: str) -> str:
        return self._to_logical.get(name, name)

    def map_row(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """저장소 row를 논리 필드명 dict로 변환."""
        return {self.to_logical(key): value for key, value in row.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._to_storage

    def __repr__(self) -> str:
        return f"FieldMap({self._to_storage!r})"


def project_fields(
    requested: Iterable[str] | None,
    vocabulary: Iterable[str],
    field_map: FieldMap,
    *,
    exclude: Iterable[str] = (),
    id_field: str = ID_FIELD,
) -> list[str]:
    """저장소 projection 필드 목록 계산.

    - requested가 비어 있으면 vocabulary 전체 (exclude 제외)
    - 아니면 vocabulary에 있는 이름만 남기고 저장소 필드명으로 변환
    - id 필드는 항상 포함 (페이지네이션/재구성에 필요)

    Args:
        requested: 호출자가 요청한 논리 필드 목록
        vocabulary: 허용 논리 필드 (엔티티 필드 순서)
        field_map: 논리 → 저장소 매핑
        exclude: 기본 필드 집합에서 제외할 필드 (요청 목록에는 적용 안 함)
        id_field: 식별자 논리 필드명

    Returns:
        중복 없는 저장소 필드명 목록
    """
    allowed = list(vocabulary)
    requested = [name for name in (requested or []) if name]
    if requested:
        allowed_set = set(allowed)
        selected = [name for name in requested if name in allowed_set]
    else:
        excluded = set(exclude)
        selected = [name for name in allowed if name not in excluded]

    if id_field not in selected:
        selected.insert(0, id_field)

    projection: list[str] = []
    for name in selected:
        storage = field_map.to_storage(name)
        if storage not in projection:
            projection.append(storage)
    return projection


def entity_from_row(entity_cls: type[E], row: Mapping[str, Any]) -> E:
    """논리 필드명 dict로 엔티티 생성. 엔티티에 없는 키는 무시."""
    names = set(entity_fields(entity_cls))
    return entity_cls(**{key: value for key, value in row.items() if key in names})
