# coding: UTF-8

from __future__ import annotations

from abc import ABC, ABCMeta, abstractmethod
from typing import Any, Generic, Mapping, Optional, TYPE_CHECKING, TypeVar

from .. import validate_and_load

if TYPE_CHECKING:
    from pathlib import Path

_DT = TypeVar('_DT')


class BaseParser(Generic[_DT], metaclass=ABCMeta):
    """
    모든 파서의 부모 클래스.
    자식 클래스는 :meth:`_parse` 를 override해야한다.
    :meth:`parse` 는 파싱을 할 경우 결과를 자동으로 캐싱 해놓는다.
    """
    __slots__ = ('_cached',)

    _cached: Optional[_DT]

    def __init__(self) -> None:
        self._cached = None

    @abstractmethod
    def _parse(self) -> _DT:
        """
        실제로 파싱을 진행하는 부분.
        자식클래스별로 내용을 다르게 구현 해야한다.

        :return: 파싱을 한 결과
        :rtype: _DT
        """
        pass

    def parse(self) -> _DT:
        """
        :meth:`_parse` 로 실제 파싱을 진행한 결과를 캐싱한다.
        캐싱이 된 상태에서 이 메소드가 다시 호출된다면, :meth:`_parse` 를 재호출하지 않고 캐싱된 결과를 반환한다.

        :return: 파싱을 한 결과
        :rtype: _DT
        """
        if self._cached is None:
            self._cached = self._parse()

        return self._cached


class LocalReadParser(BaseParser[_DT], ABC):
    """
    :class:`BaseParser` 와 다르게 패키지 밖에 존재하는 local 설정 파일도 읽어서 파싱한다.
    local 설정 파일이 ``None`` 이면 패키지의 기본 설정만 사용한다.
    """
    __slots__ = ('_local_config', '_local_path')

    _local_config: Mapping[str, Any]
    _local_path: Optional[Path]

    def __init__(self, local_path: Optional[Path] = None) -> None:
        super().__init__()

        self._local_path = local_path
        self._local_config = dict() if local_path is None else validate_and_load(local_path)

