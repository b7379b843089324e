# coding: UTF-8

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class Identity:
    """
    cgroup 디렉토리와 그 안의 모든 파일이 가져야 할 소유자 (uid, gid).

    OS에서 암묵적으로 읽지 않고, 각 컴포넌트에 인자로 명시적으로 넘겨준다.
    """
    __slots__ = ('uid', 'gid')

    uid: int
    gid: int

    @classmethod
    def current(cls) -> Identity:
        """
        현재 프로세스의 real uid와 real gid.

        :return: 프로세스를 실행한 사용자
        :rtype: cgprovision.configs.containers.Identity
        """
        return cls(os.getuid(), os.getgid())

    @classmethod
    def of(cls, path: Union[str, Path]) -> Identity:
        """
        :raises OSError: `stat` 이 실패할 경우

        :param path: 소유자를 확인할 경로
        :return: `path` 의 소유자
        :rtype: cgprovision.configs.containers.Identity
        """
        st = os.stat(path)
        return cls(st.st_uid, st.st_gid)

    def __str__(self) -> str:
        return f'{self.uid}:{self.gid}'
