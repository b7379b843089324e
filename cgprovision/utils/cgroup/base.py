# coding: UTF-8

from __future__ import annotations

import os
import stat
from abc import ABCMeta
from pathlib import Path, PurePosixPath
from typing import ClassVar, Optional, Union

import aiofiles

from ..ownership import chown_tree
from ..path import ensure_path
from ...configs.containers import Identity


def _open_existing(path: Union[str, Path], flags: int) -> int:
    # control files are created by the kernel, never by us
    return os.open(path, flags & ~os.O_CREAT)


class BaseCGroup(metaclass=ABCMeta):
    """
    기본적으로 모든 cgroup v1 subsystem들이 공통으로 사용 가능한 기능들을 묶어놓은 클래스.

    .. note::
        * `cgcreate` 같은 shell command 없이 cgroup 파일시스템을 직접 읽고 쓴다.
        * control file은 unbuffered로 열어서 한번의 `read` / `write` 로 처리한다.
    """
    MOUNT_POINT: ClassVar[Path] = Path('/sys/fs/cgroup')
    CONTROLLER_NAME: ClassVar[str]

    _name: str
    _mount_point: Path

    def __init__(self, group_name: str, mount_point: Optional[Path] = None) -> None:
        """
        `group_name` 을 이름으로하는 group을 handle하는 객체를 생성한다.

        실제로 group이 바로 생성되지는 않으며, :meth:`create_group` 를 호출해야 생성된다.

        :raises ValueError: `group_name` 이 subsystem의 root를 벗어나거나 root 자신을 가리킬 경우

        :param group_name: 그룹의 이름 (subsystem root 기준 상대 경로)
        :type group_name: str
        :param mount_point: cgroup 계층이 마운트된 경로. ``None`` 일 경우 :attr:`MOUNT_POINT`
        :type mount_point: typing.Optional[pathlib.Path]
        """
        super().__init__()

        self._name = self.validate_name(group_name)
        self._mount_point = self.MOUNT_POINT if mount_point is None else Path(mount_point)

    @classmethod
    def validate_name(cls, group_name: str) -> str:
        pure = PurePosixPath(group_name)

        if pure.is_absolute() or not pure.parts or '..' in pure.parts:
            raise ValueError(f'`{group_name}` is not a valid group name for {cls.CONTROLLER_NAME}.')

        return group_name

    def absolute_path(self) -> Path:
        """
        자신의 클래스가 대표하는 subsystem이 실제로 위치한 경로를 반환한다

        :return: 자신의 subsystem의 root 경로
        :rtype: pathlib.Path
        """
        return self._mount_point / self.CONTROLLER_NAME

    @property
    def path(self) -> Path:
        """ 그룹 디렉토리의 경로 """
        return self.absolute_path() / self._name

    @property
    def identifier(self) -> str:
        """
        해당 객체가 대표하는 group의 ID (`subsystem`:`group_name` 형식)

        :return: 그룹의 ID
        :rtype: str
        """
        return f'{self.CONTROLLER_NAME}:{self._name}'

    @property
    def name(self) -> str:
        return self._name

    @staticmethod
    def _is_dir(path: Path) -> bool:
        try:
            return stat.S_ISDIR(os.stat(path).st_mode)
        except OSError:
            return False

    def exists(self) -> bool:
        """ 그룹 디렉토리가 존재하는지 확인한다. `stat` 이 실패하면 존재하지 않는 것으로 본다. """
        return self._is_dir(self.path)

    def controller_exists(self) -> bool:
        """ subsystem의 root 디렉토리가 존재하는지 확인한다. """
        return self._is_dir(self.absolute_path())

    def owner(self) -> Identity:
        """
        :raises OSError: 그룹 디렉토리의 `stat` 이 실패할 경우

        :return: 그룹 디렉토리의 소유자
        :rtype: cgprovision.configs.containers.Identity
        """
        return Identity.of(self.path)

    def create_group(self) -> None:
        """
        그룹 디렉토리를 (필요하다면 상위 디렉토리까지) 생성한다.
        control file들은 커널이 만든다.

        :raises cgprovision.exceptions.CreationError: 디렉토리 생성에 실패한 경우
        """
        ensure_path(self.path)

    def chown(self, identity: Identity) -> bool:
        """
        그룹 디렉토리와 그 안의 모든 파일의 소유권을 변경한다.

        :raises cgprovision.exceptions.OwnershipError: 소유권 변경에 실패한 경우

        :param identity: 새 소유자
        :type identity: cgprovision.configs.containers.Identity
        :return: 디렉토리 목록을 읽지 못한 경우 ``False``
        :rtype: bool
        """
        return chown_tree(self.path, identity)

    @staticmethod
    async def _read(path: Path, size: int) -> bytes:
        async with aiofiles.open(path, 'rb', buffering=0) as afp:
            return await afp.read(size)

    async def read_control(self, file_name: str, size: int) -> bytes:
        """
        그룹의 control file을 최대 `size` 바이트만큼 한번에 읽는다.

        :raises OSError: 파일을 열거나 읽지 못한 경우
        """
        return await self._read(self.path / file_name, size)

    async def read_root_control(self, file_name: str, size: int) -> bytes:
        """ subsystem root의 control file을 최대 `size` 바이트만큼 한번에 읽는다. """
        return await self._read(self.absolute_path() / file_name, size)

    async def write_control(self, file_name: str, data: bytes) -> int:
        """
        그룹의 control file에 `data` 를 쓴다. 파일이 없을 경우 새로 만들지 않는다.

        :raises FileNotFoundError: control file이 없을 경우
        :raises OSError: 파일을 열거나 쓰거나 닫지 못한 경우

        :param file_name: control file의 이름
        :type file_name: str
        :param data: 쓸 내용
        :type data: bytes
        :return: 실제로 쓰여진 바이트 수
        :rtype: int
        """
        async with aiofiles.open(self.path / file_name, 'wb', buffering=0, opener=_open_existing) as afp:
            return await afp.write(data)
