# coding: UTF-8

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from .exceptions import (ControlFileError, ControllerNotMountedError, CreationError, OwnershipError,
                         VerificationError, describe_os_error)
from .utils.cgroup import Cpuset, find_cpuset_mounts, unified_hierarchy_mounts
from .verifier import verify_cgroup

if TYPE_CHECKING:
    from .configs.containers import Identity, ProvisionConfig

_logger = logging.getLogger(__name__)


class ProvisionResult(Enum):
    ALREADY_CONFIGURED = 'already_configured'
    PROVISIONED = 'provisioned'


class CpusetProvisioner:
    """
    cpuset 그룹 하나를 `CHECK` -> `PROVISION` -> `RECHECK` 순서로 설정한다.

    * `CHECK`: :func:`~cgprovision.verifier.verify_cgroup` 가 성공하면 아무것도 쓰지 않고 끝난다.
    * `PROVISION`: 디렉토리 생성, 소유권 변경, `cpuset.cpus` 쓰기, root의 `cpuset.mems` 복사.
    * `RECHECK`: 다시 검증하고, 실패하면 :class:`~cgprovision.exceptions.VerificationError`.

    모든 실패는 :class:`~cgprovision.exceptions.ProvisionError` 로 올라가며, 재시도나 rollback은 하지 않는다.

    .. note::
        * 같은 이름의 그룹을 동시에 설정하는 호출은 없다고 가정한다. (호출하는 쪽에서 직렬화해야 한다)
    """
    __slots__ = ('_group', '_cpus', '_identity', '_buffer_size', '_strict')

    _group: Cpuset
    _cpus: str
    _identity: Identity
    _buffer_size: int
    _strict: bool

    def __init__(self, group: Cpuset, cpus: str, identity: Identity,
                 buffer_size: int = 128, strict: bool = False) -> None:
        self._group = group
        self._cpus = cpus
        self._identity = identity
        self._buffer_size = buffer_size
        self._strict = strict

    @classmethod
    def from_config(cls, name: str, cpus: str, identity: Identity, config: ProvisionConfig) -> CpusetProvisioner:
        """
        :raises ValueError: `name` 이 올바른 그룹 이름이 아닐 경우
        """
        return cls(Cpuset(name, config.mount_point), cpus, identity, config.buffer_size, config.strict_match)

    @property
    def group(self) -> Cpuset:
        return self._group

    async def verify(self) -> bool:
        return await verify_cgroup(self._group, self._identity, self._cpus, self._buffer_size, self._strict)

    async def run(self) -> ProvisionResult:
        _logger.debug(f'Checking {self._group.identifier}...')
        if await self.verify():
            _logger.info(f'{self._group.identifier} is already configured')
            return ProvisionResult.ALREADY_CONFIGURED

        _logger.info(f'Provisioning {self._group.identifier} (cpus: {self._cpus}, owner: {self._identity})...')
        await self._provision()

        _logger.debug(f'Re-checking {self._group.identifier}...')
        if not await self.verify():
            raise VerificationError(f'{self._group.path} does not match the requested configuration '
                                    f'after provisioning')

        _logger.info(f'{self._group.identifier} has been provisioned')
        return ProvisionResult.PROVISIONED

    async def _provision(self) -> None:
        try:
            self._group.create_group()
        except CreationError as e:
            if not self._group.controller_exists():
                raise ControllerNotMountedError(self._not_mounted_message(self._group.absolute_path())) from e
            raise

        if not self._group.chown(self._identity):
            raise OwnershipError(f'Failed to change owner of {self._group.path} to {self._identity}')

        await self._assign_cpus()
        mems = await self._read_root_mems()
        await self._assign_mems(mems)

    async def _assign_cpus(self) -> None:
        path = self._group.path / Cpuset.CPUS_FILE
        data = self._cpus.encode()

        try:
            written = await self._group.assign_cpus(data)
        except FileNotFoundError as e:
            raise ControllerNotMountedError(self._not_mounted_message(path)) from e
        except OSError as e:
            raise ControlFileError(f'Failed to write {path} {describe_os_error(e)}') from e

        if written != len(data):
            raise ControlFileError(f'Short write to {path} ({written} of {len(data)} bytes)')

        _logger.debug(f'Wrote {data!r} to {path}')

    async def _read_root_mems(self) -> bytes:
        path = self._group.absolute_path() / Cpuset.MEMS_FILE

        try:
            # one extra byte to detect content that does not fit in the buffer
            mems = await self._group.read_root_mems(self._buffer_size + 1)
        except OSError as e:
            raise ControlFileError(f'Failed to read {path} {describe_os_error(e)}') from e

        if not mems:
            raise ControlFileError(f'{path} is empty')
        if len(mems) > self._buffer_size:
            raise ControlFileError(f'{path} is larger than {self._buffer_size} bytes')

        return mems

    async def _assign_mems(self, mems: bytes) -> None:
        path = self._group.path / Cpuset.MEMS_FILE

        try:
            written = await self._group.assign_mems(mems)
        except OSError as e:
            raise ControlFileError(f'Failed to write {path} {describe_os_error(e)}') from e

        if written != len(mems):
            raise ControlFileError(f'Short write to {path} ({written} of {len(mems)} bytes)')

        _logger.debug(f'Copied {mems!r} to {path}')

    @staticmethod
    def _not_mounted_message(path) -> str:
        message = f'{path} not found, ensure you\'re running with cgroups v1!'

        cpuset_mounts = find_cpuset_mounts()
        if cpuset_mounts:
            message += f' (cpuset controller is mounted at {", ".join(cpuset_mounts)})'

        unified = unified_hierarchy_mounts()
        if unified:
            message += f' (cgroup v2 hierarchy is mounted at {", ".join(unified)})'

        return message
