# coding: UTF-8

from typing import ClassVar

from .base import BaseCGroup


class Cpuset(BaseCGroup):
    """
    `cgroup cpuset subsystem <https://access.redhat.com/documentation/en-us/red_hat_enterprise_linux/6/html
    /resource_management_guide/sec-cpuset>`_ 를 대표하는 클래스.

    `cpuset.cpus` 와 `cpuset.mems` 는 해석하지 않고 바이트 그대로 다룬다.
    """
    CONTROLLER_NAME: ClassVar[str] = 'cpuset'

    CPUS_FILE: ClassVar[str] = 'cpuset.cpus'
    MEMS_FILE: ClassVar[str] = 'cpuset.mems'

    async def read_cpus(self, size: int) -> bytes:
        return await self.read_control(Cpuset.CPUS_FILE, size)

    async def read_mems(self, size: int) -> bytes:
        return await self.read_control(Cpuset.MEMS_FILE, size)

    async def read_root_mems(self, size: int) -> bytes:
        """ subsystem root의 `cpuset.mems` (시스템 전체의 memory node) 를 읽는다. """
        return await self.read_root_control(Cpuset.MEMS_FILE, size)

    async def assign_cpus(self, core_ids: bytes) -> int:
        """
        `cpuset.cpus` 를 설정한다.

        :param core_ids: 설정할 `cpus` 값
        :type core_ids: bytes
        :return: 실제로 쓰여진 바이트 수
        :rtype: int
        """
        return await self.write_control(Cpuset.CPUS_FILE, core_ids)

    async def assign_mems(self, socket_ids: bytes) -> int:
        """
        `cpuset.mems` 를 설정한다.

        :param socket_ids: 설정할 `mems` 값
        :type socket_ids: bytes
        :return: 실제로 쓰여진 바이트 수
        :rtype: int
        """
        return await self.write_control(Cpuset.MEMS_FILE, socket_ids)
