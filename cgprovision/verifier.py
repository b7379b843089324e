# coding: UTF-8

from __future__ import annotations

import logging
from typing import Awaitable, Optional, TYPE_CHECKING

from .exceptions import describe_os_error

if TYPE_CHECKING:
    from .configs.containers import Identity
    from .utils.cgroup import Cpuset

_logger = logging.getLogger(__name__)


def cpus_match(expected: bytes, actual: bytes, strict: bool = False) -> bool:
    """
    `cpuset.cpus` 의 내용이 요청한 값과 같은지 비교한다.

    기본적으로는 둘 중 짧은 쪽의 길이만큼만 비교하므로, ``b'0-3\\n'`` 은 ``b'0-3'`` 과 일치한다.
    (``b'0-31\\n'`` 도 ``b'0-3'`` 과 일치하게 된다.)
    `strict` 가 ``True`` 이면 앞뒤 공백을 제외한 전체 내용이 같아야 한다.
    """
    if strict:
        return expected.strip() == actual.strip()

    length = min(len(expected), len(actual))
    return expected[:length] == actual[:length]


def mems_match(group_mems: bytes, root_mems: bytes, strict: bool = False) -> bool:
    """
    그룹의 `cpuset.mems` 가 root의 `cpuset.mems` 와 같은지, 그룹에서 읽은 길이만큼 비교한다.
    `strict` 가 ``True`` 이면 앞뒤 공백을 제외한 전체 내용이 같아야 한다.
    """
    if strict:
        return group_mems.strip() == root_mems.strip()

    return root_mems[:len(group_mems)] == group_mems


async def _read_nonempty(what: str, read: Awaitable[bytes]) -> Optional[bytes]:
    try:
        content = await read
    except OSError as e:
        _logger.debug(f'Failed to read {what} {describe_os_error(e)}')
        return None

    if not content:
        _logger.debug(f'{what} is empty')
        return None

    return content


async def verify_cgroup(group: Cpuset, identity: Identity, cpus: str,
                        buffer_size: int = 128, strict: bool = False) -> bool:
    """
    `group` 이 이미 올바르게 설정되어 있는지 확인한다. 아무것도 수정하지 않는다.

    아래의 조건들을 순서대로 확인하며, 하나라도 실패하면 바로 ``False`` 를 반환한다.

    #. 그룹 디렉토리가 존재한다. (존재하지 않는 것은 에러가 아니라 아직 생성되지 않았다는 뜻이다)
    #. 그룹 디렉토리의 소유자가 `identity` 와 같다.
    #. 그룹의 `cpuset.cpus` 를 1 바이트 이상 읽을 수 있고, `cpus` 와 일치한다. (:func:`cpus_match`)
    #. 그룹의 `cpuset.mems` 를 1 바이트 이상 읽을 수 있다.
    #. root의 `cpuset.mems` 를 1 바이트 이상 읽을 수 있다.
    #. 두 `cpuset.mems` 가 일치한다. (:func:`mems_match`)

    :param group: 확인할 그룹
    :type group: cgprovision.utils.cgroup.Cpuset
    :param identity: 그룹이 가져야 할 소유자
    :type identity: cgprovision.configs.containers.Identity
    :param cpus: 그룹이 가져야 할 `cpuset.cpus` 값
    :type cpus: str
    :param buffer_size: control file을 한번에 읽을 최대 바이트 수
    :type buffer_size: int
    :param strict: prefix 비교 대신 전체 내용을 비교할지 여부
    :type strict: bool
    :return: 모든 조건을 만족하면 ``True``
    :rtype: bool
    """
    if not group.exists():
        _logger.debug(f'{group.path} is not provisioned yet')
        return False

    try:
        owner = group.owner()
    except OSError as e:
        _logger.debug(f'Failed to stat {group.path} {describe_os_error(e)}')
        return False

    if owner != identity:
        _logger.debug(f'{group.path} is owned by {owner}, not {identity}')
        return False

    actual_cpus = await _read_nonempty(f'{group.identifier} cpuset.cpus', group.read_cpus(buffer_size))
    if actual_cpus is None:
        return False

    if not cpus_match(cpus.encode(), actual_cpus, strict):
        _logger.debug(f'cpuset.cpus of {group.identifier} is {actual_cpus!r}, not {cpus!r}')
        return False

    group_mems = await _read_nonempty(f'{group.identifier} cpuset.mems', group.read_mems(buffer_size))
    if group_mems is None:
        return False

    root_mems = await _read_nonempty('root cpuset.mems', group.read_root_mems(buffer_size))
    if root_mems is None:
        return False

    if not mems_match(group_mems, root_mems, strict):
        _logger.debug(f'cpuset.mems of {group.identifier} is {group_mems!r}, but root has {root_mems!r}')
        return False

    return True
