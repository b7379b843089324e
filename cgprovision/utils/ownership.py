# coding: UTF-8

from __future__ import annotations

import logging
import os
from typing import Iterator, List, TYPE_CHECKING, Union

from ..exceptions import OwnershipError, describe_os_error

if TYPE_CHECKING:
    from pathlib import Path

    from ..configs.containers import Identity

_logger = logging.getLogger(__name__)


def _chown(path: Union[str, Path], identity: Identity) -> None:
    try:
        os.chown(path, identity.uid, identity.gid)
    except OSError as e:
        raise OwnershipError(f'Failed to change owner of {path} to {identity} {describe_os_error(e)}') from e


def chown_tree(root: Path, identity: Identity) -> bool:
    """
    `root` 와 그 아래의 모든 파일, 디렉토리의 소유권을 `identity` 로 변경한다. (``chown -R`` 과 같다)

    부모가 항상 자식보다 먼저 변경되는 pre-order 순서를 따르며,
    재귀 호출 대신 열려있는 디렉토리 iterator들의 stack을 사용한다.

    .. note::
        * symbolic link는 따라가지 않는다. cgroup 파일시스템에는 symbolic link가 없다고 가정한다.

    :raises OwnershipError: 소유권 변경에 실패한 경우

    :param root: 소유권을 바꿀 디렉토리
    :type root: pathlib.Path
    :param identity: 새 소유자
    :type identity: cgprovision.configs.containers.Identity
    :return: 디렉토리를 열어서 목록을 읽지 못한 경우 ``False``
    :rtype: bool
    """
    try:
        top = os.scandir(root)
    except OSError as e:
        _logger.error(f'Failed to open {root} {describe_os_error(e)}')
        return False

    stack: List[Iterator[os.DirEntry]] = [top]

    try:
        _chown(root, identity)

        while stack:
            entry = next(stack[-1], None)

            if entry is None:
                stack.pop().close()
                continue

            _chown(entry.path, identity)

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise OwnershipError(f'Failed to stat {entry.path} {describe_os_error(e)}') from e

            if is_dir:
                try:
                    stack.append(os.scandir(entry.path))
                except OSError as e:
                    _logger.error(f'Failed to open {entry.path} {describe_os_error(e)}')
                    return False
    finally:
        for it in stack:
            it.close()

    return True
