# coding: UTF-8

import logging
import os
import stat
from pathlib import Path
from typing import List

from ..exceptions import CreationError, describe_os_error

_logger = logging.getLogger(__name__)


def _is_dir(path: Path) -> bool:
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        raise CreationError(f'Failed to stat {path} {describe_os_error(e)}') from e


def ensure_path(path: Path, mode: int = 0o777) -> None:
    """
    `path` 와 존재하지 않는 모든 상위 디렉토리를 생성한다. (``mkdir -p`` 와 같다)

    이미 디렉토리로 존재하는 가장 가까운 조상까지 거슬러 올라간 뒤, 위에서부터 차례로 만든다.
    생성은 재시도하지 않으므로 다른 프로세스가 먼저 만든 경우에도 실패한다.

    :raises CreationError: 디렉토리 생성에 실패한 경우, 또는 경로를 확인할 수 없는 경우

    :param path: 생성할 디렉토리의 절대 경로
    :type path: pathlib.Path
    :param mode: 새 디렉토리의 권한 (umask 적용)
    :type mode: int
    """
    missing: List[Path] = []
    current = path

    while not _is_dir(current):
        missing.append(current)
        if current.parent == current:
            break
        current = current.parent

    for directory in reversed(missing):
        _logger.debug(f'Creating directory {directory}')
        try:
            os.mkdir(directory, mode)
        except OSError as e:
            raise CreationError(f'Failed to create {directory} {describe_os_error(e)}') from e
