# coding: UTF-8

from typing import Tuple

import psutil


def find_cpuset_mounts() -> Tuple[str, ...]:
    """
    cgroup v1 cpuset controller가 실제로 마운트 된 경로들.
    `cpu,cpuset` 처럼 다른 controller와 함께 마운트 된 경우도 포함한다.

    :return: 마운트 경로들
    :rtype: typing.Tuple[str, ...]
    """
    return tuple(
            part.mountpoint
            for part in psutil.disk_partitions(all=True)
            if part.fstype == 'cgroup' and 'cpuset' in part.opts.split(',')
    )


def unified_hierarchy_mounts() -> Tuple[str, ...]:
    """ cgroup v2 (unified hierarchy) 가 마운트 된 경로들. """
    return tuple(part.mountpoint for part in psutil.disk_partitions(all=True) if part.fstype == 'cgroup2')
