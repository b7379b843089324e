# coding: UTF-8

import errno
import os
from pathlib import Path

import pytest

from cgprovision import Identity, ProvisionConfig

ROOT_CPUS = b'0-7\n'
ROOT_MEMS = b'0-1\n'
KERNEL_FILES = ('cpuset.cpus', 'cpuset.mems', 'tasks', 'cgroup.procs')


class FakeCgroupFs:
    """ `tmp_path` 안에 cgroup v1 계층을 흉내낸다. 새 그룹 디렉토리에는 커널처럼 빈 control file들이 생긴다. """

    def __init__(self, mount_point: Path) -> None:
        self.mount_point = mount_point
        self.root = mount_point / 'cpuset'

    def group(self, name: str) -> Path:
        return self.root / name

    def write_root_mems(self, content: bytes) -> None:
        (self.root / 'cpuset.mems').write_bytes(content)

    def config(self, strict: bool = False) -> ProvisionConfig:
        return ProvisionConfig(self.mount_point, 128, strict)


def deny_stat(monkeypatch, denied: Path) -> None:
    """ `denied` 에 대한 `os.stat` 만 EACCES로 실패하게 한다. """
    real_stat = os.stat

    def stat(path, *args, **kwargs):
        if os.fspath(path) == os.fspath(denied):
            raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), os.fspath(path))
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(os, 'stat', stat)


@pytest.fixture
def identity() -> Identity:
    return Identity.current()


@pytest.fixture
def cgroupfs(tmp_path, monkeypatch) -> FakeCgroupFs:
    fs = FakeCgroupFs(tmp_path / 'cgroup')
    fs.root.mkdir(parents=True)
    (fs.root / 'cpuset.cpus').write_bytes(ROOT_CPUS)
    (fs.root / 'cpuset.mems').write_bytes(ROOT_MEMS)

    real_mkdir = os.mkdir

    def kernel_mkdir(path, mode=0o777, *args, **kwargs):
        real_mkdir(path, mode, *args, **kwargs)
        created = Path(path)
        if fs.root in created.parents:
            for name in KERNEL_FILES:
                (created / name).write_bytes(b'')

    monkeypatch.setattr(os, 'mkdir', kernel_mkdir)
    return fs
