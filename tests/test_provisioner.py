# coding: UTF-8

import asyncio
import errno
import os

import pytest

from cgprovision import CpusetProvisioner, Identity, ProvisionConfig, ProvisionResult
from cgprovision import provisioner as provisioner_module
from cgprovision.exceptions import (ControlFileError, ControllerNotMountedError, CreationError, OwnershipError,
                                    VerificationError)
from cgprovision.utils.cgroup import Cpuset

from .conftest import ROOT_MEMS


def _run(name, cpus, identity, config):
    return asyncio.run(CpusetProvisioner.from_config(name, cpus, identity, config).run())


@pytest.fixture
def writes(monkeypatch):
    calls = []
    real_write = Cpuset.write_control

    async def recording_write(self, file_name, data):
        calls.append((self.name, file_name, data))
        return await real_write(self, file_name, data)

    monkeypatch.setattr(Cpuset, 'write_control', recording_write)
    return calls


def test_provisions_fresh_group(cgroupfs, identity):
    result = _run('job42', '2-3', identity, cgroupfs.config())

    group_path = cgroupfs.group('job42')
    assert result is ProvisionResult.PROVISIONED
    assert group_path.is_dir()
    assert Identity.of(group_path) == identity
    assert Identity.of(group_path / 'tasks') == identity
    assert (group_path / 'cpuset.cpus').read_bytes() == b'2-3'
    assert (group_path / 'cpuset.mems').read_bytes() == ROOT_MEMS


def test_second_run_writes_nothing(cgroupfs, identity, writes):
    assert _run('job42', '2-3', identity, cgroupfs.config()) is ProvisionResult.PROVISIONED
    assert [file_name for _, file_name, _ in writes] == ['cpuset.cpus', 'cpuset.mems']

    writes.clear()

    assert _run('job42', '2-3', identity, cgroupfs.config()) is ProvisionResult.ALREADY_CONFIGURED
    assert writes == []


def test_nested_group_creates_parents(cgroupfs, identity):
    assert _run('sandbox/job42', '0', identity, cgroupfs.config()) is ProvisionResult.PROVISIONED
    assert (cgroupfs.group('sandbox/job42') / 'cpuset.cpus').read_bytes() == b'0'


@pytest.mark.parametrize('cpus', ['0', '0-7', '1,3,5'])
def test_mems_are_copied_from_root(cgroupfs, identity, cpus):
    cgroupfs.write_root_mems(b'0\n')

    _run('job42', cpus, identity, cgroupfs.config())

    assert (cgroupfs.group('job42') / 'cpuset.mems').read_bytes() == b'0\n'


def test_misconfigured_group_is_rewritten(cgroupfs, identity):
    os.mkdir(cgroupfs.group('job42'))
    (cgroupfs.group('job42') / 'cpuset.cpus').write_bytes(b'4-5\n')
    (cgroupfs.group('job42') / 'cpuset.mems').write_bytes(ROOT_MEMS)

    assert _run('job42', '2-3', identity, cgroupfs.config()) is ProvisionResult.PROVISIONED
    assert (cgroupfs.group('job42') / 'cpuset.cpus').read_bytes() == b'2-3'


def test_missing_controller_is_diagnosed(tmp_path, identity, monkeypatch):
    monkeypatch.setattr(provisioner_module, 'find_cpuset_mounts', lambda: ('/sys/fs/cgroup/cpu,cpuset',))
    monkeypatch.setattr(provisioner_module, 'unified_hierarchy_mounts', lambda: ())
    config = ProvisionConfig(tmp_path / 'no-cgroup', 128, False)

    with pytest.raises(ControllerNotMountedError) as info:
        _run('job42', '2-3', identity, config)

    assert 'cgroups v1' in str(info.value)
    assert '/sys/fs/cgroup/cpu,cpuset' in str(info.value)
    assert isinstance(info.value.__cause__, FileNotFoundError)


def test_mount_point_that_is_not_a_directory_is_diagnosed(tmp_path, identity, monkeypatch):
    monkeypatch.setattr(provisioner_module, 'find_cpuset_mounts', lambda: ())
    monkeypatch.setattr(provisioner_module, 'unified_hierarchy_mounts', lambda: ('/sys/fs/cgroup',))
    mount_point = tmp_path / 'sysfs-cgroup'
    mount_point.write_text('')
    config = ProvisionConfig(mount_point, 128, False)

    with pytest.raises(ControllerNotMountedError) as info:
        _run('job42', '2-3', identity, config)

    assert 'cgroups v1' in str(info.value)
    assert 'cgroup v2 hierarchy is mounted at /sys/fs/cgroup' in str(info.value)
    assert isinstance(info.value.__cause__, CreationError)


def test_creation_failure_under_existing_controller_is_not_rediagnosed(cgroupfs, identity, monkeypatch):
    def denied_mkdir(path, mode=0o777):
        raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), os.fspath(path))

    monkeypatch.setattr(os, 'mkdir', denied_mkdir)

    with pytest.raises(CreationError) as info:
        _run('job42', '2-3', identity, cgroupfs.config())

    assert not isinstance(info.value, ControllerNotMountedError)


def test_empty_root_mems_is_fatal(cgroupfs, identity):
    cgroupfs.write_root_mems(b'')

    with pytest.raises(ControlFileError, match='empty'):
        _run('job42', '2-3', identity, cgroupfs.config())


def test_root_mems_larger_than_buffer_is_fatal(cgroupfs, identity):
    cgroupfs.write_root_mems(b'0,' * 100)

    with pytest.raises(ControlFileError, match='larger than 128 bytes'):
        _run('job42', '2-3', identity, cgroupfs.config())


def test_unlistable_group_is_fatal(cgroupfs, identity, monkeypatch):
    monkeypatch.setattr(Cpuset, 'chown', lambda self, identity: False)

    with pytest.raises(OwnershipError):
        _run('job42', '2-3', identity, cgroupfs.config())


def test_failed_recheck_is_fatal(cgroupfs, identity, monkeypatch):
    async def normalizing_assign_cpus(self, core_ids):
        # the kernel may store something other than what was written
        await self.write_control(Cpuset.CPUS_FILE, b'7\n')
        return len(core_ids)

    monkeypatch.setattr(Cpuset, 'assign_cpus', normalizing_assign_cpus)

    with pytest.raises(VerificationError):
        _run('job42', '2-3', identity, cgroupfs.config())


def test_short_write_is_fatal(cgroupfs, identity, monkeypatch):
    async def short_assign_cpus(self, core_ids):
        return len(core_ids) - 1

    monkeypatch.setattr(Cpuset, 'assign_cpus', short_assign_cpus)

    with pytest.raises(ControlFileError, match='Short write'):
        _run('job42', '2-3', identity, cgroupfs.config())


@pytest.mark.parametrize('name', ['', '.', '/job42', '../job42', 'a/../../job42'])
def test_names_escaping_the_root_are_rejected(name, tmp_path):
    with pytest.raises(ValueError):
        Cpuset(name, tmp_path)
