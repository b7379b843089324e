# coding: UTF-8

"""
:mod:`cgprovision` -- cgroup v1 cpuset 그룹 설정
=========================================================

sandbox worker가 사용할 cgroup v1 `cpuset` 그룹을 만들고, 실행한 사용자에게 소유권을 넘기고,
`cpuset.cpus` 와 `cpuset.mems` 를 설정한 뒤 검증한다.
이미 올바르게 설정되어 있다면 아무것도 쓰지 않는다.

.. module:: cgprovision
    :synopsis: cgroup v1 cpuset 그룹 설정
"""

from .configs.containers import Identity, ProvisionConfig
from .provisioner import CpusetProvisioner, ProvisionResult
from .verifier import verify_cgroup
