# coding: UTF-8

from dataclasses import dataclass
from pathlib import Path

from .base import BaseConfig


@dataclass(frozen=True)
class ProvisionConfig(BaseConfig):
    """
    cpuset 그룹을 만들고 검증할 때 쓰이는 설정.

    * `mount_point`: cgroup v1 계층이 마운트 된 경로. cpuset의 root는 `mount_point` / `cpuset`
    * `buffer_size`: control file을 한번에 읽을 최대 바이트 수
    * `strict_match`: ``True`` 일 경우 검증시 prefix 비교 대신 공백을 제외한 내용 전체를 비교한다
    """
    __slots__ = ('mount_point', 'buffer_size', 'strict_match')

    mount_point: Path
    buffer_size: int
    strict_match: bool
