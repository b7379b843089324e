# coding: UTF-8

"""
:mod:`utils` -- 파일시스템과 cgroup을 다루는 기능들
=========================================================

디렉토리 생성, 소유권 변경 같은 OS API의 wrapper와 cgroup 그룹을 다루는 클래스가 있다.

.. module:: cgprovision.utils
    :synopsis: 파일시스템과 cgroup API wrapper
"""

from .ownership import chown_tree
from .path import ensure_path
