# coding: UTF-8

from .base import BaseCGroup
from .cpuset import Cpuset
from .mounts import find_cpuset_mounts, unified_hierarchy_mounts
