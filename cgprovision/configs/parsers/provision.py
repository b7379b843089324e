# coding: UTF-8

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict

from .base import LocalReadParser
from .. import get_full_path, validate_and_load
from ..containers import ProvisionConfig


class ProvisionParser(LocalReadParser[ProvisionConfig]):
    """ :mod:`cgprovision.configs` 폴더 안에있는 `provision.json` 와 local 설정을 합쳐서 파싱한다. """

    def _parse(self) -> ProvisionConfig:
        config: Dict[str, Any] = validate_and_load(get_full_path('provision.json'))
        known = set(field.name for field in fields(ProvisionConfig))

        unknown = set(self._local_config) - known
        if unknown:
            raise ValueError(f'Unknown config keys: {", ".join(sorted(unknown))}')

        merged: Dict[str, Any] = dict()
        for name in known:
            merged[name] = self._local_config.get(name, config[name])

        buffer_size = merged['buffer_size']
        if not isinstance(buffer_size, int) or isinstance(buffer_size, bool) or buffer_size <= 0:
            raise ValueError(f'`buffer_size` should be a positive integer, not {buffer_size!r}')

        return ProvisionConfig(Path(merged['mount_point']), buffer_size, bool(merged['strict_match']))
