# coding: UTF-8

"""
:mod:`containers` -- 설정과 실행 환경을 담는 컨테이너
=========================================================

:mod:`~cgprovision.configs.parsers` 로 파싱 한 결과와, 프로세스의 실행 주체 (:class:`Identity`) 를 저장하는
컨테이너들이 정의되어있다.

.. module:: cgprovision.configs.containers
    :synopsis: 설정파일을 파서를 통해 파싱된 결과
"""

from .base import BaseConfig
from .identity import Identity
from .provision import ProvisionConfig
