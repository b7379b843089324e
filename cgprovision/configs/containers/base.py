# coding: UTF-8

from abc import ABCMeta


class BaseConfig(metaclass=ABCMeta):
    """ 모든 설정 컨테이너들의 부모 클래스 """
    pass
