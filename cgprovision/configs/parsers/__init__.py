# coding: UTF-8

from .base import BaseParser, LocalReadParser
from .provision import ProvisionParser
