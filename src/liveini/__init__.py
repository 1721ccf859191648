# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/02 20:51:16
# @Author : Kariko Lin

import logging

from .configuration import Configuration
from .dispatch import (
    ConfigLogic, HandlerRegistry, SectionKeyPair,
    dispatch_all, dispatch_one
)
from .export import ConfigJsonParser, ConfigYamlParser
from .model import ConfigStore, SectionView
from .parser import ConfigFileParser, render

__all__ = [
    'Configuration',
    'ConfigStore', 'SectionView',
    'ConfigFileParser', 'render',
    'HandlerRegistry', 'ConfigLogic', 'SectionKeyPair',
    'dispatch_all', 'dispatch_one',
    'ConfigJsonParser', 'ConfigYamlParser'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
