from .params import BaseParams, RegistryParams
from .logger import RegistryLogger, ColoredFormatter

__all__ = ['BaseParams', 'RegistryParams', 'RegistryLogger', 'ColoredFormatter']
