"""
Parameter dataclasses for the backend registry.
"""

from typing import List, Dict, Any, Literal
from dataclasses import dataclass
from abc import ABC, abstractmethod


@dataclass
class BaseParams(ABC):
    """Base class for all parameter dataclasses."""
    verbose: bool = False

    def __post_init__(self):
        """Validate parameters after initialization."""
        self._validate_params()
        self._post_init_hook()

    @abstractmethod
    def _validate_params(self) -> None:
        pass

    def _post_init_hook(self) -> None:
        pass

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if not k.startswith('_')}

    def _validate_policy(self, param_name: str, value: str, allowed_values: List[str]) -> None:
        if value not in allowed_values:
            raise ValueError(f"Invalid {param_name}='{value}'. Allowed values: {allowed_values}")


@dataclass
class RegistryParams(BaseParams):
    """
    Registry naming and uniqueness policy.

    Shared by every directory of one BackendRegistry tree.
    """

    base_name_only: int = 1
    """Number of ancestor class names stripped from a class name to form its registered name"""

    unique_aliases: Literal['global', 'scope'] = 'global'
    """'global': an alias may be used once per tree; 'scope': once per directory"""

    def _validate_params(self) -> None:
        if not isinstance(self.base_name_only, int) or isinstance(self.base_name_only, bool):
            raise ValueError("base_name_only must be an integer")
        if self.base_name_only < 0:
            raise ValueError("base_name_only must be zero or positive")
        self._validate_policy('unique_aliases', self.unique_aliases, ['global', 'scope'])
