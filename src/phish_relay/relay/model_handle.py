"""
Model handle: which upstream model the process is bound to.

Lifecycle: UNBOUND -> BOUND, once. There is no way back and no re-binding.
The startup task is the only writer; requests only read.
"""

from enum import Enum
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)


class HandleState(str, Enum):
    UNBOUND = "unbound"
    BOUND = "bound"


class ModelHandle:
    """Single-assignment holder for the model identifier in use."""

    def __init__(self) -> None:
        self._model_name: Optional[str] = None

    @property
    def state(self) -> HandleState:
        return HandleState.BOUND if self._model_name is not None else HandleState.UNBOUND

    @property
    def is_bound(self) -> bool:
        return self._model_name is not None

    @property
    def model_name(self) -> Optional[str]:
        return self._model_name

    def bind(self, model_name: str) -> None:
        """
        Bind the handle to a model that passed its liveness probe.

        Raises:
            RuntimeError: If the handle is already bound
        """
        if self._model_name is not None:
            raise RuntimeError(
                f"Model handle already bound to {self._model_name!r}; cannot rebind to {model_name!r}"
            )
        self._model_name = model_name
        logger.info("Model handle bound", model=model_name)

    def __repr__(self) -> str:
        return f"ModelHandle(state={self.state.value}, model={self._model_name})"
