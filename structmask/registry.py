"""Registry mapping masking method names to strategies."""

from typing import Any, Dict, Iterator, List, Optional

from .core.exceptions import StrategyNotFoundError, StrategyRegistrationError
from .core.locks import ReadWriteLock
from .observability.logging import get_logger
from .strategies.base import FunctionStrategy, MaskStrategy
from .strategies.builtin import builtin_strategies

logger = get_logger(__name__)


class StrategyRegistry:
    """
    Thread-safe mapping from method name to :class:`MaskStrategy`.

    Every registry starts with its own copy of the built-in strategies. Lookups
    run concurrently with each other; registrations are exclusive. Registering
    an existing name replaces the previous strategy, which is how built-ins
    are overridden.

    Example:
        >>> registry = StrategyRegistry()
        >>> registry.register("shout", lambda value, mask_char, options: value.upper())
        >>> registry.lookup("shout").mask("hi", "*", ())
        'HI'
    """

    def __init__(self, include_builtins: bool = True) -> None:
        """
        Initialize the registry.

        Args:
            include_builtins: Seed the registry with the six default strategies
        """
        self._lock = ReadWriteLock()
        self._strategies: Dict[str, MaskStrategy] = (
            builtin_strategies() if include_builtins else {}
        )

    def register(self, name: str, strategy: Any) -> None:
        """
        Register ``strategy`` under ``name``, replacing any existing entry.

        Args:
            name: Method name used in directives
            strategy: A :class:`MaskStrategy`, any object with a callable ``mask``
                method, or a plain ``(value, mask_char, options)`` callable

        Raises:
            StrategyRegistrationError: If the name is empty or the strategy
                cannot mask
        """
        if not isinstance(name, str) or not name:
            raise StrategyRegistrationError(
                "Strategy name must be a non-empty string", name=str(name)
            )
        strategy = self._coerce(name, strategy)

        with self._lock.write_lock():
            replaced = name in self._strategies
            self._strategies[name] = strategy

        if replaced:
            logger.debug("Replaced masking strategy", method=name)
        else:
            logger.debug("Registered masking strategy", method=name)

    def lookup(self, name: str) -> MaskStrategy:
        """
        Get the strategy registered under ``name``.

        Raises:
            StrategyNotFoundError: If nothing is registered under ``name``
        """
        with self._lock.read_lock():
            strategy = self._strategies.get(name)
            if strategy is None:
                raise StrategyNotFoundError(name, available=list(self._strategies))
        return strategy

    def get(self, name: str) -> Optional[MaskStrategy]:
        """Get the strategy registered under ``name``, or None."""
        with self._lock.read_lock():
            return self._strategies.get(name)

    def unregister(self, name: str) -> None:
        """
        Remove the strategy registered under ``name``.

        Raises:
            StrategyNotFoundError: If nothing is registered under ``name``
        """
        with self._lock.write_lock():
            if name not in self._strategies:
                raise StrategyNotFoundError(name, available=list(self._strategies))
            del self._strategies[name]
        logger.debug("Unregistered masking strategy", method=name)

    def names(self) -> List[str]:
        """Registered method names, sorted."""
        with self._lock.read_lock():
            return sorted(self._strategies)

    def __contains__(self, name: object) -> bool:
        with self._lock.read_lock():
            return name in self._strategies

    def __len__(self) -> int:
        with self._lock.read_lock():
            return len(self._strategies)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"StrategyRegistry(methods={self.names()!r})"

    @staticmethod
    def _coerce(name: str, strategy: Any) -> MaskStrategy:
        if isinstance(strategy, MaskStrategy):
            return strategy
        if isinstance(strategy, type):
            raise StrategyRegistrationError(
                f"Cannot register the class {strategy.__name__} as masking "
                f"strategy '{name}'; register an instance instead",
                name=name,
            )
        if callable(getattr(strategy, "mask", None)):
            # Duck-typed strategy objects are used as-is
            return strategy  # type: ignore[no-any-return]
        if callable(strategy):
            return FunctionStrategy(strategy, name=name)
        raise StrategyRegistrationError(
            f"Cannot register {type(strategy).__name__} as masking strategy "
            f"'{name}': it has no mask() method and is not callable",
            name=name,
        )
