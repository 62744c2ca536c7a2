"""Base interface for masking strategies."""

from abc import ABC, abstractmethod
from typing import Callable, Sequence

MaskFunction = Callable[[str, str, Sequence[str]], str]


class MaskStrategy(ABC):
    """
    Base class for masking strategies.

    A strategy receives the field's string value, the mask character configured
    for the field, and the raw option tokens from the directive, and returns
    the masked string. Strategies must be stateless: one instance is shared by
    every engine call, from any thread.

    Example:
        >>> class MaskCard(MaskStrategy):
        ...     name = "card_number"
        ...
        ...     def mask(self, value, mask_char, options):
        ...         if len(value) < 8:
        ...             return mask_char * len(value)
        ...         return value[:4] + mask_char * (len(value) - 8) + value[-4:]
        ...
        >>> masker = StructMasker()
        >>> masker.register("card_number", MaskCard())
    """

    #: Name the strategy is registered under by default.
    name: str = ""

    @abstractmethod
    def mask(self, value: str, mask_char: str, options: Sequence[str]) -> str:
        """
        Mask a string value.

        Args:
            value: The original field value
            mask_char: Character used for masked positions
            options: Raw option tokens that followed the method name

        Returns:
            The masked value
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class FunctionStrategy(MaskStrategy):
    """Adapts a plain ``(value, mask_char, options) -> str`` callable."""

    def __init__(self, func: MaskFunction, name: str = "") -> None:
        self.func = func
        self.name = name or getattr(func, "__name__", "")

    def mask(self, value: str, mask_char: str, options: Sequence[str]) -> str:
        return self.func(value, mask_char, options)
