"""Code generator port — the black-box source of shipment codes.

A code identifies a shipment at the door: it is printed on the label and
scanned by the driver. Codes must be unique and must not be guessable from
one another; they are not security credentials.
"""

from abc import ABC, abstractmethod

MIN_CODE_LENGTH = 6


class CodeGenerator(ABC):
    @abstractmethod
    def generate(self) -> str:
        """Return a fresh code of at least ``MIN_CODE_LENGTH`` characters."""
        ...
