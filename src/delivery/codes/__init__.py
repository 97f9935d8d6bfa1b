"""Shipment code generation — pluggable source of scannable shipment codes."""

import os

_generator_instance = None


def get_code_generator():
    """Return the configured code generator (singleton).

    Uses the peppered token generator by default. Select another adapter with
    the DELIVERY_CODE_GENERATOR environment variable.
    """
    global _generator_instance
    if _generator_instance is None:
        adapter = os.environ.get("DELIVERY_CODE_GENERATOR", "token")
        if adapter == "token":
            from delivery.codes.token_adapter import TokenCodeGenerator

            _generator_instance = TokenCodeGenerator(pepper=os.environ.get("DELIVERY_CODE_PEPPER", ""))
        elif adapter == "fake":
            from delivery.codes.fake_adapter import FakeCodeGenerator

            _generator_instance = FakeCodeGenerator()
        else:
            raise ValueError(f"Unknown code generator: {adapter}")
    return _generator_instance


def set_code_generator(generator):
    """Install a specific generator instance (tests and scripts)."""
    global _generator_instance
    _generator_instance = generator


def reset_code_generator():
    """Reset the generator singleton (useful for testing)."""
    global _generator_instance
    _generator_instance = None
