"""
Context manager for parsing configuration (e.g., code synthesis).
"""

from contextlib import contextmanager
from contextvars import ContextVar

# Context variable for the object engine strategy
_compiled_mode: ContextVar[bool] = ContextVar("compiled_mode", default=True)


def use_compiled() -> bool:
    """Check if object validators should be compiled when constructed."""
    return _compiled_mode.get()


@contextmanager
def parsing_context(*, compiled: bool = True):
    """
    Context manager for parsing configuration.

    Args:
        compiled: If True (default), `Object`, `ObjectStrict` and `ObjectGuard`
                  synthesize a specialized Python function for the schema when
                  they are constructed. If False, they build interpreters
                  instead; use this where `exec` is not allowed.

    The setting is read when a validator is *constructed*, not when it is
    called. Validators keep the strategy they were built with.

    Example:
        from typeshape import Object, parse_int, parsing_context

        with parsing_context(compiled=False):
            parse_point = Object({"x": parse_int, "y": parse_int})

        parse_point({"x": 1, "y": 2})  # interpreted, outside the block too
    """
    token = _compiled_mode.set(compiled)
    try:
        yield
    finally:
        _compiled_mode.reset(token)
