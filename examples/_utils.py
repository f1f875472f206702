import inspect
from collections.abc import Callable
from types import ModuleType


def run_examples(mod: ModuleType) -> None:
    """Runner"""
    for fn in _collect_examples(mod):
        print(f"\n# running: {fn.__name__}")
        fn()


def _collect_examples(mod: ModuleType) -> list[Callable[[], None]]:
    """Collect example functions from a module"""
    return sorted(
        (obj for name, obj in inspect.getmembers(mod) if name.startswith("example_")),
        key=lambda f: f.__code__.co_firstlineno,
    )
