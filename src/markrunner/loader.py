"""Loading the Python module that contains the tests."""

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from markrunner.core.discovery import DiscoveryError


class ModuleLoadError(DiscoveryError):
    """Raised when the module containing tests cannot be loaded."""

    pass


def load_module(target: str) -> ModuleType:
    """Load a module from a .py file path or a dotted module name.

    Raises:
        ModuleLoadError: If the module cannot be found or fails to import
    """
    path = Path(target)
    if path.suffix == ".py" or path.is_file():
        return _load_from_path(path)

    try:
        return importlib.import_module(target)
    except Exception as e:
        raise ModuleLoadError(f"Cannot import module {target!r}: {e}") from e


def _load_from_path(path: Path) -> ModuleType:
    path = path.resolve()
    if not path.is_file():
        raise ModuleLoadError(f"Test module not found at: {path}")

    module_name = path.stem
    previous = sys.modules.get(module_name)
    if previous is not None and not _is_loaded_from(previous, path):
        raise ModuleLoadError(
            f"Cannot load {path}: it would shadow the already imported "
            f"module {module_name!r}"
        )

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ModuleLoadError(f"Cannot load module from: {path}")

    module = importlib.util.module_from_spec(spec)
    # Dataclasses and pickling resolve classes through sys.modules.
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        if previous is None:
            sys.modules.pop(module_name, None)
        else:
            sys.modules[module_name] = previous
        raise ModuleLoadError(f"Error importing {path}: {e}") from e

    return module


def _is_loaded_from(module: ModuleType, path: Path) -> bool:
    location = getattr(module, "__file__", None)
    return location is not None and Path(location).resolve() == path
