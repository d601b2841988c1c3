"""Class autoloading from the library path.

Maps a class name to a file under the base path and loads it in an
isolated module namespace. Underscores become directory separators, so
``Blog_Post`` lives in ``Blog/Post.py``.
"""

import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import Any

from skylark.errors import RouteLoadError

logger = logging.getLogger("skylark.loader")


class Autoloader:
    """Locate and load classes by name from *base_path*."""

    __slots__ = ("_modules", "base_path")

    def __init__(self, base_path: str | Path = ".") -> None:
        self.base_path = Path(base_path)
        self._modules: dict[Path, ModuleType] = {}

    def path_for(self, class_name: str) -> Path:
        """Return the file expected to define *class_name*."""
        parts = class_name.replace(".", "_").split("_")
        return self.base_path.joinpath(*parts[:-1], f"{parts[-1]}.py")

    def load(self, class_name: str) -> Any:
        """Return the class *class_name*, importing its file on first use.

        Raises ``RouteLoadError`` if the file or the class is missing.
        """
        path = self.path_for(class_name)
        module = self._modules.get(path)
        if module is None:
            module = self._import(path, class_name)
            self._modules[path] = module

        short_name = class_name.rsplit("_", 1)[-1]
        cls = getattr(module, class_name, None) or getattr(module, short_name, None)
        if cls is None:
            msg = f"Unable to load class {class_name!r} from {path}"
            raise RouteLoadError(msg)
        return cls

    def _import(self, path: Path, class_name: str) -> ModuleType:
        if not path.is_file():
            msg = f"Unable to load file: {path}"
            raise RouteLoadError(msg)
        spec = importlib.util.spec_from_file_location(f"skylark_autoload.{class_name}", path)
        if spec is None or spec.loader is None:
            msg = f"Unable to load file: {path}"
            raise RouteLoadError(msg)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        logger.debug("autoloaded %s from %s", class_name, path)
        return module
