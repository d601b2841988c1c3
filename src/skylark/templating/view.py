"""Kida-backed view.

Renders named templates from the app's template directory. The
``render`` lifecycle operation writes the result into the output
buffer; ``fetch`` is the same call for code that wants the string.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from kida import Environment, FileSystemLoader


class View:
    """Template renderer with view-wide variables.

    Usage::

        view = View("views")
        view.set("site", "Skylark")
        html = view.render("hello", {"name": "world"})   # views/hello.html
    """

    __slots__ = ("_env", "_vars", "extension", "path")

    def __init__(
        self,
        path: str | Path = "views",
        extension: str = ".html",
        autoescape: bool = True,
    ) -> None:
        self.path = Path(path)
        self.extension = extension
        self._vars: dict[str, Any] = {}
        self._env = Environment(
            loader=FileSystemLoader(str(self.path)),
            autoescape=autoescape,
        )

    # -- View variables --

    def set(self, key: str | Mapping[str, Any], value: Any = None) -> None:
        if isinstance(key, Mapping):
            self._vars.update(key)
        else:
            self._vars[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._vars.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._vars

    def clear(self, key: str | None = None) -> None:
        if key is None:
            self._vars.clear()
        else:
            self._vars.pop(key, None)

    # -- Rendering --

    def template_name(self, name: str) -> str:
        """Append the default extension when *name* has none."""
        return name if Path(name).suffix else f"{name}{self.extension}"

    def exists(self, name: str) -> bool:
        return (self.path / self.template_name(name)).is_file()

    def render(self, name: str, data: Mapping[str, Any] | None = None) -> str:
        """Render template *name* with view variables overlaid by *data*."""
        context = {**self._vars, **(data or {})}
        template = self._env.get_template(self.template_name(name))
        return template.render(context)

    fetch = render
