"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups. Runtime values that handlers may change live in
the app's variable store instead (``app.set("skylark.lib.path", ...)``).
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000, lib_path="lib")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Base directory for autoloaded service classes
    lib_path: str | Path = "."

    # Views
    template_dir: str | Path = "views"
    template_extension: str = ".html"
    autoescape: bool = True

    # Errors
    handle_errors: bool = True  # False re-raises instead of sending a 500
    log_errors: bool = True
