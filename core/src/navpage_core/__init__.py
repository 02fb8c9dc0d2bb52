from navpage_core.config import CoreConfig, load_core_config
from navpage_core.home import NavPagePaths, ensure_navpage_layout, resolve_navpage_home

__version__ = "0.1.0"

__all__ = [
    "CoreConfig",
    "NavPagePaths",
    "__version__",
    "ensure_navpage_layout",
    "load_core_config",
    "resolve_navpage_home",
]
