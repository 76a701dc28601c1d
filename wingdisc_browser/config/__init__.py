"""
Config package for wingdisc_browser.

Responsible for:
- config models (GlobalConfig, SourceFiles)
- config I/O helpers (load_global_config)
"""

from .model import GlobalConfig, SourceFiles
from .loader import load_global_config
