"""Installing Node.js and wiring it into the host bin directory."""

from .bin_scripts import (
    create_bin_scripts,
    path_export_line,
    register_path,
    render_bin_scripts,
)
from .node_installer import NodeJsInstaller

__all__ = [
    "NodeJsInstaller",
    "create_bin_scripts",
    "path_export_line",
    "register_path",
    "render_bin_scripts",
]
