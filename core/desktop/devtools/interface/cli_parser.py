"""CLI parser construction for taskg."""

import argparse
from typing import Any, Mapping

from core.desktop.devtools.interface.i18n import translate


def build_parser(themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskg",
        description=translate("CLI_DESCRIPTION"),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--theme",
        choices=list(themes.keys()),
        default=None,
        help=f"{translate('CLI_THEME_HELP')} (default: {default_theme})",
    )
    parser.add_argument("--no-mouse", dest="no_mouse", action="store_true", help=translate("CLI_NO_MOUSE_HELP"))
    parser.add_argument("--project", metavar="DIR", default=None, help=translate("CLI_PROJECT_HELP"))
    parser.add_argument("--task-bin", dest="task_bin", metavar="NAME", default=None, help=translate("CLI_TASK_BIN_HELP"))
    parser.add_argument("--log-file", dest="log_file", metavar="PATH", default=None, help=translate("CLI_LOG_FILE_HELP"))
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("task_args", nargs=argparse.REMAINDER, help=translate("CLI_TASK_ARGS_HELP"))
    return parser


__all__ = ["build_parser"]
