"""Persistent JSON config.

Holds the tab width and the order in which formats are tried. A missing or
malformed config file falls back to the defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from foldview.formats import DEFAULT_FORMAT_ORDER, PARSERS

logger = logging.getLogger(__name__)

APP_NAME = "foldview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_TAB_SIZE = 2


@dataclass
class ViewerConfig:
    tab_size: int = DEFAULT_TAB_SIZE
    format_order: tuple[str, ...] = DEFAULT_FORMAT_ORDER


def _read_config_file(path: Path) -> dict[str, object]:
    """Return the top-level JSON object stored at *path*, or an empty dict."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.warning("ignoring config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: not a JSON object", path)
        return {}
    return data


def load_config(path: Path | None = None) -> ViewerConfig:
    path = CONFIG_PATH if path is None else path
    data = _read_config_file(path)
    config = ViewerConfig()

    tab_size = data.get("tab_size")
    if tab_size is not None:
        # bool is an int subclass; reject it explicitly
        if isinstance(tab_size, int) and not isinstance(tab_size, bool) and tab_size > 0:
            config.tab_size = tab_size
        else:
            logger.warning("invalid tab_size %r in %s", tab_size, path)

    order = data.get("format_order")
    if order is not None:
        if (
            isinstance(order, list)
            and order
            and all(isinstance(tag, str) and tag.lower() in PARSERS for tag in order)
        ):
            config.format_order = tuple(tag.lower() for tag in order)
        else:
            logger.warning("invalid format_order %r in %s", order, path)

    return config
