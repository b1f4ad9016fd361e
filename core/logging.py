import logging

LOGGER_NAMESPACE = "comphub"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the service namespace."""
    return logging.getLogger(LOGGER_NAMESPACE).getChild(name)


def parse_filter(log_filter: str) -> tuple[int | None, dict[str, int]]:
    """
    Parse an env-filter style string into a root level and per-target levels.

    "info,comphub=debug,uvicorn.access=warning" gives
    (INFO, {"comphub": DEBUG, "uvicorn.access": WARNING}).
    Entries that do not name a known level are skipped.
    """
    root_level = None
    targets: dict[str, int] = {}

    for entry in log_filter.split(","):
        entry = entry.strip()
        if not entry:
            continue

        target, _, level_name = entry.rpartition("=")
        level = logging.getLevelName(level_name.strip().upper())
        if not isinstance(level, int):
            logging.getLogger(LOGGER_NAMESPACE).warning(
                "Ignoring invalid log filter entry: %s", entry
            )
            continue

        if target.strip():
            targets[target.strip()] = level
        else:
            root_level = level

    return root_level, targets


def setup_logging(log_filter: str) -> None:
    root_level, targets = parse_filter(log_filter)

    logging.basicConfig(
        level=root_level if root_level is not None else logging.WARNING,
        format=LOG_FORMAT,
    )
    for target, level in targets.items():
        logging.getLogger(target).setLevel(level)
