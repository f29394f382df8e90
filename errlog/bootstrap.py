"""Build a Logger from configuration and optionally capture stderr into it."""

import logging
import os

from errlog import sink
from errlog.config import CONFIG_PATH_ENV, Config, load_config, load_yaml_config
from errlog.logger import Logger

logger = logging.getLogger(__name__)


def open_logger(config: Config | None = None, time_func=None) -> Logger:
    """Open a Logger. Without *config*, settings come from env vars and the
    YAML file named by ``ERRLOG_CONFIG``, if set."""
    if config is None:
        config = load_config(load_yaml_config(os.environ.get(CONFIG_PATH_ENV)))

    log = Logger(
        config.log_path,
        time_func=time_func,
        create_dirs=config.create_dirs,
        encoding=config.encoding,
    )

    if config.capture_stderr:
        if log.status.ok:
            sink.bind(log, level=config.stderr_level, fd_level=config.capture_fd)
            logger.debug("stderr bound to %s", config.log_path)
        else:
            logger.debug("Logger disabled, stderr left unbound")
    return log
