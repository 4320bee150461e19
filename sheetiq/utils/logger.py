import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s: %(message)s"


def get_logger(name: str, level: int = logging.INFO):
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # One handler per logger, however often this is called
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
