import logging


def setup_logging(level=logging.INFO, log_file: str | None = None):
    """Configure package-wide logging."""
    logger = logging.getLogger("cursorpager")
    # Clear any existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)

    if log_file:
        fileHandler = logging.FileHandler(log_file)
        fileHandler.setFormatter(formatter)
        logger.addHandler(fileHandler)

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False
    return logger


logger = setup_logging()
