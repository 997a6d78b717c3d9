"""
Utility functions for logging and argument shaping
"""

import logging
from typing import Any, Iterable, List


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Setup logger with consistent format"""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers to avoid duplication in multiprocess scenarios
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def flatten_fields(fields: Iterable[Any]) -> List[str]:
    """
    Flatten one level of list/tuple arguments

    select('a', 'b') and select(['a', 'b']) both yield ['a', 'b']
    """
    result: List[str] = []
    for f in fields:
        if isinstance(f, (list, tuple)):
            result.extend(f)
        else:
            result.append(f)
    return result


def like_to_regex(pattern: str) -> str:
    """Convert a SQL LIKE pattern to a regex by expanding every % to .*"""
    return pattern.replace('%', '.*')
