"""Logging utilities for dbxpy modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a dbxpy component logger.
    
    Records propagate to the root logger, so an application's
    basicConfig() applies. Until the application configures logging
    (no root handlers) an unset component level defaults to WARNING;
    a level chosen through setup_logging() is never overridden.
    
    Args:
        name: Logger name ('dbxpy.<component>')
        
    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    if logger.level == logging.NOTSET and not logging.getLogger().handlers:
        logger.setLevel(logging.WARNING)
    
    return logger


def mask_headers(headers: dict) -> dict:
    """Returns a copy of headers safe for logging (Authorization masked)."""
    return {
        name: ('***' if name.lower() == 'authorization' else value)
        for name, value in headers.items()
    }
