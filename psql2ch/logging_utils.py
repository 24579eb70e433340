"""
Named loggers and helpers attaching conversion context to log records.
"""
import logging
import time
from contextlib import contextmanager

app_logger = logging.getLogger('psql2ch')
converter_logger = logging.getLogger('psql2ch.converter')
loader_logger = logging.getLogger('psql2ch.loader')


def log_with_context(logger, level, message, **context):
    """
    Log a message, passing context fields as record attributes.

    Fields whose value is None are left out, so a record only carries the
    context that applies to it (column, psql_type, column_count, ...).

    Args:
        logger: Logger to write to
        level: Level name ('DEBUG', 'INFO', ...)
        message: Log message
        **context: Fields set on the log record through ``extra``
    """
    extra = {k: v for k, v in context.items() if v is not None}
    logger.log(getattr(logging, level.upper()), message, extra=extra)


@contextmanager
def log_operation(logger, operation_name, **context):
    """
    Time a block and log its outcome.

    The start is logged at DEBUG. Completion is logged at INFO with
    duration and status='success'. A failure is logged at ERROR with
    error_type and error_message, and the exception is re-raised.
    """
    start_time = time.time()

    log_with_context(logger, 'DEBUG', f'{operation_name} started', operation=operation_name, **context)

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            'ERROR',
            f'{operation_name} failed: {str(e)}',
            operation=operation_name,
            duration=time.time() - start_time,
            status='failed',
            error_type=type(e).__name__,
            error_message=str(e),
            **context
        )
        raise

    log_with_context(
        logger,
        'INFO',
        f'{operation_name} completed successfully',
        operation=operation_name,
        duration=time.time() - start_time,
        status='success',
        **context
    )
