import datetime
import logging
import os
import pathlib


def configure_logging(logs_dir: str = 'logs') -> str:
    """Configures logging settings for the application."""

    timestamp = datetime.datetime.now().strftime('%Y%m%d_%H%M%S')

    # Create Logs directory if it doesn't exist
    if not pathlib.Path(logs_dir).exists():
        pathlib.Path(logs_dir).mkdir(parents=True)

    log_filepath = os.path.join(logs_dir, f'{timestamp}_img_indexer.log')

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(threadName)s - %(message)s',
        filename=log_filepath,
        filemode='a',
        encoding='utf-8',
    )

    urllib3_logger = logging.getLogger('urllib3')
    urllib3_logger.setLevel(logging.WARNING)

    return log_filepath
