import logging
import os


LINE_FORMAT = ("[%(asctime)s] [%(name)s:%(lineno)d] "
               "%(levelname)-8s %(message)s")
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(filename=None, level=logging.INFO):
    """ Sets up logging formatting, etc

    Parameters
    ----------
    filename: str, default=None
        If given, log records are written to this file (an existing file
        is removed first). Otherwise records go to stderr.

    level: int, default=logging.INFO
        The root logger level. Training progress is logged at INFO and
        network construction details at DEBUG.
    """
    if filename is not None and os.path.exists(filename):
        os.remove(filename)

    logging.basicConfig(
        filename=filename, format=LINE_FORMAT,
        datefmt=DATE_FORMAT, level=level)


def log_progress(logger, msg, i, n, level=logging.INFO):
    """ Log `msg` with a zero-padded "(i / n)" counter prepended
    """
    full_message = "({:0{width}d} / {:d}) {:s}".format(
        i, n, msg, width=len(str(n)))
    logger.log(level, full_message)
