import logging
import os


DEFAULT_LOG_FILENAME = 'train-log.txt'
LINE_FORMAT = '[%(asctime)s] %(levelname)-8s %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def format_progress(msg, i, n):
    """ Prefix `msg` with a zero-padded "(i / n)" counter
    """
    counter = "(%%0%dd / %d) " % (len(str(n)), n)
    return (counter % i) + msg


class TrainingLogger(logging.Logger):
    """ A logger that writes training progress to a file and, optionally,
    to standard output
    """
    def __init__(self, filename=None, stdout=True, level=logging.DEBUG):
        formatter = logging.Formatter(fmt=LINE_FORMAT, datefmt=DATE_FORMAT)

        # Handles when filename is None
        filename = filename or os.path.join(os.path.curdir,
                                            DEFAULT_LOG_FILENAME)

        self.file = filename
        self.stdout = stdout

        fhandler = logging.FileHandler(filename, mode='w')
        fhandler.setFormatter(formatter)

        logging.Logger.__init__(self, 'ffnet training logger')
        self.setLevel(level)

        self.addHandler(fhandler)

        if self.stdout:
            shandler = logging.StreamHandler()
            shandler.setFormatter(formatter)
            self.addHandler(shandler)

    def progress(self, msg, i, n):
        self.debug(format_progress(msg, i, n))

    def close(self):
        """ Close and detach every handler
        """
        for handler in self.handlers[:]:
            handler.close()
            self.removeHandler(handler)
