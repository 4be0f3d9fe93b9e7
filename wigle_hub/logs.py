import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logger(name: str = "wigle_nodes", log_file: Optional[str] = None, level: str = "INFO") -> logging.Logger:
	logger = logging.getLogger(name)
	logger.setLevel(level)
	if not logger.handlers:
		sh = logging.StreamHandler(sys.stdout)
		sh.setLevel(level)
		sh.setFormatter(logging.Formatter(LOG_FORMAT))
		logger.addHandler(sh)
		if log_file:
			log_dir = os.path.dirname(log_file)
			if log_dir:
				os.makedirs(log_dir, exist_ok=True)
			fh = logging.FileHandler(log_file)
			fh.setLevel(level)
			fh.setFormatter(logging.Formatter(LOG_FORMAT))
			logger.addHandler(fh)
	return logger
