# dacemp/config.py
import os
import logging

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"


class _DaceConfig:
    def __init__(self):
        self.version = __version__
        self.dtype = float
        self.seed = 1234
        # numerical safeguards used by the model fitter
        self.rcond_tol = 1e-10
        self.fcond_max = 1e15
        self.duplicate_tol = 1e-14
        # logger lives in config
        self.logger = logging.getLogger("dacemp")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(os.environ.get("DACEMP_LOG_LEVEL", "INFO").upper())

    def __str__(self):
        return (
            f"DaceConfig("
            f"version={self.version}, "
            f"dtype={self.dtype}, "
            f"seed={self.seed}, "
            f"rcond_tol={self.rcond_tol}, "
            f"fcond_max={self.fcond_max}, "
            f"duplicate_tol={self.duplicate_tol})"
        )

    def __repr__(self):
        return (
            f"<DaceConfig "
            f"version={self.version!r}, "
            f"seed={self.seed!r}, "
            f"rcond_tol={self.rcond_tol!r}, "
            f"fcond_max={self.fcond_max!r}, "
            f"duplicate_tol={self.duplicate_tol!r}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            if not hasattr(self, k):
                raise AttributeError(f"Unknown configuration entry '{k}'")
            setattr(self, k, v)
        return self


_config = _DaceConfig()


def get_config():
    return _config


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)
