""" Timing logger for GeomKernel.

Logging of call times is controlled by the configuration file geomkernel.cfg, which
should be placed in the current working directory (where the python script is
initiated). All logging-related information is located in a section with heading
logging; see sample file below.

By default, timing is switched off. It can be turned on by setting the keyword
'active' to True.

The decorated functions are classified into the following (overlapping) categories

    all: Used to log all decorated functions.
    algorithms: Hulls, angular sorting and best-fit planes.
    geometry: Polygon crossing and containment computations.
    relations: Entry points of the pairwise relation dispatcher.

Example logging section of geomkernel.cfg:

    [logging]
    # Activate logging. Without this, the rest of the section has no effect
    active: True
    # To only log specific sections, use e.g.
    sections: algorithms
    # multiple sections are separated by commas:
    sections: algorithms, relations
    # Name of the log file, defaults to GeomKernelTimings.log
    filename: timings.log

Ordinary diagnostic messages are not affected by this file; every module emits them
through ``logging.getLogger(__name__)`` and the application decides where they go.

"""
import functools
import logging
import time
from typing import Callable, Dict

import geomkernel as gk

__all__ = ["time_logger"]


# Try to access configuration information, as activated by the import of GeomKernel
try:
    config: Dict = gk.config["logging"]
    raw_sections = config.get("sections", "all")
    active_sections = [s.strip().lower() for s in raw_sections.split(",")]
    logger_is_active = config.get("active", "false").strip().lower() == "true"
    log_file = config.get("filename", "GeomKernelTimings.log").strip()
except KeyError:
    config = {}
    active_sections = ["all"]
    logger_is_active = False
    log_file = "GeomKernelTimings.log"

always_log = "all" in active_sections

t_logger = logging.getLogger("geomkernel.Timer")
t_logger.setLevel(logging.INFO)


def _ensure_handler() -> None:
    """Attach the file handler the first time a timed function is logged."""
    if t_logger.handlers:
        return
    time_handler = logging.FileHandler(log_file, delay=True)
    time_handler.setLevel(logging.INFO)
    time_handler.setFormatter(logging.Formatter("%(message)s"))
    t_logger.addHandler(time_handler)


def time_logger(sections: list[str]) -> Callable:
    """A decorator that measures the elapsed time of a function.

    Parameters:
        sections: Logging categories of the decorated function. The function is timed
            if any of them is active in the configuration, or if ``all`` is.

    Returns:
        The decorator.

    """

    def inner_func(func):
        @functools.wraps(func)
        def log_time(*args, **kwargs):
            if not logger_is_active:
                # Shortcut if logging is not activated.
                return func(*args, **kwargs)
            elif always_log or any([s in active_sections for s in sections]):
                _ensure_handler()
                name = f"{func.__qualname__} in module {func.__module__}."

                t_logger.log(level=logging.INFO, msg=f"Calling {name}")

                start_time = time.perf_counter()
                value = func(*args, **kwargs)
                run_time = time.perf_counter() - start_time

                t_logger.log(
                    level=logging.INFO,
                    msg=f"Finished {name} Elapsed time: {run_time:.8f} s",
                )
                return value
            else:
                return func(*args, **kwargs)

        return log_time

    return inner_func
