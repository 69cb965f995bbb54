"""Main functions that call the Driver class.

This is the first module called when launching the command-line interface.
It sets up the `Driver` object used to read the input tables, run the
analysis tasks and write their output.
"""

from .driver import Driver

__all__ = ["run"]


def run(cfg):
    """Execute the full analysis in a single process.

    Parameters
    ----------
    cfg : dict
        Full driver configuration

    Returns
    -------
    Driver
        Driver used to run the analysis
    """
    driver = Driver(cfg)
    driver.run()

    return driver
