"""Construct an analysis task class from its name."""

from aodana.utils.factory import instantiate, module_dict

from . import emcal, nuclei, spectra

# Build a dictionary of available analysis tasks
ANA_DICT = {}
for module in [emcal, nuclei, spectra]:
    ANA_DICT.update(**module_dict(module))


def ana_task_factory(name, cfg):
    """Instantiates an analysis task from a configuration dictionary.

    Parameters
    ----------
    name : str
        Name of the analysis task
    cfg : dict
        Analysis task configuration

    Returns
    -------
    TaskBase
         Initialized analysis task
    """
    # Provide the name to the configuration
    cfg = dict(cfg or {})
    cfg.setdefault("name", name)

    # Instantiate the analysis task
    return instantiate(ANA_DICT, cfg)
