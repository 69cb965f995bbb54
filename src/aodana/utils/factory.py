"""Contains functions needed to instantiate a class from a dictionary.

This allows to generically convert a YAML block into an instantiated class
with all the appropriate checks that the class exists and is provided
with appropriate arguments.
"""

from copy import deepcopy
from warnings import warn

from .logger import logger


def module_dict(module, class_name=None):
    """Converts a module into a dictionary which maps class names onto classes.

    Parameters
    ----------
    module : module
        Module from which to fetch the classes
    class_name : str, optional
        If specified, warn when this name is used as a deprecated alias

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    # Loop over the public classes of the module
    cls_dict = {}
    for cls_name in getattr(module, "__all__", dir(module)):
        # Skip private objects
        if cls_name[0] == "_":
            continue

        # Only consider classes which belong to the module of interest
        cls = getattr(module, cls_name)
        if not isinstance(cls, type) or module.__name__ not in cls.__module__:
            continue

        # Store the class name as an option to fetch it
        cls_dict[cls_name] = cls

        # If a name is provided, add it to the allowed options
        if getattr(cls, "name", None):
            cls_dict[cls.name] = cls

        # If aliases are specified, it is allowed but should be avoided
        for alias in getattr(cls, "aliases", ()):
            if class_name is not None and class_name == alias:
                warn(
                    f"This name ({alias}) is deprecated. Use {cls.name} instead.",
                    DeprecationWarning,
                )
            cls_dict[alias] = cls

    return cls_dict


def instantiate(cls_dict, cfg, alt_name=None, **kwargs):
    """Instantiates a class based on a configuration dictionary and a
    dictionary of possible classes to chose from.

    This function supports two YAML configuration structures
    (parsed as a dictionary):

    .. code-block:: yaml

        function:
          name: function_name
          kwarg_1: value_1
          kwarg_2: value_2
          ...

    or

    .. code-block:: yaml

        function:
          name: function_name
          args:
            - value_1
            - value_2
          kwargs:
            kwarg_1: value_1
            kwarg_2: value_2

    Parameters
    ----------
    cls_dict : dict
        Dictionary which maps a class name onto an object class
    cfg : Union[str, dict]
        Configuration dictionary, or simply the name of the class
    alt_name : str, optional
        Key under which the class name can be specified, beside `name` itself
    **kwargs : dict, optional
        Additional parameters to pass to the class constructor

    Returns
    -------
    object
        Instantiated object
    """
    # If the configuration is a string, it is a class name with no parameters
    if isinstance(cfg, str):
        cfg = {"name": cfg}

    # Get the name of the class, check that it exists
    config = deepcopy(cfg)
    if alt_name is not None:
        assert (alt_name in config) ^ (
            "name" in config
        ), f"Should specify one of `name` or `{alt_name}`"
        name = alt_name if alt_name in config else "name"
    else:
        assert "name" in config, "Could not find the name of the class under `name`"
        name = "name"

    class_name = config.pop(name)
    if class_name not in cls_dict:
        raise ValueError(
            f"Could not find '{class_name}' in the dictionary which maps names "
            f"to classes. Available names: {list(cls_dict.keys())}"
        )

    # Gather the arguments and keyword arguments to pass to the class
    args = config.pop("args", [])
    kwargs = dict(config.pop("kwargs", {}), **kwargs)
    for key in config:
        assert key not in kwargs, (
            f"The keyword argument {key} is provided at the top level "
            "and under `kwargs`. Ambiguous."
        )
    kwargs.update(config)

    # Initialize
    cls = cls_dict[class_name]
    try:
        return cls(*args, **kwargs)

    except Exception as err:
        logger.error(
            "Failed to instantiate %s with these arguments:\n"
            "  - args: %s\n  - kwargs: %s",
            cls.__name__,
            args,
            kwargs,
        )

        raise err
