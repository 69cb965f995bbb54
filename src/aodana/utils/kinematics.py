"""Kinematic quantities computed from reconstructed track parameters."""

import numpy as np

from .globals import SPEED_OF_LIGHT


def momentum(pt, eta):
    """Total momentum from the transverse momentum and pseudorapidity.

    Parameters
    ----------
    pt : Union[float, np.ndarray]
        Transverse momentum (GeV/c)
    eta : Union[float, np.ndarray]
        Pseudorapidity

    Returns
    -------
    Union[float, np.ndarray]
        Total momentum (GeV/c)
    """
    return pt * np.cosh(eta)


def rapidity(pt, eta, mass):
    """Rapidity of a particle of a given mass.

    Equivalent to building the four-momentum from (pt, eta, phi, m) and
    taking its rapidity, without going through the azimuth.

    Parameters
    ----------
    pt : Union[float, np.ndarray]
        Transverse momentum (GeV/c)
    eta : Union[float, np.ndarray]
        Pseudorapidity
    mass : float
        Mass hypothesis (GeV/c^2)

    Returns
    -------
    Union[float, np.ndarray]
        Rapidity
    """
    mt = np.sqrt(mass**2 + pt**2)
    return np.arcsinh(pt * np.sinh(eta) / mt)


def tof_beta(length, tof_time):
    """Velocity of a track, in units of c, from its time of flight.

    Parameters
    ----------
    length : float
        Track length (cm)
    tof_time : float
        Time of flight (ps)

    Returns
    -------
    float
        Velocity over the speed of light
    """
    return length / (SPEED_OF_LIGHT * tof_time)
